# tests/test_logging_utils.py
"""
tests for hl7_codec.logging_utils
"""

import io
import logging

import pytest

from hl7_codec.logging_utils import configure_logging


def test_configure_logging_rejects_non_int_verbosity():
    with pytest.raises(TypeError, match=r"^verbosity must be int"):
        configure_logging("load")


def test_configure_logging_rejects_bool_verbosity():
    with pytest.raises(TypeError, match=r"^verbosity must be int, got bool"):
        configure_logging(True)


def test_configure_logging_rejects_negative_verbosity():
    with pytest.raises(ValueError, match=r"^verbosity must be non-negative"):
        configure_logging(-1)


def test_configure_logging_sets_info_level(capsys):
    logger = configure_logging(verbosity=0)
    logger.info("hello info")
    logger.debug("hidden debug")

    out, _ = capsys.readouterr()
    assert "hello info" in out
    assert "hidden debug" not in out


def test_configure_logging_sets_debug_level(capsys):
    logger = configure_logging(verbosity=2)
    logger.debug("visible debug")

    out, _ = capsys.readouterr()
    assert "visible debug" in out


def test_configure_logging_accepts_custom_stream():
    buf = io.StringIO()
    logger = configure_logging(verbosity=0, stream=buf)
    logging.getLogger("hl7_codec.generator").info("routed message")

    contents = buf.getvalue()
    assert "routed message" in contents
    assert "INFO hl7_codec.generator: routed message" in contents
    assert logger is logging.getLogger()


def test_configure_logging_replaces_previous_stream_handler():
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(0, stream=first)
    configure_logging(0, stream=second)
    logging.getLogger("hl7_codec").info("only once")

    assert "only once" not in first.getvalue()
    assert second.getvalue().count("only once") == 1


def test_configure_logging_rejects_bad_stream():
    class NotAStream:
        pass

    with pytest.raises(
        TypeError, match=r"^stream must be file-like \(support .write\(...\)\)"
    ):
        configure_logging(0, stream=NotAStream())


def test_configure_logging_quiets_hl7apy_below_vv():
    configure_logging(verbosity=1, stream=io.StringIO())
    assert logging.getLogger("hl7apy").level == logging.WARNING

    configure_logging(verbosity=2, stream=io.StringIO())
    assert logging.getLogger("hl7apy").level == logging.DEBUG


def test_configure_logging_keeps_file_handlers(tmp_path):
    root = logging.getLogger()
    file_handler = logging.FileHandler(tmp_path / "codec.log")
    root.addHandler(file_handler)
    try:
        configure_logging(0, stream=io.StringIO())
        assert file_handler in root.handlers
    finally:
        root.removeHandler(file_handler)
        file_handler.close()
