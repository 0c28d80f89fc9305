# src/hl7_codec/logging_utils.py
"""
Logging utilities for hl7_codec.

Provides a single entry point to configure root logging for CLI and library
use. Library modules only ever call ``logging.getLogger(__name__)``.
"""

import logging
import sys
from typing import IO, Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_VERBOSITY_LEVELS = {
    0: logging.INFO,
    1: logging.DEBUG,  # any value >= 1 maps to DEBUG
}

# Third-party loggers held at WARNING below this verbosity
THIRD_PARTY_LOGGERS = ("hl7apy",)
THIRD_PARTY_DEBUG_VERBOSITY = 2


def configure_logging(
    verbosity: int = 0, stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure application-wide logging.

    Parameters
    ----------
    verbosity : int, default=0
        0 -> INFO, 1 or higher -> DEBUG. Must be a non-negative integer.
        hl7apy records below WARNING only show from verbosity 2 on.
    stream : IO[str] or None, default=None
        Target stream for the StreamHandler. Defaults to sys.stdout if None.

    Returns
    -------
    logging.Logger
        The configured root logger.

    Raises
    ------
    TypeError
        If verbosity is not an int (bools are rejected too), or if a stream
        is provided that does not have a write method.
    ValueError
        If verbosity is negative.
    """
    if isinstance(verbosity, bool) or not isinstance(verbosity, int):
        raise TypeError(f"verbosity must be int, got {type(verbosity).__name__}")
    if verbosity < 0:
        raise ValueError(f"verbosity must be non-negative, got {verbosity}")

    level = _VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    if stream is None:
        stream = sys.stdout
    elif not hasattr(stream, "write"):
        raise TypeError("stream must be file-like (support .write(...))")

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    # Replace only StreamHandlers; FileHandlers and friends stay attached
    root.handlers = [
        h
        for h in root.handlers
        if not isinstance(h, logging.StreamHandler)
        or isinstance(h, logging.FileHandler)
    ]
    root.addHandler(handler)
    root.setLevel(level)

    third_party_level = (
        logging.DEBUG
        if verbosity >= THIRD_PARTY_DEBUG_VERBOSITY
        else logging.WARNING
    )
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    return root
