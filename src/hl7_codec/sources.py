# src/hl7_codec/sources.py
"""
Input acquisition.

Provides:
- resolve_path: dotted-path navigation into nested bucket data
- make_bucket_lookup: field-name lookup used during generation
- load_bucket_file: read a JSON bucket document
- read_message_source: fetch message text from inline text, a file or a
  bucket

Every failure to obtain input raises InputError before any parsing or
generation work starts.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from .exceptions import InputError
from .fields import BucketLookup

LOG = logging.getLogger(__name__)

# Keys tried, in order, when a bucket path resolves to an object
MESSAGE_KEYS = ("message", "hl7", "hl7Message", "content", "text", "raw", "data")

_MISSING = object()


def resolve_path(data: Any, path: Optional[str]) -> Any:
    """
    Navigate ``data`` by successive key lookups along a dotted ``path``.

    An empty path returns ``data`` unchanged. Returns None as soon as a
    path segment is missing or the current value is not a mapping.
    """
    if not path:
        return data
    current = data
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key, _MISSING)
        if current is _MISSING:
            return None
    return current


def make_bucket_lookup(bucket: Any, base_path: Optional[str] = None) -> BucketLookup:
    """
    Build a ``name -> value`` lookup into ``bucket``.

    ``name`` is resolved under ``base_path`` (``<base_path>.<name>``) or at
    the root when the base is empty. Value filtering (scalars only) happens
    in the field resolver.
    """
    base = (base_path or "").strip(".")

    def _lookup(name: str) -> Any:
        return resolve_path(bucket, f"{base}.{name}" if base else name)

    return _lookup


def load_bucket_file(path: Path) -> Any:
    """
    Read a JSON bucket document.

    Raises
    ------
    InputError
        If the file is missing, unreadable or not valid JSON.
    """
    text = read_text_file(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Bucket file is not valid JSON: {path} ({e})") from e


def read_text_file(path: Path) -> str:
    """
    Read a UTF-8 text file (with or without BOM) after checking it exists
    and is readable. Line terminators are kept as written.

    Raises
    ------
    InputError
        On missing files, directories, permission errors or OS read failures.
    """
    if not path.exists():
        raise InputError(f"File not found: {path}")
    if not path.is_file():
        raise InputError(f"Not a file: {path}")
    if not os.access(path, os.R_OK):
        raise InputError(f"File is not readable: {path}")
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as fh:
            return fh.read()
    except PermissionError:
        raise InputError(f"Permission denied: {path}")
    except OSError as e:
        raise InputError(f"Failed to read {path}: {e}") from e


def _message_from_value(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, Mapping):
        for key in MESSAGE_KEYS:
            candidate = value.get(key)
            if isinstance(candidate, str) and candidate.strip():
                LOG.debug("Using bucket key %r as message text", key)
                return candidate
    return None


def read_message_source(
    *,
    text: Optional[str] = None,
    path: Optional[Path] = None,
    bucket: Any = None,
    bucket_path: Optional[str] = None,
) -> str:
    """
    Return message text from exactly one source.

    Precedence when several are given: inline text, then file, then bucket.

    Parameters
    ----------
    text : str, optional
        Inline message text.
    path : Path, optional
        File holding the message.
    bucket : any, optional
        Nested bucket data (already loaded).
    bucket_path : str, optional
        Dotted path into ``bucket``; empty means the root.

    Returns
    -------
    str
        The message text, unmodified.

    Raises
    ------
    InputError
        If the selected source yields no usable message text.
    """
    if text is not None:
        if not text.strip():
            raise InputError("No message text provided")
        return text
    if path is not None:
        content = read_text_file(path)
        if not content.strip():
            raise InputError(f"File is empty: {path}")
        return content
    if bucket is not None:
        value = resolve_path(bucket, bucket_path)
        if value is None:
            raise InputError(f"Bucket path not found: {bucket_path or '<root>'}")
        message = _message_from_value(value)
        if message is None:
            raise InputError(
                f"No message text found at bucket path {bucket_path or '<root>'} "
                f"(expected a string or one of: {', '.join(MESSAGE_KEYS)})"
            )
        return message
    raise InputError("No input source given (text, file or bucket)")
