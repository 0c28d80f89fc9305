# src/hl7_codec/conformance.py
"""
Optional cross-check against hl7apy's message structure definitions.

Provides:
- load_er7: strict/lenient parsing into an hl7apy Message
- conformance_issues: the hl7apy failure text, if any, as a list

This never feeds the validator: a message can be valid under the codec's
rules and still be rejected by hl7apy (and vice versa).
"""

from __future__ import annotations

import logging
from typing import List

from hl7apy.consts import VALIDATION_LEVEL
from hl7apy.core import Message
from hl7apy.exceptions import HL7apyException
from hl7apy.parser import parse_message

from .exceptions import ParseError

LOG = logging.getLogger(__name__)


def load_er7(raw: str, *, strict: bool = True) -> Message:
    """
    Parse an ER7 message string into an hl7apy Message.

    Parameters
    ----------
    raw : str
        Raw HL7 v2 message (segments separated by CR, LF or CRLF).
    strict : bool, default True
        If True, uses hl7apy STRICT validation. If False, uses TOLERANT validation.

    Returns
    -------
    Message
        Parsed hl7apy message object.

    Raises
    ------
    TypeError
        If raw is not a string.
    ValueError
        If raw is an empty string.
    ParseError
        If hl7apy cannot parse the message.
    """
    if not isinstance(raw, str):
        raise TypeError(f"raw must be str, got {type(raw).__name__}")
    if raw.strip() == "":
        raise ValueError("raw must be a non-empty HL7 v2 string")

    # hl7apy expects \r between segments
    normalized = raw.replace("\r\n", "\r").replace("\n", "\r").strip("\r")

    vlevel = VALIDATION_LEVEL.STRICT if strict else VALIDATION_LEVEL.TOLERANT
    try:
        return parse_message(normalized, find_groups=False, validation_level=vlevel)
    except HL7apyException as e:
        raise ParseError(f"Failed to parse HL7 v2 message: {e}") from e


def conformance_issues(raw: str, *, strict: bool = False) -> List[str]:
    """
    Return ``[]`` when hl7apy accepts ``raw``, else a one-element list
    holding the failure text.
    """
    try:
        load_er7(raw, strict=strict)
    except (ParseError, ValueError) as e:
        LOG.debug("Conformance check failed: %s", e)
        return [str(e)]
    return []
