# src/hl7_codec/exceptions.py
"""
Custom exceptions for hl7_codec.

All exceptions inherit from HL7CodecError so that callers can catch
codec-specific errors without grabbing unrelated built-in exceptions.
"""

from __future__ import annotations

from typing import Iterable, List


class HL7CodecError(Exception):
    """Base class for all hl7_codec exceptions."""

    pass


class InputError(HL7CodecError):
    """Raised when no usable input can be acquired (text, file or bucket)."""

    pass


class FieldFormatError(HL7CodecError):
    """
    Raised when one or more resolved field values fail format validation.

    The complete list of violations is kept on ``violations`` so callers can
    report every problem at once rather than only the first.
    """

    def __init__(self, violations: Iterable[str]):
        self.violations: List[str] = list(violations)
        super().__init__("Invalid field values: " + "; ".join(self.violations))


class ParseError(HL7CodecError):
    """Raised when an HL7 message is structurally unparseable."""

    pass


class TemplateError(HL7CodecError):
    """Raised when a message template is missing or renders an unknown field."""

    pass
