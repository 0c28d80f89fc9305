# src/hl7_codec/tokenizer.py
"""
Tokenizer for ER7 text.

Splits raw message text into segments and fields using the separators the
message declares in its own MSH line, and labels each field from the
segment catalog.

Field numbering follows the standard: for MSH the field separator itself is
field 1 and the encoding characters are field 2; for every other segment
field 1 is the first value after the segment id. Escape sequences inside
field values are passed through raw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from .catalog import HEADER_SEGMENT, SEGMENT_CATALOG, SegmentDefinition, field_label
from .exceptions import ParseError

LOG = logging.getLogger(__name__)

# MSH positions read into the header metadata
MSH_MESSAGE_TYPE = 9
MSH_CONTROL_ID = 10
MSH_VERSION = 12


@dataclass(frozen=True)
class Field:
    index: int
    name: str
    value: str


@dataclass(frozen=True)
class Segment:
    segment_id: str
    name: str
    fields: Tuple[Field, ...]
    raw: str

    def value(self, index: int) -> str:
        """Raw value of field ``index`` (1-based); empty string when absent."""
        if 1 <= index <= len(self.fields):
            return self.fields[index - 1].value
        return ""


@dataclass(frozen=True)
class TokenizedMessage:
    field_separator: str
    component_separator: str
    segments: Tuple[Segment, ...]

    @property
    def header(self) -> Segment:
        return self.segments[0]

    @property
    def message_type(self) -> str:
        return self._message_type_parts()[0]

    @property
    def event_type(self) -> str:
        return self._message_type_parts()[1]

    @property
    def control_id(self) -> str:
        return self.header.value(MSH_CONTROL_ID)

    @property
    def version(self) -> str:
        return self.header.value(MSH_VERSION)

    def _message_type_parts(self) -> Tuple[str, str]:
        value = self.header.value(MSH_MESSAGE_TYPE)
        if not self.component_separator or self.component_separator not in value:
            return value, ""
        parts = value.split(self.component_separator)
        return parts[0], parts[1]

    def segment_ids(self) -> List[str]:
        return [s.segment_id for s in self.segments]


def split_lines(text: str) -> List[str]:
    """
    Normalize CRLF, CR and LF to one terminator and drop blank lines.

    A leading UTF-8 byte order mark is dropped.
    """
    normalized = text.lstrip("\ufeff").replace("\r\n", "\r").replace("\n", "\r")
    return [line for line in normalized.split("\r") if line.strip()]


def _label(
    segment_id: str, values: List[str], catalog: Mapping[str, SegmentDefinition]
) -> Tuple[Field, ...]:
    return tuple(
        Field(index=i, name=field_label(segment_id, i, catalog), value=v)
        for i, v in enumerate(values, start=1)
    )


def tokenize(
    text: str, catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG
) -> TokenizedMessage:
    """
    Split ``text`` into labeled segments.

    Parameters
    ----------
    text : str
        Raw message text.
    catalog : mapping, optional
        Segment catalog used for labels.

    Returns
    -------
    TokenizedMessage

    Raises
    ------
    TypeError
        If text is not a string.
    ParseError
        If the first non-blank line is not an MSH segment, or declares no
        field separator.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")

    lines = split_lines(text)
    if not lines or not lines[0].startswith(HEADER_SEGMENT):
        raise ParseError("Message must start with an MSH segment")
    header = lines[0]
    if len(header) < 4:
        raise ParseError("MSH segment declares no field separator")

    fs = header[3]
    cs = header[4] if len(header) > 4 else ""

    segments: List[Segment] = []
    for line in lines:
        # str.split treats the separator literally
        parts = line.split(fs)
        segment_id = parts[0]
        if segment_id == HEADER_SEGMENT:
            values = [fs] + parts[1:]
        else:
            values = parts[1:]
        definition: Optional[SegmentDefinition] = catalog.get(segment_id)
        segments.append(
            Segment(
                segment_id=segment_id,
                name=definition.name if definition else segment_id,
                fields=_label(segment_id, values, catalog),
                raw=line,
            )
        )

    LOG.debug("Tokenized %d segments", len(segments))
    return TokenizedMessage(
        field_separator=fs, component_separator=cs, segments=tuple(segments)
    )
