# src/hl7_codec/parser.py
"""
Parsing flow: tokenize, validate, build a ParseResult.

Structural failures (no MSH first) raise ParseError and produce no result;
validation problems are reported inside an otherwise complete result.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .catalog import SEGMENT_CATALOG, SegmentDefinition
from .models import ParsedField, ParsedSegment, ParseResult
from .tokenizer import tokenize
from .validator import validate

LOG = logging.getLogger(__name__)


def parse_message(
    text: str, catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG
) -> ParseResult:
    """
    Parse raw ER7 text into a labeled, validated result.

    Parameters
    ----------
    text : str
        Raw message text; CR, LF and CRLF are all accepted as terminators.
    catalog : mapping, optional
        Segment catalog used for labels and required-segment checks.

    Returns
    -------
    ParseResult

    Raises
    ------
    ParseError
        If the message does not start with an MSH segment.
    """
    tokens = tokenize(text, catalog)
    report = validate(tokens, catalog)

    segments = [
        ParsedSegment(
            segment_id=seg.segment_id,
            name=seg.name,
            fields=[
                ParsedField(index=f.index, name=f.name, value=f.value)
                for f in seg.fields
            ],
            raw=seg.raw,
        )
        for seg in tokens.segments
    ]

    LOG.info(
        "Parsed %d segments (%d errors, %d warnings)",
        len(segments),
        len(report.errors),
        len(report.warnings),
    )
    return ParseResult(
        message_type=tokens.message_type,
        event_type=tokens.event_type,
        version=tokens.version,
        control_id=tokens.control_id,
        segments=segments,
        errors=report.errors,
        warnings=report.warnings,
        valid=report.valid,
    )
