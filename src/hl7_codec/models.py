# src/hl7_codec/models.py
"""
Structured results returned by the generator and the parser.

pydantic models so the CLI (or any host) can serialize them with
``model_dump_json``.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateResult(BaseModel):
    """Outcome of one generation call."""

    model_config = ConfigDict(frozen=True)

    tool: str = "hl7-generate"
    message_type: str
    event_type: str
    version: str
    control_id: str
    segments: List[str]
    file_name: str
    message: str
    # logical field name -> "explicit" | "bucket" | "synthetic" | "derived"
    field_sources: Dict[str, str] = Field(default_factory=dict)


class ParsedField(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    name: str
    value: str


class ParsedSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    segment_id: str
    name: str
    fields: List[ParsedField]
    raw: str

    def field(self, index: int) -> Optional[ParsedField]:
        """Return field ``index`` (1-based) or None when absent."""
        if 1 <= index <= len(self.fields):
            return self.fields[index - 1]
        return None


class ParseResult(BaseModel):
    """Outcome of one parse call; ``valid`` is true when there are no errors."""

    tool: str = "hl7-parse"
    message_type: str = ""
    event_type: str = ""
    version: str = ""
    control_id: str = ""
    segments: List[ParsedSegment] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    valid: bool = True
    conformance: Optional[List[str]] = None
