# src/hl7_codec/validator.py
"""
Validation rules applied to a tokenized message.

Errors make a message invalid; warnings do not. Rules run in a fixed order
so the reported lists are stable:

1. error   - MSH-9 (Message Type) empty
2. error   - MSH-10 (Message Control ID) empty
3. error   - MSH has fewer than 12 fields
4. warning - MSH-12 (Version ID) empty
5. warning - a required segment (other than MSH) absent

The MSH-first rule is enforced by the tokenizer, which refuses to produce a
tokenized message at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping

from .catalog import HEADER_SEGMENT, SEGMENT_CATALOG, SegmentDefinition, required_segments
from .tokenizer import MSH_CONTROL_ID, MSH_MESSAGE_TYPE, MSH_VERSION, TokenizedMessage

MIN_HEADER_FIELDS = 12


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    severity: Severity
    message: str


@dataclass
class ValidationReport:
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [i.message for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[str]:
        return [i.message for i in self.issues if i.severity is Severity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, message: str) -> None:
        self.issues.append(ValidationIssue(Severity.ERROR, message))

    def warn(self, message: str) -> None:
        self.issues.append(ValidationIssue(Severity.WARNING, message))


def _describe(position: int, catalog: Mapping[str, SegmentDefinition]) -> str:
    name = catalog[HEADER_SEGMENT].field_name(position)
    return f"{HEADER_SEGMENT}-{position} ({name})"


def validate(
    message: TokenizedMessage,
    catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG,
) -> ValidationReport:
    """
    Apply the header and required-segment rules to ``message``.

    Parameters
    ----------
    message : TokenizedMessage
        Output of ``tokenizer.tokenize``.
    catalog : mapping, optional
        Segment catalog supplying field names and required flags.

    Returns
    -------
    ValidationReport
        Ordered issues; ``valid`` is True when no error was recorded.
    """
    report = ValidationReport()
    header = message.header

    if not header.value(MSH_MESSAGE_TYPE).strip():
        report.error(f"{_describe(MSH_MESSAGE_TYPE, catalog)} is empty")
    if not header.value(MSH_CONTROL_ID).strip():
        report.error(f"{_describe(MSH_CONTROL_ID, catalog)} is empty")
    found = len(header.fields)
    if found < MIN_HEADER_FIELDS:
        report.error(
            f"{HEADER_SEGMENT} segment has fewer than {MIN_HEADER_FIELDS} fields "
            f"(found {found})"
        )
    if not header.value(MSH_VERSION).strip():
        report.warn(f"{_describe(MSH_VERSION, catalog)} is empty")

    present = set(message.segment_ids())
    for segment_id, definition in required_segments(catalog).items():
        if segment_id == HEADER_SEGMENT or segment_id in present:
            continue
        report.warn(f"No {segment_id} ({definition.name}) segment found")

    return report
