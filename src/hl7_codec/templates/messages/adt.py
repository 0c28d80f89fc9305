# src/hl7_codec/templates/messages/adt.py
"""
ADT (admit, discharge, transfer) template.

Segment order: MSH, EVN, PID, PV1, [PV2], DG1. The discharge event (A03)
adds the discharge disposition and timestamp to PV1 and carries a PV2.
"""

from __future__ import annotations

from functools import partial
from typing import List, Tuple

from ...fields import DIAGNOSIS_FIELDS, HEADER_FIELDS, PATIENT_FIELDS, VISIT_FIELDS
from .. import segments
from ..base import SegmentBuilder, SegmentTemplate
from ..registry import register

ADMITTING_EVENTS = frozenset({"A01", "A04", "A05"})
DISCHARGE_EVENT = "A03"

# HL7 table 0052
DIAGNOSIS_TYPE_ADMITTING = "A"
DIAGNOSIS_TYPE_FINAL = "F"
DIAGNOSIS_TYPE_WORKING = "W"


def diagnosis_type(event: str) -> str:
    """DG1-6 for an ADT event."""
    if event in ADMITTING_EVENTS:
        return DIAGNOSIS_TYPE_ADMITTING
    if event == DISCHARGE_EVENT:
        return DIAGNOSIS_TYPE_FINAL
    return DIAGNOSIS_TYPE_WORKING


@register("ADT")
class ADTTemplate(SegmentTemplate):
    """
    Template for ADT messages.

    Attributes
    ----------
    events : tuple of str
        A01 (admit), A02 (transfer), A03 (discharge), A04 (register),
        A05 (pre-admit), A08 (update), A11 (cancel admit),
        A13 (cancel discharge).
    """

    message_type = "ADT"
    events = ("A01", "A02", "A03", "A04", "A05", "A08", "A11", "A13")
    field_names = frozenset(
        HEADER_FIELDS + PATIENT_FIELDS + VISIT_FIELDS + DIAGNOSIS_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        discharge = event == DISCHARGE_EVENT
        out: List[Tuple[str, SegmentBuilder]] = [
            ("MSH", segments.msh),
            ("EVN", segments.evn),
            ("PID", segments.pid),
            ("PV1", partial(segments.pv1, discharge=discharge)),
        ]
        if discharge:
            out.append(("PV2", segments.pv2))
        out.append(
            ("DG1", partial(segments.dg1, diagnosis_type=diagnosis_type(event)))
        )
        return out
