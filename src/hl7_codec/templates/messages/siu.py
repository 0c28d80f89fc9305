# src/hl7_codec/templates/messages/siu.py
"""
SIU (scheduling) template.

Segment order: MSH, PID, PV1, SCH, AIS, AIL, AIP. Scheduled visits are
outpatient unless the caller supplied inpatient or emergency.
"""

from __future__ import annotations

from functools import partial
from typing import List, Tuple

from ...fields import (
    APPOINTMENT_FIELDS,
    HEADER_FIELDS,
    PATIENT_FIELDS,
    VISIT_FIELDS,
    ResolvedFieldSet,
)
from .. import segments
from ..base import RenderContext, SegmentBuilder, SegmentTemplate
from ..registry import register

OUTPATIENT = "O"
KEPT_PATIENT_CLASSES = frozenset({"I", "E"})

# SCH-25 / AIx filler status (HL7 table 0278)
FILLER_STATUS = {
    "S12": "Booked",
    "S13": "Booked",
    "S14": "Booked",
    "S15": "Cancelled",
    "S26": "Noshow",
}

# AIx-2 segment action code (HL7 table 0206)
SEGMENT_ACTION = {
    "S12": "A",
    "S13": "U",
    "S14": "U",
    "S15": "D",
    "S26": "U",
}


def scheduled_patient_class(f: ResolvedFieldSet) -> str:
    """PV1-2 for a scheduling message."""
    value = f["patientClass"].upper()
    if f.supplied("patientClass") and value in KEPT_PATIENT_CLASSES:
        return value
    return OUTPATIENT


def _pv1(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return segments.pv1(f, ctx, patient_class=scheduled_patient_class(f))


@register("SIU")
class SIUTemplate(SegmentTemplate):
    """
    Template for SIU messages.

    Attributes
    ----------
    events : tuple of str
        S12 (new booking), S13 (rescheduling), S14 (modification),
        S15 (cancellation), S26 (no-show).
    """

    message_type = "SIU"
    events = ("S12", "S13", "S14", "S15", "S26")
    field_names = frozenset(
        HEADER_FIELDS + PATIENT_FIELDS + VISIT_FIELDS + APPOINTMENT_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        status = FILLER_STATUS[event]
        action = SEGMENT_ACTION[event]
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            ("PV1", _pv1),
            ("SCH", partial(segments.sch, filler_status=status)),
            ("AIS", partial(segments.ais, action=action, filler_status=status)),
            ("AIL", partial(segments.ail, action=action, filler_status=status)),
            ("AIP", partial(segments.aip, action=action, filler_status=status)),
        ]
