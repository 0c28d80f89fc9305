# src/hl7_codec/templates/messages/rde.py
from __future__ import annotations

from typing import List, Tuple

from ...fields import (
    HEADER_FIELDS,
    MEDICATION_FIELDS,
    ORDER_FIELDS,
    PATIENT_FIELDS,
    VISIT_FIELDS,
)
from .. import segments
from ..base import SegmentBuilder, SegmentTemplate
from ..registry import register


@register("RDE")
class RDETemplate(SegmentTemplate):
    """
    Template for pharmacy encoded orders (O11 order, O25 refill):
    MSH, PID, PV1, ORC, RXE, RXR.
    """

    message_type = "RDE"
    events = ("O11", "O25")
    field_names = frozenset(
        HEADER_FIELDS
        + PATIENT_FIELDS
        + VISIT_FIELDS
        + ORDER_FIELDS
        + MEDICATION_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            ("PV1", segments.pv1),
            ("ORC", segments.orc),
            ("RXE", segments.rxe),
            ("RXR", segments.rxr_medication),
        ]
