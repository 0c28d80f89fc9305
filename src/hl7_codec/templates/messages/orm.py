# src/hl7_codec/templates/messages/orm.py
from __future__ import annotations

from typing import List, Tuple

from ...fields import (
    HEADER_FIELDS,
    LAB_FIELDS,
    ORDER_FIELDS,
    PATIENT_FIELDS,
    VISIT_FIELDS,
)
from .. import segments
from ..base import SegmentBuilder, SegmentTemplate
from ..registry import register


@register("ORM")
class ORMTemplate(SegmentTemplate):
    """
    Template for ORM^O01 general orders: MSH, PID, PV1, ORC, OBR.
    """

    message_type = "ORM"
    events = ("O01",)
    field_names = frozenset(
        HEADER_FIELDS + PATIENT_FIELDS + VISIT_FIELDS + ORDER_FIELDS + LAB_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            ("PV1", segments.pv1),
            ("ORC", segments.orc),
            ("OBR", segments.obr),
        ]
