# src/hl7_codec/templates/messages/oru.py
from __future__ import annotations

from functools import partial
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


@register("ORU")
class ORUTemplate(SegmentTemplate):
    """
    Template for ORU^R01 observation results: MSH, PID, PV1, OBR, OBX.

    The OBX abnormal flag is the derived ``abnormalFlag`` field.
    """

    message_type = "ORU"
    events = ("R01",)
    field_names = frozenset(
        HEADER_FIELDS + PATIENT_FIELDS + VISIT_FIELDS + ORDER_FIELDS + LAB_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            ("PV1", segments.pv1),
            ("OBR", partial(segments.obr, resulted=True)),
            ("OBX", segments.obx_lab),
        ]
