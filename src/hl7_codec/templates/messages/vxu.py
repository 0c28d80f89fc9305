# src/hl7_codec/templates/messages/vxu.py
from __future__ import annotations

from functools import partial
from typing import List, Tuple

from ...fields import HEADER_FIELDS, ORDER_FIELDS, PATIENT_FIELDS, VACCINE_FIELDS
from .. import segments
from ..base import SegmentBuilder, SegmentTemplate
from ..registry import register


@register("VXU")
class VXUTemplate(SegmentTemplate):
    """
    Template for VXU^V04 vaccination record updates:
    MSH, PID, ORC, RXA, RXR, OBX.

    No visit fields are used, so ORC carries no ordering provider.
    """

    message_type = "VXU"
    events = ("V04",)
    field_names = frozenset(
        HEADER_FIELDS + PATIENT_FIELDS + ORDER_FIELDS + VACCINE_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            (
                "ORC",
                partial(
                    segments.orc,
                    order_control=segments.ORDER_CONTROL_RESULT,
                    with_provider=False,
                ),
            ),
            ("RXA", segments.rxa),
            ("RXR", segments.rxr_vaccine),
            ("OBX", segments.obx_vaccine),
        ]
