# src/hl7_codec/templates/messages/dft.py
from __future__ import annotations

from typing import List, Tuple

from ...fields import (
    DIAGNOSIS_FIELDS,
    FINANCIAL_FIELDS,
    HEADER_FIELDS,
    PATIENT_FIELDS,
    VISIT_FIELDS,
)
from .. import segments
from ..base import SegmentBuilder, SegmentTemplate
from ..registry import register


@register("DFT")
class DFTTemplate(SegmentTemplate):
    """
    Template for detailed financial transactions (P03 post, P11 post
    detail): MSH, PID, PV1, FT1.
    """

    message_type = "DFT"
    events = ("P03", "P11")
    field_names = frozenset(
        HEADER_FIELDS
        + PATIENT_FIELDS
        + VISIT_FIELDS
        + FINANCIAL_FIELDS
        + DIAGNOSIS_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            ("PV1", segments.pv1),
            ("FT1", segments.ft1),
        ]
