# src/hl7_codec/templates/messages/mdm.py
from __future__ import annotations

from typing import List, Tuple

from ...fields import DOCUMENT_FIELDS, HEADER_FIELDS, PATIENT_FIELDS
from .. import segments
from ..base import SegmentBuilder, SegmentTemplate
from ..registry import register

# TXA-9/TXA-10 authoring provider
AUTHOR_FIELDS = (
    "attendingDoctorId",
    "attendingDoctorLastName",
    "attendingDoctorFirstName",
)


@register("MDM")
class MDMTemplate(SegmentTemplate):
    """
    Template for MDM medical document management: MSH, PID, TXA, OBX.

    Events: T02 (original with content), T01 (original notification),
    T04 (status change), T08 (edit), T11 (cancel).
    """

    message_type = "MDM"
    events = ("T02", "T01", "T04", "T08", "T11")
    field_names = frozenset(
        HEADER_FIELDS + PATIENT_FIELDS + DOCUMENT_FIELDS + AUTHOR_FIELDS
    )

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        return [
            ("MSH", segments.msh),
            ("PID", segments.pid),
            ("TXA", segments.txa),
            ("OBX", segments.obx_document),
        ]
