# src/hl7_codec/templates/base.py
"""
Template protocol for message generation.

A template maps (message type, event type) to an ordered list of segment
builders. Each builder renders one segment string from a ResolvedFieldSet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Callable,
    FrozenSet,
    List,
    Optional,
    Protocol,
    Tuple,
    runtime_checkable,
)

from ..er7 import DEFAULT_SEPARATORS, Separators
from ..fields import ResolvedFieldSet
from ..pools import DEFAULT_POOLS, SyntheticPools

__all__ = [
    "RenderContext",
    "SegmentBuilder",
    "MessageTemplate",
    "SegmentTemplate",
]

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """Per-message values that are not logical fields."""

    message_type: str
    event_type: str
    version: str = "2.5.1"
    processing_id: str = "P"
    separators: Separators = DEFAULT_SEPARATORS
    pools: SyntheticPools = DEFAULT_POOLS


SegmentBuilder = Callable[[ResolvedFieldSet, RenderContext], str]


@runtime_checkable
class MessageTemplate(Protocol):
    """
    Interface for message templates.

    Implementations declare the message type they handle (e.g., "ADT"), its
    valid events (default first) and the logical fields they read.
    """

    message_type: str
    events: Tuple[str, ...]
    field_names: FrozenSet[str]

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        """
        Return (segment id, builder) pairs in emission order for ``event``.
        """
        ...

    def render(self, fields: ResolvedFieldSet, ctx: RenderContext) -> List[str]:
        """
        Render every segment of the message, in order.
        """
        ...


class SegmentTemplate:
    """
    Shared behaviour for concrete templates: event substitution and
    rendering of the builder list.
    """

    message_type: str = ""
    events: Tuple[str, ...] = ()
    field_names: FrozenSet[str] = frozenset()

    @property
    def default_event(self) -> str:
        return self.events[0]

    def resolve_event(self, event: Optional[str]) -> str:
        """
        Return ``event`` (upper-cased) when valid for this message type,
        otherwise the default event.
        """
        code = (event or "").strip().upper()
        if code in self.events:
            return code
        if code:
            LOG.warning(
                "Event %s is not valid for %s; using %s",
                code,
                self.message_type,
                self.default_event,
            )
        return self.default_event

    def segment_ids(self, event: str) -> List[str]:
        return [sid for sid, _ in self.builders(event)]

    def builders(self, event: str) -> List[Tuple[str, SegmentBuilder]]:
        raise NotImplementedError

    def render(self, fields: ResolvedFieldSet, ctx: RenderContext) -> List[str]:
        return [build(fields, ctx) for _, build in self.builders(ctx.event_type)]
