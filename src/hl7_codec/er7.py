# src/hl7_codec/er7.py
"""
ER7 (pipe-delimited) emission primitives.

Provides:
- Separators: the five encoding characters declared in MSH-1/MSH-2
- render_segment: turn a field-name -> value mapping into one segment string
  using the catalog's position table
- components: join component values with the component separator
- assemble_message: join rendered segments with the segment terminator
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from .catalog import HEADER_SEGMENT, SEGMENT_CATALOG, SegmentDefinition
from .exceptions import TemplateError

SEGMENT_TERMINATOR = "\r"


@dataclass(frozen=True)
class Separators:
    """HL7 delimiter set."""

    field: str = "|"
    component: str = "^"
    repetition: str = "~"
    escape: str = "\\"
    subcomponent: str = "&"

    @property
    def encoding_characters(self) -> str:
        """MSH-2 value, e.g. ``^~\\&``."""
        return self.component + self.repetition + self.escape + self.subcomponent


DEFAULT_SEPARATORS = Separators()


def components(*parts: Optional[str], separators: Separators = DEFAULT_SEPARATORS) -> str:
    """
    Join component values, dropping trailing empty components.

    ``components("Doe", "Jane", "", "")`` -> ``"Doe^Jane"``; intermediate
    empties are kept so positions stay aligned.
    """
    values = ["" if p is None else str(p) for p in parts]
    while values and values[-1] == "":
        values.pop()
    return separators.component.join(values)


def render_segment(
    segment_id: str,
    values: Mapping[str, Optional[str]],
    *,
    separators: Separators = DEFAULT_SEPARATORS,
    catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG,
) -> str:
    """
    Render one segment from named field values.

    Fields are placed at the positions the catalog assigns to their names;
    unnamed positions in between are emitted as empty placeholders. For MSH
    the separator fields (MSH-1, MSH-2) are always taken from
    ``separators``.

    Parameters
    ----------
    segment_id : str
        Catalog segment id, e.g. "PID".
    values : mapping of str to str
        Catalog field name -> raw value. None is emitted as empty.

    Returns
    -------
    str
        Segment text without terminator.

    Raises
    ------
    TemplateError
        If the segment or any field name is not in the catalog.
    """
    definition = catalog.get(segment_id)
    if definition is None:
        raise TemplateError(f"Segment {segment_id!r} is not in the catalog")

    slots: List[str] = []
    for name, value in values.items():
        try:
            pos = definition.position(name)
        except KeyError as e:
            raise TemplateError(str(e.args[0])) from e
        if pos > len(slots):
            slots.extend([""] * (pos - len(slots)))
        slots[pos - 1] = "" if value is None else str(value)

    fs = separators.field
    if segment_id == HEADER_SEGMENT:
        if len(slots) < 2:
            slots.extend([""] * (2 - len(slots)))
        slots[0] = fs
        slots[1] = separators.encoding_characters
        # MSH-1 is the separator itself, so it is not joined like a field
        return segment_id + fs + fs.join(slots[1:])

    if not slots:
        return segment_id
    return segment_id + fs + fs.join(slots)


def assemble_message(
    segments: Iterable[str], terminator: str = SEGMENT_TERMINATOR
) -> str:
    """
    Join rendered segments into one message.

    No terminator follows the final segment, and segment content is passed
    through unchanged.
    """
    return terminator.join(segments)
