# tests/test_er7.py
"""
Tests for hl7_codec.er7.
"""

import pytest

from hl7_codec.er7 import (
    DEFAULT_SEPARATORS,
    Separators,
    assemble_message,
    components,
    render_segment,
)
from hl7_codec.exceptions import TemplateError


def test_encoding_characters():
    assert DEFAULT_SEPARATORS.encoding_characters == "^~\\&"
    assert Separators(component="#").encoding_characters == "#~\\&"


def test_components_drops_trailing_empties_only():
    assert components("Doe", "Jane", "", "") == "Doe^Jane"
    assert components("123", "", "", "HOSP", "MR") == "123^^^HOSP^MR"
    assert components(None, "x") == "^x"
    assert components("", "") == ""


def test_render_segment_places_fields_by_name():
    assert render_segment("PV1", {"Patient Class": "I"}) == "PV1||I"
    assert render_segment("PV1", {"Set ID - PV1": "1", "Visit Number": "V1"}) == (
        "PV1|1" + "|" * 18 + "V1"
    )


def test_render_segment_order_of_mapping_does_not_matter():
    a = render_segment("PID", {"Set ID - PID": "1", "Patient Name": "Doe^Jane"})
    b = render_segment("PID", {"Patient Name": "Doe^Jane", "Set ID - PID": "1"})
    assert a == b == "PID|1||||Doe^Jane"


def test_render_msh_uses_separators_for_first_two_fields():
    seg = render_segment("MSH", {"Message Type": "ADT^A01"})
    assert seg == "MSH|^~\\&|||||||ADT^A01"
    parts = seg.split("|")
    # parts[0] is "MSH"; MSH-n is parts[n-1] because MSH-1 is the separator
    assert parts[9 - 1] == "ADT^A01"


def test_render_msh_custom_separators():
    seps = Separators(field="*", component="#")
    seg = render_segment("MSH", {"Sending Application": "APP"}, separators=seps)
    assert seg == "MSH*#~\\&*APP"


def test_render_empty_segment():
    assert render_segment("EVN", {}) == "EVN"
    assert render_segment("MSH", {}) == "MSH|^~\\&"


def test_render_segment_none_is_empty():
    assert render_segment("PV1", {"Set ID - PV1": None, "Patient Class": "O"}) == "PV1||O"


def test_render_segment_unknown_segment():
    with pytest.raises(TemplateError, match=r"^Segment 'ZZZ' is not in the catalog"):
        render_segment("ZZZ", {})


def test_render_segment_unknown_field_name():
    with pytest.raises(TemplateError, match=r"PV1 has no field named 'Shoe Size'"):
        render_segment("PV1", {"Shoe Size": "9"})


def test_assemble_message_has_no_trailing_terminator():
    assert assemble_message(["MSH|^~\\&", "PID|1"]) == "MSH|^~\\&\rPID|1"
    assert assemble_message(["A", "B"], terminator="\n") == "A\nB"
