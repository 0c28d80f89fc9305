# tests/test_parser.py
"""
Tests for hl7_codec.parser.
"""

import pytest

from hl7_codec.exceptions import ParseError
from hl7_codec.parser import parse_message

SCENARIO = (
    "MSH|^~\\&|A|B|C|D|20260101000000||ADT^A01|CTRL1|P|2.5.1"
    "\r"
    "PID|1||MRN1||Doe^Jane||19800101|F"
)


def test_concrete_scenario():
    result = parse_message(SCENARIO)
    assert result.tool == "hl7-parse"
    assert result.message_type == "ADT"
    assert result.event_type == "A01"
    assert result.control_id == "CTRL1"
    assert result.version == "2.5.1"
    assert result.valid is True
    assert result.errors == []
    assert result.warnings == []
    assert result.conformance is None


def test_byte_order_mark_before_header_is_accepted():
    result = parse_message("\ufeff" + SCENARIO)
    assert result.valid is True
    assert result.segments[0].segment_id == "MSH"
    assert result.control_id == "CTRL1"


def test_segments_are_labeled():
    result = parse_message(SCENARIO)
    assert [s.segment_id for s in result.segments] == ["MSH", "PID"]
    assert result.segments[0].name == "Message Header"
    pid = result.segments[1]
    assert pid.raw == "PID|1||MRN1||Doe^Jane||19800101|F"
    name = pid.field(5)
    assert (name.index, name.name, name.value) == (5, "Patient Name", "Doe^Jane")
    assert pid.field(99) is None


def test_not_msh_is_structural_error():
    with pytest.raises(ParseError, match=r"^Message must start with an MSH segment"):
        parse_message("PID|1||MRN1")


def test_missing_control_id_makes_result_invalid():
    result = parse_message(SCENARIO.replace("|CTRL1|", "||"))
    assert result.valid is False
    assert any("Message Control ID" in e for e in result.errors)
    # the rest of the message is still returned
    assert len(result.segments) == 2


def test_missing_version_is_still_valid():
    result = parse_message(SCENARIO.replace("|P|2.5.1", "|P|"))
    assert result.valid is True
    assert result.errors == []
    assert result.warnings == ["MSH-12 (Version ID) is empty"]


def test_result_serializes_to_json():
    payload = parse_message(SCENARIO).model_dump()
    assert payload["segments"][1]["fields"][2] == {
        "index": 3,
        "name": "Patient Identifier List",
        "value": "MRN1",
    }
