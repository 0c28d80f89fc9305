# tests/test_tokenizer.py
"""
Tests for hl7_codec.tokenizer.
"""

import pytest

from hl7_codec.exceptions import ParseError
from hl7_codec.tokenizer import split_lines, tokenize

MSG = (
    "MSH|^~\\&|A|B|C|D|20260101000000||ADT^A01|CTRL1|P|2.5.1\r"
    "PID|1||MRN1||Doe^Jane||19800101|F"
)

# ------------------------------------------------------------------------------
# line handling
# ------------------------------------------------------------------------------


@pytest.mark.parametrize("terminator", ["\r", "\n", "\r\n"])
def test_line_endings_are_normalized(terminator):
    tokens = tokenize(MSG.replace("\r", terminator))
    assert tokens.segment_ids() == ["MSH", "PID"]


def test_blank_lines_are_dropped():
    assert split_lines("\n\nMSH|x\r\n   \rPID|1\n") == ["MSH|x", "PID|1"]


def test_leading_blank_lines_before_msh_are_accepted():
    assert tokenize("\r\n" + MSG).message_type == "ADT"


def test_leading_byte_order_mark_is_dropped():
    message = tokenize("\ufeff" + MSG)
    assert message.message_type == "ADT"
    assert message.header.raw.startswith("MSH|")


# ------------------------------------------------------------------------------
# structural errors
# ------------------------------------------------------------------------------


@pytest.mark.parametrize("text", ["PID|1||MRN1", "", "   \n", "XMSH|^~\\&"])
def test_must_start_with_msh(text):
    with pytest.raises(ParseError, match=r"^Message must start with an MSH segment"):
        tokenize(text)


def test_msh_without_field_separator():
    with pytest.raises(ParseError, match=r"^MSH segment declares no field separator"):
        tokenize("MSH")


def test_rejects_non_string():
    with pytest.raises(TypeError, match=r"^text must be str"):
        tokenize(b"MSH|")


# ------------------------------------------------------------------------------
# numbering and labels
# ------------------------------------------------------------------------------


def test_msh_numbering_puts_separator_at_field_one():
    msh = tokenize(MSG).header
    assert msh.fields[0].index == 1
    assert msh.fields[0].name == "Field Separator"
    assert msh.value(1) == "|"
    assert msh.value(2) == "^~\\&"
    assert msh.value(3) == "A"
    assert msh.value(9) == "ADT^A01"
    assert msh.fields[8].name == "Message Type"
    assert len(msh.fields) == 12


def test_other_segments_start_at_one_after_id():
    pid = tokenize(MSG).segments[1]
    assert pid.name == "Patient Identification"
    assert pid.value(1) == "1"
    assert pid.value(3) == "MRN1"
    assert pid.fields[4].name == "Patient Name"
    assert pid.value(5) == "Doe^Jane"
    assert pid.value(30) == ""
    assert pid.raw == "PID|1||MRN1||Doe^Jane||19800101|F"


def test_unknown_segment_gets_generic_labels():
    tokens = tokenize(MSG + "\rZPI|a|b")
    zpi = tokens.segments[2]
    assert zpi.name == "ZPI"
    assert [f.name for f in zpi.fields] == ["ZPI-1", "ZPI-2"]


def test_fields_beyond_catalog_range_get_generic_label():
    tokens = tokenize(MSG + "\rRXR|PO|LA|x|y|z|w|extra")
    rxr = tokens.segments[2]
    assert rxr.fields[6].name == "RXR-7"
    assert rxr.fields[0].name == "Route"


# ------------------------------------------------------------------------------
# header metadata
# ------------------------------------------------------------------------------


def test_header_metadata():
    tokens = tokenize(MSG)
    assert tokens.message_type == "ADT"
    assert tokens.event_type == "A01"
    assert tokens.control_id == "CTRL1"
    assert tokens.version == "2.5.1"


def test_event_absent_without_component_separator():
    tokens = tokenize("MSH|^~\\&|A|B|C|D|ts||ADT|C1|P|2.5.1")
    assert tokens.message_type == "ADT"
    assert tokens.event_type == ""


def test_message_structure_component_is_ignored():
    tokens = tokenize("MSH|^~\\&|A|B|C|D|ts||ADT^A01^ADT_A01|C1|P|2.5.1")
    assert (tokens.message_type, tokens.event_type) == ("ADT", "A01")


def test_custom_separators_are_literal():
    # "." and "*" would be pattern metacharacters for a regex split
    tokens = tokenize("MSH.*~\\&.A.B.C.D.ts..ORU*R01.C9.P.V25\rPID.1..X")
    assert tokens.field_separator == "."
    assert tokens.component_separator == "*"
    assert tokens.message_type == "ORU"
    assert tokens.event_type == "R01"
    assert tokens.control_id == "C9"
    assert tokens.segments[1].value(3) == "X"


def test_escape_sequences_pass_through_raw():
    tokens = tokenize(MSG.replace("Doe^Jane", "Doe\\S\\Smith^Jane"))
    assert tokens.segments[1].value(5) == "Doe\\S\\Smith^Jane"
