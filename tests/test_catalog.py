# tests/test_catalog.py
"""
Tests for hl7_codec.catalog.
"""

import pytest

from hl7_codec.catalog import (
    SEGMENT_CATALOG,
    _define,
    field_label,
    get_definition,
    required_segments,
)

# ------------------------------------------------------------------------------
# definitions
# ------------------------------------------------------------------------------


def test_msh_positions_follow_standard_numbering():
    msh = get_definition("MSH")
    assert msh.field_name(1) == "Field Separator"
    assert msh.field_name(2) == "Encoding Characters"
    assert msh.field_name(9) == "Message Type"
    assert msh.field_name(10) == "Message Control ID"
    assert msh.field_name(12) == "Version ID"
    assert msh.position("Message Type") == 9


def test_pid_positions():
    pid = get_definition("PID")
    assert pid.position("Patient Identifier List") == 3
    assert pid.position("Patient Name") == 5
    assert pid.position("Date/Time of Birth") == 7
    assert pid.position("Administrative Sex") == 8


def test_field_name_out_of_range_is_none():
    pid = get_definition("PID")
    assert pid.field_name(0) is None
    assert pid.field_name(len(pid.fields) + 1) is None


def test_position_unknown_name_raises_key_error():
    with pytest.raises(KeyError, match=r"PID has no field named 'Shoe Size'"):
        get_definition("PID").position("Shoe Size")


def test_get_definition_unknown_segment_is_none():
    assert get_definition("ZZZ") is None


def test_define_rejects_duplicate_field_names():
    with pytest.raises(ValueError, match=r"^duplicate field names in ZXX definition"):
        _define("ZXX", "Custom", ["A", "B", "A"])


# ------------------------------------------------------------------------------
# labels and required flags
# ------------------------------------------------------------------------------


def test_field_label_uses_catalog_name():
    assert field_label("PV1", 2) == "Patient Class"


def test_field_label_generic_beyond_range_and_for_unknown_segment():
    pv2_len = len(get_definition("PV2").fields)
    assert field_label("PV2", pv2_len + 1) == f"PV2-{pv2_len + 1}"
    assert field_label("ZPI", 3) == "ZPI-3"


def test_required_segments_are_msh_and_pid():
    assert sorted(required_segments()) == ["MSH", "PID"]


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        SEGMENT_CATALOG["ZZZ"] = SEGMENT_CATALOG["PID"]


def test_catalog_covers_every_generated_segment():
    for sid in (
        "MSH", "EVN", "PID", "PV1", "PV2", "DG1", "ORC", "OBR", "OBX",
        "SCH", "AIS", "AIL", "AIP", "RXE", "RXR", "RXA", "TXA", "FT1",
    ):
        assert sid in SEGMENT_CATALOG, sid
