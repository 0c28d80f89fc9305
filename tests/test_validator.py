# tests/test_validator.py
"""
Tests for hl7_codec.validator.
"""

from dataclasses import replace

from hl7_codec.catalog import SEGMENT_CATALOG
from hl7_codec.tokenizer import tokenize
from hl7_codec.validator import Severity, validate

HEADER = "MSH|^~\\&|A|B|C|D|20260101000000||{mt}|{cid}|P|{ver}"
PID = "PID|1||MRN1||Doe^Jane"


def _msg(mt="ADT^A01", cid="CTRL1", ver="2.5.1", pid=True):
    text = HEADER.format(mt=mt, cid=cid, ver=ver)
    return text + ("\r" + PID if pid else "")


def test_clean_message_has_no_issues():
    report = validate(tokenize(_msg()))
    assert report.valid
    assert report.issues == []


def test_missing_message_type_is_error():
    report = validate(tokenize(_msg(mt="")))
    assert not report.valid
    assert report.errors == ["MSH-9 (Message Type) is empty"]


def test_missing_control_id_is_error():
    report = validate(tokenize(_msg(cid="")))
    assert not report.valid
    assert report.errors == ["MSH-10 (Message Control ID) is empty"]


def test_missing_version_is_warning_only():
    report = validate(tokenize(_msg(ver="")))
    assert report.valid
    assert report.errors == []
    assert report.warnings == ["MSH-12 (Version ID) is empty"]


def test_short_header_is_error():
    report = validate(tokenize("MSH|^~\\&|A|B|C|D|ts||ADT^A01|CTRL1\r" + PID))
    assert report.errors == ["MSH segment has fewer than 12 fields (found 10)"]
    assert report.warnings == ["MSH-12 (Version ID) is empty"]


def test_missing_patient_segment_is_warning():
    report = validate(tokenize(_msg(pid=False)))
    assert report.valid
    assert report.warnings == ["No PID (Patient Identification) segment found"]


def test_patient_segment_anywhere_counts():
    text = _msg(pid=False) + "\rEVN|A01\r" + PID
    assert validate(tokenize(text)).warnings == []


def test_issues_keep_rule_order():
    report = validate(tokenize("MSH|^~\\&|A|B|C|D|ts||||P"))
    assert [i.severity for i in report.issues] == [
        Severity.ERROR,
        Severity.ERROR,
        Severity.ERROR,
        Severity.WARNING,
        Severity.WARNING,
    ]
    assert report.errors[0].startswith("MSH-9")
    assert report.errors[1].startswith("MSH-10")
    assert report.errors[2].startswith("MSH segment has fewer than 12 fields")


def test_required_flag_in_catalog_drives_missing_segment_warnings():
    catalog = dict(SEGMENT_CATALOG)
    catalog["EVN"] = replace(catalog["EVN"], required=True)
    report = validate(tokenize(_msg(), catalog), catalog)
    assert report.valid
    assert report.warnings == ["No EVN (Event Type) segment found"]
