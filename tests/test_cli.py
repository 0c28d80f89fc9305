# tests/test_cli.py
"""
Tests for hl7_codec/cli.
"""

import io
import json as _json
import runpy
import sys
from pathlib import Path

import pytest

from hl7_codec import cli

# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

HL7_TEXT = (
    "MSH|^~\\&|HIS|RIH|EKG|EKG|20250101123000||ADT^A01|MSG00001|P|2.5.1\n"
    "EVN|A01|20250101123000\n"
    "PID|1||12345^^^MRN||Doe^John||19700101|M\n"
    "PV1|1|I|2000^2012^01||||1234^Physician^Primary\n"
)


def write_hl7(tmp_path: Path, name: str = "msg.hl7", text: str = HL7_TEXT) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def _last_json(out: str):
    return _json.loads(out[out.index("{"):])


# ------------------------------------------------------------------------------
# generate
# ------------------------------------------------------------------------------


def test_generate_writes_file(tmp_path):
    code = cli.main(["generate", "ADT", "--event", "A03", "--seed", "7", "-o", str(tmp_path)])
    assert code == cli.EXIT_OK
    files = list(tmp_path.glob("hl7-ADT-A03-*.hl7"))
    assert len(files) == 1
    text = files[0].read_bytes().decode("utf-8")
    assert text.startswith("MSH|^~\\&|")
    assert "\rPV2|" in text


def test_generate_file_name_uses_control_id(tmp_path):
    code = cli.main([
        "generate", "vxu", "--field", "controlId=CTRL77", "-o", str(tmp_path)
    ])
    assert code == cli.EXIT_OK
    assert (tmp_path / "hl7-VXU-V04-CTRL77.hl7").is_file()


def test_generate_stdout_does_not_write(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    code = cli.main(["generate", "ORU", "--stdout", "--seed", "1"])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    lines = out.strip().split("\n")
    assert lines[0].startswith("MSH|")
    assert [line[:3] for line in lines] == ["MSH", "PID", "PV1", "OBR", "OBX"]
    assert list(tmp_path.iterdir()) == []


def test_generate_json_result(tmp_path, capsys):
    code = cli.main([
        "generate", "SIU", "--event", "S15", "--json", "--pretty", "-o", str(tmp_path)
    ])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    payload = _last_json(out)
    assert payload["tool"] == "hl7-generate"
    assert payload["message_type"] == "SIU"
    assert payload["event_type"] == "S15"
    assert (tmp_path / payload["file_name"]).is_file()


def test_generate_with_bucket(tmp_path, capsys):
    bucket = tmp_path / "bucket.json"
    bucket.write_text(
        _json.dumps({"visit": {"patientId": "BKT42", "lastName": "Bucket"}}),
        encoding="utf-8",
    )
    code = cli.main([
        "generate", "ADT", "--bucket", str(bucket), "--bucket-path", "visit",
        "--field", "lastName=Explicit", "--stdout",
    ])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    pid = next(line for line in out.split("\n") if line.startswith("PID|"))
    assert pid.split("|")[3].startswith("BKT42^")
    assert pid.split("|")[5].startswith("Explicit^")


def test_generate_bad_dob_fails_without_file(tmp_path):
    code = cli.main([
        "generate", "ADT", "--field", "dateOfBirth=1985-03-15", "-o", str(tmp_path)
    ])
    assert code == cli.EXIT_ERR
    assert list(tmp_path.iterdir()) == []


def test_generate_unknown_type(tmp_path):
    assert cli.main(["generate", "XYZ", "-o", str(tmp_path)]) == cli.EXIT_ERR


def test_generate_bad_field_argument(tmp_path):
    assert cli.main(["generate", "ADT", "--field", "novalue", "-o", str(tmp_path)]) == cli.EXIT_ERR


def test_generate_unknown_field_name(tmp_path):
    assert cli.main(["generate", "ADT", "--field", "shoe=9", "-o", str(tmp_path)]) == cli.EXIT_ERR


def test_generate_missing_bucket_file(tmp_path):
    code = cli.main(["generate", "ADT", "--bucket", str(tmp_path / "nope.json")])
    assert code == cli.EXIT_ERR


def test_generate_stdout_and_output_dir_conflict(tmp_path):
    with pytest.raises(SystemExit) as ei:
        cli.main(["generate", "ADT", "--stdout", "-o", str(tmp_path)])
    assert ei.value.code == cli.EXIT_CLI


def test_generate_stdout_and_json_conflict(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as ei:
        cli.main(["generate", "ADT", "--stdout", "--json"])
    assert ei.value.code == cli.EXIT_CLI
    out, err = capsys.readouterr()
    assert out == ""
    assert "--stdout and --json are mutually exclusive" in err
    assert list(tmp_path.iterdir()) == []


def test_generate_uses_config_output_dir(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"default_output_dir: {tmp_path / 'cfg_out'}\nfile_extension: er7\n")
    code = cli.main(["--config", str(cfg), "generate", "MDM"])
    assert code == cli.EXIT_OK
    assert len(list((tmp_path / "cfg_out").glob("hl7-MDM-T02-*.er7"))) == 1


def test_missing_config_file(tmp_path):
    code = cli.main(["--config", str(tmp_path / "nope.yaml"), "list"])
    assert code == cli.EXIT_ERR


def test_non_mapping_config_file(tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("- a\n- b\n")
    assert cli.main(["--config", str(cfg), "list"]) == cli.EXIT_ERR


# ------------------------------------------------------------------------------
# parse
# ------------------------------------------------------------------------------


def test_parse_file_ok(tmp_path, capsys):
    p = write_hl7(tmp_path)
    code = cli.main(["parse", str(p)])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    payload = _last_json(out)
    assert payload["tool"] == "hl7-parse"
    assert payload["message_type"] == "ADT"
    assert payload["event_type"] == "A01"
    assert payload["control_id"] == "MSG00001"
    assert payload["valid"] is True
    assert [s["segment_id"] for s in payload["segments"]] == ["MSH", "EVN", "PID", "PV1"]
    assert payload["conformance"] is None


def test_parse_inline_text(capsys):
    code = cli.main(["parse", "--text", HL7_TEXT])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    assert _last_json(out)["version"] == "2.5.1"


def test_parse_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(HL7_TEXT))
    code = cli.main(["parse", "-"])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    assert _last_json(out)["valid"] is True


def test_parse_bucket(tmp_path, capsys):
    bucket = tmp_path / "bucket.json"
    bucket.write_text(_json.dumps({"job": {"content": HL7_TEXT}}), encoding="utf-8")
    code = cli.main(["parse", "--bucket", str(bucket), "--bucket-path", "job", "--pretty"])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    assert _last_json(out)["message_type"] == "ADT"


def test_parse_invalid_message_still_exits_ok(capsys):
    text = HL7_TEXT.replace("|MSG00001|", "||")
    code = cli.main(["parse", "--text", text])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    payload = _last_json(out)
    assert payload["valid"] is False
    assert payload["errors"] == ["MSH-10 (Message Control ID) is empty"]


def test_parse_with_conformance(capsys):
    code = cli.main(["parse", "--text", HL7_TEXT, "--conformance"])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    assert isinstance(_last_json(out)["conformance"], list)


def test_parse_not_hl7_is_error(tmp_path):
    p = write_hl7(tmp_path, text="hello world\n")
    assert cli.main(["parse", str(p)]) == cli.EXIT_ERR


def test_parse_file_not_found(tmp_path):
    assert cli.main(["parse", str(tmp_path / "nope.hl7")]) == cli.EXIT_ERR


def test_parse_path_is_directory(tmp_path):
    d = tmp_path / "adir"
    d.mkdir()
    assert cli.main(["parse", str(d)]) == cli.EXIT_ERR


def test_parse_without_input():
    assert cli.main(["parse"]) == cli.EXIT_ERR


def test_parse_generated_message_round_trip(tmp_path, capsys):
    cli.main(["generate", "RDE", "--event", "O25", "-o", str(tmp_path)])
    capsys.readouterr()
    (generated,) = tmp_path.glob("hl7-RDE-O25-*.hl7")
    code = cli.main(["parse", str(generated)])
    out, _ = capsys.readouterr()
    payload = _last_json(out)
    assert code == cli.EXIT_OK
    assert (payload["message_type"], payload["event_type"]) == ("RDE", "O25")
    assert payload["valid"] is True
    assert payload["warnings"] == []


# ------------------------------------------------------------------------------
# list, usage and entrypoint
# ------------------------------------------------------------------------------


def test_list_prints_types_and_events(capsys):
    code = cli.main(["list"])
    out, _ = capsys.readouterr()
    assert code == cli.EXIT_OK
    assert "ADT: A01, A02, A03, A04, A05, A08, A11, A13" in out
    assert "VXU: V04" in out


def test_no_command_is_usage_error():
    with pytest.raises(SystemExit) as ei:
        cli.main([])
    assert ei.value.code == cli.EXIT_CLI


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main(["--version"])
    assert ei.value.code == 0
    out, _ = capsys.readouterr()
    assert "hl7-codec (cli)" in out


def test_keyboard_interrupt_maps_to_exit_err(monkeypatch):
    def _boom():
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "_cmd_list", _boom)
    assert cli.main(["list"]) == cli.EXIT_ERR


def test_module_entrypoint(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["hl7-codec", "list"])
    with pytest.raises(SystemExit) as ei:
        runpy.run_module("hl7_codec.cli", run_name="__main__")
    assert ei.value.code == cli.EXIT_OK
