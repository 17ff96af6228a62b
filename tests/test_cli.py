import json
import logging
from pathlib import Path

from backend.tasks import nocode_converter
from backend.tasks.nocode_converter import main


def test_missing_input_prints_usage_and_exits_1(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_converts_file_and_writes_pretty_json(tmp_path: Path, scenario_a, capsys):
    src = tmp_path / "figma.json"
    dst = tmp_path / "out.json"
    src.write_text(json.dumps(scenario_a), encoding="utf-8")

    assert main([str(src), str(dst)]) == 0

    text = dst.read_text(encoding="utf-8")
    assert text.startswith('{\n  "blocks": {')
    out = json.loads(text)
    assert out["blocks"]["root_id"]["component"]["content"]["blockIds"] == [
        k for k in out["blocks"] if k != "root_id"
    ]
    assert str(dst) in capsys.readouterr().out


def test_default_output_path(tmp_path: Path, scenario_b, monkeypatch):
    src = tmp_path / "figma.json"
    src.write_text(json.dumps(scenario_b), encoding="utf-8")
    default_out = tmp_path / "no-code-output.json"
    monkeypatch.setattr(nocode_converter, "DEFAULT_OUTPUT_PATH", str(default_out))

    assert main([str(src)]) == 0
    assert list(json.loads(default_out.read_text(encoding="utf-8"))["blocks"]) == ["root_id"]


def test_invalid_json_reports_error(tmp_path: Path, capsys):
    src = tmp_path / "broken.json"
    src.write_text("{not json", encoding="utf-8")
    dst = tmp_path / "out.json"

    assert main([str(src), str(dst)]) == 1
    assert "Conversion failed" in capsys.readouterr().err
    assert not dst.exists()


def test_unreadable_input_reports_error(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "Conversion failed" in capsys.readouterr().err


def test_contract_violation_reports_error(tmp_path: Path, capsys):
    src = tmp_path / "figma.json"
    src.write_text(json.dumps({"Result": {"nodes": {"1:1": {}}}}), encoding="utf-8")

    assert main([str(src), str(tmp_path / "out.json")]) == 1
    assert "document" in capsys.readouterr().err


def test_string_alpha_in_input_converts_cleanly(tmp_path: Path, capsys):
    group = {
        "name": "Buttons",
        "strokes": [{"color": {"r": 1, "g": 0, "b": 0, "a": "0.5"}}],
    }
    src = tmp_path / "figma.json"
    dst = tmp_path / "out.json"
    src.write_text(json.dumps({"Result": {"nodes": {"1:1": {"document": group}}}}), encoding="utf-8")

    assert main([str(src), str(dst)]) == 0
    out = json.loads(dst.read_text(encoding="utf-8"))
    (group_id,) = [k for k in out["blocks"] if k != "root_id"]
    assert out["blocks"][group_id]["component"]["appearance"]["border"]["color"] == "rgba(255,0,0,0.5)"
    assert capsys.readouterr().err == ""


def test_invalid_log_level_falls_back_to_info(tmp_path: Path, scenario_b, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert nocode_converter.log_level() == logging.INFO

    src = tmp_path / "figma.json"
    src.write_text(json.dumps(scenario_b), encoding="utf-8")
    assert main([str(src), str(tmp_path / "out.json")]) == 0


def test_named_log_level_is_honoured(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert nocode_converter.log_level() == logging.DEBUG
