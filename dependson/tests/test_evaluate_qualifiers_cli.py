"""Tests for the evaluate_qualifiers CLI."""

from __future__ import annotations

import json
import sys


def _write(tmp_path, name: str, payload) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _inputs(tmp_path) -> tuple[str, str]:
    config = _write(
        tmp_path,
        "deps.json",
        {
            "dependencies": [
                {"selector": "#plan", "qualifiers": {"values": ["pro"], "mystery": 1}},
                {"selector": "color", "qualifiers": {"==": "red"}},
            ]
        },
    )
    fields = _write(
        tmp_path,
        "fields.json",
        {
            "fields": {
                "#plan": {"value": "pro"},
                "color": [
                    {"value": "red", "type": "radio"},
                    {"value": "blue", "type": "radio", "checked": True},
                ],
            }
        },
    )
    return config, fields


def test_cli_prints_status_lines(tmp_path, capsys):
    from dependson.cli import evaluate_qualifiers as mod

    config, fields = _inputs(tmp_path)
    assert mod.main(["--config", config, "--fields", fields]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "selector=#plan status=QUALIFIED failed=-"
    assert out[1] == "selector=color status=NOT_QUALIFIED failed==="
    assert out[2] == "SUMMARY qualified=1 total=2"


def test_cli_json_and_debug(tmp_path, capsys, monkeypatch):
    from dependson.cli import evaluate_qualifiers as mod

    config, fields = _inputs(tmp_path)
    monkeypatch.setattr(
        sys, "argv", ["evaluate_qualifiers.py", "--config", config, "--fields", fields, "--json", "--debug"]
    )
    assert mod.main() == 0

    lines = capsys.readouterr().out.splitlines()
    debug = [line for line in lines if line.startswith("[debug]")]
    records = [json.loads(line) for line in lines if line.startswith("{")]
    assert any("mystery" in line for line in debug)
    assert records[0] == {"selector": "#plan", "status": "QUALIFIED", "failed": None, "skipped": ["mystery"]}
    assert records[1]["failed"] == "=="
    assert lines[-1] == "SUMMARY qualified=1 total=2"


def test_cli_reports_invalid_config(tmp_path, capsys):
    from dependson.cli import evaluate_qualifiers as mod

    config = _write(tmp_path, "deps.json", {"dependencies": [{"qualifiers": {}}]})
    _, fields = _inputs(tmp_path)
    assert mod.main(["--config", config, "--fields", fields]) == 2

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("ERROR: ")
    assert "selector" in captured.err
    assert len(captured.err.strip().splitlines()) == 1


def test_cli_reports_missing_fields_file(tmp_path, capsys):
    from dependson.cli import evaluate_qualifiers as mod

    config, _ = _inputs(tmp_path)
    assert mod.main(["--config", config, "--fields", str(tmp_path / "absent.json")]) == 2
    assert "not found" in capsys.readouterr().err
