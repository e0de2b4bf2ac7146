"""Tests for the report CLI."""

import json

from ticketdash.report import main


def test_report_from_file(tmp_path, capsys, records):
    path = tmp_path / "participants.json"
    path.write_text(json.dumps({"data": records}))
    assert main(["--file", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Tickets sold:    3" in out
    assert "Rp 1.050.000" in out
    assert "Conversion rate: 50.0%" in out
    assert "--- by date ---" in out


def test_report_json(tmp_path, capsys, records):
    path = tmp_path / "participants.json"
    path.write_text(json.dumps({"data": records}))
    assert main(["--file", str(path), "--json"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["soldTicketCount"] == 3
    assert body["statusBreakdown"][0] == {"label": "Check In", "value": 1}


def test_report_missing_file(tmp_path, capsys):
    assert main(["--file", str(tmp_path / "missing.json")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_report_without_configuration(monkeypatch, capsys):
    monkeypatch.delenv("API_URL", raising=False)
    monkeypatch.delenv("API_TOKEN", raising=False)
    assert main([]) == 1
    assert "API credentials are not configured" in capsys.readouterr().err
