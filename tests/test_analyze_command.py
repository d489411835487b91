"""Tests for the analyze command module."""

import json

from click.testing import CliRunner

from partyhunt.cli.analyze import analyze
from partyhunt.persistence import storage as storage_module

NO_LEADER_REPORT = """Session data: From 2025-07-14, 18:13:49 to 2025-07-14, 19:58:37
Session: 00:30h
Loot Type: Leader
Loot: 100
Supplies: 50
Balance: 50
Bob
\tSupplies: 25
Carol
\tSupplies: 25
"""

ZERO_TRANSFER_REPORT = """Session data: From 2025-07-14, 18:13:49 to 2025-07-14, 19:58:37
Session: 00:10h
Loot Type: Leader
Loot: 0
Supplies: 0
Balance: 0
Alice (Leader)
Bob
"""


def test_analyze_command_table_output(sample_report_path):
    runner = CliRunner()

    result = runner.invoke(analyze, [str(sample_report_path)])

    assert result.exit_code == 0, result.output
    assert "Summary" in result.output
    assert "Player Statistics" in result.output
    assert "Transfers" in result.output
    assert "transfer 466667 to Bob" in result.output
    assert "transfer 351234 to Carol" in result.output
    assert "Balance per player: 800,000 / 3 = 266,667" in result.output
    assert "Total session profit: 800,000" in result.output


def test_analyze_command_summary_output_skips_player_table(sample_report_path):
    runner = CliRunner()

    result = runner.invoke(analyze, [str(sample_report_path), "--format", "summary"])

    assert result.exit_code == 0
    assert "Player Statistics" not in result.output
    assert "transfer 466667 to Bob" in result.output


def test_analyze_command_json_output(sample_report_path):
    runner = CliRunner()

    result = runner.invoke(analyze, [str(sample_report_path), "--format", "json"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["leader"] == "Alice"
    assert [t["amount"] for t in payload["transfers"]] == [466667, 351234]
    assert payload["session"]["duration"] == "01:44h"


def test_analyze_command_without_leader(write_report):
    runner = CliRunner()

    result = runner.invoke(analyze, [str(write_report(NO_LEADER_REPORT))])

    assert result.exit_code == 0
    assert "No leader in this session" in result.output


def test_analyze_command_skip_zero(write_report):
    runner = CliRunner()
    path = str(write_report(ZERO_TRANSFER_REPORT))

    shown = runner.invoke(analyze, [path, "--format", "json"])
    hidden = runner.invoke(analyze, [path, "--format", "json", "--skip-zero"])

    assert json.loads(shown.output)["transfers"][0]["amount"] == 0
    assert json.loads(hidden.output)["transfers"] == []


def test_analyze_command_missing_header(write_report):
    runner = CliRunner()
    path = write_report("Session: 01:00h\nBob\n")

    result = runner.invoke(analyze, [str(path)])

    assert result.exit_code != 0
    assert "Session data:" in result.output


def test_analyze_command_malformed_dates(write_report):
    runner = CliRunner()
    path = write_report("Session data: From today to tomorrow\nBob\n")

    result = runner.invoke(analyze, [str(path)])

    assert result.exit_code != 0
    assert "Date range not recognized" in result.output


def test_analyze_command_missing_file(tmp_path):
    runner = CliRunner()

    result = runner.invoke(analyze, [str(tmp_path / "missing.txt")])

    assert result.exit_code != 0


def test_analyze_command_reads_stdin(sample_report_text):
    runner = CliRunner()

    result = runner.invoke(analyze, ["-", "--format", "json"], input=sample_report_text)

    assert result.exit_code == 0
    assert json.loads(result.output)["source"] == "-"


def test_analyze_command_save(sample_report_path, tmp_path, monkeypatch):
    monkeypatch.setenv(storage_module.DB_ENV_VAR, str(tmp_path / "history.db"))
    storage_module.get_storage.cache_clear()
    runner = CliRunner()

    try:
        first = runner.invoke(analyze, [str(sample_report_path), "--format", "summary", "--save"])
        second = runner.invoke(analyze, [str(sample_report_path), "--format", "summary", "--save"])
        saved = storage_module.get_storage().list_sessions()
    finally:
        storage_module.get_storage.cache_clear()

    assert first.exit_code == 0
    assert "Saved session #1" in first.output
    assert "already saved as #1" in second.output
    assert len(saved) == 1


def test_analyze_command_json_save_keeps_output_parseable(sample_report_path, tmp_path, monkeypatch):
    monkeypatch.setenv(storage_module.DB_ENV_VAR, str(tmp_path / "history.db"))
    storage_module.get_storage.cache_clear()
    runner = CliRunner()

    try:
        result = runner.invoke(analyze, [str(sample_report_path), "--format", "json", "--save"])
        saved = storage_module.get_storage().list_sessions()
    finally:
        storage_module.get_storage.cache_clear()

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["leader"] == "Alice"
    assert "Saved session" not in result.output
    assert len(saved) == 1
