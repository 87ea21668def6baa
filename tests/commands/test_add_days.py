"""Tests for the add-days command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from chronofmt.cli import cli


class TestAddDaysCommand:
    def test_forward(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add-days", "2025-12-27", "7"])
        assert result.exit_code == 0
        assert result.stdout == "2026-01-03T00:00:00+00:00\n"

    def test_backward(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add-days", "2025-12-27", "--", "-30"])
        assert result.stdout == "2025-11-27T00:00:00+00:00\n"

    def test_json_includes_epoch(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "add-days", "1766836800000", "1"])
        data = json.loads(result.stdout)
        assert data["data"]["epoch_ms"] == 1766836800000 + 86_400_000
        assert data["data"]["days"] == 1

    def test_non_integer_days(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add-days", "2025-12-27", "1.5"])
        assert result.exit_code == 2

    def test_overflow(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add-days", "9999-12-31", "1"])
        assert result.exit_code == 1
        assert "ERROR add_days" in result.stderr
