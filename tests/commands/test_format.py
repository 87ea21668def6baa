"""Tests for the format command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from chronofmt.cli import cli

NOON = "2025-12-27T12:00:00Z"


class TestFormatCommand:
    def test_default_preset(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", NOON])
        assert result.exit_code == 0
        assert result.stdout == "Dec 27, 2025\n"

    def test_named_preset_and_locale(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", NOON, "long", "--locale", "de-DE"])
        assert result.exit_code == 0
        assert result.stdout == "27. Dezember 2025\n"

    def test_time_zone(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", "2025-12-27T23:30:00Z", "--tz", "Asia/Tokyo"])
        assert result.stdout == "Dec 28, 2025\n"

    def test_local_zone_by_default(self, cli_runner: CliRunner) -> None:
        """A bare ISO date is UTC midnight, the previous evening at UTC-5."""
        result = cli_runner.invoke(cli, ["format", "2025-12-27"])
        assert result.stdout == "Dec 26, 2025\n"

    def test_epoch_milliseconds(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", "1766836800000", "--tz", "UTC"])
        assert result.stdout == "Dec 27, 2025\n"

    def test_field_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["format", NOON, "-o", "month=long", "-o", "weekday=long", "--tz", "UTC"]
        )
        assert result.stdout == "Saturday, December 27, 2025\n"

    def test_verbose_reports_cache_lookup(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "format", NOON, "--tz", "UTC"])
        assert result.exit_code == 0
        assert "FormatService.format" in result.stdout
        assert "format  (datetime.miss=1)" in result.stdout

    def test_token_pattern(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", NOON, "DD.MM.YYYY HH:mm"])
        assert result.stdout == "27.12.2025 07:00\n"

    def test_relative(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "format", "now", "relative"])
        assert result.exit_code == 0
        assert "second" in result.stdout

    def test_unrecognized_mode_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", NOON, "bogus-mode"])
        assert result.exit_code == 0
        assert result.stdout == "Dec 27, 2025\n"
        assert "WARNING: Unrecognized mode 'bogus-mode'; used 'date'" in result.stderr

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "format", NOON, "bogus-mode"])
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["route"] == "preset"
        assert data["data"]["mode"] == "date"
        assert data["warnings"] == ["Unrecognized mode 'bogus-mode'; used 'date'"]
        assert "WARNING" not in result.stderr

    def test_invalid_date(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", "2025-02-30"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "ERROR format Invalid date '2025-02-30'" in result.stderr

    def test_invalid_locale_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "format", NOON, "--locale", "zz-ZZ"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "INVALID_INPUT"
        assert data["error"]["detail"]["reason"] == "unknown locale"

    def test_malformed_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", NOON, "-o", "month"])
        assert result.exit_code == 2
        assert "key=value" in result.output

    def test_config_presets(self, cli_runner: CliRunner) -> None:
        Path("chronofmt.toml").write_text(
            '[defaults]\ntime_zone = "UTC"\n[presets.stamp]\nhour = "2-digit"\nminute = "2-digit"\nhour12 = false\n'
        )
        result = cli_runner.invoke(cli, ["format", "2025-12-27T15:45:00Z", "stamp"])
        assert result.exit_code == 0
        assert result.stdout == "15:45\n"
