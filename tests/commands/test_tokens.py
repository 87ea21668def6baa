"""Tests for the tokens command."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from chronofmt.cli import cli


class TestTokensCommand:
    def test_default_pattern(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["tokens", "2025-12-27T12:00:00Z"])
        assert result.exit_code == 0
        assert result.stdout == "2025-12-27\n"

    def test_pattern_in_local_time(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["tokens", "2025-03-04T12:06:05Z", "YYYY/M/D H:m:s"])
        assert result.stdout == "2025/3/4 7:6:5\n"

    def test_markup_is_not_interpreted(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["tokens", "2025-12-27T12:00:00Z", "[bold]YYYY[/bold]"])
        assert result.stdout == "[bold]2025[/bold]\n"

    def test_configured_pattern(self, cli_runner: CliRunner) -> None:
        Path("chronofmt.toml").write_text('[defaults]\npattern = "DD/MM/YY"\n')
        result = cli_runner.invoke(cli, ["tokens", "2025-12-27T12:00:00Z"])
        assert result.stdout == "27/12/25\n"

    def test_verbose_details(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "tokens", "2025-12-27T12:00:00Z", "YYYY"])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "2025"
        assert "OK tokens" in lines
        assert "  pattern: YYYY" in lines
        assert "FormatService.tokens" in result.stdout

    def test_invalid(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "tokens", "nope"])
        assert result.exit_code == 1
        assert result.stderr.startswith("ERROR: tokens: Invalid date 'nope'")
