"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds the configured DateFormatter lazily and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chronofmt.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from chronofmt.config.settings import ChronoSettings
    from chronofmt.services.dispatcher import DateFormatter
    from chronofmt.services.format import FormatService
    from chronofmt.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The formatter is created on first use so ``--help`` and ``--version``
    never touch locale data.
    """

    def __init__(self, settings: ChronoSettings) -> None:
        self.settings = settings
        self._formatter: DateFormatter | None = None

        from chronofmt.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from chronofmt.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def formatter(self) -> DateFormatter:
        """The configured formatter (created lazily on first access)."""
        if self._formatter is None:
            self._formatter = self.settings.build_formatter()
        return self._formatter

    @property
    def service(self) -> FormatService:
        from chronofmt.services.format import FormatService

        return FormatService(self.formatter)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
