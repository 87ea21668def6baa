"""Command: format a date with a preset, relative phrase, or token pattern."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from chronofmt.commands._base import DATE_INPUT, OPTION_PAIR, ChronoCommand
from chronofmt.services.dispatcher import DEFAULT_PRESET, RELATIVE_MODE

if TYPE_CHECKING:
    from chronofmt.commands._context import AppContext


@click.command(
    "format",
    cls=ChronoCommand,
    examples="""\
  chronofmt format 2025-12-27
  chronofmt format 2025-12-27T18:30:00Z datetime --locale de-DE --tz Europe/Berlin
  chronofmt format now "DD.MM.YYYY HH:mm"
  chronofmt format 1766836800000 long -o weekday=long
  chronofmt --json format now relative""",
)
@click.argument("value", type=DATE_INPUT)
@click.argument("mode", default=DEFAULT_PRESET)
@click.option("--locale", default=None, help="Locale such as en-US or de-DE.")
@click.option("--tz", "time_zone", default=None, help="IANA time zone, e.g. Europe/Berlin.")
@click.option(
    "-o",
    "--option",
    "options",
    type=OPTION_PAIR,
    multiple=True,
    help="Formatter field option, e.g. -o month=long -o hour12=false.",
)
@click.pass_obj
def format_cmd(
    app: AppContext,
    value: Any,
    mode: str,
    locale: str | None,
    time_zone: str | None,
    options: tuple[tuple[str, Any], ...],
) -> None:
    """Format VALUE as a preset, "relative", or a token pattern.

    Presets: date, time, datetime, short, medium, long, full.
    Unrecognized modes fall back to "date".
    """
    # Relative phrasing takes only a locale; field options apply to presets.
    extra: dict[str, Any] = {} if mode == RELATIVE_MODE else dict(options)
    if locale:
        extra["locale"] = locale
    if time_zone and mode != RELATIVE_MODE:
        extra["time_zone"] = time_zone
    app.emit(app.service.format(value, mode, **extra))
