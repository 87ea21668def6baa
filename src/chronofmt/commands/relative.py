"""Command: phrase a date relative to now."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from chronofmt.commands._base import DATE_INPUT, ChronoCommand
from chronofmt.domain.types import NumericMode, RelativeStyle

if TYPE_CHECKING:
    from chronofmt.commands._context import AppContext


@click.command(
    cls=ChronoCommand,
    examples="""\
  chronofmt relative 2025-12-20
  chronofmt relative 2025-12-27T12:00:00Z --now 2025-12-27T12:05:00Z
  chronofmt relative 2026-03-01 --locale fr-FR --style short""",
)
@click.argument("value", type=DATE_INPUT)
@click.option("--now", "now", type=DATE_INPUT, default=None, help="Reference instant (default: now).")
@click.option("--locale", default=None, help="Locale such as en-US or de-DE.")
@click.option(
    "--numeric",
    type=click.Choice([m.value for m in NumericMode]),
    default=None,
    help="Numeric display mode.",
)
@click.option(
    "--style",
    type=click.Choice([s.value for s in RelativeStyle]),
    default=None,
    help="Phrase length.",
)
@click.pass_obj
def relative(
    app: AppContext,
    value: Any,
    now: Any,
    locale: str | None,
    numeric: str | None,
    style: str | None,
) -> None:
    """Phrase VALUE relative to now ("3 days ago", "in 2 hours")."""
    app.emit(app.service.relative(value, now=now, locale=locale, numeric=numeric, style=style))
