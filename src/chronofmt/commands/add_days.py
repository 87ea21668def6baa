"""Command: shift a date by whole days."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from chronofmt.commands._base import DATE_INPUT, ChronoCommand

if TYPE_CHECKING:
    from chronofmt.commands._context import AppContext


@click.command(
    "add-days",
    cls=ChronoCommand,
    examples="""\
  chronofmt add-days 2025-12-27 7
  chronofmt add-days now -- -30
  chronofmt --json add-days 1766836800000 1""",
)
@click.argument("value", type=DATE_INPUT)
@click.argument("days", type=int)
@click.pass_obj
def add_days(app: AppContext, value: Any, days: int) -> None:
    """Shift VALUE by DAYS whole days (UTC arithmetic)."""
    app.emit(app.service.add_days(value, days))
