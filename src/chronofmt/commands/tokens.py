"""Command: expand a token pattern."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from chronofmt.commands._base import DATE_INPUT, ChronoCommand

if TYPE_CHECKING:
    from chronofmt.commands._context import AppContext


@click.command(
    cls=ChronoCommand,
    examples="""\
  chronofmt tokens now
  chronofmt tokens 2025-12-27T08:05:09 "YYYY/M/D H:m:s"
  chronofmt -q tokens now YYYYMMDD-HHmmss""",
)
@click.argument("value", type=DATE_INPUT)
@click.argument("pattern", required=False)
@click.pass_obj
def tokens(app: AppContext, value: Any, pattern: str | None) -> None:
    """Expand the tokens of PATTERN for VALUE in local time.

    Tokens: YYYY YY MM M DD D HH H mm m ss s.  Other text is kept as is.
    """
    app.emit(app.service.tokens(value, pattern))
