"""Custom Click base classes and parameter types.

ChronoCommand accepts an ``examples`` parameter: ``--examples`` prints
usage examples and exits, keeping ``--help`` concise.  DateInputType and
OptionPairType turn command-line text into formatter inputs.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

import click

_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class ChronoCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class DateInputType(click.ParamType):
    """A date on the command line.

    ``now`` is the current instant, an all-digit value is a millisecond
    timestamp, and anything else is passed through as a date string.
    Validation happens in the service so errors share one format.
    """

    name = "date"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.lower() == "now":
            return datetime.now(UTC)
        if _NUMBER.match(text):
            return float(text) if "." in text else int(text)
        return value


class OptionPairType(click.ParamType):
    """``key=value`` formatter option; ``true``/``false`` become booleans."""

    name = "key=value"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, tuple):
            return value
        key, sep, raw = str(value).partition("=")
        if not sep or not key.strip():
            self.fail(f"{value!r} is not of the form key=value", param, ctx)
        lowered = raw.strip().lower()
        parsed: Any = raw.strip()
        if lowered in {"true", "false"}:
            parsed = lowered == "true"
        return key.strip(), parsed


DATE_INPUT = DateInputType()
OPTION_PAIR = OptionPairType()
