"""Subcommand modules for chronofmt.

Provides register_commands() which uses deferred imports to keep
``chronofmt --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from chronofmt.commands.add_days import add_days
    from chronofmt.commands.format_cmd import format_cmd
    from chronofmt.commands.relative import relative
    from chronofmt.commands.tokens import tokens

    cli.add_command(format_cmd)
    cli.add_command(relative)
    cli.add_command(tokens)
    cli.add_command(add_days)
