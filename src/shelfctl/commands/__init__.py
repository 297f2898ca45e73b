"""Subcommand modules for shelfctl.

Provides register_commands() which uses deferred imports to keep
``shelfctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from shelfctl.commands.check import check
    from shelfctl.commands.list_cmd import list_cmd
    from shelfctl.commands.show import show

    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(check)
