"""Subcommand modules for imd.

Provides register_commands() which uses deferred imports to keep
``imd --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 1 standalone command.
    """
    # --- Groups ---
    from improved_markdown.commands.path import path
    from improved_markdown.commands.secret import secret

    cli.add_command(path)
    cli.add_command(secret)

    # --- Standalone commands ---
    from improved_markdown.commands.render import render

    cli.add_command(render)
