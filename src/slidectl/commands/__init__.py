"""Subcommand modules for slidectl.

Provides register_commands() which uses deferred imports to keep
``slidectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the action commands and the deck listing on the root group."""
    from slidectl.commands.icon import icon
    from slidectl.commands.logo import logo
    from slidectl.commands.shapes import shapes
    from slidectl.commands.unbg import unbg

    cli.add_command(icon)
    cli.add_command(logo)
    cli.add_command(unbg)
    cli.add_command(shapes)
