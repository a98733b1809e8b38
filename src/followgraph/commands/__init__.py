"""Subcommand modules for followctl.

Provides register_commands() which uses deferred imports to keep
``followctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from followgraph.commands.query import query
    from followgraph.commands.user import user

    cli.add_command(user)
    cli.add_command(query)

    # --- Standalone commands ---
    from followgraph.commands.follow import follow, unfollow

    cli.add_command(follow)
    cli.add_command(unfollow)
