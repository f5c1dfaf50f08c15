"""Subcommand modules for sixdegrees.

Provides register_commands() which uses deferred imports to keep
``sixdegrees --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from sixdegrees.commands.cache import cache
    from sixdegrees.commands.graph import graph
    from sixdegrees.commands.people import people

    cli.add_command(graph)
    cli.add_command(people)
    cli.add_command(cache)
