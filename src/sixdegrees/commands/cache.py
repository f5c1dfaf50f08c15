"""Command group: rebuild and inspect the snapshot cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixGroup

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext

_CACHE_EXAMPLES = """\
  sixdegrees cache build
  sixdegrees cache status"""


@click.group(cls=SixGroup, examples=_CACHE_EXAMPLES)
@click.pass_obj
def cache(app: AppContext) -> None:
    """Build the graph from the catalog and manage its cache."""


@cache.command(
    examples="""\
  sixdegrees cache build
  sixdegrees -v cache build
  sixdegrees --json cache build"""
)
@click.pass_obj
def build(app: AppContext) -> None:
    """Rebuild the graph from the catalog and rewrite the cache."""
    app.emit(app.builder.build_graph())


@cache.command(
    examples="""\
  sixdegrees cache status
  sixdegrees --json cache status"""
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show cache location, age, and whether a rebuild is due."""
    builder = app.builder
    builder.load_cache()
    app.emit(builder.cache_status())
