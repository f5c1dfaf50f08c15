"""Command group: find and list people."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixGroup
from sixdegrees.services.people import PeopleService

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext

_PEOPLE_EXAMPLES = """\
  sixdegrees people search hanks
  sixdegrees people list --limit 20 --offset 40"""


@click.group(cls=SixGroup, examples=_PEOPLE_EXAMPLES)
@click.pass_obj
def people(app: AppContext) -> None:
    """Search and page through people in the graph."""


@people.command(
    examples="""\
  sixdegrees people search hanks
  sixdegrees people search "tom" --limit 5 --offset 5
  sixdegrees -q people search bacon"""
)
@click.argument("query")
@click.option("--limit", type=int, default=20, help="Max results (capped by [search] settings).")
@click.option("--offset", type=int, default=0, help="Results to skip.")
@click.pass_obj
def search(app: AppContext, query: str, limit: int, offset: int) -> None:
    """Find people whose name contains QUERY (case-insensitive)."""
    limit = min(limit, app.settings.search.max_search_results)
    app.emit(PeopleService(app.graph()).search(query, limit=limit, offset=offset))


@people.command(
    name="list",
    examples="""\
  sixdegrees people list
  sixdegrees --json people list --limit 200""",
)
@click.option("--limit", type=int, default=50, help="Page size (1-200).")
@click.option("--offset", type=int, default=0, help="People to skip.")
@click.pass_obj
def list_people(app: AppContext, limit: int, offset: int) -> None:
    """List people ordered by name."""
    app.emit(PeopleService(app.graph()).list_people(limit=limit, offset=offset))
