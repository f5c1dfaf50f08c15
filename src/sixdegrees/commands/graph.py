"""Command group: path finding, neighborhoods, statistics, and export."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sixdegrees.commands._base import SixGroup
from sixdegrees.services.export import GRAPH_FORMATS, ExportService
from sixdegrees.services.pathfinding import PathfindingService
from sixdegrees.services.people import PeopleService
from sixdegrees.services.result import ServiceResult

if TYPE_CHECKING:
    from sixdegrees.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  sixdegrees graph path 31 4495
  sixdegrees graph path 31 4495 --max-depth 3
  sixdegrees graph neighbors 31 --degree 1
  sixdegrees graph stats
  sixdegrees graph export --format dot | dot -Tsvg -o graph.svg"""


@click.group(cls=SixGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Explore how people are connected through shared media."""


@graph.command(
    examples="""\
  sixdegrees graph path 31 4495
  sixdegrees graph path "Tom Hanks" "Tom Cruise" --max-depth 4
  sixdegrees --json graph path 31 4495"""
)
@click.argument("from_id")
@click.argument("to_id")
@click.option(
    "--max-depth", type=int, default=None, help="Maximum person-to-person hops (default: 6)."
)
@click.pass_obj
def path(app: AppContext, from_id: str, to_id: str, max_depth: int | None) -> None:
    """Find the shortest chain of shared credits between two people."""
    depth = max_depth if max_depth is not None else app.settings.search.max_depth
    app.emit(PathfindingService(app.graph()).find_shortest_path(from_id, to_id, depth))


@graph.command(
    examples="""\
  sixdegrees graph neighbors 31
  sixdegrees graph neighbors 31 --degree 3 --max-nodes 200
  sixdegrees --json graph neighbors 31"""
)
@click.argument("person_id")
@click.option("--degree", type=int, default=None, help="Person hops to expand (1-6).")
@click.option("--max-nodes", type=int, default=None, help="Node cap for the result (1-1000).")
@click.pass_obj
def neighbors(
    app: AppContext, person_id: str, degree: int | None, max_nodes: int | None
) -> None:
    """List people and media around a person."""
    search = app.settings.search
    app.emit(
        PathfindingService(app.graph()).get_neighbors(
            person_id,
            degree if degree is not None else search.default_degree,
            max_nodes if max_nodes is not None else search.max_graph_nodes,
        )
    )


@graph.command(
    examples="""\
  sixdegrees graph stats
  sixdegrees --json graph stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show people, media, and connection counts."""
    app.emit(PeopleService(app.graph()).statistics())


@graph.command(
    examples="""\
  sixdegrees graph export
  sixdegrees graph export --format dot --output graph.dot
  sixdegrees graph export --center 31 --degree 1"""
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(GRAPH_FORMATS, case_sensitive=False),
    default="json",
    help="Graph output format.",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.option("--center", default=None, help="Only export the neighborhood of this person.")
@click.option("--degree", type=int, default=2, help="Person hops around --center.")
@click.pass_obj
def export(
    app: AppContext,
    fmt: str,
    output_file: str | None,
    center: str | None,
    degree: int,
) -> None:
    """Export the graph as D3 JSON or Graphviz DOT."""
    result = ExportService(app.graph()).export_graph(fmt=fmt.lower(), center=center, degree=degree)

    if not result.ok:
        app.emit(result)
        return

    if output_file:
        Path(output_file).write_text(result.data["content"], encoding="utf-8")
        summary = {k: v for k, v in result.data.items() if k != "content"}
        app.emit(
            ServiceResult(
                ok=True,
                op="export_graph",
                data={"output_file": output_file, **summary},
            )
        )
    else:
        # Pipe-friendly: raw content to stdout
        click.echo(result.data["content"], nl=False)
