"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sixdegrees.output.console import create_console, get_output, style_for_node

if TYPE_CHECKING:
    from rich.console import Console

    from sixdegrees.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "find_path":
        return "\n".join(
            str(step["id"]) for step in result.data.get("path", []) if step.get("type") == "person"
        )

    # For people listings, return IDs only
    items = result.data.get("people")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        val = item.get("id")
        return str(val) if val is not None else ""
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="six.ok")
    op = Text(f"  {result.op}", style="six.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="six.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="six.id")
    elif key.endswith("_path") or key == "output_file":
        v = Text(str(value), style="six.path")
    elif key == "name":
        v = Text(str(value), style="six.name")
    else:
        v = Text(str(value))
    console.print(k, v, end="", sep="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations")
    if annotations:
        extras = ", ".join(f"{ak}={av}" for ak, av in annotations.items())
        line += f"  ({extras})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _people_table(people: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of person summaries."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="six.id", no_wrap=True)
    table.add_column("Name", style="six.name")
    table.add_column("Credits", justify="right")
    if verbose:
        table.add_column("Image", style="dim")

    for person in people:
        row = [
            str(person.get("id", "")),
            str(person.get("name", "")),
            str(person.get("connection_count", 0)),
        ]
        if verbose:
            row.append(str(person.get("image_url") or ""))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="six.error")
    op = Text(f"  {result.op}", style="six.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    # Failed searches still report how much of the graph was explored
    if verbose and result.data:
        for k, v in result.data.items():
            console.print(f"    {k}: {v}")
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Graph renderers ───────────────────────────────────────────────────


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a shortest path as an alternating person/media chain."""
    d = result.data
    steps = d.get("path", [])

    if not steps:
        console.print("No path found.")
        return

    chain_parts: list[str] = []
    for step in steps:
        style = style_for_node(str(step.get("type", "")), step.get("media_kind")) or "six.name"
        name = escape(str(step.get("name", "?")))
        if step.get("type") == "media":
            chain_parts.append(f"[{style}]\\[{name}][/{style}]")
        else:
            chain_parts.append(f"[{style}]{name}[/{style}]")
    console.print(" → ".join(chain_parts))

    if verbose:
        console.print()
        for step in steps:
            if step.get("type") == "media":
                kind = f" ({step['media_kind']})" if step.get("media_kind") else ""
                line = Text("    ")
                line.append(str(step.get("role", "")), style="six.role")
                line.append(f" in {step.get('name', '')}{kind}")
                console.print(line)

    console.print(f"\nDegrees: {d.get('degrees', 0)}")
    _field(console, "search_time_ms", d.get("search_time_ms", 0.0))
    _field(console, "nodes_visited", d.get("nodes_visited", 0))
    if verbose:
        _render_meta(console, result)


def _render_neighbors(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a neighborhood as a depth-ordered node table."""
    d = result.data
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Depth", justify="right")
    table.add_column("Type")
    table.add_column("ID", style="six.id", no_wrap=True)
    table.add_column("Name", style="six.name")

    for node in sorted(d.get("nodes", []), key=lambda n: n.get("depth", 0)):
        node_type = str(node.get("type", ""))
        kind = node.get("media_kind")
        type_label = Text(kind or node_type, style=style_for_node(node_type, kind))
        table.add_row(
            str(node.get("depth", 0)),
            type_label,
            Text(str(node.get("id", ""))),
            Text(str(node.get("name", ""))),
        )
    console.print(table)

    summary = f"\n{d.get('node_count', 0)} nodes, {d.get('edge_count', 0)} edges"
    if d.get("truncated"):
        summary += " [six.warning](truncated)[/six.warning]"
    console.print(summary)
    if verbose:
        _field(console, "search_time_ms", d.get("search_time_ms", 0.0))
        _field(console, "nodes_visited", d.get("nodes_visited", 0))
        _render_meta(console, result)


def _render_statistics(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    keys = (
        "people_count",
        "media_count",
        "connection_count",
        "average_connections_per_person",
    )
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── People renderers ──────────────────────────────────────────────────


def _render_people(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render search_people or list_people results as a table."""
    d = result.data
    people = d.get("people", [])
    if not people:
        console.print("No people found.")
        return
    console.print(_people_table(people, verbose=verbose))
    footer = f"\n{d.get('count', len(people))} people"
    if "total_count" in d:
        footer += f" of {d['total_count']}"
    console.print(footer)
    if verbose:
        _render_meta(console, result)


# ── Cache renderers ───────────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build_graph results with counts and timing."""
    _status_line(console, result)
    d = result.data
    for key in ("message", "people_count", "media_count", "connection_count", "build_time_ms"):
        if key in d:
            _field(console, key, d[key])
    if verbose:
        _render_meta(console, result)


def _render_cache_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("cache_path", "cache_exists", "last_build_time", "refresh_interval_minutes"):
        if key in d:
            _field(console, key, d[key] if d[key] is not None else "never")
    rebuild = d.get("should_rebuild", False)
    style = "six.warning" if rebuild else "six.ok"
    console.print(
        Text("  should_rebuild: ", style="six.key"), Text(str(rebuild), style=style), sep=""
    )
    if verbose:
        _field(console, "people_count", d.get("people_count", 0))
        _field(console, "media_count", d.get("media_count", 0))


# ── Export renderers ──────────────────────────────────────────────────


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render export results with output path and counts."""
    _status_line(console, result)
    d = result.data
    for key in ("output_file", "format", "center", "degree", "node_count", "edge_count"):
        if key in d:
            _field(console, key, d[key])
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Graph
    "find_path": _render_path,
    "get_neighbors": _render_neighbors,
    "statistics": _render_statistics,
    # People
    "search_people": _render_people,
    "list_people": _render_people,
    # Cache
    "build_graph": _render_build,
    "cache_status": _render_cache_status,
    # Export
    "export_graph": _render_export,
}
