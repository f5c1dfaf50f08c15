"""ExportService — render the people/media graph for external tools.

Extends BaseService; the export is a NetworkX projection of the store at
the moment of the call.
"""

from __future__ import annotations

import json
from typing import Any

import networkx as nx

from sixdegrees.domain.errors import ErrorCode
from sixdegrees.domain.types import NodeType
from sixdegrees.infrastructure.graph.projection import node_key, to_networkx
from sixdegrees.services.base import BaseService
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import trace_span, traced

GRAPH_FORMATS = ("json", "dot")


class ExportService(BaseService):
    """Export the graph in portable formats."""

    @traced
    def export_graph(
        self,
        *,
        fmt: str = "json",
        center: str | None = None,
        degree: int = 2,
    ) -> ServiceResult:
        """Export the whole graph, or the neighborhood of one person.

        Formats:
        - ``json`` — D3-compatible ``{"nodes": [...], "links": [...]}``
        - ``dot`` — Graphviz DOT language

        With *center*, only nodes within *degree* person hops of that
        person are exported (a person hop is two edges). Returns the
        content as a string in ``data["content"]``.
        """
        op = "export_graph"
        if fmt not in GRAPH_FORMATS:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_FORMAT,
                f"Unknown graph format: {fmt}",
                detail={"format": fmt, "valid": list(GRAPH_FORMATS)},
            )

        with trace_span("project"):
            g = to_networkx(self._store)

        if center is not None:
            center_key = node_key(NodeType.PERSON, center)
            if center_key not in g:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, "Person not found", detail={"person_id": center}
                )
            degree = max(1, min(degree, 6))
            g = nx.ego_graph(g, center_key, radius=2 * degree)

        content = self._to_dot(g) if fmt == "dot" else self._to_d3_json(g)

        payload: dict[str, Any] = {
            "format": fmt,
            "content": content,
            "node_count": g.number_of_nodes(),
            "edge_count": g.number_of_edges(),
        }
        if center is not None:
            payload["center"] = center
            payload["degree"] = degree
        return ServiceResult(ok=True, op=op, data=payload)

    # ── Private helpers ───────────────────────────────────────────────

    @staticmethod
    def _to_dot(g: nx.Graph) -> str:
        """Generate Graphviz DOT notation; people are ellipses, media boxes."""
        lines = ["graph sixdegrees {", "  rankdir=LR;"]

        for key, attrs in g.nodes(data=True):
            safe_label = str(attrs.get("name", key)).replace('"', '\\"')
            shape = "box" if attrs.get("type") == NodeType.MEDIA else "ellipse"
            lines.append(f'  "{key}" [label="{safe_label}" shape={shape}];')

        for src, tgt, attrs in g.edges(data=True):
            role = str(attrs.get("role", "")).replace('"', '\\"')
            lines.append(f'  "{src}" -- "{tgt}" [label="{role}"];')

        lines.append("}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _to_d3_json(g: nx.Graph) -> str:
        """Generate D3-compatible JSON."""
        d3_nodes = []
        for key, attrs in g.nodes(data=True):
            node: dict[str, Any] = {
                "id": key,
                "name": attrs.get("name", ""),
                "type": attrs.get("type", ""),
            }
            if attrs.get("type") == NodeType.MEDIA:
                node["media_kind"] = attrs.get("media_kind")
                node["year"] = attrs.get("year")
            d3_nodes.append(node)

        d3_links = [
            {"source": src, "target": tgt, "role": attrs.get("role", "")}
            for src, tgt, attrs in g.edges(data=True)
        ]
        return json.dumps({"nodes": d3_nodes, "links": d3_links}, indent=2) + "\n"
