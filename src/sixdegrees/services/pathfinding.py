"""PathfindingService — shortest connection paths and bounded neighborhoods.

Both algorithms are breadth-first searches over person ids where one BFS
level is a person → media → person hop. The store is read one node at a
time (no lock is held across a search), and each call keeps its own
queue, visited set, and parent map, so concurrent queries never share
mutable state.

"Degrees" count every hop of the alternating person/media sequence, so a
path between two co-stars is 2 degrees, not 1.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass

from pydantic import BaseModel

from sixdegrees.domain.errors import (
    ErrorCode,
    NoPathError,
    NotFoundError,
    SamePersonError,
    SixDegreesError,
    ValidationError,
)
from sixdegrees.domain.models import Person
from sixdegrees.domain.types import MediaKind, NodeType
from sixdegrees.services._helpers import elapsed_ms
from sixdegrees.services.base import BaseService
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 6
DEFAULT_MAX_NODES = 500
MAX_DEGREE = 6
MAX_NODES_LIMIT = 1000


class PathStep(BaseModel):
    """One entry of a path: a person, or the media item linking two people.

    For media steps ``role`` is ``"<previous person's role> / <next person's role>"``.
    """

    model_config = {"frozen": True}

    type: NodeType
    id: str
    name: str
    media_kind: MediaKind | None = None
    image_url: str | None = None
    role: str | None = None


class GraphNode(BaseModel):
    """A node of a neighborhood expansion, tagged with its discovery depth."""

    model_config = {"frozen": True}

    id: str
    name: str
    type: NodeType
    media_kind: MediaKind | None = None
    image_url: str | None = None
    depth: int


class GraphEdge(BaseModel):
    """A directed person → media or media → person edge."""

    model_config = {"frozen": True}

    source: str
    target: str
    role: str


@dataclass(frozen=True)
class _ParentEdge:
    """How BFS first reached a person: from whom, through which media."""

    from_person_id: str
    media_id: str
    media_name: str
    media_kind: MediaKind
    media_image_url: str | None
    from_role: str
    to_role: str


@dataclass
class _Expansion:
    nodes: list[GraphNode]
    edges: list[GraphEdge]
    nodes_visited: int


class PathfindingService(BaseService):
    """Answers path and neighborhood queries against the current store."""

    # ------------------------------------------------------------------
    # find_shortest_path
    # ------------------------------------------------------------------

    @traced
    def find_shortest_path(
        self,
        from_id: str | None,
        to_id: str | None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> ServiceResult:
        """Find the shortest person → media → … → person chain.

        Validation happens in a fixed order: blank ids, identical ids,
        unknown start, unknown target. The first time BFS dequeues the
        target the path is optimal because every hop has equal weight.

        Args:
            from_id: Starting person id.
            to_id: Target person id.
            max_depth: Maximum person-to-person hops; the returned
                ``degrees`` is at most ``2 * max_depth``.
        """
        op = "find_path"
        try:
            self._validate_path_request(from_id, to_id)
        except SixDegreesError as exc:
            return ServiceResult.from_exception(op, exc)
        assert from_id is not None and to_id is not None

        start = time.perf_counter()
        try:
            with trace_span("bfs") as span:
                path, nodes_visited = self._breadth_first_search(from_id, to_id, max_depth)
                if span:
                    span.annotate("nodes_visited", nodes_visited)
        except NoPathError as exc:
            search_ms = elapsed_ms(start)
            logger.info(
                "Path search completed in %.3fms, visited %d nodes (no path)",
                search_ms,
                exc.nodes_visited,
            )
            return ServiceResult.failure(
                op,
                ErrorCode.NO_PATH,
                str(exc),
                data={"search_time_ms": search_ms, "nodes_visited": exc.nodes_visited},
                detail={"max_depth": max_depth},
            )
        except Exception as exc:
            logger.error("Error finding path: %s", exc, exc_info=True)
            return ServiceResult.failure(
                op, ErrorCode.SEARCH_ERROR, f"Error during search: {exc}"
            )

        search_ms = elapsed_ms(start)
        logger.info("Path search completed in %.3fms, visited %d nodes", search_ms, nodes_visited)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "from_id": from_id,
                "to_id": to_id,
                "degrees": len(path) - 1,
                "path": [step.model_dump(mode="json") for step in path],
                "search_time_ms": search_ms,
                "nodes_visited": nodes_visited,
            },
        )

    def _validate_path_request(self, from_id: str | None, to_id: str | None) -> None:
        if not from_id or not to_id:
            raise ValidationError("Invalid person IDs")
        if from_id == to_id:
            raise SamePersonError("Start and target person are the same")
        if self._store.get_person(from_id) is None:
            raise NotFoundError("Start person not found")
        if self._store.get_person(to_id) is None:
            raise NotFoundError("Target person not found")

    def _breadth_first_search(
        self, start_id: str, target_id: str, max_depth: int
    ) -> tuple[list[PathStep], int]:
        """Return ``(path, nodes_visited)`` or raise :class:`NoPathError`."""
        queue: deque[tuple[str, int]] = deque([(start_id, 0)])
        visited: set[str] = {start_id}
        parents: dict[str, _ParentEdge] = {}

        while queue:
            person_id, depth = queue.popleft()

            if person_id == target_id:
                return self._reconstruct_path(parents, start_id, target_id), len(visited)

            if depth >= max_depth:
                continue

            for media_link in self._store.get_person_links(person_id):
                for person_link in self._store.get_media_links(media_link.media_id):
                    next_id = person_link.person_id
                    if next_id in visited:
                        continue
                    visited.add(next_id)
                    parents[next_id] = _ParentEdge(
                        from_person_id=person_id,
                        media_id=media_link.media_id,
                        media_name=media_link.media_name,
                        media_kind=media_link.media_kind,
                        media_image_url=media_link.image_url,
                        from_role=media_link.role,
                        to_role=person_link.role,
                    )
                    queue.append((next_id, depth + 1))

        raise NoPathError(
            f"No path found within {max_depth} degrees", nodes_visited=len(visited)
        )

    def _reconstruct_path(
        self, parents: dict[str, _ParentEdge], start_id: str, target_id: str
    ) -> list[PathStep]:
        hops: list[tuple[str, _ParentEdge]] = []
        current = target_id
        while current != start_id:
            edge = parents[current]
            hops.append((current, edge))
            current = edge.from_person_id
        hops.reverse()

        path = [self._person_step(start_id)]
        for person_id, edge in hops:
            path.append(
                PathStep(
                    type=NodeType.MEDIA,
                    id=edge.media_id,
                    name=edge.media_name,
                    media_kind=edge.media_kind,
                    image_url=edge.media_image_url,
                    role=f"{edge.from_role} / {edge.to_role}",
                )
            )
            path.append(self._person_step(person_id))
        return path

    def _person_step(self, person_id: str) -> PathStep:
        person = self._store.get_person(person_id)
        if person is None:
            raise NotFoundError(f"Person {person_id} disappeared during search")
        return PathStep(
            type=NodeType.PERSON, id=person.id, name=person.name, image_url=person.image_url
        )

    # ------------------------------------------------------------------
    # get_neighbors
    # ------------------------------------------------------------------

    @traced
    def get_neighbors(
        self,
        person_id: str | None,
        degree: int = 2,
        max_nodes: int = DEFAULT_MAX_NODES,
    ) -> ServiceResult:
        """Expand the neighborhood of a person up to *degree* person hops.

        *degree* is clamped to 1-6 and *max_nodes* to 1-1000. Each node is
        reported once, at the depth it was first discovered: the start
        person is depth 0, a media item takes the depth of the person it
        was reached from, and a person reached through it is one deeper.
        ``truncated`` is set when the result holds exactly *max_nodes* nodes.
        """
        op = "get_neighbors"
        if not person_id:
            return ServiceResult.failure(op, ErrorCode.INVALID_INPUT, "Invalid person ID")

        degree = max(1, min(degree, MAX_DEGREE))
        max_nodes = max(1, min(max_nodes, MAX_NODES_LIMIT))

        person = self._store.get_person(person_id)
        if person is None:
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, "Person not found")

        start = time.perf_counter()
        try:
            with trace_span("bfs_expansion") as span:
                expansion = self._breadth_first_expansion(person, degree, max_nodes)
                if span:
                    span.annotate("nodes", len(expansion.nodes))
                    span.annotate("edges", len(expansion.edges))
        except Exception as exc:
            logger.error("Error getting neighbors: %s", exc, exc_info=True)
            return ServiceResult.failure(
                op, ErrorCode.SEARCH_ERROR, f"Error during expansion: {exc}"
            )

        search_ms = elapsed_ms(start)
        logger.info(
            "Neighbor expansion completed in %.3fms: %d nodes, %d edges, visited %d nodes",
            search_ms,
            len(expansion.nodes),
            len(expansion.edges),
            expansion.nodes_visited,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "person_id": person_id,
                "degree": degree,
                "max_nodes": max_nodes,
                "nodes": [n.model_dump(mode="json") for n in expansion.nodes],
                "edges": [e.model_dump(mode="json") for e in expansion.edges],
                "node_count": len(expansion.nodes),
                "edge_count": len(expansion.edges),
                "truncated": len(expansion.nodes) >= max_nodes,
                "search_time_ms": search_ms,
                "nodes_visited": expansion.nodes_visited,
            },
        )

    def _breadth_first_expansion(
        self, start: Person, max_degree: int, max_nodes: int
    ) -> _Expansion:
        nodes: list[GraphNode] = [
            GraphNode(
                id=start.id,
                name=start.name,
                type=NodeType.PERSON,
                image_url=start.image_url,
                depth=0,
            )
        ]
        # (edge, True when the source is the person end)
        candidate_edges: list[tuple[GraphEdge, bool]] = []
        visited_people: set[str] = {start.id}
        visited_media: set[str] = set()
        added_people: set[str] = {start.id}
        queue: deque[tuple[str, int]] = deque([(start.id, 0)])

        while queue and len(nodes) < max_nodes:
            person_id, depth = queue.popleft()
            if depth >= max_degree:
                continue

            for media_link in self._store.get_person_links(person_id):
                if len(nodes) >= max_nodes:
                    break

                if media_link.media_id not in visited_media:
                    visited_media.add(media_link.media_id)
                    nodes.append(
                        GraphNode(
                            id=media_link.media_id,
                            name=media_link.media_name,
                            type=NodeType.MEDIA,
                            media_kind=media_link.media_kind,
                            image_url=media_link.image_url,
                            depth=depth,
                        )
                    )
                person_edge = GraphEdge(
                    source=person_id, target=media_link.media_id, role=media_link.role
                )
                candidate_edges.append((person_edge, True))

                for person_link in self._store.get_media_links(media_link.media_id):
                    if len(nodes) >= max_nodes:
                        break
                    next_id = person_link.person_id
                    if next_id not in visited_people:
                        visited_people.add(next_id)
                        next_person = self._store.get_person(next_id)
                        if next_person is not None:
                            nodes.append(
                                GraphNode(
                                    id=next_person.id,
                                    name=next_person.name,
                                    type=NodeType.PERSON,
                                    image_url=next_person.image_url,
                                    depth=depth + 1,
                                )
                            )
                            added_people.add(next_id)
                            queue.append((next_id, depth + 1))
                    media_edge = GraphEdge(
                        source=media_link.media_id, target=next_id, role=person_link.role
                    )
                    candidate_edges.append((media_edge, False))

        return _Expansion(
            nodes=nodes,
            edges=_edges_within(candidate_edges, added_people, visited_media),
            nodes_visited=len(visited_people) + len(visited_media),
        )


def _edges_within(
    candidates: list[tuple[GraphEdge, bool]], people: set[str], media: set[str]
) -> list[GraphEdge]:
    """Keep edges whose two endpoints are in the node set, once per direction."""
    seen: set[tuple[str, str]] = set()
    edges: list[GraphEdge] = []
    for edge, from_person in candidates:
        if from_person:
            person_end, media_end = edge.source, edge.target
        else:
            person_end, media_end = edge.target, edge.source
        if person_end not in people or media_end not in media:
            continue
        key = (edge.source, edge.target)
        if key in seen:
            continue
        seen.add(key)
        edges.append(edge)
    return edges
