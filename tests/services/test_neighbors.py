"""Tests for PathfindingService.get_neighbors."""

from __future__ import annotations

from typing import Any

import pytest

from sixdegrees.domain.errors import ErrorCode
from sixdegrees.infrastructure.graph.store import GraphStore
from sixdegrees.services.pathfinding import PathfindingService
from tests.conftest import add_media, add_person


def _depths(data: dict[str, Any]) -> dict[str, int]:
    return {node["id"]: node["depth"] for node in data["nodes"]}


@pytest.fixture
def spoke_store() -> GraphStore:
    """One center person sharing a different media item with each of 20 people."""
    s = GraphStore()
    add_person(s, "center", "Center")
    for i in range(20):
        add_person(s, f"p{i}", f"Spoke {i}")
        add_media(s, f"m{i}", f"Media {i}")
        s.add_connection("center", f"m{i}", "Actor")
        s.add_connection(f"p{i}", f"m{i}", "Actor")
    return s


class TestGetNeighbors:
    def test_depths_follow_discovery(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=2)
        assert result.ok
        assert result.op == "get_neighbors"
        depths = _depths(result.data)
        assert depths["center"] == 0
        assert depths["mediaA"] == 0
        assert depths["mediaB"] == 0
        assert depths["person1"] == 1
        assert depths["person2"] == 1
        assert depths["person3"] == 1
        assert depths["mediaC"] == 1
        assert depths["person4"] == 2
        assert len(result.data["nodes"]) == 8
        assert result.data["truncated"] is False

    def test_degree_one_stops_at_co_stars(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=1)
        assert set(_depths(result.data)) == {
            "center",
            "mediaA",
            "mediaB",
            "person1",
            "person2",
            "person3",
        }
        assert result.data["edge_count"] == 7

    def test_nodes_are_unique(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=6)
        keys = [(n["type"], n["id"]) for n in result.data["nodes"]]
        assert len(keys) == len(set(keys))

    def test_edges_stay_within_node_set(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=1)
        ids = {n["id"] for n in result.data["nodes"]}
        edges = result.data["edges"]
        assert all(e["source"] in ids and e["target"] in ids for e in edges)
        pairs = [(e["source"], e["target"]) for e in edges]
        assert len(pairs) == len(set(pairs))

    def test_edges_carry_roles(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=1)
        roles = {(e["source"], e["target"]): e["role"] for e in result.data["edges"]}
        assert roles[("center", "mediaB")] == "Director"
        assert roles[("mediaB", "person2")] == "Actor"

    def test_media_nodes_carry_kind(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=2)
        media_c = next(n for n in result.data["nodes"] if n["id"] == "mediaC")
        assert media_c["type"] == "media"
        assert media_c["media_kind"] == "Series"

    def test_isolated_person(self, store: GraphStore) -> None:
        add_person(store, "loner", "Lone Actor")
        result = PathfindingService(store).get_neighbors("loner")
        assert result.ok
        assert len(result.data["nodes"]) == 1
        assert result.data["edges"] == []
        assert result.data["truncated"] is False
        assert result.data["nodes_visited"] == 1

    def test_reports_metrics(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center")
        assert result.data["search_time_ms"] >= 0
        # 5 people + 3 media
        assert result.data["nodes_visited"] == 8


class TestTruncation:
    def test_node_cap(self, spoke_store: GraphStore) -> None:
        result = PathfindingService(spoke_store).get_neighbors("center", degree=2, max_nodes=5)
        assert len(result.data["nodes"]) == 5
        assert result.data["truncated"] is True

    def test_uncapped_spokes(self, spoke_store: GraphStore) -> None:
        result = PathfindingService(spoke_store).get_neighbors("center", degree=1, max_nodes=500)
        assert len(result.data["nodes"]) == 41
        assert result.data["truncated"] is False

    def test_edges_filtered_after_truncation(self, spoke_store: GraphStore) -> None:
        result = PathfindingService(spoke_store).get_neighbors("center", degree=1, max_nodes=5)
        ids = {n["id"] for n in result.data["nodes"]}
        assert all(e["source"] in ids and e["target"] in ids for e in result.data["edges"])


class TestClamping:
    @pytest.mark.parametrize(("requested", "effective"), [(0, 1), (-3, 1), (3, 3), (99, 6)])
    def test_degree(self, neighbors_store: GraphStore, requested: int, effective: int) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=requested)
        assert result.data["degree"] == effective

    def test_max_nodes_floor(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", max_nodes=0)
        assert result.data["max_nodes"] == 1
        assert len(result.data["nodes"]) == 1
        assert result.data["truncated"] is True

    def test_max_nodes_ceiling(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", max_nodes=50_000)
        assert result.data["max_nodes"] == 1000


class TestGetNeighborsFailures:
    @pytest.mark.parametrize("person_id", ["", None])
    def test_blank_id(self, neighbors_store: GraphStore, person_id: str | None) -> None:
        result = PathfindingService(neighbors_store).get_neighbors(person_id)
        assert result.error is not None
        assert result.error.code == ErrorCode.INVALID_INPUT
        assert result.message == "Invalid person ID"

    def test_unknown_id(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("nobody")
        assert result.error is not None
        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.message == "Person not found"

    def test_store_failure_becomes_search_error(
        self, neighbors_store: GraphStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(_media_id: str | None) -> list[Any]:
            raise RuntimeError("lost media")

        monkeypatch.setattr(neighbors_store, "get_media_links", boom)
        result = PathfindingService(neighbors_store).get_neighbors("center")
        assert result.error is not None
        assert result.error.code == ErrorCode.SEARCH_ERROR
        assert result.message == "Error during expansion: lost media"
