"""Tests for the Rich renderers."""

from __future__ import annotations

from sixdegrees.domain.errors import ErrorCode
from sixdegrees.infrastructure.graph.store import GraphStore
from sixdegrees.output.console import create_console, get_output, style_for_node
from sixdegrees.output.renderers import render_quiet, render_result
from sixdegrees.services.pathfinding import PathfindingService
from sixdegrees.services.people import PeopleService
from sixdegrees.services.result import ServiceResult


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_node_styles(self) -> None:
        assert style_for_node("person") == "six.person"
        assert style_for_node("media", "Series") == "six.media.series"
        assert style_for_node("media", "Unknown") == ""


class TestRenderPath:
    def test_chain(self, standard_store: GraphStore) -> None:
        result = PathfindingService(standard_store).find_shortest_path("p1", "p4")
        output = render_result(result)
        assert "Tom Hanks → [Forrest Gump] → Gary Sinise" in output
        assert "Degrees: 6" in output

    def test_verbose_lists_roles(self, standard_store: GraphStore) -> None:
        result = PathfindingService(standard_store).find_shortest_path("p1", "p5")
        output = render_result(result, verbose=True)
        assert "Actor / Actor in Forrest Gump (Movie)" in output

    def test_quiet_prints_person_ids(self, standard_store: GraphStore) -> None:
        result = PathfindingService(standard_store).find_shortest_path("p1", "p4")
        assert render_quiet(result).splitlines() == ["p1", "p2", "p3", "p4"]

    def test_no_path_error(self, standard_store: GraphStore) -> None:
        result = PathfindingService(standard_store).find_shortest_path("p1", "p4", max_depth=1)
        output = render_result(result, verbose=True)
        assert "ERROR" in output
        assert "No path found within 1 degrees" in output
        assert "nodes_visited" in output


class TestRenderNeighbors:
    def test_table_and_summary(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", degree=1)
        output = render_result(result)
        assert "Center Person" in output
        assert "Media B" in output
        assert "6 nodes, 7 edges" in output
        assert "truncated" not in output

    def test_truncated_marker(self, neighbors_store: GraphStore) -> None:
        result = PathfindingService(neighbors_store).get_neighbors("center", max_nodes=2)
        assert "(truncated)" in render_result(result)


class TestRenderPeople:
    def test_search_table(self, standard_store: GraphStore) -> None:
        output = render_result(PeopleService(standard_store).search("tom"))
        assert "Tom Cruise" in output
        assert "Tom Hanks" in output
        assert "2 people" in output

    def test_list_footer_has_total(self, standard_store: GraphStore) -> None:
        output = render_result(PeopleService(standard_store).list_people(limit=2))
        assert "2 people of 5" in output

    def test_empty(self, standard_store: GraphStore) -> None:
        assert render_result(PeopleService(standard_store).search("zzz")) == "No people found."

    def test_quiet_ids(self, standard_store: GraphStore) -> None:
        assert render_quiet(PeopleService(standard_store).search("tom")) == "p4\np1"


class TestRenderOther:
    def test_statistics(self, standard_store: GraphStore) -> None:
        output = render_result(PeopleService(standard_store).statistics())
        assert "people_count: 5" in output
        assert "connection_count: 7" in output

    def test_build(self) -> None:
        result = ServiceResult(
            ok=True,
            op="build_graph",
            data={"people_count": 5, "media_count": 3, "connection_count": 7, "build_time_ms": 1.5},
        )
        output = render_result(result)
        assert "build_graph" in output
        assert "media_count: 3" in output

    def test_cache_status_never_built(self) -> None:
        result = ServiceResult(
            ok=True,
            op="cache_status",
            data={"cache_path": "/c.json", "last_build_time": None, "should_rebuild": True},
        )
        output = render_result(result)
        assert "last_build_time: never" in output
        assert "should_rebuild: True" in output

    def test_generic_fallback(self) -> None:
        output = render_result(ServiceResult(ok=True, op="custom", data={"items": [1, 2]}))
        assert "items: [1,2]" in output

    def test_error_detail_verbose(self) -> None:
        result = ServiceResult.failure(
            "export_graph", ErrorCode.INVALID_FORMAT, "Unknown graph format: x", detail={"format": "x"}
        )
        assert "format: x" in render_result(result, verbose=True)
        assert "format: x" not in render_result(result)

    def test_telemetry_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="statistics",
            data={"people_count": 0},
            meta={"telemetry": {"name": "PeopleService.statistics", "duration_ms": 0.5}},
        )
        output = render_result(result, verbose=True)
        assert "PeopleService.statistics" in output
        assert "0.50ms" in output
