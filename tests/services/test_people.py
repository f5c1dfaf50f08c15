"""Tests for PeopleService."""

from __future__ import annotations

import pytest

from sixdegrees.infrastructure.graph.store import GraphStore
from sixdegrees.services.people import PeopleService
from tests.conftest import add_person


class TestSearch:
    def test_matches_with_connection_counts(self, standard_store: GraphStore) -> None:
        result = PeopleService(standard_store).search("sinise")
        assert result.ok
        assert result.op == "search_people"
        assert result.data["count"] == 1
        person = result.data["people"][0]
        assert person == {
            "id": "p2",
            "name": "Gary Sinise",
            "image_url": None,
            "connection_count": 2,
        }

    def test_blank_query(self, standard_store: GraphStore) -> None:
        result = PeopleService(standard_store).search("  ")
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["people"] == []

    def test_echoes_paging(self, standard_store: GraphStore) -> None:
        result = PeopleService(standard_store).search("tom", limit=1, offset=1)
        assert result.data["limit"] == 1
        assert result.data["offset"] == 1
        assert [p["name"] for p in result.data["people"]] == ["Tom Hanks"]


class TestListPeople:
    def test_total_count(self, standard_store: GraphStore) -> None:
        result = PeopleService(standard_store).list_people(limit=2)
        assert result.op == "list_people"
        assert result.data["count"] == 2
        assert result.data["total_count"] == 5
        assert [p["name"] for p in result.data["people"]] == ["Gary Sinise", "Kevin Bacon"]

    def test_offset_past_end(self, standard_store: GraphStore) -> None:
        result = PeopleService(standard_store).list_people(offset=99)
        assert result.data["count"] == 0
        assert result.data["total_count"] == 5

    def test_unconnected_people_listed(self, store: GraphStore) -> None:
        add_person(store, "p1", "Solo")
        result = PeopleService(store).list_people()
        assert result.data["people"][0]["connection_count"] == 0


class TestStatistics:
    def test_counts(self, standard_store: GraphStore) -> None:
        result = PeopleService(standard_store).statistics()
        assert result.op == "statistics"
        assert result.data["people_count"] == 5
        assert result.data["media_count"] == 3
        assert result.data["connection_count"] == 7
        assert result.data["average_connections_per_person"] == pytest.approx(1.4)

    def test_empty(self, store: GraphStore) -> None:
        assert PeopleService(store).statistics().data["average_connections_per_person"] == 0.0
