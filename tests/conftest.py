"""Shared pytest fixtures and test helpers for sixdegrees tests."""

from __future__ import annotations

import json
import random
from collections.abc import Collection, Iterable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from sixdegrees.domain.models import Media, Person
from sixdegrees.domain.types import MediaKind
from sixdegrees.infrastructure.catalog import CatalogItem, CreditedPerson
from sixdegrees.infrastructure.graph.store import GraphStore
from sixdegrees.services.telemetry import disable_telemetry

# (person_id, name)
STANDARD_PEOPLE = [
    ("p1", "Tom Hanks"),
    ("p2", "Gary Sinise"),
    ("p3", "Kevin Bacon"),
    ("p4", "Tom Cruise"),
    ("p5", "Robin Wright"),
]
# (media_id, name, year)
STANDARD_MEDIA = [
    ("m1", "Forrest Gump", 1994),
    ("m2", "Apollo 13", 1995),
    ("m3", "A Few Good Men", 1992),
]
# (person_id, media_id, role)
STANDARD_CONNECTIONS = [
    ("p1", "m1", "Actor"),
    ("p2", "m1", "Actor"),
    ("p5", "m1", "Actor"),
    ("p2", "m2", "Actor"),
    ("p3", "m2", "Actor"),
    ("p3", "m3", "Actor"),
    ("p4", "m3", "Actor"),
]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _telemetry_off() -> Iterable[None]:
    """Telemetry is a ContextVar; make sure no test leaks it into the next."""
    yield
    disable_telemetry()


@pytest.fixture
def store() -> GraphStore:
    """An empty store."""
    return GraphStore()


@pytest.fixture
def standard_store() -> GraphStore:
    """Hanks, Sinise, Bacon, Cruise, Wright across three 90s movies.

    Tom Hanks reaches Tom Cruise in 6 degrees:
    Hanks → Forrest Gump → Sinise → Apollo 13 → Bacon → A Few Good Men → Cruise.
    """
    return build_store(STANDARD_PEOPLE, STANDARD_MEDIA, STANDARD_CONNECTIONS)


@pytest.fixture
def neighbors_store() -> GraphStore:
    """A small graph around one center person with mixed roles and kinds."""
    s = GraphStore()
    for pid, name in [
        ("center", "Center Person"),
        ("person1", "Person 1"),
        ("person2", "Person 2"),
        ("person3", "Person 3"),
        ("person4", "Person 4"),
    ]:
        add_person(s, pid, name)
    add_media(s, "mediaA", "Media A", kind=MediaKind.MOVIE)
    add_media(s, "mediaB", "Media B", kind=MediaKind.MOVIE)
    add_media(s, "mediaC", "Media C", kind=MediaKind.SERIES)
    s.add_connection("center", "mediaA", "Actor")
    s.add_connection("person1", "mediaA", "Actor")
    s.add_connection("center", "mediaB", "Director")
    s.add_connection("person2", "mediaB", "Actor")
    s.add_connection("person3", "mediaB", "Actor")
    s.add_connection("person1", "mediaC", "Actor")
    s.add_connection("person4", "mediaC", "Actor")
    return s


# ---------------------------------------------------------------------------
# Shared test helpers (used across test modules)
# ---------------------------------------------------------------------------


def add_person(store: GraphStore, person_id: str, name: str | None = None) -> Person:
    person = Person(id=person_id, name=name or person_id)
    store.add_person(person)
    return person


def add_media(
    store: GraphStore,
    media_id: str,
    name: str | None = None,
    *,
    kind: MediaKind = MediaKind.MOVIE,
    year: int | None = None,
) -> Media:
    media = Media(id=media_id, name=name or media_id, kind=kind, year=year)
    store.add_media(media)
    return media


def build_store(
    people: Iterable[tuple[str, str]],
    media: Iterable[tuple[str, str, int | None]],
    connections: Iterable[tuple[str, str, str]],
) -> GraphStore:
    """Build a store from plain tuples, asserting every connection is new."""
    s = GraphStore()
    for pid, name in people:
        add_person(s, pid, name)
    for mid, name, year in media:
        add_media(s, mid, name, year=year)
    for pid, mid, role in connections:
        assert s.add_connection(pid, mid, role)
    return s


def build_random_store(
    people: int, media: int, credits_per_media: int, *, seed: int = 42
) -> GraphStore:
    """A reproducible random bipartite graph."""
    rng = random.Random(seed)
    s = GraphStore()
    for i in range(people):
        add_person(s, f"p{i}", f"Person {i:05d}")
    for j in range(media):
        add_media(s, f"m{j}", f"Media {j:05d}")
        for pid in rng.sample(range(people), credits_per_media):
            s.add_connection(f"p{pid}", f"m{j}", "Actor")
    return s


class FakeCatalog:
    """In-memory Catalog: items with embedded credits, and call counters."""

    def __init__(self, items: list[dict[str, Any]] | None = None) -> None:
        self.items = items or []
        self.requested_kinds: list[list[str]] = []
        self.fail_on: set[str] = set()

    def get_items(self, kinds: Collection[str]) -> list[CatalogItem]:
        self.requested_kinds.append(list(kinds))
        wanted = {k.lower() for k in kinds}
        return [
            CatalogItem(
                id=item["id"],
                name=item["name"],
                year=item.get("year"),
                has_primary_image=item.get("has_primary_image", False),
                kind=item.get("kind", "Movie"),
            )
            for item in self.items
            if item.get("kind", "Movie").lower() in wanted
        ]

    def get_credited_people(self, item_id: str) -> list[CreditedPerson]:
        if item_id in self.fail_on:
            raise RuntimeError(f"credits unavailable for {item_id}")
        for item in self.items:
            if item["id"] == item_id:
                return [CreditedPerson(**p) for p in item.get("people", [])]
        return []


def standard_catalog_items() -> list[dict[str, Any]]:
    """The standard graph as catalog records."""
    names = dict(STANDARD_PEOPLE)
    items: list[dict[str, Any]] = []
    for mid, name, year in STANDARD_MEDIA:
        credits = [
            {"person_id": pid, "person_name": names[pid], "role": role}
            for pid, m, role in STANDARD_CONNECTIONS
            if m == mid
        ]
        items.append(
            {
                "id": mid,
                "name": name,
                "year": year,
                "kind": "Movie",
                "has_primary_image": True,
                "people": credits,
            }
        )
    return items


def write_catalog(path: Path, items: list[dict[str, Any]]) -> Path:
    path.write_text(json.dumps({"items": items}), encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A CWD with sixdegrees.toml pointing at a catalog of the standard graph.

    Use on command tests; the CLI discovers the config by walk-up.
    """
    monkeypatch.delenv("SIXDEGREES_CONFIG", raising=False)
    write_catalog(tmp_path / "catalog.json", standard_catalog_items())
    (tmp_path / "sixdegrees.toml").write_text(
        '[catalog]\npath = "catalog.json"\n\n[cache]\ndirectory = "cache"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path
