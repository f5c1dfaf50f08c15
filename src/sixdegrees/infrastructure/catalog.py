"""Catalog collaborator — the source of raw media items and their credits.

The builder depends only on the :class:`Catalog` protocol. A media server
integration implements it directly; :class:`JsonCatalog` reads the same
records from a JSON export so the graph can be built offline.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Collection
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class CreditedPerson(BaseModel):
    """A person credited on a catalog item.

    ``person_id`` is the catalog's stable identifier when it has one.
    """

    model_config = {"frozen": True}

    person_id: str | None = None
    person_name: str = ""
    role: str = ""


class CatalogItem(BaseModel):
    """A media item as the catalog reports it."""

    model_config = {"frozen": True}

    id: str
    name: str
    year: int | None = None
    has_primary_image: bool = False
    kind: str = ""


@runtime_checkable
class Catalog(Protocol):
    """Read-only view of an external content catalog."""

    def get_items(self, kinds: Collection[str]) -> list[CatalogItem]:
        """Return every item whose type is in *kinds*."""
        ...

    def get_credited_people(self, item_id: str) -> list[CreditedPerson]:
        """Return the people credited on *item_id* with their roles."""
        ...


class _CatalogRecord(CatalogItem):
    people: list[CreditedPerson] = Field(default_factory=list)


class _CatalogFile(BaseModel):
    items: list[_CatalogRecord] = Field(default_factory=list)


class JsonCatalog:
    """Catalog backed by a JSON file of items with embedded credits.

    File shape::

        {"items": [
            {"id": "m1", "name": "Apollo 13", "year": 1995, "kind": "Movie",
             "has_primary_image": true,
             "people": [{"person_id": "p3", "person_name": "Kevin Bacon",
                         "role": "Actor"}]}
        ]}

    The file is read lazily on first access and kept in memory.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._records: dict[str, _CatalogRecord] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, _CatalogRecord]:
        if self._records is None:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            parsed = _CatalogFile.model_validate(raw)
            self._records = {record.id: record for record in parsed.items}
            logger.debug("Loaded %d catalog items from %s", len(self._records), self._path)
        return self._records

    def get_items(self, kinds: Collection[str]) -> list[CatalogItem]:
        wanted = {k.lower() for k in kinds}
        return [
            CatalogItem.model_validate(record.model_dump(exclude={"people"}))
            for record in self._load().values()
            if record.kind.lower() in wanted
        ]

    def get_credited_people(self, item_id: str) -> list[CreditedPerson]:
        record = self._load().get(item_id)
        return list(record.people) if record else []
