"""PeopleService — search, paging, and graph statistics."""

from __future__ import annotations

from typing import Any

from sixdegrees.domain.models import Person
from sixdegrees.services.base import BaseService
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import traced


def _person_summary(person: Person) -> dict[str, Any]:
    return {
        "id": person.id,
        "name": person.name,
        "image_url": person.image_url,
        "connection_count": len(person.media_links),
    }


class PeopleService(BaseService):
    """Read-only people queries shaped as ServiceResults."""

    @traced
    def search(self, query: str | None, *, limit: int = 20, offset: int = 0) -> ServiceResult:
        """Case-insensitive name search. A blank query returns no people."""
        people = self._store.search_people(query, limit=limit, offset=offset)
        return ServiceResult(
            ok=True,
            op="search_people",
            data={
                "query": query or "",
                "limit": limit,
                "offset": offset,
                "count": len(people),
                "people": [_person_summary(p) for p in people],
            },
        )

    @traced
    def list_people(self, *, limit: int = 50, offset: int = 0) -> ServiceResult:
        """One page of people ordered by name, with the overall total."""
        people = self._store.get_all_people(limit=limit, offset=offset)
        return ServiceResult(
            ok=True,
            op="list_people",
            data={
                "limit": limit,
                "offset": offset,
                "count": len(people),
                "total_count": self._store.people_count,
                "people": [_person_summary(p) for p in people],
            },
        )

    @traced
    def statistics(self) -> ServiceResult:
        stats = self._store.get_statistics()
        stats["average_connections_per_person"] = round(stats["average_connections_per_person"], 2)
        return ServiceResult(ok=True, op="statistics", data=stats)
