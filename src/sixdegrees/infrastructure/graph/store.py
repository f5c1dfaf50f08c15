"""GraphStore — thread-safe bipartite adjacency of people and media.

Two id-keyed dicts share a single lock so that the two mirrored halves of
a connection are created atomically: no reader ever observes a
``MediaLink`` without its ``PersonLink`` (or vice versa).

The store knows nothing about traversal. Multi-step algorithms compose
many individual reads without holding the lock across the whole walk;
a concurrent rebuild can therefore surface a stale or missing node
mid-search, but never a half-built connection.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from sixdegrees.domain.errors import ValidationError
from sixdegrees.domain.models import Media, MediaLink, Person, PersonLink

logger = logging.getLogger(__name__)

SEARCH_LIMIT_MAX = 100
LIST_LIMIT_MAX = 200


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _name_key(person: Person) -> tuple[str, str]:
    return (person.name.casefold(), person.name)


class GraphStore:
    """Owns all people and media and the connections between them."""

    def __init__(self) -> None:
        self._people: dict[str, Person] = {}
        self._media: dict[str, Media] = {}
        self._lock = threading.Lock()
        self._connection_count = 0
        self._connection_count_dirty = False

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    @property
    def people_count(self) -> int:
        return len(self._people)

    @property
    def media_count(self) -> int:
        return len(self._media)

    @property
    def connection_count(self) -> int:
        """Total person-side links, recomputed only after a mutation."""
        with self._lock:
            return self._connection_count_locked()

    def _connection_count_locked(self) -> int:
        if self._connection_count_dirty:
            self._connection_count = sum(len(p.media_links) for p in self._people.values())
            self._connection_count_dirty = False
        return self._connection_count

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_person(self, person: Person) -> None:
        """Insert *person*; an existing id keeps its first-inserted data."""
        if not person.id:
            raise ValidationError("Person ID cannot be null or empty.")
        with self._lock:
            if person.id in self._people:
                return
            self._people[person.id] = person
            if person.media_links:
                self._connection_count_dirty = True
        logger.debug("Added person: %s (ID: %s)", person.name, person.id)

    def add_media(self, media: Media) -> None:
        """Insert *media*; an existing id keeps its first-inserted data."""
        if not media.id:
            raise ValidationError("Media ID cannot be null or empty.")
        with self._lock:
            if media.id in self._media:
                return
            self._media[media.id] = media
        logger.debug("Added media: %s (ID: %s)", media.name, media.id)

    def add_connection(self, person_id: str, media_id: str, role: str) -> bool:
        """Connect a person to a media item in both directions.

        Returns True when a new connection was created. A missing endpoint
        is logged and ignored. An existing connection is left untouched,
        so the first role recorded for a pair wins.
        """
        if not person_id:
            raise ValidationError("Person ID cannot be null or empty.")
        if not media_id:
            raise ValidationError("Media ID cannot be null or empty.")

        with self._lock:
            person = self._people.get(person_id)
            if person is None:
                logger.warning("Person not found: %s", person_id)
                return False
            media = self._media.get(media_id)
            if media is None:
                logger.warning("Media not found: %s", media_id)
                return False

            if media_id in person.media_links and person_id in media.person_links:
                return False

            person.media_links.setdefault(
                media_id,
                MediaLink(
                    media_id=media.id,
                    media_name=media.name,
                    media_kind=media.kind,
                    role=role,
                    year=media.year,
                    image_url=media.image_url,
                ),
            )
            media.person_links.setdefault(
                person_id,
                PersonLink(
                    person_id=person.id,
                    person_name=person.name,
                    role=role,
                    image_url=person.image_url,
                ),
            )
            self._connection_count_dirty = True

        logger.debug("Connected %s to %s as %s", person.name, media.name, role)
        return True

    def clear(self) -> None:
        """Remove every person and media item."""
        with self._lock:
            self._people.clear()
            self._media.clear()
            self._connection_count = 0
            self._connection_count_dirty = False
        logger.info("Graph cleared")

    def replace_all(self, people: Iterable[Person], media: Iterable[Media]) -> None:
        """Swap in a complete graph in one step.

        Every id is checked before the swap; a bad id raises
        :class:`ValidationError` and leaves the current graph in place.
        Duplicate ids keep their first entry.
        """
        new_people: dict[str, Person] = {}
        for person in people:
            if not person.id:
                raise ValidationError("Person ID cannot be null or empty.")
            new_people.setdefault(person.id, person)
        new_media: dict[str, Media] = {}
        for item in media:
            if not item.id:
                raise ValidationError("Media ID cannot be null or empty.")
            new_media.setdefault(item.id, item)
        with self._lock:
            self._people = new_people
            self._media = new_media
            self._connection_count = 0
            self._connection_count_dirty = True
        logger.info("Graph replaced - People: %d, Media: %d", len(new_people), len(new_media))

    def copy_graph(self) -> tuple[list[Person], list[Media]]:
        """Deep copies of every person and every media item someone is credited on.

        People are ordered by name; media follow the order they are first
        reached through those people's links.
        """
        with self._lock:
            people = sorted(self._people.values(), key=_name_key)
            media: dict[str, Media] = {}
            for person in people:
                for link in person.media_links.values():
                    item = self._media.get(link.media_id)
                    if item is not None and link.media_id not in media:
                        media[link.media_id] = item.model_copy(deep=True)
            copies = [p.model_copy(deep=True) for p in people]
        return copies, list(media.values())

    # ------------------------------------------------------------------
    # Point lookups
    # ------------------------------------------------------------------

    def get_person(self, person_id: str | None) -> Person | None:
        if not person_id:
            return None
        with self._lock:
            return self._people.get(person_id)

    def get_media(self, media_id: str | None) -> Media | None:
        if not media_id:
            return None
        with self._lock:
            return self._media.get(media_id)

    def get_person_links(self, person_id: str | None) -> list[MediaLink]:
        """Snapshot of a person's media links, safe to iterate without the lock."""
        if not person_id:
            return []
        with self._lock:
            person = self._people.get(person_id)
            return list(person.media_links.values()) if person else []

    def get_media_links(self, media_id: str | None) -> list[PersonLink]:
        """Snapshot of a media item's person links, safe to iterate without the lock."""
        if not media_id:
            return []
        with self._lock:
            media = self._media.get(media_id)
            return list(media.person_links.values()) if media else []

    # ------------------------------------------------------------------
    # Listing and search
    # ------------------------------------------------------------------

    def search_people(self, query: str | None, limit: int = 20, offset: int = 0) -> list[Person]:
        """Case-insensitive substring search over names, ordered by name.

        A blank query matches nothing. *limit* is clamped to 1-100 and
        *offset* to a minimum of 0.
        """
        if query is None or not query.strip():
            return []
        limit = _clamp(limit, 1, SEARCH_LIMIT_MAX)
        offset = max(0, offset)
        needle = query.casefold()
        with self._lock:
            matches = [p for p in self._people.values() if needle in p.name.casefold()]
        matches.sort(key=_name_key)
        return matches[offset : offset + limit]

    def get_all_people(self, limit: int = 50, offset: int = 0) -> list[Person]:
        """Page through every person ordered by name (limit clamped to 1-200)."""
        limit = _clamp(limit, 1, LIST_LIMIT_MAX)
        offset = max(0, offset)
        return self.iter_people()[offset : offset + limit]

    def iter_people(self) -> list[Person]:
        """Every person, ordered by name, without pagination."""
        with self._lock:
            people = list(self._people.values())
        people.sort(key=_name_key)
        return people

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_statistics(self) -> dict[str, Any]:
        with self._lock:
            people = len(self._people)
            connections = self._connection_count_locked()
            return {
                "people_count": people,
                "media_count": len(self._media),
                "connection_count": connections,
                "average_connections_per_person": connections / people if people else 0.0,
            }
