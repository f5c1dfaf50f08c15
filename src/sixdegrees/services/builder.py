"""GraphBuilder — populate the store from a catalog and persist snapshots.

A build clears the store, walks every catalog item of the enabled kinds,
and records each credit as a person ↔ media connection. The resulting
graph is written to a JSON snapshot so later processes can start from the
cache instead of re-reading the catalog.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timedelta
from typing import Any

from sixdegrees.config.models import CacheConfig, CatalogConfig
from sixdegrees.domain.errors import BuildError, CacheError, ErrorCode, SixDegreesError
from sixdegrees.domain.models import GraphSnapshot, Media, Person
from sixdegrees.domain.types import MediaKind
from sixdegrees.infrastructure.catalog import Catalog, CatalogItem
from sixdegrees.infrastructure.graph.store import GraphStore
from sixdegrees.infrastructure.snapshot import SnapshotFile
from sixdegrees.services._helpers import as_utc, elapsed_ms, utc_now
from sixdegrees.services.base import BaseService
from sixdegrees.services.result import ServiceResult
from sixdegrees.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

PROGRESS_STEP_PERCENT = 10


class GraphBuilder(BaseService):
    """Builds the graph from a :class:`Catalog` and manages the snapshot cache.

    Args:
        store: The store to populate.
        snapshot: Where the cache artifact lives.
        catalog: Source of media items and credits. Without one the
            builder can still load and save the cache, but ``build_graph``
            fails.
        catalog_config: Inclusion flags and the image URL template.
        cache_config: Refresh interval for cache validity.
    """

    def __init__(
        self,
        store: GraphStore,
        snapshot: SnapshotFile,
        catalog: Catalog | None = None,
        *,
        catalog_config: CatalogConfig | None = None,
        cache_config: CacheConfig | None = None,
    ) -> None:
        super().__init__(store)
        if snapshot is None:
            raise TypeError("GraphBuilder requires a SnapshotFile")
        self._snapshot = snapshot
        self._catalog = catalog
        self._catalog_config = catalog_config or CatalogConfig()
        self._cache_config = cache_config or CacheConfig()
        self._build_lock = threading.Lock()
        self._last_build_time: datetime | None = None

    @property
    def last_build_time(self) -> datetime | None:
        """When the current graph was built (or the loaded snapshot was)."""
        return self._last_build_time

    @property
    def snapshot(self) -> SnapshotFile:
        return self._snapshot

    @property
    def has_catalog(self) -> bool:
        return self._catalog is not None

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(minutes=self._cache_config.refresh_interval_minutes)

    # ------------------------------------------------------------------
    # build_graph
    # ------------------------------------------------------------------

    @traced
    def build_graph(self) -> ServiceResult:
        """Rebuild the whole graph from the catalog.

        Concurrent calls on the same builder run one after another. Items
        that fail individually are logged and skipped. Any other failure
        clears the store, forgets the last build time, and returns a
        ``BUILD_ERROR`` result with zero counts. Without a catalog the
        store is left as it is.
        """
        op = "build_graph"
        with self._build_lock:
            start = time.perf_counter()
            if self._catalog is None:
                logger.error("Cannot build graph: no catalog configured")
                return ServiceResult.from_exception(
                    op,
                    BuildError("No catalog configured"),
                    data=_build_data(0, 0, 0, elapsed_ms(start)),
                )

            logger.info("Starting graph build...")
            try:
                self._store.clear()

                with trace_span("fetch_items") as span:
                    items = self._library_items()
                    if span:
                        span.annotate("items", len(items))

                if not items:
                    logger.warning("No media items found in library")
                    return ServiceResult(
                        ok=True,
                        op=op,
                        data=_build_data(
                            0, 0, 0, elapsed_ms(start), "No media items found in library"
                        ),
                    )

                logger.info("Found %d media items to process", len(items))
                with trace_span("process_items"):
                    warnings = self._process_items(items)

                with trace_span("save_cache"):
                    self.save_cache()
                self._last_build_time = utc_now()
            except Exception as exc:
                logger.error("Error building graph: %s", exc, exc_info=True)
                self._store.clear()
                self._last_build_time = None
                return ServiceResult.failure(
                    op,
                    ErrorCode.BUILD_ERROR,
                    f"Error building graph: {exc}",
                    data=_build_data(0, 0, 0, elapsed_ms(start)),
                )

            stats = self._store.get_statistics()
            build_ms = elapsed_ms(start)
            logger.info(
                "Graph build completed in %.0fms - People: %d, Media: %d, Connections: %d",
                build_ms,
                stats["people_count"],
                stats["media_count"],
                stats["connection_count"],
            )
            return ServiceResult(
                ok=True,
                op=op,
                data=_build_data(
                    stats["people_count"],
                    stats["media_count"],
                    stats["connection_count"],
                    build_ms,
                    "Graph built successfully",
                ),
                warnings=warnings,
            )

    def _library_items(self) -> list[CatalogItem]:
        assert self._catalog is not None
        kinds = self._catalog_config.included_types()
        if not kinds:
            logger.warning("No media types enabled in configuration")
            return []
        return self._catalog.get_items(kinds)

    def _process_items(self, items: list[CatalogItem]) -> list[str]:
        total = len(items)
        seen_people: set[str] = set()
        warnings: list[str] = []
        last_logged = 0
        for processed, item in enumerate(items, start=1):
            percent = processed * 100 // total
            if percent >= last_logged + PROGRESS_STEP_PERCENT:
                logger.info("Progress: %d%% (%d/%d items processed)", percent, processed, total)
                last_logged = percent
            try:
                self._process_item(item, seen_people)
            except Exception as exc:
                logger.error("Error processing item %s (ID: %s): %s", item.name, item.id, exc)
                warnings.append(f"Skipped {item.name} ({item.id}): {exc}")
        return warnings

    def _process_item(self, item: CatalogItem, seen_people: set[str]) -> None:
        assert self._catalog is not None
        template = self._catalog_config
        media = Media(
            id=item.id,
            name=item.name,
            kind=MediaKind.from_catalog(item.kind),
            year=item.year,
            image_url=template.image_url(item.id) if item.has_primary_image else None,
        )
        self._store.add_media(media)

        for credit in self._catalog.get_credited_people(item.id):
            if not credit.person_name or not credit.person_name.strip():
                continue
            person_id = credit.person_id or credit.person_name
            if person_id not in seen_people:
                self._store.add_person(
                    Person(
                        id=person_id,
                        name=credit.person_name,
                        image_url=(
                            template.image_url(credit.person_id) if credit.person_id else None
                        ),
                    )
                )
                seen_people.add(person_id)
            self._store.add_connection(person_id, media.id, credit.role)

    # ------------------------------------------------------------------
    # Snapshot cache
    # ------------------------------------------------------------------

    def load_cache(self) -> bool:
        """Replace the store with the cached snapshot if it is still valid.

        Returns False, leaving the store untouched, when the artifact is
        missing, unreadable, stale, holds no people or no media, or holds
        an entity the store rejects.
        """
        if not self._snapshot.exists():
            logger.info("No cache file found")
            return False

        logger.info("Loading graph from cache...")
        start = time.perf_counter()
        try:
            snapshot = self._snapshot.read()
        except CacheError as exc:
            logger.warning("Cache file is empty or invalid: %s", exc)
            return False

        if not self._is_valid(snapshot):
            logger.warning("Cache validation failed")
            return False
        assert snapshot.people is not None and snapshot.media is not None

        try:
            self._store.replace_all(snapshot.people, snapshot.media)
        except SixDegreesError as exc:
            logger.warning("Cache validation failed: %s", exc)
            return False
        self._last_build_time = as_utc(snapshot.build_timestamp)

        logger.info(
            "Cache loaded successfully in %.0fms - People: %d, Media: %d",
            elapsed_ms(start),
            len(snapshot.people),
            len(snapshot.media),
        )
        return True

    def _is_valid(self, snapshot: GraphSnapshot) -> bool:
        age = utc_now() - as_utc(snapshot.build_timestamp)
        if age > self.refresh_interval:
            logger.info("Cache expired (age: %s)", age)
            return False
        return bool(snapshot.people) and bool(snapshot.media)

    def save_cache(self) -> None:
        """Write the current graph to the snapshot file.

        Media are collected by walking every person's links, so media
        nobody is credited on are not persisted. Failures are logged.
        """
        logger.info("Saving graph to cache...")
        start = time.perf_counter()
        people, media = self._store.copy_graph()
        snapshot = GraphSnapshot(build_timestamp=utc_now(), people=people, media=media)
        try:
            size = self._snapshot.write(snapshot)
        except CacheError as exc:
            logger.error("Error saving cache: %s", exc)
            return
        logger.info(
            "Cache saved successfully in %.0fms - Size: %dKB", elapsed_ms(start), size // 1024
        )

    def should_rebuild_cache(self) -> bool:
        """True when nothing was ever built or the build is older than the refresh interval."""
        if self._last_build_time is None:
            return True
        return utc_now() - self._last_build_time > self.refresh_interval

    def cache_status(self) -> ServiceResult:
        """Report build time, artifact location, and whether a rebuild is due."""
        last = self._last_build_time
        data: dict[str, Any] = {
            "cache_path": str(self._snapshot.path),
            "cache_exists": self._snapshot.exists(),
            "last_build_time": last.isoformat() if last else None,
            "refresh_interval_minutes": self._cache_config.refresh_interval_minutes,
            "should_rebuild": self.should_rebuild_cache(),
            "people_count": self._store.people_count,
            "media_count": self._store.media_count,
        }
        return ServiceResult(ok=True, op="cache_status", data=data)


def _build_data(
    people: int, media: int, connections: int, build_ms: float, message: str = ""
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "people_count": people,
        "media_count": media,
        "connection_count": connections,
        "build_time_ms": build_ms,
    }
    if message:
        data["message"] = message
    return data
