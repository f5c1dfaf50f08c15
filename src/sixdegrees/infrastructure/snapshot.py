"""Snapshot cache — one human-readable JSON file per installation.

Reads and writes :class:`GraphSnapshot`. Every I/O or decode failure is
raised as :class:`CacheError` so callers can fall back to a rebuild.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from sixdegrees.domain.errors import CacheError
from sixdegrees.domain.models import GraphSnapshot

logger = logging.getLogger(__name__)


class SnapshotFile:
    """Load and persist a graph snapshot at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> GraphSnapshot:
        """Parse the artifact.

        Raises:
            CacheError: The file is missing, unreadable, empty, or malformed.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CacheError(f"Cannot read cache file {self._path}: {exc}") from exc
        if not raw.strip():
            raise CacheError(f"Cache file {self._path} is empty")
        try:
            return GraphSnapshot.model_validate_json(raw)
        except PydanticValidationError as exc:
            raise CacheError(f"Cache file {self._path} is invalid: {exc}") from exc

    def write(self, snapshot: GraphSnapshot) -> int:
        """Write *snapshot* atomically and return the file size in bytes.

        The JSON is written to a sibling temp file and renamed over the
        target so a crash never leaves a truncated cache behind.

        Raises:
            CacheError: The directory or file could not be written.
        """
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
            size = self._path.stat().st_size
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise CacheError(f"Cannot write cache file {self._path}: {exc}") from exc
        logger.debug("Wrote snapshot %s (%d bytes)", self._path, size)
        return size
