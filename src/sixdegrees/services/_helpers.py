"""Shared service-layer helper functions."""

from __future__ import annotations

import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (older snapshots) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def elapsed_ms(start: float) -> float:
    """Milliseconds since *start* (a ``time.perf_counter()`` reading)."""
    return round((time.perf_counter() - start) * 1000, 3)
