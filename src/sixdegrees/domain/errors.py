"""Error taxonomy and the error codes carried by failed ServiceResults.

Exceptions are raised only at the store boundary (bad ids) and inside the
builder/snapshot layers, where they are converted into results. Expected
failures reach callers as ``ServiceError`` codes, never as exceptions.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable codes for ``ServiceError.code``."""

    INVALID_INPUT = "INVALID_INPUT"
    SAME_PERSON = "SAME_PERSON"
    NOT_FOUND = "NOT_FOUND"
    NO_PATH = "NO_PATH"
    SEARCH_ERROR = "SEARCH_ERROR"
    BUILD_ERROR = "BUILD_ERROR"
    CACHE_ERROR = "CACHE_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"


class SixDegreesError(Exception):
    """Base class for all sixdegrees errors."""

    code: ErrorCode = ErrorCode.SEARCH_ERROR


class ValidationError(SixDegreesError, ValueError):
    """Missing or invalid id argument."""

    code = ErrorCode.INVALID_INPUT


class SamePersonError(ValidationError):
    """Path requested between a person and themselves."""

    code = ErrorCode.SAME_PERSON


class NotFoundError(SixDegreesError, LookupError):
    """Unknown person or media id."""

    code = ErrorCode.NOT_FOUND


class NoPathError(SixDegreesError):
    """Breadth-first search exhausted within its depth bound."""

    code = ErrorCode.NO_PATH

    def __init__(self, message: str, *, nodes_visited: int = 0) -> None:
        super().__init__(message)
        self.nodes_visited = nodes_visited


class BuildError(SixDegreesError):
    """Unexpected failure aborting a whole rebuild attempt."""

    code = ErrorCode.BUILD_ERROR


class CacheError(SixDegreesError):
    """Snapshot cache could not be read, validated, or written."""

    code = ErrorCode.CACHE_ERROR
