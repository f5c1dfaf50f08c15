"""ServiceResult and ServiceError — the contract every operation returns.

Expected failure modes (bad ids, unknown people, no path, a failed
rebuild) come back as ``ok=False`` results with a typed error code and a
human-readable message; they are never raised to the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from sixdegrees.domain.errors import ErrorCode, SixDegreesError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"find_path"``).
        data: Operation-specific payload. Failed searches still report
            metrics such as ``nodes_visited`` here.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def message(self) -> str:
        """The error message, or an empty string on success."""
        return self.error.message if self.error else ""

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    @classmethod
    def from_exception(
        cls, op: str, exc: SixDegreesError, *, data: dict[str, Any] | None = None
    ) -> ServiceResult:
        """Wrap a domain error, keeping its code and message."""
        return cls.failure(op, exc.code, str(exc), data=data)
