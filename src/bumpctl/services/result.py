"""ServiceResult and ServiceError — what the CLI renders.

INVARIANT: Service operations return a ServiceResult rather than raising
for per-manifest failures. Only programming errors escape as exceptions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """The first failure of an operation.

    Attributes:
        code: Stable error code (``NOT_FOUND``, ``PARSE_ERROR``, ...).
        message: Human-readable message, including the manifest path.
        detail: Extra context (offending path, failure counts).
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of a service operation.

    Attributes:
        ok: Whether every unit of work succeeded.
        op: Operation name (``"propagate_version"``).
        data: Operation payload; present on failure too (partial progress).
        warnings: Non-fatal issues.
        error: First failure when ``ok`` is False.
        meta: Timing and telemetry, when enabled.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
