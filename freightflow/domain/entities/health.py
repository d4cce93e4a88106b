"""Domain entities describing health indicator results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

HEALTH_STATUS_OK = "ok"
HEALTH_STATUS_ERROR = "error"


@dataclass(frozen=True)
class HealthIndicatorResult:
    """Outcome of one independent health check."""

    key: str
    is_healthy: bool
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HealthReport:
    """Aggregate of indicator results; healthy iff every indicator is."""

    results: tuple[HealthIndicatorResult, ...]

    @property
    def status(self) -> str:
        if all(result.is_healthy for result in self.results):
            return HEALTH_STATUS_OK
        return HEALTH_STATUS_ERROR

    @property
    def failing_keys(self) -> list[str]:
        return [result.key for result in self.results if not result.is_healthy]

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{status, info, error, details}`` body of ``GET /health``."""

        info = {
            result.key: {"status": "up", **result.details}
            for result in self.results
            if result.is_healthy
        }
        error = {
            result.key: {"status": "down", **result.details}
            for result in self.results
            if not result.is_healthy
        }
        return {
            "status": self.status,
            "info": info,
            "error": error,
            "details": {**info, **error},
        }


__all__ = [
    "HEALTH_STATUS_ERROR",
    "HEALTH_STATUS_OK",
    "HealthIndicatorResult",
    "HealthReport",
]
