"""Health indicators checked by :class:`~freightflow.application.use_cases.health.HealthAggregator`.

Each indicator has a ``key`` and a blocking ``check()`` returning a
:class:`HealthIndicatorResult`. The aggregator runs them in worker threads.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.orm import Session

from freightflow.domain.entities import HealthIndicatorResult

from .probes import SystemMemory, process_rss_bytes, system_memory

logger = logging.getLogger(__name__)

_MIB = 1024 * 1024


class HealthIndicator(Protocol):
    key: str

    def check(self) -> HealthIndicatorResult:
        ...


def _level(value: float, warning: float, critical: float) -> str:
    if value > critical:
        return "critical"
    if value > warning:
        return "warning"
    return "normal"


class DatabaseIndicator:
    """Run a trivial query to prove the datastore answers."""

    key = "database"

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def check(self) -> HealthIndicatorResult:
        started = time.perf_counter()
        session = self._session_factory()
        try:
            session.execute(text("SELECT 1"))
        finally:
            session.close()
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return HealthIndicatorResult(
            key=self.key, is_healthy=True, details={"response_time_ms": latency_ms}
        )


class MemoryIndicator:
    """Compare the process resident memory with the configured thresholds."""

    key = "memory_rss"

    def __init__(
        self,
        *,
        warning_bytes: int,
        critical_bytes: int,
        probe: Callable[[], int] = process_rss_bytes,
    ) -> None:
        self._warning_bytes = warning_bytes
        self._critical_bytes = critical_bytes
        self._probe = probe

    def check(self) -> HealthIndicatorResult:
        rss = self._probe()
        level = _level(rss, self._warning_bytes, self._critical_bytes)
        if level == "warning":
            logger.warning("Process RSS at %.1f MiB exceeds the warning threshold", rss / _MIB)
        return HealthIndicatorResult(
            key=self.key,
            is_healthy=level != "critical",
            details={
                "rss_mb": round(rss / _MIB, 2),
                "warning_mb": round(self._warning_bytes / _MIB, 2),
                "critical_mb": round(self._critical_bytes / _MIB, 2),
                "level": level,
            },
        )


class SystemMemoryIndicator:
    """Compare host memory usage with the configured percentages."""

    key = "system_memory"

    def __init__(
        self,
        *,
        warning_percent: float,
        critical_percent: float,
        probe: Callable[[], SystemMemory] = system_memory,
    ) -> None:
        self._warning_percent = warning_percent
        self._critical_percent = critical_percent
        self._probe = probe

    def check(self) -> HealthIndicatorResult:
        memory = self._probe()
        used = memory.used_percent
        level = _level(used, self._warning_percent, self._critical_percent)
        return HealthIndicatorResult(
            key=self.key,
            is_healthy=level != "critical",
            details={
                "used_percent": used,
                "total_mb": round(memory.total_bytes / _MIB, 2),
                "available_mb": round(memory.available_bytes / _MIB, 2),
                "level": level,
            },
        )


class UptimeIndicator:
    """Report unhealthy until the process has been up for a minimum time."""

    key = "uptime"

    def __init__(
        self,
        *,
        started_at: float,
        min_uptime_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._started_at = started_at
        self._min_uptime_seconds = min_uptime_seconds
        self._clock = clock

    def check(self) -> HealthIndicatorResult:
        uptime = max(self._clock() - self._started_at, 0.0)
        return HealthIndicatorResult(
            key=self.key,
            is_healthy=uptime >= self._min_uptime_seconds,
            details={
                "uptime_seconds": round(uptime, 2),
                "required_seconds": self._min_uptime_seconds,
            },
        )


class CacheIndicator:
    """Ping a cache client; any object with a ``ping()`` method works."""

    key = "cache"

    def __init__(self, client: Any) -> None:
        self._client = client

    def check(self) -> HealthIndicatorResult:
        answered = self._client.ping()
        return HealthIndicatorResult(
            key=self.key,
            is_healthy=answered is not False,
            details={} if answered is not False else {"error": "ping returned False"},
        )


__all__ = [
    "CacheIndicator",
    "DatabaseIndicator",
    "HealthIndicator",
    "MemoryIndicator",
    "SystemMemoryIndicator",
    "UptimeIndicator",
]
