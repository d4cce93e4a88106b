"""Runtime metrics reported by ``GET /health/detailed``."""

from __future__ import annotations

import os
import platform
import time
from typing import Any

from sqlalchemy.engine import Engine

from freightflow.config import Settings

from .probes import process_rss_bytes, system_memory

_MIB = 1024 * 1024


def _database_metrics(engine: Engine) -> dict[str, Any]:
    pool = engine.pool
    metrics: dict[str, Any] = {
        "dialect": engine.dialect.name,
        "pool": pool.__class__.__name__,
    }
    checked_out = getattr(pool, "checkedout", None)
    if callable(checked_out):
        metrics["connections_in_use"] = checked_out()
    size = getattr(pool, "size", None)
    if callable(size):
        metrics["pool_size"] = size()
    return metrics


def _system_metrics() -> dict[str, Any]:
    memory = system_memory()
    metrics: dict[str, Any] = {
        "platform": platform.platform(),
        "python_version": platform.python_version(),
        "cpu_count": os.cpu_count(),
        "memory_total_mb": round(memory.total_bytes / _MIB, 2),
        "memory_available_mb": round(memory.available_bytes / _MIB, 2),
        "memory_used_percent": memory.used_percent,
    }
    if hasattr(os, "getloadavg"):
        metrics["load_average"] = [round(value, 2) for value in os.getloadavg()]
    return metrics


def _application_metrics(settings: Settings, started_at: float) -> dict[str, Any]:
    return {
        "pid": os.getpid(),
        "uptime_seconds": round(time.monotonic() - started_at, 2),
        "rss_mb": round(process_rss_bytes() / _MIB, 2),
        "version": settings.app_version,
        "environment": settings.environment,
    }


def collect_metrics(
    *, engine: Engine, settings: Settings, started_at: float
) -> dict[str, dict[str, Any]]:
    """Return database, system and application metrics as plain dictionaries."""

    return {
        "database": _database_metrics(engine),
        "system": _system_metrics(),
        "application": _application_metrics(settings, started_at),
    }


__all__ = ["collect_metrics"]
