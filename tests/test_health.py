"""Tests for health indicators and their aggregation."""

from __future__ import annotations

import time

import pytest

from freightflow.application.use_cases import HealthAggregator
from freightflow.domain.entities import HealthIndicatorResult
from freightflow.infrastructure import database
from freightflow.infrastructure.health import (
    CacheIndicator,
    DatabaseIndicator,
    MemoryIndicator,
    SystemMemory,
    SystemMemoryIndicator,
    UptimeIndicator,
)

MIB = 1024 * 1024


class StaticIndicator:
    def __init__(self, key: str, healthy: bool = True) -> None:
        self.key = key
        self._healthy = healthy

    def check(self) -> HealthIndicatorResult:
        return HealthIndicatorResult(key=self.key, is_healthy=self._healthy)


class SleepingIndicator:
    key = "slow"

    def check(self) -> HealthIndicatorResult:
        time.sleep(0.5)
        return HealthIndicatorResult(key=self.key, is_healthy=True)


class RaisingIndicator:
    key = "cache"

    def check(self) -> HealthIndicatorResult:
        raise ConnectionError("connection refused")


@pytest.mark.anyio
async def test_all_indicators_healthy_reports_ok() -> None:
    aggregator = HealthAggregator(
        [StaticIndicator(key) for key in ("database", "memory_rss", "system_memory", "uptime")]
    )

    report = await aggregator.check()

    assert report.status == "ok"
    body = report.to_dict()
    assert body["error"] == {}
    assert set(body["info"]) == {"database", "memory_rss", "system_memory", "uptime"}


@pytest.mark.anyio
async def test_one_failing_indicator_reports_error_naming_it() -> None:
    aggregator = HealthAggregator(
        [
            StaticIndicator("database"),
            StaticIndicator("memory_rss", healthy=False),
            StaticIndicator("system_memory"),
            StaticIndicator("uptime"),
        ]
    )

    report = await aggregator.check()

    assert report.status == "error"
    assert report.failing_keys == ["memory_rss"]
    body = report.to_dict()
    assert body["error"] == {"memory_rss": {"status": "down"}}
    assert body["details"]["database"] == {"status": "up"}


@pytest.mark.anyio
async def test_timeout_becomes_unhealthy_result() -> None:
    aggregator = HealthAggregator([SleepingIndicator(), StaticIndicator("database")], timeout=0.05)

    report = await aggregator.check()

    assert report.failing_keys == ["slow"]
    assert "timed out" in report.to_dict()["error"]["slow"]["error"]


@pytest.mark.anyio
async def test_exception_becomes_unhealthy_result(caplog) -> None:
    aggregator = HealthAggregator([RaisingIndicator(), StaticIndicator("database")])

    with caplog.at_level("ERROR"):
        report = await aggregator.check()

    assert report.status == "error"
    assert report.to_dict()["error"]["cache"] == {
        "status": "down",
        "error": "connection refused",
    }
    assert "connection refused" in caplog.text


def test_database_indicator_runs_select_one() -> None:
    result = DatabaseIndicator(database.SessionLocal).check()

    assert result.is_healthy
    assert result.details["response_time_ms"] >= 0


@pytest.mark.parametrize(
    ("rss_mb", "healthy", "level"),
    [(100, True, "normal"), (200, True, "warning"), (301, False, "critical")],
)
def test_memory_indicator_thresholds(rss_mb: int, healthy: bool, level: str) -> None:
    indicator = MemoryIndicator(
        warning_bytes=150 * MIB, critical_bytes=300 * MIB, probe=lambda: rss_mb * MIB
    )

    result = indicator.check()

    assert result.is_healthy is healthy
    assert result.details["level"] == level
    assert result.details["rss_mb"] == rss_mb


def test_system_memory_indicator_uses_used_percent() -> None:
    indicator = SystemMemoryIndicator(
        warning_percent=85,
        critical_percent=95,
        probe=lambda: SystemMemory(total_bytes=100 * MIB, available_bytes=2 * MIB),
    )

    result = indicator.check()

    assert not result.is_healthy
    assert result.details["used_percent"] == 98.0


def test_uptime_indicator_requires_minimum_uptime() -> None:
    young = UptimeIndicator(started_at=100.0, min_uptime_seconds=10, clock=lambda: 105.0)
    settled = UptimeIndicator(started_at=100.0, min_uptime_seconds=10, clock=lambda: 130.0)

    assert not young.check().is_healthy
    assert settled.check().is_healthy
    assert settled.check().details["uptime_seconds"] == 30.0


def test_cache_indicator_pings_client() -> None:
    class Client:
        def ping(self):
            return True

    assert CacheIndicator(Client()).check().is_healthy
