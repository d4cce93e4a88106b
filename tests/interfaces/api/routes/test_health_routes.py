"""Integration tests for the health endpoints."""

from __future__ import annotations

from freightflow.domain.entities import HealthIndicatorResult
from freightflow.infrastructure.health import indicators as indicators_module


def test_health_reports_every_indicator(client) -> None:
    response = client.get("/health")

    body = response.json()
    assert set(body) == {"status", "info", "error", "details"}
    assert set(body["details"]) == {"database", "memory_rss", "system_memory", "uptime"}
    assert body["details"]["database"]["status"] == "up"
    expected_status = 200 if body["status"] == "ok" else 503
    assert response.status_code == expected_status


def test_health_returns_503_with_body_when_an_indicator_fails(client, monkeypatch) -> None:
    def failing_check(self):
        return HealthIndicatorResult(key=self.key, is_healthy=False, details={"level": "critical"})

    monkeypatch.setattr(indicators_module.MemoryIndicator, "check", failing_check)

    response = client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "error"
    assert body["error"] == {"memory_rss": {"status": "down", "level": "critical"}}


def test_detailed_health_includes_metrics(client) -> None:
    response = client.get("/health/detailed")

    body = response.json()
    assert set(body["metrics"]) == {"database", "system", "application"}
    assert body["metrics"]["database"]["dialect"] == "sqlite"
    assert body["version"] == "1.0.0"
    assert body["environment"] == "development"
    assert "timestamp" in body


def test_liveness_only_checks_uptime(client) -> None:
    response = client.get("/health/live")

    assert response.status_code == 200
    assert set(response.json()["details"]) == {"uptime"}


def test_readiness_checks_database_and_memory(client) -> None:
    response = client.get("/health/ready")

    assert set(response.json()["details"]) == {"database", "memory_rss"}
