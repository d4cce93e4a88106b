"""Compose independent health indicators into one report."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import anyio

from freightflow.domain.entities import HealthIndicatorResult, HealthReport
from freightflow.infrastructure.health import HealthIndicator

logger = logging.getLogger(__name__)


class HealthAggregator:
    """Run every indicator concurrently and fold failures into the report.

    An indicator that raises or exceeds ``timeout`` seconds is reported as
    unhealthy with an ``error`` detail; it never aborts the other checks.
    """

    def __init__(self, indicators: Iterable[HealthIndicator], *, timeout: float = 3.0) -> None:
        self._indicators = list(indicators)
        self._timeout = timeout

    async def check(self) -> HealthReport:
        results: list[HealthIndicatorResult | None] = [None] * len(self._indicators)

        async def _run(index: int, indicator: HealthIndicator) -> None:
            results[index] = await self._check_one(indicator)

        async with anyio.create_task_group() as task_group:
            for index, indicator in enumerate(self._indicators):
                task_group.start_soon(_run, index, indicator)

        report = HealthReport(results=tuple(results))
        if report.failing_keys:
            logger.warning("Health check failing for: %s", ", ".join(report.failing_keys))
        return report

    async def _check_one(self, indicator: HealthIndicator) -> HealthIndicatorResult:
        try:
            with anyio.fail_after(self._timeout):
                return await anyio.to_thread.run_sync(
                    indicator.check, abandon_on_cancel=True
                )
        except TimeoutError:
            return HealthIndicatorResult(
                key=indicator.key,
                is_healthy=False,
                details={"error": f"timed out after {self._timeout:g} seconds"},
            )
        except Exception as exc:
            logger.error("Health indicator %s raised: %s", indicator.key, exc)
            return HealthIndicatorResult(
                key=indicator.key, is_healthy=False, details={"error": str(exc)}
            )


__all__ = ["HealthAggregator"]
