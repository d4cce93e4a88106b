"""Health, liveness and readiness endpoints."""

from __future__ import annotations

from typing import Any

import anyio
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from freightflow.application.use_cases import HealthAggregator
from freightflow.config import Settings, get_settings
from freightflow.domain.entities import HEALTH_STATUS_OK, HealthReport
from freightflow.infrastructure.database import engine
from freightflow.infrastructure.health import collect_metrics
from freightflow.interfaces.api.dependencies import (
    get_health_aggregator,
    get_liveness_aggregator,
    get_readiness_aggregator,
)
from freightflow.utils import now_utc

router = APIRouter(prefix="/health", tags=["health"])


def _respond(report: HealthReport, body: dict[str, Any] | None = None) -> JSONResponse:
    status_code = (
        status.HTTP_200_OK
        if report.status == HEALTH_STATUS_OK
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(status_code=status_code, content=body or report.to_dict())


@router.get("")
async def read_health(
    aggregator: HealthAggregator = Depends(get_health_aggregator),
) -> JSONResponse:
    """Return ``{status, info, error, details}`` for every indicator."""

    return _respond(await aggregator.check())


@router.get("/detailed")
async def read_detailed_health(
    request: Request,
    aggregator: HealthAggregator = Depends(get_health_aggregator),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    report = await aggregator.check()
    metrics = await anyio.to_thread.run_sync(
        lambda: collect_metrics(
            engine=engine, settings=settings, started_at=request.app.state.started_at
        )
    )
    body = {
        **report.to_dict(),
        "metrics": metrics,
        "timestamp": now_utc().isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
    }
    return _respond(report, body)


@router.get("/live")
async def read_liveness(
    aggregator: HealthAggregator = Depends(get_liveness_aggregator),
) -> JSONResponse:
    return _respond(await aggregator.check())


@router.get("/ready")
async def read_readiness(
    aggregator: HealthAggregator = Depends(get_readiness_aggregator),
) -> JSONResponse:
    return _respond(await aggregator.check())


__all__ = ["router"]
