"""FastAPI dependency utilities."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from freightflow.application.use_cases import (
    HealthAggregator,
    datastore_unavailable_as_upstream_error,
)
from freightflow.config import Settings, get_settings
from freightflow.domain.entities import User, UserRole
from freightflow.infrastructure.database import SessionLocal, get_db
from freightflow.infrastructure.health import (
    CacheIndicator,
    DatabaseIndicator,
    HealthIndicator,
    MemoryIndicator,
    SystemMemoryIndicator,
    UptimeIndicator,
)
from freightflow.infrastructure.repositories import UserRepository
from freightflow.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized("Invalid credentials") from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid credentials") from None

    with datastore_unavailable_as_upstream_error("resolve_current_user"):
        user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the bearer token."""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    user = resolve_current_user(credentials.credentials, db)
    with datastore_unavailable_as_upstream_error("touch_last_seen"):
        UserRepository(db).touch_last_seen(user.id)
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_role_scoped_user(
    role: str | None = Query(
        default=None, description="Dashboard role; defaults to the caller's role"
    ),
    current_user: User = Depends(get_current_active_user),
) -> User:
    """Return the caller once the requested ``role`` is confirmed to be theirs."""

    if role is None:
        return current_user
    try:
        requested = UserRole.parse(role)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    if not current_user.has_role(requested):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not allowed to read the {requested.value} dashboard",
        )
    return current_user


def build_health_indicators(
    request: Request, settings: Settings, *, include: frozenset[str] | None = None
) -> list[HealthIndicator]:
    started_at: float = request.app.state.started_at
    indicators: list[HealthIndicator] = [
        DatabaseIndicator(SessionLocal),
        MemoryIndicator(
            warning_bytes=settings.memory_rss_warning_bytes,
            critical_bytes=settings.memory_rss_critical_bytes,
        ),
        SystemMemoryIndicator(
            warning_percent=settings.system_memory_warning_percent,
            critical_percent=settings.system_memory_critical_percent,
        ),
        UptimeIndicator(
            started_at=started_at, min_uptime_seconds=settings.min_uptime_seconds
        ),
    ]
    cache_client = getattr(request.app.state, "cache_client", None)
    if cache_client is not None:
        indicators.append(CacheIndicator(cache_client))
    if include is not None:
        indicators = [indicator for indicator in indicators if indicator.key in include]
    return indicators


def get_health_aggregator(
    request: Request, settings: Settings = Depends(get_settings)
) -> HealthAggregator:
    return HealthAggregator(
        build_health_indicators(request, settings),
        timeout=settings.health_check_timeout_seconds,
    )


def get_readiness_aggregator(
    request: Request, settings: Settings = Depends(get_settings)
) -> HealthAggregator:
    return HealthAggregator(
        build_health_indicators(
            request, settings, include=frozenset({"database", "memory_rss"})
        ),
        timeout=settings.health_check_timeout_seconds,
    )


def get_liveness_aggregator(
    request: Request, settings: Settings = Depends(get_settings)
) -> HealthAggregator:
    # Liveness only proves the process runs; no warm-up period applies.
    return HealthAggregator(
        [UptimeIndicator(started_at=request.app.state.started_at, min_uptime_seconds=0)],
        timeout=settings.health_check_timeout_seconds,
    )


__all__ = [
    "bearer_scheme",
    "build_health_indicators",
    "get_current_active_user",
    "get_current_user",
    "get_health_aggregator",
    "get_liveness_aggregator",
    "get_readiness_aggregator",
    "get_role_scoped_user",
    "resolve_current_user",
]
