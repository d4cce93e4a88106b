"""Use case computing the role-specific dashboard analytics."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlalchemy import and_, func, or_, true
from sqlalchemy.orm import Session

from freightflow.config import Settings, get_settings
from freightflow.domain.entities import (
    ACTIVE_SHIPMENT_STATUSES,
    DELIVERED_SHIPMENT_STATUSES,
    ISSUE_SHIPMENT_STATUSES,
    AmountPoint,
    DashboardAnalytics,
    DashboardCharts,
    DeliveryPerformancePoint,
    RouteCount,
    Shipment,
    ShipmentStatus,
    StatusCount,
    User,
    UserRole,
)
from freightflow.infrastructure.models import ShipmentModel, UserModel
from freightflow.infrastructure.repositories import ShipmentRepository, shipment_scope_filter
from freightflow.utils import (
    ensure_naive_utc,
    ensure_utc,
    get_app_timezone,
    local_day,
    now_utc,
)

from .datastore import datastore_unavailable_as_upstream_error

logger = logging.getLogger(__name__)

TOP_ROUTES_LIMIT = 5


@dataclass(frozen=True)
class AnalyticsWindow:
    """Naive UTC boundaries used to filter shipment rows."""

    now: datetime
    window_start: datetime
    month_start: datetime


def _percentage(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


def _values(statuses: Sequence[ShipmentStatus]) -> list[str]:
    return [status.value for status in statuses]


def _build_window(reference: datetime, settings: Settings) -> AnalyticsWindow:
    local_now = reference.astimezone(get_app_timezone())
    local_month_start = local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return AnalyticsWindow(
        now=ensure_naive_utc(reference),
        window_start=ensure_naive_utc(reference - timedelta(days=settings.analytics_window_days)),
        month_start=ensure_naive_utc(local_month_start),
    )


def _on_time_clause():
    return and_(
        ShipmentModel.delivered_at.isnot(None),
        or_(
            ShipmentModel.estimated_delivery_at.is_(None),
            ShipmentModel.delivered_at <= ShipmentModel.estimated_delivery_at,
        ),
    )


def _count(session: Session, *filters) -> int:
    return int(session.query(func.count(ShipmentModel.id)).filter(*filters).scalar() or 0)


def _on_time_rate(session: Session, scope, window: AnalyticsWindow) -> float:
    delivered_filters = (
        scope,
        ShipmentModel.status.in_(_values(DELIVERED_SHIPMENT_STATUSES)),
        ShipmentModel.delivered_at.isnot(None),
        ShipmentModel.delivered_at >= window.window_start,
    )
    delivered = _count(session, *delivered_filters)
    on_time = _count(session, *delivered_filters, _on_time_clause())
    return _percentage(on_time, delivered)


# Chart series. Status counts are grouped in SQL; the others are built in
# Python from a bounded row fetch.


def _amount_over_time(
    shipments: Sequence[Shipment], *, delivered_only: bool
) -> list[AmountPoint]:
    totals: dict[date, float] = defaultdict(float)
    for shipment in shipments:
        if shipment.status == ShipmentStatus.CANCELLED:
            continue
        if delivered_only:
            if shipment.status not in DELIVERED_SHIPMENT_STATUSES:
                continue
            moment = shipment.delivered_at or shipment.created_at
        else:
            moment = shipment.created_at
        totals[local_day(moment)] += shipment.amount
    return [
        AmountPoint(date=day.isoformat(), amount=round(amount, 2))
        for day, amount in sorted(totals.items())
    ]


def _delivery_performance(shipments: Sequence[Shipment]) -> list[DeliveryPerformancePoint]:
    delivered: Counter[date] = Counter()
    on_time: Counter[date] = Counter()
    for shipment in shipments:
        if shipment.status not in DELIVERED_SHIPMENT_STATUSES or shipment.delivered_at is None:
            continue
        day = local_day(shipment.delivered_at)
        delivered[day] += 1
        if shipment.is_on_time():
            on_time[day] += 1
    return [
        DeliveryPerformancePoint(
            date=day.isoformat(),
            on_time_rate=_percentage(on_time[day], total),
            delayed_rate=_percentage(total - on_time[day], total),
        )
        for day, total in sorted(delivered.items())
    ]


def _status_distribution(session: Session, scope, window: AnalyticsWindow) -> list[StatusCount]:
    rows = (
        session.query(ShipmentModel.status, func.count(ShipmentModel.id))
        .filter(scope, ShipmentModel.created_at >= window.window_start)
        .group_by(ShipmentModel.status)
        .all()
    )
    return [
        StatusCount(status=status, count=int(count))
        for status, count in sorted(rows, key=lambda item: (-item[1], item[0]))
    ]


def _top_routes(shipments: Sequence[Shipment]) -> list[RouteCount]:
    counts = Counter(shipment.route for shipment in shipments)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [RouteCount(route=route, shipments=count) for route, count in ranked[:TOP_ROUTES_LIMIT]]


def _load_chart_rows(
    session: Session, user: User, window: AnalyticsWindow, settings: Settings
) -> list[Shipment]:
    rows = list(
        ShipmentRepository(session).list_created_since(
            user, since=window.window_start, limit=settings.analytics_row_limit
        )
    )
    if len(rows) >= settings.analytics_row_limit:
        logger.info(
            "Dashboard charts for user %s truncated to %s rows",
            user.id,
            settings.analytics_row_limit,
        )
    return rows


# One aggregator per role.


def _shipper_analytics(
    session: Session, user: User, window: AnalyticsWindow, settings: Settings
) -> tuple[dict[str, float], DashboardCharts]:
    scope = shipment_scope_filter(user)
    recent = ShipmentModel.created_at >= window.window_start

    active = _count(session, scope, recent, ShipmentModel.status.in_(_values(ACTIVE_SHIPMENT_STATUSES)))
    pending = _count(session, scope, recent, ShipmentModel.status == ShipmentStatus.PENDING.value)
    spent = (
        session.query(func.coalesce(func.sum(ShipmentModel.amount), 0.0))
        .filter(
            scope,
            ShipmentModel.created_at >= window.month_start,
            ShipmentModel.status != ShipmentStatus.CANCELLED.value,
        )
        .scalar()
    ) or 0.0

    rows = _load_chart_rows(session, user, window, settings)
    kpis = {
        "activeShipments": active,
        "pendingDeliveries": pending,
        "totalSpentMTD": round(float(spent), 2),
        "onTimeRate": _on_time_rate(session, scope, window),
    }
    charts = DashboardCharts(
        revenue_or_cost_over_time=_amount_over_time(rows, delivered_only=False),
        delivery_performance=_delivery_performance(rows),
        shipment_status_distribution=_status_distribution(session, scope, window),
    )
    return kpis, charts


def _carrier_analytics(
    session: Session, user: User, window: AnalyticsWindow, settings: Settings
) -> tuple[dict[str, float], DashboardCharts]:
    scope = shipment_scope_filter(user)
    recent = ShipmentModel.created_at >= window.window_start

    active_jobs = _count(
        session, scope, recent, ShipmentModel.status.in_(_values(ACTIVE_SHIPMENT_STATUSES))
    )
    available_jobs = _count(
        session,
        recent,
        ShipmentModel.carrier_id.is_(None),
        ShipmentModel.status == ShipmentStatus.PENDING.value,
    )
    revenue = (
        session.query(func.coalesce(func.sum(ShipmentModel.amount), 0.0))
        .filter(
            scope,
            ShipmentModel.status.in_(_values(DELIVERED_SHIPMENT_STATUSES)),
            ShipmentModel.delivered_at.isnot(None),
            ShipmentModel.delivered_at >= window.month_start,
        )
        .scalar()
    ) or 0.0
    average_rating = (
        session.query(func.avg(ShipmentModel.rating))
        .filter(scope, recent, ShipmentModel.rating.isnot(None))
        .scalar()
    )

    rows = _load_chart_rows(session, user, window, settings)
    kpis = {
        "activeJobs": active_jobs,
        "availableJobs": available_jobs,
        "revenueMTD": round(float(revenue), 2),
        "averageRating": round(float(average_rating), 2) if average_rating is not None else 0.0,
    }
    charts = DashboardCharts(
        revenue_or_cost_over_time=_amount_over_time(rows, delivered_only=True),
        delivery_performance=_delivery_performance(rows),
        shipment_status_distribution=_status_distribution(session, scope, window),
    )
    return kpis, charts


def _dispatcher_analytics(
    session: Session, user: User, window: AnalyticsWindow, settings: Settings
) -> tuple[dict[str, float], DashboardCharts]:
    scope = shipment_scope_filter(user)
    recent = ShipmentModel.created_at >= window.window_start
    active_filter = ShipmentModel.status.in_(_values(ACTIVE_SHIPMENT_STATUSES))

    total_active = _count(session, scope, recent, active_filter)
    issues = _count(session, scope, recent, ShipmentModel.status.in_(_values(ISSUE_SHIPMENT_STATUSES)))

    online_since = window.now - timedelta(minutes=settings.carrier_online_window_minutes)
    carrier_filters = (
        UserModel.role == UserRole.CARRIER.value,
        UserModel.is_active == true(),
    )
    carriers_online = int(
        session.query(func.count(UserModel.id))
        .filter(
            *carrier_filters,
            UserModel.last_seen_at.isnot(None),
            UserModel.last_seen_at >= online_since,
        )
        .scalar()
        or 0
    )
    active_carriers = int(
        session.query(func.count(UserModel.id)).filter(*carrier_filters).scalar() or 0
    )
    busy_carriers = int(
        session.query(func.count(func.distinct(ShipmentModel.carrier_id)))
        .filter(scope, recent, active_filter, ShipmentModel.carrier_id.isnot(None))
        .scalar()
        or 0
    )

    rows = _load_chart_rows(session, user, window, settings)
    kpis = {
        "totalActiveShipments": total_active,
        "carriersOnline": carriers_online,
        "issuesReported": issues,
        "systemUtilization": _percentage(busy_carriers, active_carriers),
    }
    charts = DashboardCharts(
        delivery_performance=_delivery_performance(rows),
        shipment_status_distribution=_status_distribution(session, scope, window),
        top_routes=_top_routes(rows),
    )
    return kpis, charts


RoleAggregator = Callable[
    [Session, User, AnalyticsWindow, Settings], tuple[dict[str, float], DashboardCharts]
]

_ROLE_AGGREGATORS: dict[UserRole, RoleAggregator] = {
    UserRole.SHIPPER: _shipper_analytics,
    UserRole.CARRIER: _carrier_analytics,
    UserRole.DISPATCHER: _dispatcher_analytics,
}


def get_dashboard_analytics(
    session: Session,
    *,
    user: User,
    reference: datetime | None = None,
    settings: Settings | None = None,
) -> DashboardAnalytics:
    """Compute the KPI grid and chart series shown to ``user``'s role."""

    settings = settings or get_settings()
    reference = ensure_utc(reference) if reference else now_utc()
    window = _build_window(reference, settings)
    aggregator = _ROLE_AGGREGATORS[user.role]

    with datastore_unavailable_as_upstream_error("get_dashboard_analytics"):
        kpis, charts = aggregator(session, user, window, settings)

    return DashboardAnalytics(
        role=user.role,
        generated_at=reference,
        kpis=kpis,
        charts=charts,
    )


__all__ = ["AnalyticsWindow", "get_dashboard_analytics"]
