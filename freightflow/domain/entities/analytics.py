"""Derived dashboard analytics computed per role."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .role import UserRole


@dataclass(frozen=True)
class AmountPoint:
    """Revenue or cost accumulated on a single day."""

    date: str
    amount: float


@dataclass(frozen=True)
class DeliveryPerformancePoint:
    """Share of deliveries on a single day that arrived on time or late."""

    date: str
    on_time_rate: float
    delayed_rate: float


@dataclass(frozen=True)
class StatusCount:
    status: str
    count: int


@dataclass(frozen=True)
class RouteCount:
    route: str
    shipments: int


@dataclass
class DashboardCharts:
    """Chart series shown below the KPI grid; unused series stay empty."""

    revenue_or_cost_over_time: list[AmountPoint] = field(default_factory=list)
    delivery_performance: list[DeliveryPerformancePoint] = field(default_factory=list)
    shipment_status_distribution: list[StatusCount] = field(default_factory=list)
    top_routes: list[RouteCount] = field(default_factory=list)


@dataclass
class DashboardAnalytics:
    """Aggregate view of KPI metrics and charts for one role."""

    role: UserRole
    generated_at: datetime
    kpis: dict[str, float]
    charts: DashboardCharts


__all__ = [
    "AmountPoint",
    "DashboardAnalytics",
    "DashboardCharts",
    "DeliveryPerformancePoint",
    "RouteCount",
    "StatusCount",
]
