"""Schemas for dashboard analytics endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from freightflow.domain.entities import UserRole


class AmountPointRead(BaseModel):
    date: str = Field(..., description="Calendar day in ISO format")
    amount: float

    model_config = ConfigDict(from_attributes=True)


class DeliveryPerformancePointRead(BaseModel):
    date: str
    on_time_rate: float = Field(..., description="Percentage of on-time deliveries")
    delayed_rate: float = Field(..., description="Percentage of late deliveries")

    model_config = ConfigDict(from_attributes=True)


class StatusCountRead(BaseModel):
    status: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class RouteCountRead(BaseModel):
    route: str
    shipments: int

    model_config = ConfigDict(from_attributes=True)


class DashboardChartsRead(BaseModel):
    revenue_or_cost_over_time: list[AmountPointRead] = Field(default_factory=list)
    delivery_performance: list[DeliveryPerformancePointRead] = Field(default_factory=list)
    shipment_status_distribution: list[StatusCountRead] = Field(default_factory=list)
    top_routes: list[RouteCountRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class DashboardAnalyticsRead(BaseModel):
    role: UserRole
    generated_at: datetime
    kpis: dict[str, float] = Field(
        ..., description="KPI values keyed by the metric names of the role"
    )
    charts: DashboardChartsRead

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "AmountPointRead",
    "DashboardAnalyticsRead",
    "DashboardChartsRead",
    "DeliveryPerformancePointRead",
    "RouteCountRead",
    "StatusCountRead",
]
