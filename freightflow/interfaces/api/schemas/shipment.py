"""Pydantic schemas for shipment feed endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from freightflow.domain.entities import ShipmentStatus


class RecentShipmentRead(BaseModel):
    id: int
    tracking_number: str
    status: ShipmentStatus
    origin: str
    destination: str
    carrier_name: str | None = None
    eta: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShipmentRead(BaseModel):
    id: int
    tracking_number: str
    shipper_id: int
    carrier_id: int | None = None
    status: ShipmentStatus
    origin: str
    destination: str
    amount: float
    rating: float | None = None
    created_at: datetime
    updated_at: datetime | None = None
    estimated_delivery_at: datetime | None = None
    delivered_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ShipmentPageRead(BaseModel):
    items: list[RecentShipmentRead]
    total: int = Field(..., description="Number of shipments visible to the caller")
    page: int
    page_size: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)


class ShipmentCursorPageRead(BaseModel):
    items: list[RecentShipmentRead]
    next_cursor: str | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "RecentShipmentRead",
    "ShipmentCursorPageRead",
    "ShipmentPageRead",
    "ShipmentRead",
]
