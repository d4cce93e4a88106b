"""Domain entities describing shipments and their dashboard projection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ShipmentStatus(str, Enum):
    """Lifecycle states a shipment can be in."""

    PENDING = "pending"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DELAYED = "delayed"
    EXCEPTION = "exception"


# A shipment is "active" while it is on the road.
ACTIVE_SHIPMENT_STATUSES = (
    ShipmentStatus.PICKED_UP,
    ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.OUT_FOR_DELIVERY,
    ShipmentStatus.DELAYED,
    ShipmentStatus.EXCEPTION,
)
DELIVERED_SHIPMENT_STATUSES = (ShipmentStatus.DELIVERED, ShipmentStatus.COMPLETED)
ISSUE_SHIPMENT_STATUSES = (ShipmentStatus.DELAYED, ShipmentStatus.EXCEPTION)


@dataclass
class Shipment:
    """Persisted shipment record owned by the shipment workflows."""

    id: int | None
    tracking_number: str
    shipper_id: int
    carrier_id: int | None
    status: ShipmentStatus
    origin: str
    destination: str
    amount: float
    rating: float | None
    created_at: datetime
    updated_at: datetime | None = None
    estimated_delivery_at: datetime | None = None
    delivered_at: datetime | None = None

    @property
    def route(self) -> str:
        return f"{self.origin} → {self.destination}"

    def is_on_time(self) -> bool:
        """Return ``True`` when the shipment was delivered by its estimate."""

        if self.delivered_at is None:
            return False
        if self.estimated_delivery_at is None:
            return True
        return self.delivered_at <= self.estimated_delivery_at


@dataclass(frozen=True)
class RecentShipment:
    """Read-only dashboard projection of a shipment."""

    id: int
    tracking_number: str
    status: ShipmentStatus
    origin: str
    destination: str
    carrier_name: str | None
    eta: datetime | None
    created_at: datetime


__all__ = [
    "ACTIVE_SHIPMENT_STATUSES",
    "DELIVERED_SHIPMENT_STATUSES",
    "ISSUE_SHIPMENT_STATUSES",
    "RecentShipment",
    "Shipment",
    "ShipmentStatus",
]
