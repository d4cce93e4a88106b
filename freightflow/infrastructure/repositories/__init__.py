"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .notification_repository import NotificationRepository
from .shipment_repository import ShipmentRepository, shipment_scope_filter
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "NotificationRepository",
    "ShipmentRepository",
    "UserRepository",
    "shipment_scope_filter",
]
