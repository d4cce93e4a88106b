"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .notification import NotificationModel
from .shipment import ShipmentModel
from .user import UserModel

__all__ = [
    "ActivityModel",
    "NotificationModel",
    "ShipmentModel",
    "UserModel",
]
