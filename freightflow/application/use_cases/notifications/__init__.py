"""Notification use cases."""

from .dispatcher import NotificationDispatcher
from .events import STATUS_TEMPLATES, notify_shipment_status_changed

__all__ = [
    "NotificationDispatcher",
    "STATUS_TEMPLATES",
    "notify_shipment_status_changed",
]
