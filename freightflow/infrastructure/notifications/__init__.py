"""Notification transports and realtime delivery helpers."""

from .channels import ChannelAdapter, EmailChannelAdapter, InAppChannelAdapter
from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NotificationPublisher,
    notification_publisher,
    serialize_notification,
)

__all__ = [
    "ChannelAdapter",
    "EmailChannelAdapter",
    "InAppChannelAdapter",
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
