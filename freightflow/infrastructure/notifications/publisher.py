"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from freightflow.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[Any]] = set()

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user."""

        message = {"type": "notification", "data": serialize_notification(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.send_to_user, notification.user_id, message)
        else:
            task = loop.create_task(
                self._manager.send_to_user(notification.user_id, message)
            )
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "event_type": notification.event_type,
        "title": notification.title,
        "message": notification.message,
        "payload": notification.payload or {},
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "read_at": notification.read_at.isoformat() if notification.read_at else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
