"""Channel adapters delivering a single notification over one transport.

Every adapter exposes a ``channel`` attribute and an async
``send(target, message)`` returning a :class:`ChannelOutcome`. Adapters make
exactly one attempt; failures are reported, never retried.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

import anyio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freightflow.domain.entities import (
    ChannelMessage,
    ChannelOutcome,
    DeliveryFailure,
    Notification,
    NotificationChannel,
)
from freightflow.infrastructure import email as email_transport
from freightflow.infrastructure.repositories import NotificationRepository, UserRepository

from .publisher import NotificationPublisher

logger = logging.getLogger(__name__)


class ChannelAdapter(Protocol):
    channel: NotificationChannel

    async def send(self, target: object, message: ChannelMessage) -> ChannelOutcome:
        ...


class EmailChannelAdapter:
    """Send notifications as HTML email through SendGrid."""

    channel = NotificationChannel.EMAIL

    async def send(self, target: object, message: ChannelMessage) -> ChannelOutcome:
        recipient = str(target or "").strip()
        if "@" not in recipient:
            return ChannelOutcome.failed(
                self.channel,
                DeliveryFailure.INVALID_RECIPIENT,
                f"'{recipient}' is not a valid email address",
            )

        try:
            await anyio.to_thread.run_sync(
                email_transport.send_email,
                message.subject,
                message.body,
                recipient,
                abandon_on_cancel=True,
            )
        except email_transport.EmailNotConfiguredError as exc:
            return ChannelOutcome.failed(
                self.channel, DeliveryFailure.TRANSPORT_NOT_CONFIGURED, str(exc)
            )
        except email_transport.EmailDeliveryError as exc:
            failure = (
                DeliveryFailure.INVALID_RECIPIENT
                if exc.is_client_error
                else DeliveryFailure.TRANSPORT_UNAVAILABLE
            )
            logger.warning("Email to %s failed (%s): %s", recipient, failure.value, exc)
            return ChannelOutcome.failed(self.channel, failure, str(exc))

        return ChannelOutcome.delivered(self.channel)


class InAppChannelAdapter:
    """Persist notifications for a user and push them to open websockets.

    A send cancelled by the dispatcher timeout leaves its worker thread running.
    That thread skips the insert when it has not started yet; an insert already
    in flight still commits, but it is never pushed.
    """

    channel = NotificationChannel.IN_APP

    def __init__(
        self,
        session_factory: Callable[[], Session],
        publisher: NotificationPublisher | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._publisher = publisher

    def _persist(
        self, user_id: int, message: ChannelMessage, abandoned: threading.Event
    ) -> Notification | None:
        session = self._session_factory()
        try:
            if UserRepository(session).get(user_id) is None:
                return None
            if abandoned.is_set():
                logger.info("Skipping in-app notification for user %s after timeout", user_id)
                return None
            notification = Notification(
                id=None,
                user_id=user_id,
                event_type=message.event_type,
                title=message.subject,
                message=message.body,
                payload=dict(message.metadata),
            )
            return NotificationRepository(session).create(notification)
        finally:
            session.close()

    async def send(self, target: object, message: ChannelMessage) -> ChannelOutcome:
        if not isinstance(target, int) or isinstance(target, bool):
            return ChannelOutcome.failed(
                self.channel,
                DeliveryFailure.INVALID_RECIPIENT,
                f"'{target}' is not a user identifier",
            )

        abandoned = threading.Event()
        try:
            saved = await anyio.to_thread.run_sync(
                self._persist, target, message, abandoned, abandon_on_cancel=True
            )
        except anyio.get_cancelled_exc_class():
            abandoned.set()
            raise
        except SQLAlchemyError as exc:
            logger.error("Unable to store in-app notification for user %s: %s", target, exc)
            return ChannelOutcome.failed(
                self.channel, DeliveryFailure.TRANSPORT_UNAVAILABLE, str(exc)
            )

        if saved is None:
            return ChannelOutcome.failed(
                self.channel,
                DeliveryFailure.INVALID_RECIPIENT,
                f"User {target} does not exist",
            )

        if self._publisher is not None:
            self._publisher.dispatch(saved)
        return ChannelOutcome.delivered(self.channel)


__all__ = ["ChannelAdapter", "EmailChannelAdapter", "InAppChannelAdapter"]
