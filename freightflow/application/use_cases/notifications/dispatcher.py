"""Fan a notification out to its channels concurrently."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import anyio

from freightflow.domain.entities import (
    ChannelMessage,
    ChannelOutcome,
    DeliveryFailure,
    DispatchReport,
    NotificationChannel,
    NotificationPayload,
)
from freightflow.infrastructure.notifications import ChannelAdapter

from ..validators import validate_notification_payload

logger = logging.getLogger(__name__)


def _channel_request(
    channel: NotificationChannel, payload: NotificationPayload
) -> tuple[object, ChannelMessage]:
    """Return the adapter target and message for ``channel``."""

    if channel is NotificationChannel.EMAIL:
        return payload.user_email, ChannelMessage(
            subject=payload.subject or "",
            body=payload.email_body or "",
            event_type=payload.event_type,
            metadata=payload.metadata,
        )
    return payload.user_id, ChannelMessage(
        subject=payload.subject or payload.event_type,
        body=payload.in_app_message or "",
        event_type=payload.event_type,
        metadata=payload.metadata,
    )


class NotificationDispatcher:
    """Deliver one :class:`NotificationPayload` over every requested channel.

    The payload is validated before any adapter is called. Channels are sent
    concurrently; each gets exactly one attempt bounded by ``timeout`` seconds,
    and a failing channel never prevents the others from being attempted.
    """

    def __init__(
        self, adapters: Iterable[ChannelAdapter], *, timeout: float = 10.0
    ) -> None:
        self._adapters = {adapter.channel: adapter for adapter in adapters}
        self._timeout = timeout

    async def dispatch(self, payload: NotificationPayload) -> DispatchReport:
        validate_notification_payload(payload).raise_if_invalid()

        channels = [NotificationChannel(channel) for channel in payload.channels]
        outcomes: list[ChannelOutcome | None] = [None] * len(channels)

        async def _run(index: int, channel: NotificationChannel) -> None:
            outcomes[index] = await self._send(channel, payload)

        async with anyio.create_task_group() as task_group:
            for index, channel in enumerate(channels):
                task_group.start_soon(_run, index, channel)

        report = DispatchReport(outcomes=tuple(outcomes))
        logger.info(
            "Dispatched '%s' notification for user %s: %s",
            payload.event_type,
            payload.user_id,
            report.status,
        )
        return report

    async def _send(
        self, channel: NotificationChannel, payload: NotificationPayload
    ) -> ChannelOutcome:
        adapter = self._adapters.get(channel)
        if adapter is None:
            return ChannelOutcome.failed(
                channel,
                DeliveryFailure.TRANSPORT_NOT_CONFIGURED,
                f"No adapter registered for channel '{channel.value}'",
            )

        target, message = _channel_request(channel, payload)
        try:
            with anyio.fail_after(self._timeout):
                outcome = await adapter.send(target, message)
        except TimeoutError:
            logger.warning(
                "Channel %s timed out after %.1fs", channel.value, self._timeout
            )
            return ChannelOutcome.failed(
                channel,
                DeliveryFailure.TIMEOUT,
                f"No response within {self._timeout:g} seconds",
            )
        except Exception as exc:
            logger.exception("Channel %s failed unexpectedly", channel.value)
            return ChannelOutcome.failed(channel, DeliveryFailure.UNEXPECTED_ERROR, str(exc))

        if not outcome.is_delivered:
            logger.warning(
                "Channel %s reported %s: %s",
                channel.value,
                outcome.failure.value if outcome.failure else "failure",
                outcome.reason,
            )
        return outcome


__all__ = ["NotificationDispatcher"]
