"""Domain entities for notifications and their multi-channel delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationChannel(str, Enum):
    """Transports a notification can be delivered through."""

    EMAIL = "email"
    IN_APP = "in_app"


class DeliveryStatus(str, Enum):
    DELIVERED = "delivered"
    FAILED = "failed"


class DeliveryFailure(str, Enum):
    """Typed reasons a channel send can fail."""

    INVALID_RECIPIENT = "invalid_recipient"
    TRANSPORT_UNAVAILABLE = "transport_unavailable"
    TRANSPORT_NOT_CONFIGURED = "transport_not_configured"
    TIMEOUT = "timeout"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass
class Notification:
    """In-app message persisted for a specific user."""

    id: int | None
    user_id: int
    event_type: str
    title: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    read_at: datetime | None = None


@dataclass(frozen=True)
class NotificationPayload:
    """One notification to fan out over the requested channels."""

    user_id: int | None
    user_email: str | None
    subject: str | None
    email_body: str | None
    in_app_message: str | None
    channels: tuple[NotificationChannel, ...]
    event_type: str = "generic"
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ChannelMessage:
    """Content handed to a single channel adapter."""

    subject: str
    body: str
    event_type: str = "generic"
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ChannelOutcome:
    """Result of one channel send."""

    channel: NotificationChannel
    status: DeliveryStatus
    failure: DeliveryFailure | None = None
    reason: str | None = None

    @classmethod
    def delivered(cls, channel: NotificationChannel) -> "ChannelOutcome":
        return cls(channel=channel, status=DeliveryStatus.DELIVERED)

    @classmethod
    def failed(
        cls, channel: NotificationChannel, failure: DeliveryFailure, reason: str
    ) -> "ChannelOutcome":
        return cls(
            channel=channel,
            status=DeliveryStatus.FAILED,
            failure=failure,
            reason=reason,
        )

    @property
    def is_delivered(self) -> bool:
        return self.status is DeliveryStatus.DELIVERED


@dataclass(frozen=True)
class DispatchReport:
    """Per-channel outcomes of one dispatch, in the order channels were requested."""

    outcomes: tuple[ChannelOutcome, ...]

    @property
    def status(self) -> str:
        """``delivered`` when every channel succeeded, ``failed`` when none did,
        ``partial`` otherwise."""

        delivered = sum(1 for outcome in self.outcomes if outcome.is_delivered)
        if delivered == len(self.outcomes):
            return "delivered"
        if delivered == 0:
            return "failed"
        return "partial"

    def outcome_for(self, channel: NotificationChannel) -> ChannelOutcome | None:
        for outcome in self.outcomes:
            if outcome.channel == channel:
                return outcome
        return None


__all__ = [
    "ChannelMessage",
    "ChannelOutcome",
    "DeliveryFailure",
    "DeliveryStatus",
    "DispatchReport",
    "Notification",
    "NotificationChannel",
    "NotificationPayload",
]
