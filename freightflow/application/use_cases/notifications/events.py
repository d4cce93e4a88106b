"""Turn shipment status changes into activity items and notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import anyio
from sqlalchemy.orm import Session

from freightflow.domain.entities import (
    ActivityActor,
    ActivityEntity,
    ActivityItem,
    DispatchReport,
    NotificationChannel,
    NotificationPayload,
    Shipment,
    ShipmentStatus,
    User,
)
from freightflow.infrastructure.repositories import ActivityRepository, UserRepository
from freightflow.utils import now_utc

from .dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = ActivityActor(name="FreightFlow")


@dataclass(frozen=True)
class StatusTemplate:
    title: str
    message: str


STATUS_TEMPLATES: dict[ShipmentStatus, StatusTemplate] = {
    ShipmentStatus.PICKED_UP: StatusTemplate(
        "Shipment picked up",
        "Shipment {tracking} has been picked up in {origin}.",
    ),
    ShipmentStatus.IN_TRANSIT: StatusTemplate(
        "Shipment in transit",
        "Shipment {tracking} is on its way from {origin} to {destination}.",
    ),
    ShipmentStatus.OUT_FOR_DELIVERY: StatusTemplate(
        "Out for delivery",
        "Shipment {tracking} is out for delivery to {destination}.",
    ),
    ShipmentStatus.DELIVERED: StatusTemplate(
        "Shipment delivered",
        "Shipment {tracking} was delivered in {destination}.",
    ),
    ShipmentStatus.DELAYED: StatusTemplate(
        "Shipment delayed",
        "Shipment {tracking} to {destination} is running late.",
    ),
    ShipmentStatus.EXCEPTION: StatusTemplate(
        "Delivery exception",
        "Shipment {tracking} needs attention: the carrier reported an exception.",
    ),
    ShipmentStatus.CANCELLED: StatusTemplate(
        "Shipment cancelled",
        "Shipment {tracking} from {origin} to {destination} was cancelled.",
    ),
}


def _render(template: StatusTemplate, shipment: Shipment) -> tuple[str, str]:
    message = template.message.format(
        tracking=shipment.tracking_number,
        origin=shipment.origin,
        destination=shipment.destination,
    )
    return template.title, message


def _email_body(title: str, message: str) -> str:
    return f"<h2>{title}</h2><p>{message}</p>"


def _record_activity(
    session_factory: Callable[[], Session],
    shipment: Shipment,
    title: str,
    message: str,
    actor: ActivityActor,
) -> User | None:
    session = session_factory()
    try:
        shipper = UserRepository(session).get(shipment.shipper_id)
        if shipper is None:
            return None
        ActivityRepository(session).create(
            shipper.id,
            ActivityItem(
                id=0,
                type=f"shipment.{shipment.status.value}",
                title=title,
                description=message,
                created_at=now_utc(),
                is_unread=True,
                actor=actor,
                entity=ActivityEntity(type="shipment", id=str(shipment.id)),
            ),
        )
        return shipper
    finally:
        session.close()


async def notify_shipment_status_changed(
    *,
    session_factory: Callable[[], Session],
    dispatcher: NotificationDispatcher,
    shipment: Shipment,
    actor: User | None = None,
) -> DispatchReport | None:
    """Record the new status in the shipper's feed and notify them.

    Returns ``None`` when the status has no notification template or the
    shipper no longer exists.
    """

    template = STATUS_TEMPLATES.get(shipment.status)
    if template is None:
        logger.debug("No notification for shipment status %s", shipment.status.value)
        return None

    title, message = _render(template, shipment)
    activity_actor = (
        ActivityActor(name=actor.name, avatar_url=actor.avatar_url) if actor else SYSTEM_ACTOR
    )
    shipper = await anyio.to_thread.run_sync(
        _record_activity, session_factory, shipment, title, message, activity_actor
    )
    if shipper is None:
        logger.warning(
            "Shipper %s of shipment %s not found; skipping notification",
            shipment.shipper_id,
            shipment.id,
        )
        return None

    channels = [NotificationChannel.IN_APP]
    if shipper.email:
        channels.insert(0, NotificationChannel.EMAIL)

    payload = NotificationPayload(
        user_id=shipper.id,
        user_email=shipper.email,
        subject=title,
        email_body=_email_body(title, message),
        in_app_message=message,
        channels=tuple(channels),
        event_type=f"shipment.{shipment.status.value}",
        metadata={
            "shipment_id": shipment.id,
            "tracking_number": shipment.tracking_number,
            "status": shipment.status.value,
        },
    )
    return await dispatcher.dispatch(payload)


__all__ = ["STATUS_TEMPLATES", "notify_shipment_status_changed"]
