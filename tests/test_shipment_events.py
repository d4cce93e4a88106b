"""Tests for shipment status notifications."""

from __future__ import annotations

import pytest

from freightflow.application.use_cases import (
    NotificationDispatcher,
    list_recent_activity,
    notify_shipment_status_changed,
)
from freightflow.domain.entities import (
    ChannelOutcome,
    NotificationChannel,
    ShipmentStatus,
    UserRole,
)
from freightflow.infrastructure import database

pytestmark = pytest.mark.anyio


class RecordingAdapter:
    def __init__(self, channel: NotificationChannel) -> None:
        self.channel = channel
        self.calls: list = []

    async def send(self, target, message):
        self.calls.append((target, message))
        return ChannelOutcome.delivered(self.channel)


async def test_delivered_status_notifies_shipper(session, make_user, make_shipment) -> None:
    shipper = make_user(UserRole.SHIPPER, email="shipper@example.com")
    carrier = make_user(UserRole.CARRIER, name="Rapid Haul")
    shipment = make_shipment(shipper, carrier=carrier, status=ShipmentStatus.DELIVERED)
    email = RecordingAdapter(NotificationChannel.EMAIL)
    in_app = RecordingAdapter(NotificationChannel.IN_APP)

    report = await notify_shipment_status_changed(
        session_factory=database.SessionLocal,
        dispatcher=NotificationDispatcher([email, in_app]),
        shipment=shipment,
        actor=carrier,
    )

    assert report is not None and report.status == "delivered"
    ((email_target, email_message),) = email.calls
    assert email_target == "shipper@example.com"
    assert email_message.subject == "Shipment delivered"
    assert shipment.tracking_number in email_message.body
    ((in_app_target, in_app_message),) = in_app.calls
    assert in_app_target == shipper.id
    assert in_app_message.metadata["status"] == "delivered"

    feed = list_recent_activity(session, user=shipper)
    (item,) = feed.items
    assert item.type == "shipment.delivered"
    assert item.actor.name == "Rapid Haul"
    assert item.entity is not None and item.entity.id == str(shipment.id)
    assert item.is_unread


async def test_status_without_template_sends_nothing(make_user, make_shipment) -> None:
    shipper = make_user(UserRole.SHIPPER)
    shipment = make_shipment(shipper, status=ShipmentStatus.PENDING)
    in_app = RecordingAdapter(NotificationChannel.IN_APP)

    report = await notify_shipment_status_changed(
        session_factory=database.SessionLocal,
        dispatcher=NotificationDispatcher([in_app]),
        shipment=shipment,
    )

    assert report is None
    assert in_app.calls == []
