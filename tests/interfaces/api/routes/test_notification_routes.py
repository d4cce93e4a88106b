"""Integration tests for the in-app notification endpoints."""

from __future__ import annotations

import pytest
from starlette.websockets import WebSocketDisconnect

from freightflow.domain.entities import Notification, UserRole
from freightflow.infrastructure import database
from freightflow.infrastructure.repositories import NotificationRepository
from freightflow.infrastructure.security import create_access_token


def _store_notification(user_id: int, title: str) -> Notification:
    session = database.SessionLocal()
    try:
        return NotificationRepository(session).create(
            Notification(
                id=None,
                user_id=user_id,
                event_type="shipment.delayed",
                title=title,
                message=f"{title} message",
            )
        )
    finally:
        session.close()


def test_list_and_mark_notifications_read(client, make_user, auth_headers) -> None:
    user = make_user(UserRole.SHIPPER)
    first = _store_notification(user.id, "First")
    _store_notification(user.id, "Second")
    _store_notification(make_user(UserRole.SHIPPER).id, "Not mine")

    listed = client.get("/notifications", headers=auth_headers(user))
    assert listed.status_code == 200
    assert [item["title"] for item in listed.json()] == ["Second", "First"]

    marked = client.post(
        "/notifications/read", json={"ids": [first.id, first.id]}, headers=auth_headers(user)
    )
    assert marked.json() == {"updated": 1}

    unread = client.get(
        "/notifications", params={"unread_only": True}, headers=auth_headers(user)
    )
    assert [item["title"] for item in unread.json()] == ["Second"]


def test_websocket_sends_pending_notifications_and_answers_ping(client, make_user) -> None:
    user = make_user(UserRole.CARRIER)
    stored = _store_notification(user.id, "Pending")
    token = create_access_token({"sub": user.id})

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert [item["id"] for item in init["data"]] == [stored.id]

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_websocket_without_valid_token_is_closed(client) -> None:
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/notifications/ws?token=bogus") as websocket:
            websocket.receive_json()

    assert exc_info.value.code == 1008
