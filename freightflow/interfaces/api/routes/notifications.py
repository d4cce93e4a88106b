"""Endpoints and websocket handler for in-app notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
)
from sqlalchemy.orm import Session

from freightflow.domain.entities import User
from freightflow.infrastructure.database import SessionLocal, get_db
from freightflow.infrastructure.notifications import (
    notification_manager,
    serialize_notification,
)
from freightflow.infrastructure.repositories import NotificationRepository
from freightflow.interfaces.api.dependencies import (
    get_current_active_user,
    resolve_current_user,
)
from freightflow.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, description="Only return unread notifications"),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    repository = NotificationRepository(db)
    if unread_only:
        notifications = repository.list_unread_for_user(current_user.id, limit=limit)
    else:
        notifications = repository.list_for_user(current_user.id, limit=limit)
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_notifications_read(
    request: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkReadResponse:
    updated = NotificationRepository(db).mark_as_read(
        request.unique_ids(), user_id=current_user.id
    )
    return NotificationMarkReadResponse(updated=updated)


def _authenticate_websocket(token: str) -> tuple[User, list[dict]] | None:
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            return None
        pending = NotificationRepository(session).list_unread_for_user(user.id)
        return user, [serialize_notification(notification) for notification in pending]
    except HTTPException:
        return None
    finally:
        session.close()


def _acknowledge(user_id: int, ids: list) -> None:
    session = SessionLocal()
    try:
        NotificationRepository(session).mark_as_read(
            [value for value in ids if isinstance(value, int)], user_id=user_id
        )
    finally:
        session.close()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    authenticated = _authenticate_websocket(token)
    if authenticated is None:
        await websocket.close(code=1008)
        return
    user, pending = authenticated

    await notification_manager.connect(user.id, websocket)
    try:
        if pending:
            await websocket.send_json({"type": "init", "data": pending})
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, ids)
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for user %s", user.id)
    finally:
        notification_manager.disconnect(user.id, websocket)


__all__ = ["router"]
