"""Use cases serving the role-scoped activity and shipment feeds."""

from __future__ import annotations

import math

from sqlalchemy.orm import Session

from freightflow.application.cursor import decode_cursor, encode_cursor
from freightflow.config import Settings, get_settings
from freightflow.domain.entities import (
    ActivityItem,
    CursorPage,
    Page,
    RecentShipment,
    Shipment,
    User,
)
from freightflow.domain.exceptions import NotFoundError
from freightflow.infrastructure.repositories import ActivityRepository, ShipmentRepository
from freightflow.utils import ensure_naive_utc

from .datastore import datastore_unavailable_as_upstream_error
from .validators import validate_cursor_request, validate_page_request


def _decode_position(cursor: str | None):
    if not cursor:
        return None
    created_at, record_id = decode_cursor(cursor)
    return ensure_naive_utc(created_at), record_id


def _to_cursor_page(records: list, limit: int) -> CursorPage:
    """Trim the ``limit + 1`` lookahead and derive ``next_cursor`` from it."""

    has_more = len(records) > limit
    items = records[:limit]
    next_cursor = None
    if has_more and items:
        last = items[-1]
        next_cursor = encode_cursor(last.created_at, last.id)
    return CursorPage(items=items, next_cursor=next_cursor)


def list_recent_activity(
    session: Session,
    *,
    user: User,
    cursor: str | None = None,
    limit: int | None = None,
    settings: Settings | None = None,
) -> CursorPage[ActivityItem]:
    """Return the caller's activity items newest first, one cursor page at a time."""

    settings = settings or get_settings()
    limit = settings.feed_default_page_size if limit is None else limit
    validate_cursor_request(limit, max_page_size=settings.feed_max_page_size).raise_if_invalid()
    after = _decode_position(cursor)

    with datastore_unavailable_as_upstream_error("list_recent_activity"):
        records = ActivityRepository(session).list_after(
            user.id, after=after, limit=limit + 1
        )
    return _to_cursor_page(list(records), limit)


def mark_activity_read(session: Session, *, user: User, item_id: int) -> ActivityItem:
    """Mark one of the caller's activity items as read and return it."""

    repository = ActivityRepository(session)
    with datastore_unavailable_as_upstream_error("mark_activity_read"):
        if not repository.mark_as_read(user.id, item_id):
            raise NotFoundError("Activity", item_id)
        item = repository.get_for_user(user.id, item_id)
    if item is None:
        raise NotFoundError("Activity", item_id)
    return item


def list_recent_shipments(
    session: Session,
    *,
    user: User,
    page: int = 1,
    page_size: int | None = None,
    settings: Settings | None = None,
) -> Page[RecentShipment]:
    """Return one offset page of the shipments visible to ``user``."""

    settings = settings or get_settings()
    page_size = settings.feed_default_page_size if page_size is None else page_size
    validate_page_request(
        page, page_size, max_page_size=settings.feed_max_page_size
    ).raise_if_invalid()

    repository = ShipmentRepository(session)
    with datastore_unavailable_as_upstream_error("list_recent_shipments"):
        total = repository.count_for(user)
        offset = (page - 1) * page_size
        items = (
            list(repository.list_recent(user, skip=offset, limit=page_size))
            if offset < total
            else []
        )
    return Page(
        items=items,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size),
    )


def list_recent_shipments_cursor(
    session: Session,
    *,
    user: User,
    cursor: str | None = None,
    limit: int | None = None,
    settings: Settings | None = None,
) -> CursorPage[RecentShipment]:
    """Cursor variant of :func:`list_recent_shipments`."""

    settings = settings or get_settings()
    limit = settings.feed_default_page_size if limit is None else limit
    validate_cursor_request(limit, max_page_size=settings.feed_max_page_size).raise_if_invalid()
    after = _decode_position(cursor)

    with datastore_unavailable_as_upstream_error("list_recent_shipments_cursor"):
        records = ShipmentRepository(session).list_recent_after(
            user, after=after, limit=limit + 1
        )
    return _to_cursor_page(list(records), limit)


def get_shipment_for_user(session: Session, *, user: User, shipment_id: int) -> Shipment:
    """Return the shipment when ``user`` may see it, else raise :class:`NotFoundError`."""

    with datastore_unavailable_as_upstream_error("get_shipment_for_user"):
        shipment = ShipmentRepository(session).get_for(user, shipment_id)
    if shipment is None:
        raise NotFoundError("Shipment", shipment_id)
    return shipment


__all__ = [
    "get_shipment_for_user",
    "list_recent_activity",
    "list_recent_shipments",
    "list_recent_shipments_cursor",
    "mark_activity_read",
]
