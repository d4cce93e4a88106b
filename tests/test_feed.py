"""Tests for the activity and shipment feed use cases."""

from __future__ import annotations

import math
from datetime import timedelta

import pytest

from freightflow.application.cursor import encode_cursor
from freightflow.application.use_cases import (
    get_shipment_for_user,
    list_recent_activity,
    list_recent_shipments,
    list_recent_shipments_cursor,
    mark_activity_read,
)
from freightflow.domain.entities import UserRole
from freightflow.domain.exceptions import NotFoundError, ValidationError


def test_activity_cursor_walk_returns_every_item_exactly_once(
    session, make_user, make_activity, base_time
) -> None:
    user = make_user(UserRole.SHIPPER)
    other = make_user(UserRole.SHIPPER)
    created = []
    for index in range(7):
        # Pairs share a timestamp so the id tie-break is exercised.
        created.append(make_activity(user, created_at=base_time + timedelta(minutes=index // 2)))
    make_activity(other)

    seen: list[int] = []
    cursor = None
    while True:
        page = list_recent_activity(session, user=user, cursor=cursor, limit=3)
        assert len(page.items) <= 3
        seen.extend(item.id for item in page.items)
        if page.next_cursor is None:
            break
        cursor = page.next_cursor

    expected = [
        item.id
        for item in sorted(created, key=lambda item: (item.created_at, item.id), reverse=True)
    ]
    assert seen == expected


def test_same_cursor_twice_returns_identical_page(session, make_user, make_activity, base_time) -> None:
    user = make_user(UserRole.CARRIER)
    for index in range(5):
        make_activity(user, created_at=base_time + timedelta(minutes=index))

    first = list_recent_activity(session, user=user, limit=2)
    again = list_recent_activity(session, user=user, cursor=first.next_cursor, limit=2)
    repeat = list_recent_activity(session, user=user, cursor=first.next_cursor, limit=2)

    assert again == repeat
    assert [item.id for item in again.items] != [item.id for item in first.items]


def test_last_page_has_no_next_cursor(session, make_user, make_activity) -> None:
    user = make_user(UserRole.SHIPPER)
    make_activity(user)
    make_activity(user)

    page = list_recent_activity(session, user=user, limit=2)

    assert len(page.items) == 2
    assert page.next_cursor is None


def test_activity_limit_out_of_range_is_rejected(session, make_user) -> None:
    user = make_user(UserRole.SHIPPER)

    with pytest.raises(ValidationError):
        list_recent_activity(session, user=user, limit=0)
    with pytest.raises(ValidationError):
        list_recent_activity(session, user=user, limit=101)


def test_malformed_cursor_is_rejected(session, make_user) -> None:
    user = make_user(UserRole.SHIPPER)

    with pytest.raises(ValidationError):
        list_recent_activity(session, user=user, cursor="%%%")


def test_cursor_with_oversized_id_is_rejected(session, make_user, base_time) -> None:
    user = make_user(UserRole.SHIPPER)

    with pytest.raises(ValidationError):
        list_recent_activity(session, user=user, cursor=encode_cursor(base_time, 10**20))


def test_mark_activity_read(session, make_user, make_activity) -> None:
    user = make_user(UserRole.SHIPPER)
    intruder = make_user(UserRole.SHIPPER)
    item = make_activity(user)

    with pytest.raises(NotFoundError):
        mark_activity_read(session, user=intruder, item_id=item.id)

    updated = mark_activity_read(session, user=user, item_id=item.id)
    assert updated.is_unread is False


def test_offset_pages_are_scoped_to_the_shipper(session, make_user, make_shipment, base_time) -> None:
    shipper = make_user(UserRole.SHIPPER)
    other = make_user(UserRole.SHIPPER)
    for index in range(5):
        make_shipment(shipper, created_at=base_time + timedelta(hours=index))
    make_shipment(other)

    page = list_recent_shipments(session, user=shipper, page=1, page_size=2)

    assert page.total == 5
    assert page.total_pages == math.ceil(5 / 2)
    assert len(page.items) == 2
    assert page.items[0].created_at > page.items[1].created_at


def test_offset_page_past_the_end_is_empty(session, make_user, make_shipment) -> None:
    shipper = make_user(UserRole.SHIPPER)
    make_shipment(shipper)

    page = list_recent_shipments(session, user=shipper, page=5, page_size=10)

    assert page.items == []
    assert page.total == 1
    assert page.total_pages == 1


def test_offset_page_far_past_the_end_is_empty(session, make_user, make_shipment) -> None:
    shipper = make_user(UserRole.SHIPPER)
    make_shipment(shipper)

    page = list_recent_shipments(session, user=shipper, page=10**17, page_size=100)

    assert page.items == []
    assert page.total == 1
    assert page.page == 10**17


def test_offset_page_validation_collects_violations(session, make_user) -> None:
    shipper = make_user(UserRole.SHIPPER)

    with pytest.raises(ValidationError) as exc_info:
        list_recent_shipments(session, user=shipper, page=0, page_size=500)

    assert exc_info.value.violations == [
        "page must be greater than or equal to 1",
        "page_size must be between 1 and 100",
    ]


def test_carrier_sees_assigned_shipments_with_carrier_name(
    session, make_user, make_shipment
) -> None:
    shipper = make_user(UserRole.SHIPPER)
    carrier = make_user(UserRole.CARRIER, name="Rapid Haul")
    assigned = make_shipment(shipper, carrier=carrier)
    make_shipment(shipper)

    page = list_recent_shipments(session, user=carrier)

    assert [item.id for item in page.items] == [assigned.id]
    assert page.items[0].carrier_name == "Rapid Haul"


def test_dispatcher_sees_every_shipment(session, make_user, make_shipment) -> None:
    dispatcher = make_user(UserRole.DISPATCHER)
    make_shipment(make_user(UserRole.SHIPPER))
    make_shipment(make_user(UserRole.SHIPPER))

    assert list_recent_shipments(session, user=dispatcher).total == 2


def test_shipment_cursor_walk(session, make_user, make_shipment, base_time) -> None:
    dispatcher = make_user(UserRole.DISPATCHER)
    shipper = make_user(UserRole.SHIPPER)
    created = [make_shipment(shipper, created_at=base_time) for _ in range(4)]

    seen: list[int] = []
    cursor = None
    while True:
        page = list_recent_shipments_cursor(session, user=dispatcher, cursor=cursor, limit=3)
        seen.extend(item.id for item in page.items)
        cursor = page.next_cursor
        if cursor is None:
            break

    assert seen == sorted((shipment.id for shipment in created), reverse=True)


def test_shipment_lookup_is_role_scoped(session, make_user, make_shipment) -> None:
    owner = make_user(UserRole.SHIPPER)
    stranger = make_user(UserRole.SHIPPER)
    shipment = make_shipment(owner)

    assert get_shipment_for_user(session, user=owner, shipment_id=shipment.id).id == shipment.id
    with pytest.raises(NotFoundError):
        get_shipment_for_user(session, user=stranger, shipment_id=shipment.id)
