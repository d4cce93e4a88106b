"""Shared fixtures: a throwaway SQLite database and factories for records."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"freightflow-test-{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["MIN_UPTIME_SECONDS"] = "0"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from freightflow.domain.entities import (  # noqa: E402
    ActivityActor,
    ActivityEntity,
    ActivityItem,
    Shipment,
    ShipmentStatus,
    User,
    UserRole,
)
from freightflow.infrastructure import database  # noqa: E402
from freightflow.infrastructure.repositories import (  # noqa: E402
    ActivityRepository,
    ShipmentRepository,
    UserRepository,
)
from freightflow.infrastructure.security import create_access_token  # noqa: E402
from freightflow.utils import now_utc  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test empty tables."""

    from freightflow.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.engine.dispose()


def pytest_sessionfinish(session, exitstatus) -> None:
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(session):
    counter = {"value": 0}

    def _make_user(
        role: UserRole = UserRole.SHIPPER,
        *,
        name: str | None = None,
        email: str | None = None,
        is_active: bool = True,
        last_seen_at: datetime | None = None,
    ) -> User:
        counter["value"] += 1
        number = counter["value"]
        return UserRepository(session).create(
            User(
                id=None,
                role=role,
                name=name or f"{role.value.title()} {number}",
                email=email if email is not None else f"user{number}@example.com",
                avatar_url=None,
                is_active=is_active,
                last_seen_at=last_seen_at,
                created_at=None,
            )
        )

    return _make_user


@pytest.fixture
def make_shipment(session):
    counter = {"value": 0}

    def _make_shipment(
        shipper: User,
        *,
        carrier: User | None = None,
        status: ShipmentStatus = ShipmentStatus.IN_TRANSIT,
        origin: str = "Chicago",
        destination: str = "Denver",
        amount: float = 100.0,
        rating: float | None = None,
        created_at: datetime | None = None,
        estimated_delivery_at: datetime | None = None,
        delivered_at: datetime | None = None,
    ) -> Shipment:
        counter["value"] += 1
        return ShipmentRepository(session).create(
            Shipment(
                id=None,
                tracking_number=f"FF-{counter['value']:06d}",
                shipper_id=shipper.id,
                carrier_id=carrier.id if carrier else None,
                status=status,
                origin=origin,
                destination=destination,
                amount=amount,
                rating=rating,
                created_at=created_at or now_utc(),
                estimated_delivery_at=estimated_delivery_at,
                delivered_at=delivered_at,
            )
        )

    return _make_shipment


@pytest.fixture
def make_activity(session):
    def _make_activity(
        user: User,
        *,
        title: str = "Shipment updated",
        created_at: datetime | None = None,
        is_unread: bool = True,
    ) -> ActivityItem:
        return ActivityRepository(session).create(
            user.id,
            ActivityItem(
                id=0,
                type="shipment.in_transit",
                title=title,
                created_at=created_at or now_utc(),
                is_unread=is_unread,
                actor=ActivityActor(name="FreightFlow"),
                entity=ActivityEntity(type="shipment", id="1"),
            ),
        )

    return _make_activity


@pytest.fixture
def base_time() -> datetime:
    """A fixed moment a few days ago, so rows stay inside the analytics window."""

    return (now_utc() - timedelta(days=2)).replace(microsecond=0)


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}

    return _auth_headers


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
