"""Persistence layer for shipment records and their dashboard projection."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, or_, true
from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import ColumnElement

from freightflow.domain.entities import (
    RecentShipment,
    Shipment,
    ShipmentStatus,
    User,
    UserRole,
)
from freightflow.infrastructure.models import ShipmentModel
from freightflow.utils import ensure_naive_utc, ensure_utc, now_utc_naive


def shipment_scope_filter(user: User) -> ColumnElement[bool]:
    """Return the ownership predicate limiting shipments to what ``user`` may see.

    Shippers see shipments they booked, carriers see shipments assigned to
    them and dispatchers operate the whole fleet.
    """

    if user.role == UserRole.SHIPPER:
        return ShipmentModel.shipper_id == user.id
    if user.role == UserRole.CARRIER:
        return ShipmentModel.carrier_id == user.id
    return true()


class ShipmentRepository:
    """Provide role-scoped read operations for :class:`Shipment` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _scoped(self, user: User) -> Query:
        return self.session.query(ShipmentModel).filter(shipment_scope_filter(user))

    def count_for(self, user: User) -> int:
        return int(self._scoped(user).count())

    def list_recent(
        self, user: User, *, skip: int = 0, limit: int = 20
    ) -> Sequence[RecentShipment]:
        query = self._scoped(user).order_by(
            ShipmentModel.created_at.desc(), ShipmentModel.id.desc()
        )
        if skip:
            query = query.offset(skip)
        query = query.limit(limit)
        return [self._to_recent(model) for model in query.all()]

    def list_recent_after(
        self,
        user: User,
        *,
        after: tuple[datetime, int] | None,
        limit: int,
    ) -> Sequence[RecentShipment]:
        """Return up to ``limit`` shipments strictly older than ``after``."""

        query = self._scoped(user)
        if after is not None:
            created_at, shipment_id = after
            query = query.filter(
                or_(
                    ShipmentModel.created_at < created_at,
                    and_(
                        ShipmentModel.created_at == created_at,
                        ShipmentModel.id < shipment_id,
                    ),
                )
            )
        query = query.order_by(
            ShipmentModel.created_at.desc(), ShipmentModel.id.desc()
        ).limit(limit)
        return [self._to_recent(model) for model in query.all()]

    def list_created_since(
        self, user: User, *, since: datetime, limit: int
    ) -> Sequence[Shipment]:
        """Return at most ``limit`` scoped shipments created at or after ``since``."""

        query = (
            self._scoped(user)
            .filter(ShipmentModel.created_at >= ensure_naive_utc(since))
            .order_by(ShipmentModel.created_at.desc(), ShipmentModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def get_for(self, user: User, shipment_id: int) -> Shipment | None:
        model = self._scoped(user).filter(ShipmentModel.id == shipment_id).first()
        return self._to_entity(model) if model else None

    def create(self, shipment: Shipment) -> Shipment:
        model = ShipmentModel(
            tracking_number=shipment.tracking_number,
            shipper_id=shipment.shipper_id,
            carrier_id=shipment.carrier_id,
            status=shipment.status.value,
            origin=shipment.origin,
            destination=shipment.destination,
            amount=shipment.amount,
            rating=shipment.rating,
            created_at=ensure_naive_utc(shipment.created_at) or now_utc_naive(),
            estimated_delivery_at=ensure_naive_utc(shipment.estimated_delivery_at),
            delivered_at=ensure_naive_utc(shipment.delivered_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ShipmentModel) -> Shipment:
        return Shipment(
            id=model.id,
            tracking_number=model.tracking_number,
            shipper_id=model.shipper_id,
            carrier_id=model.carrier_id,
            status=ShipmentStatus(model.status),
            origin=model.origin,
            destination=model.destination,
            amount=float(model.amount or 0.0),
            rating=model.rating,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            estimated_delivery_at=ensure_utc(model.estimated_delivery_at),
            delivered_at=ensure_utc(model.delivered_at),
        )

    @staticmethod
    def _to_recent(model: ShipmentModel) -> RecentShipment:
        return RecentShipment(
            id=model.id,
            tracking_number=model.tracking_number,
            status=ShipmentStatus(model.status),
            origin=model.origin,
            destination=model.destination,
            carrier_name=model.carrier.name if model.carrier is not None else None,
            eta=ensure_utc(model.estimated_delivery_at),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["ShipmentRepository", "shipment_scope_filter"]
