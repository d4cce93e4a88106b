"""Endpoints serving the role-scoped shipment feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from freightflow.application.use_cases import (
    get_shipment_for_user,
    list_recent_shipments,
    list_recent_shipments_cursor,
)
from freightflow.config import Settings, get_settings
from freightflow.domain.entities import User
from freightflow.infrastructure.database import get_db
from freightflow.interfaces.api.dependencies import (
    get_current_active_user,
    get_role_scoped_user,
)
from freightflow.interfaces.api.schemas import (
    ShipmentCursorPageRead,
    ShipmentPageRead,
    ShipmentRead,
)

router = APIRouter(prefix="/shipments", tags=["shipments"])


@router.get("/recent", response_model=ShipmentPageRead)
def read_recent_shipments(
    page: int = Query(1, description="1-based page number"),
    page_size: int | None = Query(None, description="Number of shipments per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_role_scoped_user),
    settings: Settings = Depends(get_settings),
) -> ShipmentPageRead:
    """Return one page of the shipments visible to the caller."""

    result = list_recent_shipments(
        db, user=current_user, page=page, page_size=page_size, settings=settings
    )
    return ShipmentPageRead.model_validate(result)


@router.get("/recent/cursor", response_model=ShipmentCursorPageRead)
def read_recent_shipments_cursor(
    cursor: str | None = Query(None),
    limit: int | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_role_scoped_user),
    settings: Settings = Depends(get_settings),
) -> ShipmentCursorPageRead:
    result = list_recent_shipments_cursor(
        db, user=current_user, cursor=cursor, limit=limit, settings=settings
    )
    return ShipmentCursorPageRead.model_validate(result)


@router.get("/{shipment_id}", response_model=ShipmentRead)
def read_shipment(
    shipment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ShipmentRead:
    """Return a shipment the caller may see; others are reported as missing."""

    shipment = get_shipment_for_user(db, user=current_user, shipment_id=shipment_id)
    return ShipmentRead.model_validate(shipment)


__all__ = ["router"]
