"""Endpoints serving the caller's activity feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from freightflow.application.use_cases import list_recent_activity, mark_activity_read
from freightflow.config import Settings, get_settings
from freightflow.domain.entities import User
from freightflow.infrastructure.database import get_db
from freightflow.interfaces.api.dependencies import (
    get_current_active_user,
    get_role_scoped_user,
)
from freightflow.interfaces.api.schemas import ActivityItemRead, ActivityPageRead

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=ActivityPageRead)
def read_activity(
    cursor: str | None = Query(None, description="Token returned as next_cursor"),
    limit: int | None = Query(None, description="Maximum number of items to return"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_role_scoped_user),
    settings: Settings = Depends(get_settings),
) -> ActivityPageRead:
    """Return the caller's most recent activity, newest first."""

    page = list_recent_activity(
        db, user=current_user, cursor=cursor, limit=limit, settings=settings
    )
    return ActivityPageRead.model_validate(page)


@router.post("/{item_id}/read", response_model=ActivityItemRead)
def read_activity_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActivityItemRead:
    item = mark_activity_read(db, user=current_user, item_id=item_id)
    return ActivityItemRead.model_validate(item)


__all__ = ["router"]
