"""Pydantic schemas for activity feed endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ActivityActorRead(BaseModel):
    name: str
    avatar_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ActivityEntityRead(BaseModel):
    type: str
    id: str

    model_config = ConfigDict(from_attributes=True)


class ActivityItemRead(BaseModel):
    id: int = Field(..., description="Unique identifier of the activity item")
    type: str = Field(..., description="Kind of event, e.g. shipment.delivered")
    title: str
    description: str | None = None
    created_at: datetime = Field(..., description="Moment the event happened")
    is_unread: bool
    actor: ActivityActorRead
    entity: ActivityEntityRead | None = None

    model_config = ConfigDict(from_attributes=True)


class ActivityPageRead(BaseModel):
    items: list[ActivityItemRead]
    next_cursor: str | None = Field(
        default=None, description="Pass as ``cursor`` to fetch the next page"
    )

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ActivityActorRead",
    "ActivityEntityRead",
    "ActivityItemRead",
    "ActivityPageRead",
]
