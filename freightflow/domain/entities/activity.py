"""Domain entity describing an item of recent activity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ActivityActor:
    """Who performed the action shown in the feed."""

    name: str
    avatar_url: str | None = None


@dataclass(frozen=True)
class ActivityEntity:
    """Reference to the domain object an activity item talks about."""

    type: str
    id: str


@dataclass(frozen=True)
class ActivityItem:
    """Represents a high level event visible in the activity feed."""

    id: int
    type: str
    title: str
    created_at: datetime
    is_unread: bool
    actor: ActivityActor
    description: str | None = None
    entity: ActivityEntity | None = None


__all__ = ["ActivityActor", "ActivityEntity", "ActivityItem"]
