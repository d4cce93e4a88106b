"""Persistence helpers for activity feed items."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from freightflow.domain.entities import ActivityActor, ActivityEntity, ActivityItem
from freightflow.infrastructure.models import ActivityModel
from freightflow.utils import ensure_naive_utc, ensure_utc, now_utc_naive


class ActivityRepository:
    """Provide keyset-paginated access to a user's :class:`ActivityItem` feed."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_after(
        self,
        user_id: int,
        *,
        after: tuple[datetime, int] | None,
        limit: int,
    ) -> Sequence[ActivityItem]:
        """Return up to ``limit`` items older than ``after``, newest first."""

        query = self.session.query(ActivityModel).filter(ActivityModel.user_id == user_id)
        if after is not None:
            created_at, item_id = after
            query = query.filter(
                or_(
                    ActivityModel.created_at < created_at,
                    and_(
                        ActivityModel.created_at == created_at,
                        ActivityModel.id < item_id,
                    ),
                )
            )
        query = query.order_by(
            ActivityModel.created_at.desc(), ActivityModel.id.desc()
        ).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get_for_user(self, user_id: int, item_id: int) -> ActivityItem | None:
        model = (
            self.session.query(ActivityModel)
            .filter(ActivityModel.id == item_id, ActivityModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user_id: int, item: ActivityItem) -> ActivityItem:
        model = ActivityModel(
            user_id=user_id,
            type=item.type,
            title=item.title,
            description=item.description,
            actor_name=item.actor.name,
            actor_avatar_url=item.actor.avatar_url,
            entity_type=item.entity.type if item.entity else None,
            entity_id=item.entity.id if item.entity else None,
            created_at=ensure_naive_utc(item.created_at) or now_utc_naive(),
            read_at=None if item.is_unread else now_utc_naive(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, user_id: int, item_id: int) -> bool:
        """Mark one item read; return ``False`` when the user does not own it."""

        updated = (
            self.session.query(ActivityModel)
            .filter(
                ActivityModel.id == item_id,
                ActivityModel.user_id == user_id,
                ActivityModel.read_at.is_(None),
            )
            .update({ActivityModel.read_at: now_utc_naive()}, synchronize_session=False)
        )
        self.session.commit()
        if updated:
            return True
        return self.get_for_user(user_id, item_id) is not None

    @staticmethod
    def _to_entity(model: ActivityModel) -> ActivityItem:
        entity = None
        if model.entity_type and model.entity_id:
            entity = ActivityEntity(type=model.entity_type, id=model.entity_id)
        return ActivityItem(
            id=model.id,
            type=model.type,
            title=model.title,
            description=model.description,
            created_at=ensure_utc(model.created_at),
            is_unread=model.read_at is None,
            actor=ActivityActor(name=model.actor_name, avatar_url=model.actor_avatar_url),
            entity=entity,
        )


__all__ = ["ActivityRepository"]
