"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from freightflow.domain.entities import User, UserRole
from freightflow.infrastructure.models import UserModel
from freightflow.utils import ensure_naive_utc, ensure_utc, now_utc_naive


class UserRepository:
    """Provide lookup and creation operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            role=user.role.value,
            name=user.name,
            email=user.email,
            avatar_url=user.avatar_url,
            is_active=user.is_active,
            last_seen_at=ensure_naive_utc(user.last_seen_at),
            created_at=ensure_naive_utc(user.created_at) or now_utc_naive(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def touch_last_seen(self, user_id: int) -> None:
        """Record that ``user_id`` made an authenticated request just now."""

        self.session.query(UserModel).filter(UserModel.id == user_id).update(
            {UserModel.last_seen_at: now_utc_naive()},
            synchronize_session=False,
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRole(model.role),
            name=model.name,
            email=model.email,
            avatar_url=model.avatar_url,
            is_active=bool(model.is_active),
            last_seen_at=ensure_utc(model.last_seen_at),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["UserRepository"]
