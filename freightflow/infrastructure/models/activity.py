"""SQLAlchemy model for activity feed items."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text

from freightflow.infrastructure.database import Base
from freightflow.utils import now_utc_naive


class ActivityModel(Base):
    """Immutable event shown in one user's activity feed."""

    __tablename__ = "activity"
    __table_args__ = (Index("ix_activity_user_recent", "user_id", "created_at", "id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    actor_name = Column(String(120), nullable=False)
    actor_avatar_url = Column(String(255), nullable=True)
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    read_at = Column(DateTime, nullable=True)


__all__ = ["ActivityModel"]
