"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from freightflow.infrastructure.database import Base
from freightflow.utils import now_utc_naive


class NotificationModel(Base):
    """Database representation for in-app user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    event_type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
