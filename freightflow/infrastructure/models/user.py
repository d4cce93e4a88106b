"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import expression

from freightflow.infrastructure.database import Base
from freightflow.utils import now_utc_naive


class UserModel(Base):
    """Database representation of a shipper, carrier or dispatcher account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(String(20), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    avatar_url = Column(String(255), nullable=True)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    last_seen_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)


__all__ = ["UserModel"]
