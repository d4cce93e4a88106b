"""SQLAlchemy model for shipments."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from freightflow.infrastructure.database import Base
from freightflow.utils import now_utc_naive


class ShipmentModel(Base):
    """Database representation of a shipment moving between two locations."""

    __tablename__ = "shipment"
    __table_args__ = (
        Index("ix_shipment_shipper_recent", "shipper_id", "created_at", "id"),
        Index("ix_shipment_carrier_recent", "carrier_id", "created_at", "id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tracking_number = Column(String(40), nullable=False, unique=True)
    shipper_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    carrier_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    status = Column(String(30), nullable=False, default="pending", index=True)
    origin = Column(String(120), nullable=False)
    destination = Column(String(120), nullable=False)
    amount = Column(Float, nullable=False, default=0.0)
    rating = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive, index=True)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive)
    estimated_delivery_at = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)

    carrier = relationship("UserModel", foreign_keys=[carrier_id], lazy="joined")


__all__ = ["ShipmentModel"]
