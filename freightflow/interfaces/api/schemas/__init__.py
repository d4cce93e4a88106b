"""Pydantic schemas exposed by the HTTP interface."""

from .activity import (
    ActivityActorRead,
    ActivityEntityRead,
    ActivityItemRead,
    ActivityPageRead,
)
from .analytics import (
    AmountPointRead,
    DashboardAnalyticsRead,
    DashboardChartsRead,
    DeliveryPerformancePointRead,
    RouteCountRead,
    StatusCountRead,
)
from .notification import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)
from .shipment import (
    RecentShipmentRead,
    ShipmentCursorPageRead,
    ShipmentPageRead,
    ShipmentRead,
)

__all__ = [
    "ActivityActorRead",
    "ActivityEntityRead",
    "ActivityItemRead",
    "ActivityPageRead",
    "AmountPointRead",
    "DashboardAnalyticsRead",
    "DashboardChartsRead",
    "DeliveryPerformancePointRead",
    "RouteCountRead",
    "StatusCountRead",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "RecentShipmentRead",
    "ShipmentCursorPageRead",
    "ShipmentPageRead",
    "ShipmentRead",
]
