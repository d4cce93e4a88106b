"""Domain entities exposed by the application."""

from .activity import ActivityActor, ActivityEntity, ActivityItem
from .analytics import (
    AmountPoint,
    DashboardAnalytics,
    DashboardCharts,
    DeliveryPerformancePoint,
    RouteCount,
    StatusCount,
)
from .health import (
    HEALTH_STATUS_ERROR,
    HEALTH_STATUS_OK,
    HealthIndicatorResult,
    HealthReport,
)
from .notification import (
    ChannelMessage,
    ChannelOutcome,
    DeliveryFailure,
    DeliveryStatus,
    DispatchReport,
    Notification,
    NotificationChannel,
    NotificationPayload,
)
from .pagination import CursorPage, Page
from .role import UserRole
from .shipment import (
    ACTIVE_SHIPMENT_STATUSES,
    DELIVERED_SHIPMENT_STATUSES,
    ISSUE_SHIPMENT_STATUSES,
    RecentShipment,
    Shipment,
    ShipmentStatus,
)
from .user import User

__all__ = [
    "ActivityActor",
    "ActivityEntity",
    "ActivityItem",
    "AmountPoint",
    "DashboardAnalytics",
    "DashboardCharts",
    "DeliveryPerformancePoint",
    "RouteCount",
    "StatusCount",
    "HEALTH_STATUS_ERROR",
    "HEALTH_STATUS_OK",
    "HealthIndicatorResult",
    "HealthReport",
    "ChannelMessage",
    "ChannelOutcome",
    "DeliveryFailure",
    "DeliveryStatus",
    "DispatchReport",
    "Notification",
    "NotificationChannel",
    "NotificationPayload",
    "CursorPage",
    "Page",
    "UserRole",
    "ACTIVE_SHIPMENT_STATUSES",
    "DELIVERED_SHIPMENT_STATUSES",
    "ISSUE_SHIPMENT_STATUSES",
    "RecentShipment",
    "Shipment",
    "ShipmentStatus",
    "User",
]
