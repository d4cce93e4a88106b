"""Use cases exposed by the application layer."""

from .analytics import get_dashboard_analytics
from .datastore import datastore_unavailable_as_upstream_error
from .feed import (
    get_shipment_for_user,
    list_recent_activity,
    list_recent_shipments,
    list_recent_shipments_cursor,
    mark_activity_read,
)
from .health import HealthAggregator
from .notifications import NotificationDispatcher, notify_shipment_status_changed
from .validators import (
    ValidationResult,
    validate_cursor_request,
    validate_notification_payload,
    validate_page_request,
)

__all__ = [
    "datastore_unavailable_as_upstream_error",
    "get_dashboard_analytics",
    "get_shipment_for_user",
    "list_recent_activity",
    "list_recent_shipments",
    "list_recent_shipments_cursor",
    "mark_activity_read",
    "HealthAggregator",
    "NotificationDispatcher",
    "notify_shipment_status_changed",
    "ValidationResult",
    "validate_cursor_request",
    "validate_notification_payload",
    "validate_page_request",
]
