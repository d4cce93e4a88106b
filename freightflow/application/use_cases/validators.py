"""Explicit validation of use case inputs.

Validators collect every violated constraint instead of stopping at the
first one, so callers can report them together.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from freightflow.domain.entities import NotificationChannel, NotificationPayload
from freightflow.domain.exceptions import ValidationError


@dataclass
class ValidationResult:
    violations: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, violation: str) -> None:
        self.violations.append(violation)

    def raise_if_invalid(self) -> None:
        if self.violations:
            raise ValidationError(self.violations)


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def validate_notification_payload(payload: NotificationPayload) -> ValidationResult:
    """Check that ``payload`` carries what each requested channel needs."""

    result = ValidationResult()
    if not payload.channels:
        result.add("channels must contain at least one channel")

    channels: list[NotificationChannel] = []
    for raw in payload.channels:
        try:
            channel = NotificationChannel(raw)
        except ValueError:
            result.add(f"channel '{raw}' is not supported")
            continue
        if channel in channels:
            result.add(f"channel '{channel.value}' is requested more than once")
            continue
        channels.append(channel)

    if NotificationChannel.EMAIL in channels:
        if _is_blank(payload.user_email):
            result.add("user_email is required for the email channel")
        if _is_blank(payload.subject):
            result.add("subject is required for the email channel")
        if _is_blank(payload.email_body):
            result.add("email_body is required for the email channel")

    if NotificationChannel.IN_APP in channels:
        if payload.user_id is None:
            result.add("user_id is required for the in_app channel")
        if _is_blank(payload.in_app_message):
            result.add("in_app_message is required for the in_app channel")

    return result


def validate_page_request(
    page: int, page_size: int, *, max_page_size: int
) -> ValidationResult:
    result = ValidationResult()
    if page < 1:
        result.add("page must be greater than or equal to 1")
    if page_size < 1 or page_size > max_page_size:
        result.add(f"page_size must be between 1 and {max_page_size}")
    return result


def validate_cursor_request(limit: int, *, max_page_size: int) -> ValidationResult:
    result = ValidationResult()
    if limit < 1 or limit > max_page_size:
        result.add(f"limit must be between 1 and {max_page_size}")
    return result


__all__ = [
    "ValidationResult",
    "validate_cursor_request",
    "validate_notification_payload",
    "validate_page_request",
]
