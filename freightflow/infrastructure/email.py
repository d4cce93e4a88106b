"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from freightflow.config import get_settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when SendGrid rejects a message or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        """``True`` for 4xx responses, where the message itself was rejected."""

        return self.status_code is not None and 400 <= self.status_code < 500


class EmailNotConfiguredError(EmailDeliveryError):
    """Raised when no SendGrid credentials are configured."""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{field}: {message}")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: int | None, details: str | None) -> str:
    if status_code and details:
        return f"SendGrid responded with status {status_code}: {details}"
    if status_code:
        return f"SendGrid responded with status {status_code}"
    if details:
        return f"SendGrid request failed: {details}"
    return "SendGrid request failed"


def send_email(subject: str, html_content: str, recipient: str) -> None:
    """Send an email using the configured SendGrid credentials.

    Raises :class:`EmailNotConfiguredError` when credentials are missing and
    :class:`EmailDeliveryError` when SendGrid fails or rejects the message.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        raise EmailNotConfiguredError("SendGrid credentials are not configured")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # sendgrid raises python_http_client errors and OSError subclasses
        status_code = getattr(exc, "status_code", None)
        description = _describe_failure(
            status_code, _extract_sendgrid_error_details(getattr(exc, "body", None))
        )
        logger.error("SendGrid API request failed: %s", description)
        raise EmailDeliveryError(description, status_code=status_code) from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        description = _describe_failure(
            status_code, _extract_sendgrid_error_details(getattr(response, "body", None))
        )
        logger.error("SendGrid API rejected the message: %s", description)
        raise EmailDeliveryError(
            description, status_code=status_code if isinstance(status_code, int) else None
        )

    logger.debug("SendGrid accepted message '%s' for %s", subject, recipient)


__all__ = ["EmailDeliveryError", "EmailNotConfiguredError", "send_email"]
