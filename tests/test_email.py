"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from freightflow.infrastructure import email as email_module


class ConfiguredSettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that records sent messages."""

    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper refuses to send."""

    class DummySettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())

    with pytest.raises(email_module.EmailNotConfiguredError):
        email_module.send_email("Subject", "<p>Body</p>", "user@example.com")


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """A 2xx SendGrid response completes without raising."""

    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: ConfiguredSettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    monkeypatch.setattr(email_module, "Mail", lambda **kwargs: kwargs)

    email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert RecordingClient.sent == [
        {
            "from_email": "sender@example.com",
            "to_emails": "user@example.com",
            "subject": "Subject",
            "html_content": "<p>Body</p>",
        }
    ]


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: ConfiguredSettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)
    monkeypatch.setattr(email_module, "Mail", lambda **kwargs: kwargs)

    with caplog.at_level("ERROR"):
        with pytest.raises(email_module.EmailDeliveryError) as exc_info:
            email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert exc_info.value.status_code == 403
    assert exc_info.value.is_client_error
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_send_email_rejects_non_success_status(monkeypatch: pytest.MonkeyPatch) -> None:
    class ServerErrorClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=503, body=b"upstream busy")

    monkeypatch.setattr(email_module, "get_settings", lambda: ConfiguredSettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", ServerErrorClient)
    monkeypatch.setattr(email_module, "Mail", lambda **kwargs: kwargs)

    with pytest.raises(email_module.EmailDeliveryError) as exc_info:
        email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert exc_info.value.status_code == 503
    assert not exc_info.value.is_client_error
    assert "upstream busy" in str(exc_info.value)
