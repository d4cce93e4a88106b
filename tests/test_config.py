"""Tests for settings validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from freightflow.config import Settings


def _settings(**overrides) -> Settings:
    values = {"database_url": "sqlite://", "secret_key": "secret"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults() -> None:
    settings = _settings()

    assert settings.feed_max_page_size == 100
    assert settings.memory_rss_critical_bytes == 300 * 1024 * 1024
    assert settings.app_timezone == "UTC"


def test_sendgrid_key_requires_sender() -> None:
    with pytest.raises(ValidationError, match="SENDGRID_SENDER"):
        _settings(sendgrid_api_key="SG.key")


def test_warning_threshold_cannot_exceed_critical() -> None:
    with pytest.raises(ValidationError, match="MEMORY_RSS_WARNING_BYTES"):
        _settings(memory_rss_warning_bytes=10, memory_rss_critical_bytes=5)
