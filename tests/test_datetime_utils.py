"""Tests for timezone helpers used to bucket dashboard series."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from freightflow.config import reset_settings_cache
from freightflow.utils import datetime as datetime_utils


@pytest.fixture
def app_timezone(monkeypatch):
    def _set(name: str) -> None:
        class DummySettings:
            app_timezone = name

        monkeypatch.setattr(datetime_utils, "get_settings", lambda: DummySettings())

    return _set


def test_local_day_uses_configured_offset(app_timezone) -> None:
    app_timezone("UTC-05:00")

    assert datetime_utils.get_app_timezone() == timezone(-timedelta(hours=5))
    assert datetime_utils.local_day(datetime(2024, 5, 20, 2, 0)) == date(2024, 5, 19)


def test_unknown_timezone_falls_back_to_utc(app_timezone) -> None:
    app_timezone("Mars/Olympus_Mons")

    assert datetime_utils.get_app_timezone() == timezone.utc


def test_timezone_follows_reloaded_settings(monkeypatch) -> None:
    monkeypatch.setenv("APP_TIMEZONE", "UTC+02:00")
    reset_settings_cache()
    try:
        assert datetime_utils.get_app_timezone() == timezone(timedelta(hours=2))
    finally:
        monkeypatch.undo()
        reset_settings_cache()

    assert datetime_utils.get_app_timezone().utcoffset(None) == timedelta(0)


def test_ensure_naive_utc_converts_aware_values() -> None:
    aware = datetime(2024, 5, 20, 7, 0, tzinfo=timezone(timedelta(hours=2)))

    assert datetime_utils.ensure_naive_utc(aware) == datetime(2024, 5, 20, 5, 0)
    assert datetime_utils.ensure_utc(None) is None
