"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_naive_utc,
    ensure_utc,
    get_app_timezone,
    local_day,
    now_utc,
    now_utc_naive,
)

__all__ = [
    "ensure_naive_utc",
    "ensure_utc",
    "get_app_timezone",
    "local_day",
    "now_utc",
    "now_utc_naive",
]
