"""Domain entity describing the logical user types of the platform."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Caller role governing which data and KPIs are visible."""

    SHIPPER = "SHIPPER"
    CARRIER = "CARRIER"
    DISPATCHER = "DISPATCHER"

    @classmethod
    def parse(cls, value: str) -> "UserRole":
        """Return the role matching ``value`` regardless of case."""

        normalized = value.strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            allowed = ", ".join(role.value for role in cls)
            raise ValueError(f"Unknown role '{value}'. Expected one of: {allowed}") from None


__all__ = ["UserRole"]
