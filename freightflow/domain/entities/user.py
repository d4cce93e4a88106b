"""Domain entity representing a platform user."""

from dataclasses import dataclass
from datetime import datetime

from .role import UserRole


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    role: UserRole
    name: str
    email: str
    avatar_url: str | None
    is_active: bool
    last_seen_at: datetime | None
    created_at: datetime | None

    def has_role(self, role: UserRole) -> bool:
        """Return ``True`` when the user acts as ``role``."""

        return self.role == role


__all__ = ["User"]
