"""Containers returned by paginated feed queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """Offset-based page: a contiguous slice of an ordered result set."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int


@dataclass(frozen=True)
class CursorPage(Generic[T]):
    """Cursor-based page; ``next_cursor`` is ``None`` iff nothing follows."""

    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None


__all__ = ["CursorPage", "Page"]
