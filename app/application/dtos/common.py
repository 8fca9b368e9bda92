"""Pagination DTOs shared by list use cases."""

import math
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page and a page size clamped to 1..MAX_PAGE_SIZE."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @classmethod
    def of(cls, page: int | None, limit: int | None) -> "PageRequest":
        """Normalize raw query values (None, zero or out-of-range)."""
        page = max(page or 1, 1)
        limit = DEFAULT_PAGE_SIZE if limit is None else min(max(limit, 1), MAX_PAGE_SIZE)
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Pagination:
    """Pagination envelope: current page, page size, total rows, page count."""

    current: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, request: PageRequest, total: int) -> "Pagination":
        return cls(
            current=request.page,
            limit=request.limit,
            total=total,
            pages=math.ceil(total / request.limit) if total else 0,
        )


@dataclass(frozen=True)
class Page[T]:
    """One page of results."""

    items: list[T]
    pagination: Pagination
