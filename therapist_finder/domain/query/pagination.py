"""Pagination window and page metadata."""

import math
from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# OFFSET and LIMIT are bigint in PostgreSQL
MAX_ROW_NUMBER = 2**63 - 1


def coerce_positive_int(value: Any, default: int) -> int:
    """Coerce a transport value to an integer >= 1.

    Missing or non-numeric values take the default; values below one
    become one. Integer strings are parsed exactly; decimal and exponent
    forms are truncated.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            decimal = float(value)
        except (TypeError, ValueError):
            return default
        if not math.isfinite(decimal):
            return default
        number = int(decimal)
    return max(1, number)


def _bounded(page: int, limit: int) -> tuple[int, int]:
    """Keep the window inside the range storage accepts for OFFSET and LIMIT."""
    limit = min(limit, MAX_ROW_NUMBER)
    return min(page, MAX_ROW_NUMBER // limit + 1), limit


@dataclass(frozen=True)
class PageWindow:
    """Row window handed to storage."""

    offset: int
    count: int


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata returned with a page of results."""

    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


@dataclass(frozen=True)
class PageRequest:
    """Validated 1-based page request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_raw(
        cls,
        page: Any = None,
        limit: Any = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int | None = None,
    ) -> "PageRequest":
        size = coerce_positive_int(limit, default_limit)
        if max_limit is not None:
            size = min(size, max_limit)
        page, size = _bounded(coerce_positive_int(page, DEFAULT_PAGE), size)
        return cls(page=page, limit=size)

    @property
    def window(self) -> PageWindow:
        return window(self.page, self.limit)

    def describe(self, total_count: int) -> PageInfo:
        return describe(self.page, self.limit, total_count)


def window(page: Any, limit: Any) -> PageWindow:
    """Convert a page number and size into an offset/count pair."""
    page = coerce_positive_int(page, DEFAULT_PAGE)
    limit = coerce_positive_int(limit, DEFAULT_LIMIT)
    page, limit = _bounded(page, limit)
    return PageWindow(offset=(page - 1) * limit, count=limit)


def describe(page: Any, limit: Any, total_count: int) -> PageInfo:
    """Derive page metadata from the total number of matching rows.

    Args:
        page: Requested 1-based page
        limit: Page size
        total_count: Rows matching the query, across all pages

    Returns:
        Page metadata; zero rows yields zero pages
    """
    page = coerce_positive_int(page, DEFAULT_PAGE)
    limit = coerce_positive_int(limit, DEFAULT_LIMIT)
    total_count = max(0, int(total_count))
    total_pages = math.ceil(total_count / limit)
    return PageInfo(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
        limit=limit,
    )
