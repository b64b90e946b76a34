"""Pagination controller: fixed-size pages over a filtered result set.

The controller never clamps. A page outside ``1..total_pages`` raises
PageOutOfRangeError, and callers turn that into a no-op.
"""

import math
from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
# Show every page link up to this many pages; beyond it, elide.
MAX_FULL_LINKS = 10
LINK_WINDOW = 2


class PageOutOfRangeError(ValueError):
    """Requested page is outside 1..total_pages."""

    def __init__(self, page: int, total_pages: int) -> None:
        super().__init__(f"page {page} is out of range 1..{total_pages}")
        self.page = page
        self.total_pages = total_pages


class Page(BaseModel, Generic[T]):
    """One page of results plus the metadata page controls need.

    ``range_start``/``range_end`` are 1-based and inclusive; both are 0 when
    the result set is empty.
    """

    model_config = ConfigDict(frozen=True)

    items: list[T]
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_pages: int = Field(ge=1)
    total_count: int = Field(ge=0)
    range_start: int = Field(ge=0)
    range_end: int = Field(ge=0)

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def links(self) -> list[int | None]:
        return page_links(self.page, self.total_pages)


def total_pages_for(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for ``count`` items; at least 1."""
    if page_size < 1:
        msg = f"page_size must be >= 1, got {page_size}"
        raise ValueError(msg)
    return max(1, math.ceil(count / page_size))


def paginate(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """Slice ``items`` into page ``page`` (1-based).

    Raises:
        PageOutOfRangeError: page < 1 or page > total_pages.
    """
    count = len(items)
    total_pages = total_pages_for(count, page_size)
    if not 1 <= page <= total_pages:
        raise PageOutOfRangeError(page, total_pages)

    start = (page - 1) * page_size
    end = min(start + page_size, count)
    return Page(
        items=list(items[start:end]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_count=count,
        range_start=start + 1 if count else 0,
        range_end=end,
    )


def page_links(current: int, total_pages: int) -> list[int | None]:
    """Page numbers for the control bar; ``None`` marks an elided gap.

    Up to MAX_FULL_LINKS pages are all shown. Beyond that: first, last and
    current ± LINK_WINDOW.

    >>> page_links(6, 12)
    [1, None, 4, 5, 6, 7, 8, None, 12]
    """
    if total_pages <= 1:
        return []
    if total_pages <= MAX_FULL_LINKS:
        return list(range(1, total_pages + 1))

    links: list[int | None] = []
    last_shown = 0
    for i in range(1, total_pages + 1):
        if i in (1, total_pages) or current - LINK_WINDOW <= i <= current + LINK_WINDOW:
            if last_shown and i - last_shown > 1:
                links.append(None)
            links.append(i)
            last_shown = i
    return links
