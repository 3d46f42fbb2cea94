"""Pagination - 1-indexed slicing plus the page-number strip shown under lists.

Invariants:
    - items = entities[(page - 1) * page_size : page * page_size]
    - total_pages = ceil(len(entities) / page_size); 0 for an empty collection
    - An out-of-range page yields empty items (callers clamp with clamp_page)
    - page_numbers never lists a page twice and always includes first and last

Design Decisions:
    - Page is a frozen dataclass, not a pydantic model: it never crosses the
      HTTP boundary as-is
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pokedex.core.domain_types import ELLIPSIS, PAGE_STRIP_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages_for(total_items: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(total_items / page_size)


def paginate(entities: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice one page out of entities. Pages below 1 are empty, like pages past the end."""
    total_pages = total_pages_for(len(entities), page_size)
    if page < 1:
        items: list[T] = []
    else:
        start = (page - 1) * page_size
        items = list(entities[start:start + page_size])
    return Page(
        items=items,
        page=page,
        page_size=page_size,
        total_items=len(entities),
        total_pages=total_pages,
    )


def clamp_page(page: int, total_pages: int) -> int:
    """Redirect pages outside 1..total_pages to page 1."""
    if page < 1 or (total_pages > 0 and page > total_pages):
        return 1
    return page


def page_numbers(
    current: int, total_pages: int, show: int = PAGE_STRIP_SIZE,
) -> list[int | str]:
    """Page strip, e.g. [1, '...', 4, 5, 6, '...', 10]."""
    if total_pages <= show + 2:
        return list(range(1, total_pages + 1))

    if current <= 3:
        return [*range(1, show + 1), ELLIPSIS, total_pages]

    if current >= total_pages - 2:
        return [1, ELLIPSIS, *range(total_pages - show + 1, total_pages + 1)]

    return [1, ELLIPSIS, current - 1, current, current + 1, ELLIPSIS, total_pages]


def showing_range(current: int, page_size: int, total_items: int) -> tuple[int, int]:
    """(first, last) 1-based item positions on the current page; (0, 0) when empty."""
    if total_items == 0:
        return 0, 0
    start = (current - 1) * page_size + 1
    end = min(current * page_size, total_items)
    return start, end
