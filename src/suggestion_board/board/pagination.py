"""
Client-side pagination over the fetched suggestion list.

Pages are 1-based. ``current_page`` always lies in ``[1, total_pages]``, or is
1 when there are no pages at all.
"""

import math
from typing import Sequence, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


def count_pages(count: int, page_size: int) -> int:
    """Number of pages needed to show ``count`` items."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(count / page_size)


def paginate(items: Sequence[T], page: int, page_size: int) -> Tuple[T, ...]:
    """Return the items shown on ``page``."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    start = (page - 1) * page_size
    return tuple(items[start:page * page_size])


class PaginationState(BaseModel):
    """Page size, current page and page count."""

    model_config = ConfigDict(frozen=True)

    page_size: int = 5
    current_page: int = 1
    total_pages: int = 0

    @property
    def is_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def is_last_page(self) -> bool:
        # An empty list has no last page to stop on
        return self.total_pages == 0 or self.current_page == self.total_pages

    def with_item_count(self, count: int) -> "PaginationState":
        """Recompute pages for a new list and go back to page 1."""
        return self.model_copy(update={
            "current_page": 1,
            "total_pages": count_pages(count, self.page_size),
        })

    def with_page_size(self, page_size: int, count: int) -> "PaginationState":
        """Change the page size for a list of ``count`` items; resets to page 1."""
        return PaginationState(
            page_size=page_size,
            current_page=1,
            total_pages=count_pages(count, page_size),
        )

    def next_page(self) -> "PaginationState":
        if self.current_page < self.total_pages:
            return self.model_copy(update={"current_page": self.current_page + 1})
        return self

    def previous_page(self) -> "PaginationState":
        if self.current_page > 1:
            return self.model_copy(update={"current_page": self.current_page - 1})
        return self
