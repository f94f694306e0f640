"""Pagination stage."""

import math
from collections.abc import Sequence
from typing import TypeVar

from logscope.core.models import LogRecord, Page, PageRequest

T = TypeVar("T")


def total_pages(total_items: int, page_size: int) -> int:
    """Return the number of pages needed, 0 for an empty collection."""
    if total_items <= 0:
        return 0
    return math.ceil(total_items / page_size)


def paginate(items: Sequence[T], request: PageRequest) -> list[T]:
    """Return the slice of items on the requested 1-based page.

    Out-of-range page indexes yield an empty list instead of raising.
    """
    if request.page_index < 1:
        return []
    start = (request.page_index - 1) * request.page_size
    return list(items[start : start + request.page_size])


def build_page(records: Sequence[LogRecord], request: PageRequest) -> Page:
    """Paginate records and attach the page bookkeeping."""
    return Page(
        items=tuple(paginate(records, request)),
        page_index=request.page_index,
        page_size=request.page_size,
        total_items=len(records),
        total_pages=total_pages(len(records), request.page_size),
    )


def previous_page(page_index: int) -> int:
    """Return the page before ``page_index``, never below 1."""
    return max(1, page_index - 1)


def next_page(page_index: int, pages: int) -> int:
    """Return the page after ``page_index``, never past the last page."""
    return max(1, min(pages, page_index + 1))
