"""Sort stage for log records."""

from collections.abc import Callable, Sequence

from logscope.core.models import LogRecord, SortField, SortSpec
from logscope.core.timestamps import epoch_millis

SortKey = Callable[[LogRecord], int | str]

_KEYS: dict[str, SortKey] = {
    "timestamp": lambda r: epoch_millis(r.timestamp),
    "address": lambda r: r.address,
    "country": lambda r: r.country,
    "organization": lambda r: r.organization,
    "city": lambda r: r.city,
}


def sort_key(field: SortField) -> SortKey:
    """Return the comparison key extractor for a sort field."""
    return _KEYS[field]


def sort_records(records: Sequence[LogRecord], order: SortSpec) -> list[LogRecord]:
    """Return a new list ordered by ``order.field`` and ``order.direction``.

    Strings compare by code point, timestamps by epoch milliseconds. The
    sort is stable in both directions: records with equal keys keep their
    input order.
    """
    return sorted(
        records,
        key=sort_key(order.field),
        reverse=order.direction == "desc",
    )


def toggle_sort(current: SortSpec, field: SortField) -> SortSpec:
    """Return the sort that results from selecting a column.

    Selecting the active column flips its direction; selecting another
    column sorts it ascending.
    """
    if current.field == field:
        return SortSpec(field, "asc" if current.direction == "desc" else "desc")
    return SortSpec(field, "asc")
