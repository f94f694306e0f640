"""Aggregation stage and derived summaries.

Grouping uses exact, case-sensitive string equality. Counts are ranked
descending; equal counts keep the order in which their groups were first
encountered.
"""

from collections import Counter
from collections.abc import Iterable, Sequence

from logscope.core.models import (
    AggregateBucket,
    DateRange,
    FilteredStats,
    GlobalStats,
    GlobalSummary,
    LegendEntry,
    LogRecord,
)
from logscope.core.timestamps import parse_timestamp

DEFAULT_LEGEND_THRESHOLD = 2.0


def count_by(records: Iterable[LogRecord], field: str) -> list[AggregateBucket]:
    """Group records by a field and rank the groups by count.

    Args:
        records: Records to group.
        field: Name of a LogRecord field.

    Returns:
        Every group, most frequent first.
    """
    counts = Counter(record.value_of(field) for record in records)
    # Counter preserves insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [AggregateBucket(key=key, count=count) for key, count in ranked]


def aggregate_top_n(
    records: Iterable[LogRecord], field: str = "country", n: int = 10
) -> list[AggregateBucket]:
    """Return the ``n`` most frequent values of a field."""
    if n <= 0:
        return []
    return count_by(records, field)[:n]


def cardinality(records: Iterable[LogRecord], field: str) -> int:
    """Return the number of distinct values of a field."""
    return len({record.value_of(field) for record in records})


def filtered_stats(records: Sequence[LogRecord]) -> FilteredStats:
    """Summarize the filtered records."""
    return FilteredStats(
        total_hits=len(records),
        unique_address_count=cardinality(records, "address"),
        unique_country_count=cardinality(records, "country"),
    )


def share(count: int, total: int) -> float:
    """Return ``count / total``, or 0.0 when there is nothing to divide by."""
    if total <= 0:
        return 0.0
    return count / total


def percentage(count: int, total: int) -> float:
    """Return the share as a percentage rounded to one decimal place."""
    return round(share(count, total) * 100, 1)


def with_percentages(
    buckets: Iterable[AggregateBucket], total: int
) -> list[LegendEntry]:
    """Attach the percentage of ``total`` to each bucket."""
    return [
        LegendEntry(key=b.key, count=b.count, percentage=percentage(b.count, total))
        for b in buckets
    ]


def legend(
    buckets: Iterable[AggregateBucket],
    total: int,
    threshold: float = DEFAULT_LEGEND_THRESHOLD,
) -> list[LegendEntry]:
    """Return the buckets too small to label on a chart.

    A bucket is listed when its percentage is at or below ``threshold``.
    """
    return [e for e in with_percentages(buckets, total) if e.percentage <= threshold]


def summarize_global(stats: GlobalStats | None) -> GlobalSummary:
    """Turn an external stats snapshot into display values.

    An absent snapshot summarizes to zeros.
    """
    if stats is None:
        return GlobalSummary()
    users = stats.unique_address_count
    if users is None:
        users = len(stats.unique_addresses)
    countries = stats.unique_country_count
    if countries is None:
        countries = len(stats.unique_countries)
    return GlobalSummary(
        total_hits=stats.total_hits or 0,
        unique_users=users,
        unique_countries=countries,
        daily=tuple(sorted(stats.daily, key=lambda item: item[0])),
    )


def date_range(records: Iterable[LogRecord]) -> DateRange | None:
    """Return the earliest and latest parseable timestamps, if any."""
    moments = [
        moment
        for moment in (parse_timestamp(r.timestamp) for r in records)
        if moment is not None
    ]
    if not moments:
        return None
    return DateRange(earliest=min(moments), latest=max(moments))
