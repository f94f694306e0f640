"""Filter stage: text, date interval and first-occurrence-per-address."""

from collections.abc import Iterable, Sequence

from logscope.core.models import DateInterval, FilterCriteria, LogRecord
from logscope.core.timestamps import end_of_day, parse_timestamp, start_of_day


def matches_query(record: LogRecord, query: str) -> bool:
    """Return True if the record matches a free-text query.

    Country and organization are matched case-insensitively. The address is
    matched as-is.
    """
    if not query:
        return True
    needle = query.lower()
    return (
        needle in record.country.lower()
        or needle in record.organization.lower()
        or query in record.address
    )


def within_interval(record: LogRecord, interval: DateInterval) -> bool:
    """Return True if the record timestamp falls inside the day interval.

    Records whose timestamp does not parse never match.
    """
    moment = parse_timestamp(record.timestamp)
    if moment is None:
        return False
    return start_of_day(interval.start) <= moment <= end_of_day(interval.end)


def first_per_address(records: Iterable[LogRecord]) -> list[LogRecord]:
    """Keep the first record for each address, in input order."""
    seen: set[str] = set()
    unique: list[LogRecord] = []
    for record in records:
        if record.address in seen:
            continue
        seen.add(record.address)
        unique.append(record)
    return unique


def filter_records(
    records: Sequence[LogRecord], criteria: FilterCriteria
) -> list[LogRecord]:
    """Apply the text, date and dedup predicates, preserving input order.

    Dedup runs last, so the first surviving record for an address wins.

    Args:
        records: Records in their stored order.
        criteria: Filter configuration.

    Returns:
        New list containing the matching records.
    """
    filtered = [r for r in records if matches_query(r, criteria.query)]
    if criteria.interval is not None:
        interval = criteria.interval
        filtered = [r for r in filtered if within_interval(r, interval)]
    if criteria.dedup_by_address:
        filtered = first_per_address(filtered)
    return filtered
