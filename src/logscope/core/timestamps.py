"""Lenient timestamp handling for log records.

Timestamps arrive as ISO-8601 strings. Anything that fails to parse is
reported as ``None`` rather than raised, so callers can exclude or
substitute without interrupting the pipeline.
"""

from datetime import UTC, date, datetime, time

# Sort key used for timestamps that cannot be parsed (epoch zero)
UNPARSABLE_SORT_KEY = 0


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are interpreted as UTC. A trailing ``Z`` designator is
    accepted.

    Args:
        value: Raw timestamp string from the record feed.

    Returns:
        Timezone-aware datetime, or None if the value is not valid ISO-8601.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def epoch_millis(value: str) -> int:
    """Return the timestamp as epoch milliseconds for ordering.

    Unparsable timestamps map to ``UNPARSABLE_SORT_KEY``.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNPARSABLE_SORT_KEY
    return int(parsed.timestamp() * 1000)


def start_of_day(day: date) -> datetime:
    """Return the first instant of a UTC calendar day."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def end_of_day(day: date) -> datetime:
    """Return the last instant of a UTC calendar day."""
    return datetime.combine(day, time.max, tzinfo=UTC)


def parse_day(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` day, returning None for blank or bad input."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None
