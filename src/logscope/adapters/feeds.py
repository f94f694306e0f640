"""Parsing for the record and global-stats feeds.

Transport is left to the caller: a feed is any zero-argument callable
returning the decoded JSON payload (or raw JSON text/bytes). Failures never
propagate. The record feed falls back to an empty collection and the stats
feed to ``None``, and every result is tagged so callers can tell a failed
fetch from a feed that simply had no data.
"""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from logscope.core.models import DailyStats, GlobalStats, LogRecord
from logscope.core.ports import RecordStorePort, StatsStorePort

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Any]

# Wire key -> LogRecord field
_RECORD_FIELDS = {
    "ip": "address",
    "timestamp": "timestamp",
    "country": "country",
    "org": "organization",
    "city": "city",
    "region": "region",
}


class FeedParseError(ValueError):
    """Raised when a payload does not have the expected shape."""


class FeedStatus(Enum):
    """Outcome of a feed fetch."""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class FeedResult(Generic[T]):
    """A fetched value tagged with how it was obtained.

    Attributes:
        value: The parsed value or its fallback.
        status: OK, EMPTY (feed had no data) or FAILED (fallback used).
        error: Description of the failure, if any.
    """

    value: T
    status: FeedStatus
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status is FeedStatus.FAILED


def _decode(payload: Any) -> Any:
    if isinstance(payload, bytes | bytearray):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        return json.loads(payload)
    return payload


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value)


def parse_record(row: Mapping[str, Any]) -> LogRecord:
    """Build a LogRecord from one wire object. Missing fields become ''."""
    values = {field: _text(row, key) for key, field in _RECORD_FIELDS.items()}
    return LogRecord(**values)


def parse_records(payload: Any) -> list[LogRecord]:
    """Parse a record feed payload.

    Args:
        payload: A JSON array of record objects, decoded or as text.

    Returns:
        Records in payload order. Rows that are not objects are skipped.

    Raises:
        FeedParseError: If the payload is not a JSON array.
    """
    try:
        data = _decode(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise FeedParseError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise FeedParseError(f"expected a JSON array, got {type(data).__name__}")
    records = []
    for index, row in enumerate(data):
        if not isinstance(row, Mapping):
            logger.debug("Skipping non-object record at index %d", index)
            continue
        records.append(parse_record(row))
    return records


def _strings(value: Any) -> tuple[str, ...]:
    if isinstance(value, list | tuple):
        return tuple(str(v) for v in value)
    return ()


def _count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return None


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return int(value)
    return 0


def parse_daily_stats(day: Mapping[str, Any]) -> DailyStats:
    """Build a DailyStats from one entry of ``daily_stats``."""
    return DailyStats(
        new_hits=_int(day.get("new_hits")),
        new_unique_addresses=_strings(day.get("new_unique_ips")),
        new_unique_countries=_strings(day.get("new_unique_countries")),
    )


def parse_global_stats(payload: Any) -> GlobalStats:
    """Parse a global stats payload.

    ``unique_ips`` and ``unique_countries`` may be lists of values or plain
    counts.

    Raises:
        FeedParseError: If the payload is not a JSON object.
    """
    try:
        data = _decode(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise FeedParseError(f"invalid JSON: {e}") from e
    if not isinstance(data, Mapping):
        raise FeedParseError(f"expected a JSON object, got {type(data).__name__}")
    daily_raw = data.get("daily_stats")
    daily: tuple[tuple[str, DailyStats], ...] = ()
    if isinstance(daily_raw, Mapping):
        daily = tuple(
            (str(day), parse_daily_stats(entry))
            for day, entry in daily_raw.items()
            if isinstance(entry, Mapping)
        )
    last = data.get("last_processed_timestamp")
    return GlobalStats(
        total_hits=_int(data.get("total_hits")),
        unique_addresses=_strings(data.get("unique_ips")),
        unique_countries=_strings(data.get("unique_countries")),
        daily=daily,
        last_processed_timestamp=str(last) if last is not None else None,
        unique_address_count=_count(data.get("unique_ips")),
        unique_country_count=_count(data.get("unique_countries")),
    )


def fetch_records(fetch: Fetcher) -> FeedResult[list[LogRecord]]:
    """Fetch and parse the record feed, falling back to no records."""
    try:
        records = parse_records(fetch())
    except FeedParseError as e:
        logger.warning("Record feed returned an unusable payload: %s", e)
        return FeedResult([], FeedStatus.FAILED, str(e))
    except Exception as e:
        logger.exception("Error fetching record feed")
        return FeedResult([], FeedStatus.FAILED, f"{type(e).__name__}: {e}")
    status = FeedStatus.OK if records else FeedStatus.EMPTY
    return FeedResult(records, status)


def fetch_global_stats(fetch: Fetcher) -> FeedResult[GlobalStats | None]:
    """Fetch and parse the global stats feed, falling back to None."""
    try:
        payload = fetch()
        if payload is None:
            return FeedResult(None, FeedStatus.EMPTY)
        stats = parse_global_stats(payload)
    except FeedParseError as e:
        logger.warning("Stats feed returned an unusable payload: %s", e)
        return FeedResult(None, FeedStatus.FAILED, str(e))
    except Exception as e:
        logger.exception("Error fetching stats feed")
        return FeedResult(None, FeedStatus.FAILED, f"{type(e).__name__}: {e}")
    return FeedResult(stats, FeedStatus.OK)


def refresh(
    records: RecordStorePort,
    stats: StatsStorePort,
    fetch_logs: Fetcher,
    fetch_stats: Fetcher,
) -> tuple[FeedResult[list[LogRecord]], FeedResult[GlobalStats | None]]:
    """Fetch both feeds and replace the stores wholesale."""
    record_result = fetch_records(fetch_logs)
    records.replace(record_result.value)
    stats_result = fetch_global_stats(fetch_stats)
    stats.replace(stats_result.value)
    return record_result, stats_result
