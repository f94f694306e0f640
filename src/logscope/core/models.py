"""Core domain models for access-log analytics."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

SortField = Literal["timestamp", "address", "country", "organization", "city"]
SortDirection = Literal["asc", "desc"]
RecordField = Literal[
    "address", "timestamp", "country", "organization", "city", "region"
]

SORT_FIELDS: frozenset[str] = frozenset(
    {"timestamp", "address", "country", "organization", "city"}
)
SORT_DIRECTIONS: frozenset[str] = frozenset({"asc", "desc"})
RECORD_FIELDS: frozenset[str] = frozenset(
    {"address", "timestamp", "country", "organization", "city", "region"}
)


@dataclass(frozen=True)
class LogRecord:
    """A single observed request.

    Attributes:
        address: Network address of the client, treated as an opaque string.
        timestamp: ISO-8601 encoded instant, kept exactly as received.
        country: Country name or code.
        organization: Owning organization of the address (ISP, company).
        city: City name.
        region: Region or state name.
    """

    address: str
    timestamp: str
    country: str = ""
    organization: str = ""
    city: str = ""
    region: str = ""

    def value_of(self, name: str) -> str:
        """Return the raw string value of a record field."""
        if name not in RECORD_FIELDS:
            raise ValueError(f"unknown record field: {name!r}")
        value: str = getattr(self, name)
        return value


@dataclass(frozen=True)
class DateInterval:
    """Inclusive calendar-day interval.

    Bounds are not reordered: a start after the end simply matches nothing.
    """

    start: date
    end: date


@dataclass(frozen=True)
class FilterCriteria:
    """Text, date and uniqueness filter configuration.

    Attributes:
        query: Substring matched against address, country and organization.
        interval: Optional inclusive day interval on the record timestamp.
        dedup_by_address: Keep only the first record seen for each address.
    """

    query: str = ""
    interval: DateInterval | None = None
    dedup_by_address: bool = False


@dataclass(frozen=True)
class SortSpec:
    """Sort field and direction for the record table."""

    field: SortField = "timestamp"
    direction: SortDirection = "desc"

    def __post_init__(self) -> None:
        if self.field not in SORT_FIELDS:
            raise ValueError(f"unknown sort field: {self.field!r}")
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"unknown sort direction: {self.direction!r}")


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page index with a fixed page size."""

    page_index: int = 1
    page_size: int = 50

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be a positive integer")


@dataclass(frozen=True)
class Page:
    """One page of a sorted record collection.

    Attributes:
        items: Records on this page, possibly empty.
        page_index: The requested 1-based page index.
        page_size: Maximum number of records per page.
        total_items: Size of the collection that was paginated.
        total_pages: Number of pages, 0 for an empty collection.
    """

    items: tuple[LogRecord, ...]
    page_index: int
    page_size: int
    total_items: int
    total_pages: int


@dataclass(frozen=True)
class AggregateBucket:
    """Group-and-count result keyed by a categorical field value."""

    key: str
    count: int


@dataclass(frozen=True)
class LegendEntry:
    """A chart bucket with its share of the filtered total."""

    key: str
    count: int
    percentage: float


@dataclass(frozen=True)
class FilteredStats:
    """Summary statistics over the currently filtered records."""

    total_hits: int = 0
    unique_address_count: int = 0
    unique_country_count: int = 0


@dataclass(frozen=True)
class DailyStats:
    """Per-day breakdown from the global stats feed."""

    new_hits: int = 0
    new_unique_addresses: tuple[str, ...] = ()
    new_unique_countries: tuple[str, ...] = ()


@dataclass(frozen=True)
class GlobalStats:
    """Externally supplied aggregate snapshot.

    The core never recomputes these values from the record store; a snapshot
    is replaced wholesale on each refresh. ``daily`` holds ``(day, stats)``
    pairs in feed order, which keeps snapshots hashable.
    """

    total_hits: int = 0
    unique_addresses: tuple[str, ...] = ()
    unique_countries: tuple[str, ...] = ()
    daily: tuple[tuple[str, DailyStats], ...] = ()
    last_processed_timestamp: str | None = None
    unique_address_count: int | None = None
    unique_country_count: int | None = None


@dataclass(frozen=True)
class GlobalSummary:
    """Display values derived from a GlobalStats snapshot."""

    total_hits: int = 0
    unique_users: int = 0
    unique_countries: int = 0
    daily: tuple[tuple[str, DailyStats], ...] = ()


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest parsed timestamps in a record collection."""

    earliest: datetime
    latest: datetime


@dataclass(frozen=True)
class DashboardView:
    """Everything the presentation layer needs for one render.

    Attributes:
        page: Sorted, paginated slice of the filtered records.
        filtered_stats: Summary over the filtered records.
        global_summary: Summary of the external stats snapshot.
        top_buckets: Top-N aggregate buckets with their percentages.
        legend: Buckets too small to be labelled on the chart.
        date_range: Bounds of the unfiltered records, if any parse.
        criteria: Criteria the view was computed with.
        sort: Sort the view was computed with.
        pending: True while a query change is waiting to be committed.
    """

    page: Page
    filtered_stats: FilteredStats
    global_summary: GlobalSummary
    top_buckets: tuple[LegendEntry, ...]
    legend: tuple[LegendEntry, ...]
    date_range: DateRange | None
    criteria: FilterCriteria
    sort: SortSpec
    pending: bool = False
