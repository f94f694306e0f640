"""In-memory storage adapters for records and the global stats snapshot."""

from collections.abc import Sequence

from logscope.core.models import GlobalStats, LogRecord


class InMemoryRecordStore:
    """In-memory implementation of RecordStorePort.

    Holds the record collection as an immutable tuple. Replacing it bumps
    ``version`` so memoized results computed from the old collection are
    not reused.
    """

    def __init__(self, records: Sequence[LogRecord] = ()) -> None:
        self._records: tuple[LogRecord, ...] = tuple(records)
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def replace(self, records: Sequence[LogRecord]) -> None:
        """Replace the stored records."""
        self._records = tuple(records)
        self._version += 1

    def read(self) -> tuple[LogRecord, ...]:
        """Return the stored records in their original order."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)


class InMemoryStatsStore:
    """In-memory implementation of StatsStorePort."""

    def __init__(self, stats: GlobalStats | None = None) -> None:
        self._stats = stats
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def replace(self, stats: GlobalStats | None) -> None:
        """Replace the snapshot. None means no snapshot is available."""
        self._stats = stats
        self._version += 1

    def current(self) -> GlobalStats | None:
        """Return the current snapshot, if any."""
        return self._stats
