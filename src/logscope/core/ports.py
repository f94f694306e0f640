"""Port interfaces for adapters.

These protocols define the contracts that storage and scheduling adapters
must implement. The core depends only on these interfaces, not concrete
implementations.
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from logscope.core.models import GlobalStats, LogRecord


@runtime_checkable
class RecordStorePort(Protocol):
    """Port for the raw record collection.

    The collection is replaced wholesale; records are never mutated.
    Examples: InMemoryRecordStore.
    """

    @property
    def version(self) -> int:
        """Counter that changes every time the collection is replaced."""
        ...

    def replace(self, records: Sequence[LogRecord]) -> None:
        """Replace the stored records."""
        ...

    def read(self) -> Sequence[LogRecord]:
        """Return the stored records in their original order."""
        ...


@runtime_checkable
class StatsStorePort(Protocol):
    """Port for the externally supplied global stats snapshot."""

    @property
    def version(self) -> int:
        """Counter that changes every time the snapshot is replaced."""
        ...

    def replace(self, stats: GlobalStats | None) -> None:
        """Replace the snapshot. None means no snapshot is available."""
        ...

    def current(self) -> GlobalStats | None:
        """Return the current snapshot, if any."""
        ...


@runtime_checkable
class TimerHandle(Protocol):
    """A pending deferred callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


@runtime_checkable
class SchedulerPort(Protocol):
    """Port for scheduling deferred callbacks.

    Examples: AsyncioScheduler, ManualScheduler.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` time units."""
        ...
