"""Storage adapters implementing core ports."""

from logscope.adapters.storage.in_memory import (
    InMemoryRecordStore,
    InMemoryStatsStore,
)

__all__ = [
    "InMemoryRecordStore",
    "InMemoryStatsStore",
]
