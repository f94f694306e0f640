"""In-memory analytics for access-log records.

Example:
    ```python
    from logscope import (
        DashboardSession,
        InMemoryRecordStore,
        LogPipeline,
        ManualScheduler,
    )

    store = InMemoryRecordStore(records)
    session = DashboardSession(LogPipeline(store), ManualScheduler())
    view = session.view()
    ```
"""

from logscope.adapters.feeds import (
    FeedResult,
    FeedStatus,
    fetch_global_stats,
    fetch_records,
    refresh,
)
from logscope.adapters.scheduling import AsyncioScheduler, ManualScheduler
from logscope.adapters.storage import InMemoryRecordStore, InMemoryStatsStore
from logscope.core.aggregation import aggregate_top_n, cardinality
from logscope.core.config import PipelineConfig
from logscope.core.debounce import DebounceCoordinator
from logscope.core.filtering import filter_records
from logscope.core.models import (
    AggregateBucket,
    DashboardView,
    DateInterval,
    FilterCriteria,
    FilteredStats,
    GlobalStats,
    LogRecord,
    Page,
    PageRequest,
    SortSpec,
)
from logscope.core.pagination import paginate, total_pages
from logscope.core.pipeline import LogPipeline
from logscope.core.session import DashboardSession
from logscope.core.sorting import sort_records

__all__ = [
    "AggregateBucket",
    "AsyncioScheduler",
    "DashboardSession",
    "DashboardView",
    "DateInterval",
    "DebounceCoordinator",
    "FeedResult",
    "FeedStatus",
    "FilterCriteria",
    "FilteredStats",
    "GlobalStats",
    "InMemoryRecordStore",
    "InMemoryStatsStore",
    "LogPipeline",
    "LogRecord",
    "ManualScheduler",
    "Page",
    "PageRequest",
    "PipelineConfig",
    "SortSpec",
    "aggregate_top_n",
    "cardinality",
    "fetch_global_stats",
    "fetch_records",
    "filter_records",
    "paginate",
    "refresh",
    "sort_records",
    "total_pages",
]
