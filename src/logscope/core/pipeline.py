"""Memoized analytics pipeline over a record store.

Data flows one way: store -> filter -> (sort -> paginate) and
(aggregate, stats). Each derived value is cached against the inputs it
depends on, so unrelated changes (a new page index, say) do not re-filter
or re-sort the whole collection.
"""

from logscope.core.aggregation import (
    aggregate_top_n,
    date_range,
    filtered_stats,
    legend,
    summarize_global,
    with_percentages,
)
from logscope.core.config import PipelineConfig
from logscope.core.filtering import filter_records
from logscope.core.memo import MemoCell
from logscope.core.models import (
    AggregateBucket,
    DashboardView,
    DateRange,
    FilterCriteria,
    FilteredStats,
    GlobalSummary,
    LogRecord,
    Page,
    PageRequest,
    SortSpec,
)
from logscope.core.pagination import build_page
from logscope.core.ports import RecordStorePort, StatsStorePort
from logscope.core.sorting import sort_records


class LogPipeline:
    """Derive filtered, sorted, paginated and aggregated views of records.

    Args:
        records: Store holding the raw record collection.
        stats: Store holding the external stats snapshot (optional).
        config: Fixed pipeline parameters.
    """

    def __init__(
        self,
        records: RecordStorePort,
        stats: StatsStorePort | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.records = records
        self.stats = stats
        self.config = config or PipelineConfig()
        self._filtered: MemoCell[tuple[LogRecord, ...]] = MemoCell("filtered")
        self._sorted: MemoCell[tuple[LogRecord, ...]] = MemoCell("sorted")
        self._page: MemoCell[Page] = MemoCell("page")
        self._buckets: MemoCell[tuple[AggregateBucket, ...]] = MemoCell("buckets")
        self._stats: MemoCell[FilteredStats] = MemoCell("filtered_stats")
        self._global: MemoCell[GlobalSummary] = MemoCell("global_summary")
        self._range: MemoCell[DateRange | None] = MemoCell("date_range")

    def filtered(self, criteria: FilterCriteria) -> tuple[LogRecord, ...]:
        """Records matching the criteria, in stored order."""
        key = (self.records.version, criteria)
        return self._filtered.get(
            key, lambda: tuple(filter_records(self.records.read(), criteria))
        )

    def sorted_records(
        self, criteria: FilterCriteria, sort: SortSpec
    ) -> tuple[LogRecord, ...]:
        """Filtered records in sort order."""
        key = (self.records.version, criteria, sort)
        return self._sorted.get(
            key, lambda: tuple(sort_records(self.filtered(criteria), sort))
        )

    def page(
        self, criteria: FilterCriteria, sort: SortSpec, page_index: int
    ) -> Page:
        """One page of the sorted, filtered records."""
        request = PageRequest(page_index, self.config.page_size)
        key = (self.records.version, criteria, sort, request)
        return self._page.get(
            key, lambda: build_page(self.sorted_records(criteria, sort), request)
        )

    def top_buckets(self, criteria: FilterCriteria) -> tuple[AggregateBucket, ...]:
        """Most frequent values of the configured aggregate field."""
        key = (self.records.version, criteria)
        return self._buckets.get(
            key,
            lambda: tuple(
                aggregate_top_n(
                    self.filtered(criteria),
                    self.config.aggregate_field,
                    self.config.top_n,
                )
            ),
        )

    def filtered_stats(self, criteria: FilterCriteria) -> FilteredStats:
        """Hit, address and country counts over the filtered records."""
        key = (self.records.version, criteria)
        return self._stats.get(key, lambda: filtered_stats(self.filtered(criteria)))

    def global_summary(self) -> GlobalSummary:
        """Display values for the external stats snapshot."""
        if self.stats is None:
            return GlobalSummary()
        stats = self.stats
        return self._global.get(
            stats.version, lambda: summarize_global(stats.current())
        )

    def date_range(self) -> DateRange | None:
        """Bounds of the unfiltered records."""
        return self._range.get(
            self.records.version, lambda: date_range(self.records.read())
        )

    def view(
        self,
        criteria: FilterCriteria,
        sort: SortSpec,
        page_index: int = 1,
        pending: bool = False,
    ) -> DashboardView:
        """Compute every derived value for one render."""
        total = len(self.filtered(criteria))
        buckets = self.top_buckets(criteria)
        return DashboardView(
            page=self.page(criteria, sort, page_index),
            filtered_stats=self.filtered_stats(criteria),
            global_summary=self.global_summary(),
            top_buckets=tuple(with_percentages(buckets, total)),
            legend=tuple(legend(buckets, total, self.config.legend_threshold)),
            date_range=self.date_range(),
            criteria=criteria,
            sort=sort,
            pending=pending,
        )
