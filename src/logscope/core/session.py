"""Interactive dashboard state driving a LogPipeline.

The session owns the user-selected parameters: the debounced search query,
the date interval, the unique-address toggle, the sort and the page index.
Views are always recomputed from these through the pipeline's memo cells.
"""

from datetime import date

from logscope.core.debounce import DebounceCoordinator
from logscope.core.models import (
    DashboardView,
    DateInterval,
    FilterCriteria,
    SortField,
    SortSpec,
)
from logscope.core.pagination import next_page, previous_page
from logscope.core.pipeline import LogPipeline
from logscope.core.ports import SchedulerPort
from logscope.core.sorting import toggle_sort


class DashboardSession:
    """User-facing state for one dashboard view.

    Args:
        pipeline: Pipeline computing the derived values.
        scheduler: Scheduler for the query debounce timer.
    """

    def __init__(self, pipeline: LogPipeline, scheduler: SchedulerPort) -> None:
        self.pipeline = pipeline
        self._query = DebounceCoordinator(
            scheduler, delay=pipeline.config.debounce_delay
        )
        self._start: date | None = None
        self._end: date | None = None
        self._unique = False
        self._sort = SortSpec()
        self._page_index = 1

    @property
    def query(self) -> str:
        """Query as typed, possibly not yet committed."""
        return self._query.raw

    @property
    def committed_query(self) -> str:
        return self._query.committed

    @property
    def pending(self) -> bool:
        """True while a typed query is waiting for the debounce timer."""
        return self._query.pending

    @property
    def sort(self) -> SortSpec:
        return self._sort

    @property
    def page_index(self) -> int:
        return self._page_index

    def set_query(self, value: str) -> None:
        """Accept a keystroke's worth of query text."""
        self._query.submit(value)

    def set_dates(self, start: date | None, end: date | None) -> None:
        """Set either bound of the date filter.

        The interval only applies once both bounds are set.
        """
        self._start = start
        self._end = end

    def clear_dates(self) -> None:
        """Remove the date filter."""
        self._start = None
        self._end = None

    def set_unique_addresses(self, enabled: bool) -> None:
        """Toggle first-occurrence-per-address filtering."""
        self._unique = enabled

    def sort_by(self, field: SortField) -> None:
        """Select a sort column, then return to the first page."""
        self._sort = toggle_sort(self._sort, field)
        self._page_index = 1

    def go_to_page(self, page_index: int) -> None:
        """Jump to a page. Out-of-range indexes render an empty page."""
        self._page_index = page_index

    def previous_page(self) -> None:
        self._page_index = previous_page(self._page_index)

    def next_page(self) -> None:
        pages = self.view().page.total_pages
        self._page_index = next_page(self._page_index, pages)

    def criteria(self) -> FilterCriteria:
        """Filter criteria built from the committed state."""
        interval = None
        if self._start is not None and self._end is not None:
            interval = DateInterval(self._start, self._end)
        return FilterCriteria(
            query=self._query.committed,
            interval=interval,
            dedup_by_address=self._unique,
        )

    def view(self) -> DashboardView:
        """Compute the current dashboard view."""
        return self.pipeline.view(
            self.criteria(),
            self._sort,
            self._page_index,
            pending=self._query.pending,
        )

    def close(self) -> None:
        """Tear down the session, cancelling any pending debounce timer."""
        self._query.close()
