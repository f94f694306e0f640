"""BDD step definitions for dashboard features.

Steps share state through the ``ctx`` fixture. Time is driven by a
ManualScheduler so debounce scenarios are deterministic.
"""

from dataclasses import dataclass, field
from datetime import date

import pytest
from pytest_bdd import given, parsers, then, when

from logscope.adapters.scheduling import ManualScheduler
from logscope.adapters.storage.in_memory import InMemoryRecordStore
from logscope.core.config import PipelineConfig
from logscope.core.models import DashboardView, LogRecord
from logscope.core.pipeline import LogPipeline
from logscope.core.session import DashboardSession


@dataclass
class DashboardScenarioContext:
    """Shared state between steps in a dashboard scenario."""

    records: list[LogRecord] = field(default_factory=list)
    scheduler: ManualScheduler = field(default_factory=ManualScheduler)
    session: DashboardSession | None = None

    def start(self, config: PipelineConfig) -> None:
        pipeline = LogPipeline(InMemoryRecordStore(self.records), config=config)
        self.session = DashboardSession(pipeline, self.scheduler)

    @property
    def current(self) -> DashboardSession:
        assert self.session is not None, "no dashboard session started"
        return self.session

    def view(self) -> DashboardView:
        return self.current.view()


@pytest.fixture
def ctx() -> DashboardScenarioContext:
    """Fresh scenario context for each test."""
    return DashboardScenarioContext()


def _day(value: str) -> date | None:
    return date.fromisoformat(value) if value else None


# === Setup Steps ===
@given("the dashboard records")
def step_dashboard_records(ctx: DashboardScenarioContext, dashboard_records) -> None:
    ctx.records = list(dashboard_records)


@given("no records")
def step_no_records(ctx: DashboardScenarioContext) -> None:
    ctx.records = []


@given(
    parsers.parse(
        '{many:d} records from "{common}" and {few:d} record from "{rare}"'
    )
)
def step_mixed_countries(
    ctx: DashboardScenarioContext,
    make_record,
    many: int,
    common: str,
    few: int,
    rare: str,
) -> None:
    ctx.records = [
        make_record(address=f"10.1.0.{i}", country=common) for i in range(many)
    ] + [make_record(address=f"10.2.0.{i}", country=rare) for i in range(few)]


@given(parsers.parse("a dashboard session with a debounce delay of {delay:d} ms"))
def step_session_with_delay(ctx: DashboardScenarioContext, delay: int) -> None:
    ctx.start(PipelineConfig(debounce_delay=delay))


@given(parsers.parse("a dashboard session with page size {size:d}"))
def step_session_with_page_size(ctx: DashboardScenarioContext, size: int) -> None:
    ctx.start(PipelineConfig(page_size=size))


# === Query Steps ===
@when(parsers.parse('the user types "{value}" at {moment:d} ms'))
def step_type(ctx: DashboardScenarioContext, value: str, moment: int) -> None:
    ctx.scheduler.advance_to(moment)
    ctx.current.set_query(value)


@when(parsers.parse("the clock reaches {moment:d} ms"))
def step_clock(ctx: DashboardScenarioContext, moment: int) -> None:
    ctx.scheduler.advance_to(moment)


@when("the session is closed")
def step_close(ctx: DashboardScenarioContext) -> None:
    ctx.current.close()


@then(parsers.re(r'the committed query is "(?P<value>[^"]*)"'))
def step_committed_query(ctx: DashboardScenarioContext, value: str) -> None:
    assert ctx.current.committed_query == value


@then("the view is pending")
def step_pending(ctx: DashboardScenarioContext) -> None:
    assert ctx.view().pending


@then("the view is not pending")
def step_not_pending(ctx: DashboardScenarioContext) -> None:
    assert not ctx.view().pending


# === Filter Steps ===
@when(
    parsers.re(
        r'the user selects dates from "(?P<start>[^"]*)" to "(?P<end>[^"]*)"'
    )
)
def step_dates(ctx: DashboardScenarioContext, start: str, end: str) -> None:
    ctx.current.set_dates(_day(start), _day(end))


@when("the user enables unique addresses")
def step_unique(ctx: DashboardScenarioContext) -> None:
    ctx.current.set_unique_addresses(True)


# === Sort and Page Steps ===
@when(parsers.parse('the user sorts by "{field_name}"'))
def step_sort(ctx: DashboardScenarioContext, field_name: str) -> None:
    ctx.current.sort_by(field_name)  # type: ignore[arg-type]


@when(parsers.re(r"the user moves to the next page(?: (?P<times>\d+) times)?$"))
def step_next_page(ctx: DashboardScenarioContext, times: str | None) -> None:
    for _ in range(int(times or 1)):
        ctx.current.next_page()


@when(parsers.re(r"the user moves to the previous page(?: (?P<times>\d+) times)?$"))
def step_previous_page(ctx: DashboardScenarioContext, times: str | None) -> None:
    for _ in range(int(times or 1)):
        ctx.current.previous_page()


@then(parsers.parse('the sort is "{field_name}" "{direction}"'))
def step_sort_is(
    ctx: DashboardScenarioContext, field_name: str, direction: str
) -> None:
    assert ctx.current.sort.field == field_name
    assert ctx.current.sort.direction == direction


@then(parsers.parse("the current page is {page:d}"))
def step_current_page(ctx: DashboardScenarioContext, page: int) -> None:
    assert ctx.current.page_index == page


# === View Assertions ===
@then(parsers.parse('the page shows addresses "{addresses}"'))
def step_page_addresses(ctx: DashboardScenarioContext, addresses: str) -> None:
    expected = [a.strip() for a in addresses.split(",")]
    assert [r.address for r in ctx.view().page.items] == expected


@then(parsers.parse("the view shows {count:d} records"))
def step_view_count(ctx: DashboardScenarioContext, count: int) -> None:
    assert ctx.view().page.total_items == count


@then(parsers.parse("the view reports {count:d} records on {pages:d} pages"))
def step_view_pages(ctx: DashboardScenarioContext, count: int, pages: int) -> None:
    page = ctx.view().page
    assert page.total_items == count
    assert page.total_pages == pages


@then(
    parsers.parse(
        "the filtered stats show {hits:d} hits from {addresses:d} addresses "
        "in {countries:d} countries"
    )
)
def step_filtered_stats(
    ctx: DashboardScenarioContext, hits: int, addresses: int, countries: int
) -> None:
    stats = ctx.view().filtered_stats
    assert stats.total_hits == hits
    assert stats.unique_address_count == addresses
    assert stats.unique_country_count == countries


@then(parsers.parse('the top countries are "{buckets}"'))
def step_top_countries(ctx: DashboardScenarioContext, buckets: str) -> None:
    expected = []
    for item in buckets.split(","):
        key, count = item.strip().rsplit(":", 1)
        expected.append((key, int(count)))
    assert [(e.key, e.count) for e in ctx.view().top_buckets] == expected


@then("the legend is empty")
def step_legend_empty(ctx: DashboardScenarioContext) -> None:
    assert ctx.view().legend == ()


@then(parsers.parse('the legend lists "{key}" at {percent:f} percent'))
def step_legend_lists(ctx: DashboardScenarioContext, key: str, percent: float) -> None:
    assert [(e.key, e.percentage) for e in ctx.view().legend] == [(key, percent)]
