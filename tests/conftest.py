"""Shared test fixtures for all test modules."""

import pytest

try:
    import httpx
except ImportError:
    httpx = None

from logscope.adapters.scheduling import ManualScheduler
from logscope.adapters.storage.in_memory import (
    InMemoryRecordStore,
    InMemoryStatsStore,
)
from logscope.core.models import DailyStats, GlobalStats, LogRecord
from logscope.core.pipeline import LogPipeline


@pytest.fixture
def scenario_records() -> list[LogRecord]:
    """Two hits from one address and one from another."""
    return [
        LogRecord(address="1.1.1.1", timestamp="2024-01-01T00:00:00Z", country="US"),
        LogRecord(address="1.1.1.1", timestamp="2024-01-02T00:00:00Z", country="US"),
        LogRecord(address="2.2.2.2", timestamp="2024-01-01T12:00:00Z", country="DE"),
    ]


@pytest.fixture
def make_record():
    """Factory fixture for records with sensible defaults."""

    def _record(
        address: str = "10.0.0.1",
        timestamp: str = "2024-03-01T10:00:00Z",
        country: str = "US",
        organization: str = "Example ISP",
        city: str = "Springfield",
        region: str = "IL",
    ) -> LogRecord:
        return LogRecord(
            address=address,
            timestamp=timestamp,
            country=country,
            organization=organization,
            city=city,
            region=region,
        )

    return _record


@pytest.fixture
def dashboard_records(make_record) -> list[LogRecord]:
    """A small mixed collection used by pipeline and adapter tests."""
    return [
        make_record("10.0.0.1", "2024-03-01T10:00:00Z", "US", "Comcast", "Denver"),
        make_record("10.0.0.2", "2024-03-02T11:00:00Z", "Germany", "Telekom", "Berlin"),
        make_record("10.0.0.1", "2024-03-03T12:00:00Z", "US", "Comcast", "Denver"),
        make_record("10.0.0.3", "2024-03-03T13:00:00Z", "France", "Orange", "Paris"),
        make_record("10.0.0.4", "not-a-date", "US", "Verizon", "Austin"),
        make_record("10.0.0.5", "2024-03-05T09:30:00Z", "Germany", "Vodafone", "Bonn"),
    ]


@pytest.fixture
def global_stats() -> GlobalStats:
    """Global stats snapshot as delivered by the stats feed."""
    return GlobalStats(
        total_hits=1200,
        unique_addresses=("10.0.0.1", "10.0.0.2", "10.0.0.3"),
        unique_countries=("US", "Germany"),
        daily=(
            ("2024-03-02", DailyStats(new_hits=40, new_unique_addresses=("10.0.0.2",))),
            (
                "2024-03-01",
                DailyStats(
                    new_hits=25,
                    new_unique_addresses=("10.0.0.1",),
                    new_unique_countries=("US",),
                ),
            ),
        ),
        last_processed_timestamp="2024-03-02T23:59:59Z",
    )


@pytest.fixture
def record_store(dashboard_records) -> InMemoryRecordStore:
    """Record store preloaded with the dashboard records."""
    return InMemoryRecordStore(dashboard_records)


@pytest.fixture
def stats_store(global_stats) -> InMemoryStatsStore:
    """Stats store preloaded with the global stats snapshot."""
    return InMemoryStatsStore(global_stats)


@pytest.fixture
def pipeline(record_store, stats_store) -> LogPipeline:
    """Pipeline over the dashboard records and global stats."""
    return LogPipeline(record_store, stats_store)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Scheduler with a logical clock starting at 0."""
    return ManualScheduler()


# === ASGI Test Fixtures ===


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Returns a callable that accepts an ASGI app and yields a client
    with ASGITransport configured.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(pipeline)
            async with asgi_test_client(app) as client:
                response = await client.get("/records")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        """Capture ASGI messages."""
        responses.append(message)

    return send, responses
