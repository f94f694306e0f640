"""Tests for scheduler adapters."""

import asyncio

import pytest

from logscope.adapters.scheduling import AsyncioScheduler, ManualScheduler
from logscope.core.ports import SchedulerPort, TimerHandle

pytestmark = [pytest.mark.unit, pytest.mark.tier(1)]


class TestManualScheduler:
    """Tests for ManualScheduler."""

    def test_implements_scheduler_port(self) -> None:
        """ManualScheduler must satisfy SchedulerPort protocol."""
        assert isinstance(ManualScheduler(), SchedulerPort)

    def test_timer_implements_timer_handle(self) -> None:
        """Returned timers satisfy TimerHandle."""
        timer = ManualScheduler().call_later(1, lambda: None)
        assert isinstance(timer, TimerHandle)

    def test_fires_when_due(self) -> None:
        """Callbacks run once the clock reaches their deadline."""
        scheduler = ManualScheduler()
        fired: list[float] = []
        scheduler.call_later(10, lambda: fired.append(scheduler.now))
        scheduler.advance(9)
        assert fired == []
        scheduler.advance(1)
        assert fired == [10]

    def test_fires_in_deadline_order(self) -> None:
        """Timers run by deadline, then by scheduling order."""
        scheduler = ManualScheduler()
        fired: list[str] = []
        scheduler.call_later(20, lambda: fired.append("late"))
        scheduler.call_later(10, lambda: fired.append("early"))
        scheduler.call_later(10, lambda: fired.append("early-second"))
        scheduler.advance(50)
        assert fired == ["early", "early-second", "late"]
        assert scheduler.now == 50

    def test_cancelled_timer_does_not_fire(self) -> None:
        """Cancelled timers are skipped."""
        scheduler = ManualScheduler()
        fired: list[int] = []
        timer = scheduler.call_later(5, lambda: fired.append(1))
        timer.cancel()
        timer.cancel()
        scheduler.advance(10)
        assert fired == []
        assert scheduler.pending == 0

    def test_callback_may_schedule_more_work(self) -> None:
        """Timers armed by a callback fire within the same advance if due."""
        scheduler = ManualScheduler()
        fired: list[float] = []

        def first() -> None:
            fired.append(scheduler.now)
            scheduler.call_later(5, lambda: fired.append(scheduler.now))

        scheduler.call_later(5, first)
        scheduler.advance(20)
        assert fired == [5, 10]

    def test_debounce_burst_keeps_queue_bounded(self) -> None:
        """Re-arming after each cancel never accumulates dead timers."""
        scheduler = ManualScheduler()
        timer = scheduler.call_later(300, lambda: None)
        for _ in range(1000):
            timer.cancel()
            timer = scheduler.call_later(300, lambda: None)
        assert scheduler.queued == 1
        assert scheduler.pending == 1

    def test_cancelled_timers_behind_live_head_are_compacted(self) -> None:
        """Dead timers queued behind a live one are dropped once they dominate."""
        scheduler = ManualScheduler()
        fired: list[str] = []
        scheduler.call_later(1, lambda: fired.append("head"))
        for _ in range(100):
            scheduler.call_later(50, lambda: fired.append("dead")).cancel()
        assert scheduler.queued <= 3
        assert scheduler.pending == 1
        scheduler.advance(100)
        assert fired == ["head"]

    def test_clock_cannot_go_backwards(self) -> None:
        """Moving the clock back is an error."""
        scheduler = ManualScheduler(now=100)
        with pytest.raises(ValueError, match="backwards"):
            scheduler.advance_to(50)


class TestAsyncioScheduler:
    """Tests for AsyncioScheduler."""

    def test_implements_scheduler_port(self) -> None:
        """AsyncioScheduler must satisfy SchedulerPort protocol."""
        assert isinstance(AsyncioScheduler(), SchedulerPort)

    async def test_runs_callback_after_delay(self) -> None:
        """Callbacks run on the running event loop."""
        scheduler = AsyncioScheduler()
        done = asyncio.Event()
        scheduler.call_later(0.01, done.set)
        await asyncio.wait_for(done.wait(), timeout=1)
        assert done.is_set()

    async def test_cancel_prevents_callback(self) -> None:
        """Cancelled asyncio timers never run."""
        scheduler = AsyncioScheduler()
        fired: list[int] = []
        handle = scheduler.call_later(0.01, lambda: fired.append(1))
        handle.cancel()
        await asyncio.sleep(0.05)
        assert fired == []
