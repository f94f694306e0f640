"""Scheduler adapters for deferred callbacks.

``AsyncioScheduler`` defers work on a running event loop.
``ManualScheduler`` keeps a logical clock that only moves when ``advance``
is called, which makes timing behaviour deterministic.
"""

import asyncio
import heapq
from collections.abc import Callable
from dataclasses import dataclass, field


class AsyncioScheduler:
    """SchedulerPort backed by an asyncio event loop.

    Delays are in seconds. If no loop is given, the running loop is looked
    up on each call, so the scheduler must be used from async code.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


@dataclass(order=True)
class ManualTimer:
    """Timer scheduled on a ManualScheduler."""

    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """SchedulerPort driven by an explicit logical clock.

    Example:
        ```python
        scheduler = ManualScheduler()
        scheduler.call_later(300, lambda: print("fired"))
        scheduler.advance(300)  # prints "fired"
        ```
    """

    def __init__(self, now: float = 0.0) -> None:
        self._now = now
        self._queue: list[ManualTimer] = []
        self._seq = 0

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of armed, uncancelled timers."""
        return sum(1 for t in self._queue if not t.cancelled)

    @property
    def queued(self) -> int:
        """Number of timers held in the queue, cancelled ones included."""
        return len(self._queue)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        """Run ``callback`` once the clock has advanced by ``delay``."""
        self._prune()
        timer = ManualTimer(self._now + delay, self._seq, callback)
        self._seq += 1
        heapq.heappush(self._queue, timer)
        return timer

    def _prune(self) -> None:
        """Drop cancelled timers so the queue stays bounded by live ones."""
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
        cancelled = sum(1 for t in self._queue if t.cancelled)
        if cancelled * 2 > len(self._queue):
            self._queue = [t for t in self._queue if not t.cancelled]
            heapq.heapify(self._queue)

    def advance(self, delta: float) -> None:
        """Move the clock forward, firing every timer that comes due."""
        self.advance_to(self._now + delta)

    def advance_to(self, moment: float) -> None:
        """Move the clock to ``moment``, firing due timers in order."""
        if moment < self._now:
            raise ValueError("cannot move the clock backwards")
        while self._queue and self._queue[0].when <= moment:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = timer.when
            timer.callback()
        self._now = moment
