"""Debounce coordinator for the free-text query.

Raw query values arrive once per keystroke. The coordinator holds at most
one pending timer; each new value cancels it and arms a fresh one. Only a
timer that fires uninterrupted commits its value.

    Idle --submit--> Pending --submit--> Pending (timer restarted)
    Pending --timer fires--> Idle (committed value updated)
    Pending --cancel/close--> Idle (nothing committed)
"""

import logging
from collections.abc import Callable

from logscope.core.ports import SchedulerPort, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.3


class DebounceCoordinator:
    """Delay committing a rapidly changing value until input pauses.

    Args:
        scheduler: Scheduler used to arm the commit timer.
        delay: Time units to wait after the last change.
        initial: Starting raw and committed value.
        on_commit: Optional callback invoked with each committed value.
    """

    def __init__(
        self,
        scheduler: SchedulerPort,
        delay: float = DEFAULT_DELAY,
        initial: str = "",
        on_commit: Callable[[str], None] | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self._scheduler = scheduler
        self._delay = delay
        self._raw = initial
        self._committed = initial
        self._on_commit = on_commit
        self._timer: TimerHandle | None = None
        self._closed = False

    @property
    def raw(self) -> str:
        """Most recently submitted value."""
        return self._raw

    @property
    def committed(self) -> str:
        """Value last admitted downstream."""
        return self._committed

    @property
    def pending(self) -> bool:
        """True while a commit timer is armed."""
        return self._timer is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, value: str) -> None:
        """Record a new raw value and restart the commit timer.

        Submitting the current raw value again is ignored and does not
        restart the timer, matching the original dashboard, whose search
        effect only re-ran when the query text changed. After ``close``
        every submission is ignored.
        """
        if self._closed or value == self._raw:
            return
        self._raw = value
        self._cancel_timer()
        self._timer = self._scheduler.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending value without committing it."""
        self._cancel_timer()
        self._raw = self._committed

    def close(self) -> None:
        """Tear down: cancel any pending timer and refuse further input."""
        self._cancel_timer()
        self._closed = True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        if self._closed:
            return
        self._timer = None
        self._committed = self._raw
        logger.debug("Committed query %r", self._committed)
        if self._on_commit is not None:
            self._on_commit(self._committed)
