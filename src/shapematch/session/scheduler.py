"""
Trailing-edge throttle for recomputes.

States:
    IDLE     no recompute scheduled
    PENDING  one recompute scheduled, not yet run

The first input while IDLE schedules a single fire after a fixed delay.
Further inputs while PENDING do not schedule anything; the fire reads the
latest state when it runs, so a burst of N inputs costs one recompute.

Timers are injected as a ``call_later(delay, callback)`` function returning a
handle with ``cancel()``. The default binds to the running asyncio event loop.
Tests can pass a fake timer, or simply call ``flush()``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

from ..core.types import DEFAULT_THROTTLE_MS, SchedulerState

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


CallLater = Callable[[float, Callable[[], None]], TimerHandle]


def event_loop_call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule on the running asyncio loop (raises RuntimeError if none is running)."""
    loop = asyncio.get_running_loop()
    return loop.call_later(delay, callback)


class UpdateScheduler:
    """
    Coalesces bursts of input events into one deferred callback.

    At most one fire is outstanding at any time. There is no single-flight
    guard around the callback itself: it is assumed to finish well within
    one interval.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        delay_seconds: float = DEFAULT_THROTTLE_MS / 1000.0,
        call_later: Optional[CallLater] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            callback: Work to run when the interval elapses
            delay_seconds: Throttle interval
            call_later: Timer factory; defaults to the running event loop
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")

        self._callback = callback
        self.delay_seconds = delay_seconds
        self._call_later = call_later or event_loop_call_later
        self._state = SchedulerState.IDLE
        self._handle: Optional[TimerHandle] = None
        self.requests = 0
        self.fires = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is SchedulerState.PENDING

    def request(self) -> bool:
        """
        Signal one input event.

        Returns:
            True if this call scheduled a fire, False if one was already pending
        """
        self.requests += 1

        if self._state is SchedulerState.PENDING:
            return False

        self._handle = self._call_later(self.delay_seconds, self._fire)
        self._state = SchedulerState.PENDING
        logger.debug("Recompute scheduled in %.3fs", self.delay_seconds)
        return True

    def flush(self) -> bool:
        """
        Run a pending fire now instead of waiting for the timer.

        Returns:
            True if a pending fire ran, False if the scheduler was idle
        """
        if self._state is not SchedulerState.PENDING:
            return False

        self._cancel_handle()
        self._fire()
        return True

    def cancel(self) -> bool:
        """Drop a pending fire without running it."""
        if self._state is not SchedulerState.PENDING:
            return False

        self._cancel_handle()
        self._state = SchedulerState.IDLE
        logger.debug("Pending recompute cancelled")
        return True

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        # Back to IDLE before running, so input arriving from inside the
        # callback schedules a fresh fire.
        self._handle = None
        self._state = SchedulerState.IDLE
        self.fires += 1

        try:
            self._callback()
        except Exception:
            logger.exception("Scheduled recompute failed")
