"""Pausable countdown timers on top of a single-threaded scheduler.

The engine never sleeps or spawns threads. It asks a *clock* for one-shot
callbacks. Any object with ``time()`` (seconds) and
``call_later(delay, callback)`` returning a cancellable handle will do: a
running :mod:`asyncio` event loop qualifies as-is, and :class:`ManualClock`
offers the same surface in model time for tests and headless runs.
"""

from __future__ import annotations

import enum
import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Handle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Subset of :class:`asyncio.AbstractEventLoop` the engine relies on."""

    def time(self) -> float: ...

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any,
    ) -> Handle: ...


class ManualHandle:
    """Cancellable entry in a :class:`ManualClock` queue."""

    __slots__ = ("when", "_callback", "_args", "_cancelled")

    def __init__(
        self, when: float, callback: Callable[..., Any], args: tuple,
    ) -> None:
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        self._callback(*self._args)


class ManualClock:
    """Deterministic clock whose time only moves when :meth:`advance` is called.

    Callbacks run in deadline order; ties run in scheduling order.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any,
    ) -> ManualHandle:
        handle = ManualHandle(self._now + max(delay, 0.0), callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled, non-cancelled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled())

    def advance(self, seconds: float) -> int:
        """Move time forward, running every callback that falls due.

        Returns the number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("Cannot move a clock backwards.")
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = when
            handle._run()
            ran += 1
        self._now = target
        return ran

    def run_pending(self) -> int:
        """Run callbacks already due without moving time."""
        return self.advance(0.0)


class TimerState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUSPENDED = "suspended"


class Countdown:
    """One logical timer whose remaining time survives pause and resume.

    ``schedule`` starts it for a full duration, ``cancel`` stops it and
    returns what was left, and ``reschedule`` arms it again for the stored
    (or an explicit) remaining duration. ``suspend`` is ``cancel`` that
    remembers the timer should come back on resume. Remaining time is not
    clamped when stopped; a timer that was already due fires immediately
    when rescheduled.
    """

    def __init__(
        self, clock: Clock, callback: Callable[[], None], name: str = "timer",
    ) -> None:
        self.clock = clock
        self.callback = callback
        self.name = name
        self.state = TimerState.IDLE
        self.remaining_ms = 0.0
        self._started_at = 0.0
        self._handle: Handle | None = None

    @property
    def running(self) -> bool:
        return self.state == TimerState.RUNNING

    @property
    def suspended(self) -> bool:
        return self.state == TimerState.SUSPENDED

    def time_left_ms(self) -> float:
        """Remaining milliseconds as of now."""
        if self.running:
            return self.remaining_ms - self._elapsed_ms()
        return self.remaining_ms

    def schedule(self, duration_ms: float) -> Countdown:
        """(Re)start for a full duration, dropping any pending callback."""
        self._drop_handle()
        self.remaining_ms = float(duration_ms)
        self._arm()
        return self

    def cancel(self) -> float:
        """Stop without firing; return the remaining milliseconds."""
        if self.running:
            self.remaining_ms -= self._elapsed_ms()
            self._drop_handle()
        self.state = TimerState.IDLE
        return self.remaining_ms

    def suspend(self) -> float:
        """Stop a running timer and mark it for :meth:`reschedule`."""
        if not self.running:
            return self.remaining_ms
        remaining = self.cancel()
        self.state = TimerState.SUSPENDED
        logger.debug("Suspended %s with %.0f ms left.", self.name, remaining)
        return remaining

    def reschedule(self, remaining_ms: float | None = None) -> Countdown:
        """Arm again for the stored remaining time against a fresh start."""
        self._drop_handle()
        if remaining_ms is not None:
            self.remaining_ms = float(remaining_ms)
        self._arm()
        return self

    def _arm(self) -> None:
        self._started_at = self.clock.time()
        self._handle = self.clock.call_later(
            max(self.remaining_ms, 0.0) / 1000.0, self._fire,
        )
        self.state = TimerState.RUNNING

    def _elapsed_ms(self) -> float:
        return (self.clock.time() - self._started_at) * 1000.0

    def _drop_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.remaining_ms = 0.0
        self.state = TimerState.IDLE
        self.callback()


class TimerGroup:
    """The set of countdowns the pause controller freezes together."""

    def __init__(self) -> None:
        self._timers: list[Countdown] = []

    def add(self, timer: Countdown) -> Countdown:
        if timer not in self._timers:
            self._timers.append(timer)
        return timer

    def discard(self, timer: Countdown) -> None:
        timer.cancel()
        if timer in self._timers:
            self._timers.remove(timer)

    def __iter__(self):
        return iter(list(self._timers))

    def __len__(self) -> int:
        return len(self._timers)

    def live(self) -> list[Countdown]:
        """Timers currently running or suspended."""
        return [t for t in self._timers if t.state != TimerState.IDLE]

    def suspend_all(self) -> int:
        """Suspend every running timer; return how many were suspended."""
        count = 0
        for timer in list(self._timers):
            if timer.running:
                timer.suspend()
                count += 1
        return count

    def resume_all(self) -> int:
        """Reschedule every suspended timer with its remaining time."""
        suspended = [t for t in self._timers if t.suspended]
        for timer in suspended:
            timer.reschedule()
        return len(suspended)

    def cancel_all(self) -> None:
        """Cancel everything and forget the timers."""
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
