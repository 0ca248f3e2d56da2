"""
Injectable clocks for timer-driven components.

Every component that waits (render coalescing, search debounce) schedules
its callbacks through a Clock instead of creating timers directly, so the
host decides which event loop drives them and tests can advance virtual time.
"""

import asyncio
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Protocol, Set

from PyQt6.QtCore import QTimer

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Handle returned by Clock.call_later()."""

    def cancel(self) -> None:
        ...


class Clock(ABC):
    """Schedules single-shot callbacks after a delay in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """
        Schedule callback to run once after delay_ms.

        Args:
            delay_ms: Delay in milliseconds
            callback: Zero-argument callable

        Returns:
            Handle whose cancel() prevents the callback from running
        """
        pass


class AsyncioClock(Clock):
    """Clock backed by the running asyncio event loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class _QtTimerHandle:

    def __init__(self, clock: 'QtTimerClock', timer: QTimer):
        self._clock = clock
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()
        self._clock._release(self._timer)


class QtTimerClock(Clock):
    """
    Clock backed by single-shot QTimers.

    Requires a running Qt event loop. Active timers are retained by the clock
    until they fire or are cancelled.
    """

    def __init__(self):
        self._active: Set[QTimer] = set()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = QTimer()
        timer.setSingleShot(True)

        def fire():
            self._release(timer)
            callback()

        timer.timeout.connect(fire)
        self._active.add(timer)
        timer.start(delay_ms)
        return _QtTimerHandle(self, timer)

    def _release(self, timer: QTimer) -> None:
        self._active.discard(timer)

    @property
    def active_count(self) -> int:
        return len(self._active)


class _ManualTimer:

    def __init__(self, deadline_ms: int, order: int, callback: Callable[[], None]):
        self.deadline_ms = deadline_ms
        self.order = order
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock(Clock):
    """
    Virtual-time clock.

    Nothing fires until advance() is called; callbacks then run in deadline
    order, with now_ms set to each callback's deadline while it runs.

    Usage:
        clock = ManualClock()
        scheduler = RenderScheduler(render, clock=clock)
        scheduler.request_render()
        clock.advance(100)  # render fires here
    """

    def __init__(self):
        self.now_ms = 0
        self._timers: List[_ManualTimer] = []
        self._order = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(self.now_ms + delay_ms, next(self._order), callback)
        self._timers.append(timer)
        return timer

    def advance(self, delay_ms: int) -> None:
        """Move virtual time forward, firing every timer that comes due."""
        target = self.now_ms + delay_ms
        while True:
            due = [t for t in self._timers if not t.cancelled and t.deadline_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.deadline_ms, t.order))
            self._timers.remove(timer)
            self.now_ms = timer.deadline_ms
            timer.callback()
        self.now_ms = target
        self._timers = [t for t in self._timers if not t.cancelled]

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)
