"""
Core timing utilities.

Clocks, the trailing debounce timer and the render-coalescing scheduler.
No domain-specific logic.
"""

from .clock import Clock, TimerHandle, AsyncioClock, QtTimerClock, ManualClock
from .debounce_timer import DebounceTimer
from .render_scheduler import RenderScheduler, RenderState

__all__ = [
    "Clock",
    "TimerHandle",
    "AsyncioClock",
    "QtTimerClock",
    "ManualClock",
    "DebounceTimer",
    "RenderScheduler",
    "RenderState",
]
