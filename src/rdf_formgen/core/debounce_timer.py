"""Trailing debounce over an injectable Clock."""

from typing import Callable, Optional

from .clock import AsyncioClock, Clock, TimerHandle


class DebounceTimer:
    """
    Fires handler once delay_ms after the last trigger().

    Without a clock the running asyncio loop drives the timer.

    Usage:
        self._debounce = DebounceTimer(delay_ms=300, handler=self._do_lookup)

        def on_text_changed(self):
            self._debounce.trigger()  # Re-arms timer
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None], clock: Optional[Clock] = None):
        self._delay_ms = delay_ms
        self._handler = handler
        self._clock = clock or AsyncioClock()
        self._handle: Optional[TimerHandle] = None

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def trigger(self):
        """Start the quiet period again, dropping any pending fire."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._clock.call_later(self._delay_ms, self._fire)

    def cancel(self):
        """Drop the pending fire, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def force(self):
        """Cancel timer and fire handler immediately."""
        self.cancel()
        self._handler()

    def _fire(self):
        self._handle = None
        self._handler()
