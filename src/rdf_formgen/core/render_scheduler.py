"""
Render-coalescing scheduler.

Collapses any number of redraw requests arriving within the coalescing window
into one downstream redraw. The redraw reads whatever state is current when
it fires, never a snapshot taken at request time.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from rdf_formgen.protocols.form_config import get_form_config
from .clock import Clock
from .debounce_timer import DebounceTimer

logger = logging.getLogger(__name__)


class RenderState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class RenderScheduler:
    """
    Trailing-edge redraw debounce with an explicit state machine.

    IDLE -> PENDING on request_render(); PENDING -> IDLE when the downstream
    redraw fires. Requests while PENDING re-arm the timer instead of queueing
    a second redraw.

    Args:
        render: Downstream redraw trigger, called with no arguments
        window_ms: Coalescing window (defaults to FormGenConfig.render_window_ms)
        clock: Clock driving the window (defaults to the asyncio loop)
    """

    def __init__(self, render: Callable[[], object], window_ms: Optional[int] = None,
                 clock: Optional[Clock] = None):
        if window_ms is None:
            window_ms = get_form_config().render_window_ms
        self._render = render
        self._timer = DebounceTimer(window_ms, self._fire, clock)
        self._state = RenderState.IDLE
        self.render_count = 0

    @property
    def state(self) -> RenderState:
        return self._state

    def request_render(self) -> None:
        """Schedule a redraw, re-arming the window if one is already pending."""
        self._state = RenderState.PENDING
        self._timer.trigger()

    def flush(self) -> None:
        """Fire a pending redraw immediately."""
        if self._state is RenderState.PENDING:
            self._timer.force()

    def cancel(self) -> None:
        """Drop a pending redraw without firing it."""
        self._timer.cancel()
        self._state = RenderState.IDLE

    def _fire(self) -> None:
        self._state = RenderState.IDLE
        self.render_count += 1
        logger.debug(f"Coalesced redraw #{self.render_count}")
        self._render()
