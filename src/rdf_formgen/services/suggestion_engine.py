"""
Debounced autocomplete engine.

One debounce timer and one result list per editable slot (index). Only the
most recently started lookup for an index may write its results: every
lookup takes a sequence number when it starts, and a result whose number is
no longer the latest for its index is dropped on arrival. In-flight lookups
are never aborted.
"""

import asyncio
import itertools
import logging
from functools import partial
from typing import Callable, Dict, List, Optional, Set

from rdf_formgen.core.clock import Clock
from rdf_formgen.core.debounce_timer import DebounceTimer
from rdf_formgen.protocols.form_config import get_form_config
from .suggestion_sources import Suggestion, SuggestionSource

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """
    Per-index debounced search with stale-result suppression.

    Args:
        source: Where lookups go
        on_results: Called with the index whenever its results change
        debounce_ms: Quiet period before a lookup fires
        min_chars: Terms shorter than this never trigger a lookup
        clock: Clock driving the debounce timers
    """

    def __init__(self, source: SuggestionSource,
                 on_results: Optional[Callable[[int], None]] = None,
                 debounce_ms: Optional[int] = None,
                 min_chars: Optional[int] = None,
                 clock: Optional[Clock] = None):
        config = get_form_config()
        self.source = source
        self._on_results = on_results
        self._debounce_ms = config.search_debounce_ms if debounce_ms is None else debounce_ms
        self.min_chars = config.min_search_chars if min_chars is None else min_chars
        self._clock = clock

        self._results: Dict[int, List[Suggestion]] = {}
        self._timers: Dict[int, DebounceTimer] = {}
        self._pending_terms: Dict[int, str] = {}
        self._latest: Dict[int, int] = {}
        self._sequence = itertools.count(1)
        self._tasks: Set[asyncio.Future] = set()
        self.lookup_count = 0

    def search(self, index: int, term: Optional[str]) -> None:
        """Debounce a lookup of term for index."""
        term = (term or "").strip()
        if len(term) < self.min_chars:
            logger.debug(f"Search for slot {index} skipped, '{term}' is below {self.min_chars} chars")
            return

        self._pending_terms[index] = term
        timer = self._timers.get(index)
        if timer is None:
            timer = DebounceTimer(self._debounce_ms, partial(self._fire, index), self._clock)
            self._timers[index] = timer
        timer.trigger()

    def results(self, index: int) -> List[Suggestion]:
        return list(self._results.get(index, []))

    def select(self, index: int, position: int) -> Optional[Suggestion]:
        """The suggestion at position for index; the caller applies it and then clears."""
        results = self._results.get(index, [])
        if 0 <= position < len(results):
            return results[position]
        return None

    def clear(self, index: int) -> None:
        """Drop results for index and invalidate anything still pending for it."""
        self._results.pop(index, None)
        self._pending_terms.pop(index, None)
        timer = self._timers.get(index)
        if timer is not None:
            timer.cancel()
        if index in self._latest:
            self._latest[index] = next(self._sequence)

    def clear_from(self, first_index: int) -> None:
        """Clear every index >= first_index (slots from there on were renumbered)."""
        known = set(self._results) | set(self._timers) | set(self._latest) | set(self._pending_terms)
        for index in sorted(known):
            if index >= first_index:
                self.clear(index)

    def close(self) -> None:
        """Cancel every pending debounce and orphan in-flight lookups."""
        self.clear_from(0)
        self._results.clear()

    async def wait_idle(self) -> None:
        """Wait until no lookup is in flight."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    def _fire(self, index: int) -> None:
        term = self._pending_terms.pop(index, None)
        if term is None:
            return
        sequence = next(self._sequence)
        self._latest[index] = sequence
        self.lookup_count += 1
        task = asyncio.ensure_future(self._execute(index, term, sequence))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _execute(self, index: int, term: str, sequence: int) -> None:
        try:
            results = await self.source.lookup(term)
        except Exception as e:
            logger.warning(f"Suggestion lookup for '{term}' failed: {e}")
            results = []

        if self._latest.get(index) != sequence:
            logger.debug(f"Dropping stale suggestions for slot {index} ('{term}')")
            return

        self._results[index] = list(results)
        if self._on_results is not None:
            self._on_results(index)
