"""Tests for the debounced autocomplete engine."""

import pytest

from conftest import GatedSource, InstantSource, settle
from rdf_formgen.services import LookupServiceError, ReferenceSuggestion, SuggestionEngine


def make_engine(source, clock, **kwargs):
    changed = []
    engine = SuggestionEngine(source, on_results=changed.append, debounce_ms=300, clock=clock, **kwargs)
    return engine, changed


def test_short_term_starts_nothing(clock):
    source = InstantSource()
    engine, changed = make_engine(source, clock)

    engine.search(0, "ab")

    assert clock.pending_count == 0
    assert engine.lookup_count == 0
    assert engine.results(0) == []
    assert changed == []


def test_min_chars_defaults_to_four(clock):
    engine, _ = make_engine(InstantSource(), clock)
    assert engine.min_chars == 4
    engine.search(0, "abc")
    assert clock.pending_count == 0
    engine.search(0, "abcd")
    assert clock.pending_count == 1


@pytest.mark.asyncio
async def test_lookup_fires_after_quiet_period(clock):
    paris = ReferenceSuggestion("Paris", "http://dbpedia.org/resource/Paris")
    source = InstantSource([paris])
    engine, changed = make_engine(source, clock)

    engine.search(0, "Pari")
    clock.advance(299)
    assert source.calls == []

    clock.advance(1)
    await engine.wait_idle()

    assert source.calls == ["Pari"]
    assert engine.results(0) == [paris]
    assert changed == [0]


@pytest.mark.asyncio
async def test_rapid_searches_on_one_index_run_one_lookup(clock):
    source = InstantSource([ReferenceSuggestion("Paris", "http://example.org/paris")])
    engine, _ = make_engine(source, clock)

    engine.search(1, "pari")
    engine.search(1, "paris")
    clock.advance(300)
    await engine.wait_idle()

    assert source.calls == ["paris"]
    assert engine.lookup_count == 1


@pytest.mark.asyncio
async def test_superseded_result_is_discarded(clock):
    source = GatedSource()
    engine, changed = make_engine(source, clock)

    engine.search(1, "pari")
    clock.advance(300)
    engine.search(1, "paris")
    clock.advance(300)
    await settle()
    assert source.calls == ["pari", "paris"]

    # The newer lookup answers first, the older one arrives late
    source.release("paris")
    await settle()
    assert [s.uri for s in engine.results(1)] == ["http://example.org/paris"]

    source.release("pari")
    await engine.wait_idle()
    assert [s.uri for s in engine.results(1)] == ["http://example.org/paris"]
    assert changed == [1]


@pytest.mark.asyncio
async def test_indexes_are_independent(clock):
    source = GatedSource()
    engine, _ = make_engine(source, clock)

    engine.search(0, "london")
    engine.search(2, "berlin")
    clock.advance(300)
    await settle()
    source.release("berlin")
    source.release("london")
    await engine.wait_idle()

    assert engine.results(0)[0].label == "London"
    assert engine.results(2)[0].label == "Berlin"


@pytest.mark.asyncio
async def test_clear_discards_in_flight_result(clock):
    source = GatedSource()
    engine, changed = make_engine(source, clock)

    engine.search(0, "paris")
    clock.advance(300)
    await settle()
    engine.clear(0)
    source.release("paris")
    await engine.wait_idle()

    assert engine.results(0) == []
    assert changed == []


@pytest.mark.asyncio
async def test_failed_lookup_degrades_to_empty_results(clock):
    source = InstantSource(error=LookupServiceError("endpoint down"))
    engine, changed = make_engine(source, clock)

    engine.search(0, "paris")
    clock.advance(300)
    await engine.wait_idle()

    assert engine.results(0) == []
    assert changed == [0]


@pytest.mark.asyncio
async def test_select_returns_suggestion_without_clearing(clock):
    paris = ReferenceSuggestion("Paris", "http://example.org/paris")
    engine, _ = make_engine(InstantSource([paris]), clock)

    engine.search(0, "paris")
    clock.advance(300)
    await engine.wait_idle()

    assert engine.select(0, 0) == paris
    assert engine.select(0, 5) is None
    assert engine.results(0) == [paris]


def test_close_cancels_pending_debounce(clock):
    source = InstantSource()
    engine, _ = make_engine(source, clock)
    engine.search(0, "paris")
    engine.close()
    clock.advance(1000)
    assert engine.lookup_count == 0


@pytest.mark.asyncio
async def test_clear_from_invalidates_renumbered_indexes(clock):
    source = GatedSource()
    engine, changed = make_engine(source, clock)

    engine.search(0, "london")
    engine.search(2, "berlin")
    clock.advance(300)
    engine.search(3, "madrid")
    await settle()

    engine.clear_from(1)
    source.release("london")
    source.release("berlin")
    await engine.wait_idle()
    clock.advance(1000)

    assert engine.results(0)[0].label == "London"
    assert engine.results(2) == []
    assert source.calls == ["london", "berlin"]
    assert changed == [0]
