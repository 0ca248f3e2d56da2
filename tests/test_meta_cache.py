"""Tests for the reference metadata cache."""

import pytest
from rdflib import Literal as RDFLiteral, URIRef

from conftest import FakePathFactory, settle
from rdf_formgen.services import LookupServiceError, MetaCache, ProjectionState
from rdf_formgen.values import Literal, Reference

PARIS = "http://dbpedia.org/resource/Paris"


def test_resolve_returns_same_handle_and_one_pipeline():
    factory = FakePathFactory()
    cache = MetaCache(factory, "en")

    first = cache.resolve(PARIS)
    second = cache.resolve(PARIS)

    assert first is second
    assert len(factory.created) == 1
    assert len(cache) == 1


def test_context_carries_prefixes_and_language():
    factory = FakePathFactory()
    MetaCache(factory, "fr").resolve(PARIS)
    _, context = factory.created[0]
    assert context["rdfs"] == "http://www.w3.org/2000/01/rdf-schema#"
    assert context["@language"] == "fr"


def test_update_primes_only_filled_references():
    factory = FakePathFactory()
    cache = MetaCache(factory, "en")
    cache.update([Reference(PARIS), Reference(""), Literal("x"), None, Reference(PARIS)])
    assert [subject for subject, _ in factory.created] == [PARIS]
    assert PARIS in cache


@pytest.mark.asyncio
async def test_label_prefers_interface_language():
    factory = FakePathFactory({PARIS: {
        "rdfs:label": [RDFLiteral("Paris (fr)", lang="fr"), RDFLiteral("Paris", lang="en")],
    }})
    resolved = []
    cache = MetaCache(factory, "en", on_resolved=lambda: resolved.append(1))
    meta = cache.resolve(PARIS)

    assert meta.label.loading
    assert await meta.label == "Paris"
    assert meta.label.state is ProjectionState.RESOLVED
    assert resolved == [1]


@pytest.mark.asyncio
async def test_projection_walks_predicates_in_order():
    image = URIRef("http://commons.wikimedia.org/paris.jpg")
    factory = FakePathFactory({PARIS: {
        "foaf:name": [RDFLiteral("Ville de Paris")],
        "schema:image": [image],
    }})
    meta = MetaCache(factory, "en").resolve(PARIS)

    assert await meta.label == "Ville de Paris"
    assert await meta.thumbnail == str(image)
    assert meta.label.value == "Ville de Paris"


@pytest.mark.asyncio
async def test_projection_without_values_resolves_to_none():
    factory = FakePathFactory()
    meta = MetaCache(factory, "en").resolve(PARIS)

    assert await meta.label is None
    assert not meta.label.loading


@pytest.mark.asyncio
async def test_failed_traversal_resolves_to_none_and_still_notifies():
    factory = FakePathFactory(error=LookupServiceError("offline"))
    resolved = []
    meta = MetaCache(factory, "en", on_resolved=lambda: resolved.append(1)).resolve(PARIS)

    meta.start()
    await settle()

    assert meta.label.value is None
    assert meta.thumbnail.value is None
    assert not meta.label.loading
    assert len(resolved) == 2


@pytest.mark.asyncio
async def test_projection_resolves_once():
    factory = FakePathFactory({PARIS: {"rdfs:label": [RDFLiteral("Paris")]}})
    cache = MetaCache(factory, "en")
    meta = cache.resolve(PARIS)

    await meta.label
    await meta.label
    meta.label.start()
    await settle()

    assert meta.path.calls == ["rdfs:label"]


def test_proxy_is_forwarded_to_every_path():
    factory = FakePathFactory()
    cache = MetaCache(factory, "en", proxy="https://proxy.example/")
    meta = cache.resolve(PARIS)
    assert meta.path.proxy == "https://proxy.example/"


@pytest.mark.asyncio
async def test_clear_detaches_running_projections():
    resolved = []
    cache = MetaCache(FakePathFactory(), "en", on_resolved=lambda: resolved.append(1))
    meta = cache.resolve(PARIS)
    meta.start()

    cache.clear()
    await meta.label
    await meta.thumbnail

    assert resolved == []
    assert len(cache) == 0
