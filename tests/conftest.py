"""pytest configuration and fixtures for rdf-formgen tests."""

import asyncio
import json
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from rdf_formgen.core import ManualClock
from rdf_formgen.protocols import ExpandedRecord
from rdf_formgen.services.suggestion_sources import ReferenceSuggestion, SuggestionSource


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def record():
    return ExpandedRecord(
        expanded_data={},
        languages={"en": "English", "fr": "Français"},
        language="en",
    )


class FakePath:
    """EntityPath over a fixed predicate -> values mapping."""

    def __init__(self, subject, values=None, error=None, proxy=None):
        self.subject = subject
        self.proxy = proxy
        self._values = values or {}
        self._error = error
        self.calls = []

    async def values(self, predicate):
        self.calls.append(predicate)
        if self._error is not None:
            raise self._error
        return list(self._values.get(predicate, []))


class FakePathFactory:
    """PathFactory handing out FakePaths; counts pipelines created."""

    def __init__(self, graph=None, error=None):
        self.graph = graph or {}
        self.error = error
        self.created = []

    def create(self, subject, context, proxy=None):
        path = FakePath(subject, self.graph.get(subject), self.error, proxy)
        self.created.append((subject, dict(context)))
        return path


class GatedSource(SuggestionSource):
    """Suggestion source whose lookups finish only when released."""

    def __init__(self):
        self.calls = []
        self._gates = {}

    def _gate(self, term):
        return self._gates.setdefault(term, asyncio.Event())

    def release(self, term):
        self._gate(term).set()

    async def lookup(self, term):
        self.calls.append(term)
        await self._gate(term).wait()
        return [ReferenceSuggestion(label=term.title(), uri=f"http://example.org/{term}")]


class InstantSource(SuggestionSource):
    """Suggestion source answering immediately from a fixed list."""

    def __init__(self, suggestions=None, error=None):
        self.suggestions = suggestions or []
        self.error = error
        self.calls = []

    async def lookup(self, term):
        self.calls.append(term)
        if self.error is not None:
            raise self.error
        return list(self.suggestions)


class FakeHttp:
    """Stands in for HttpSession; replays one canned response."""

    def __init__(self, body, content_type="text/plain"):
        self.body = body
        self.content_type = content_type
        self.calls = []

    async def get_text(self, url, params=None, headers=None, proxy=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "proxy": proxy})
        return self.body, self.content_type

    async def get_json(self, url, params=None, headers=None, proxy=None):
        text, _ = await self.get_text(url, params, headers, proxy)
        return json.loads(text)


async def settle(rounds=5):
    """Let ready callbacks and woken tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
