"""
Autocomplete suggestion sources.

A source turns one search term into an ordered list of suggestions. Two
implementations: a parameterized SPARQL query and the DBpedia free-text
prefix lookup.
"""

import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

from rdf_formgen.protocols.form_config import get_form_config
from rdf_formgen.protocols.lookup_services import QueryEngine, get_query_engine
from .exceptions import LookupServiceError
from .http_session import HttpSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceSuggestion:
    """Candidate entity for a reference slot."""
    label: str
    uri: str
    image: Optional[str] = None


@dataclass(frozen=True)
class LiteralSuggestion:
    """Candidate text for a literal slot."""
    label: str
    value: str


Suggestion = Union[ReferenceSuggestion, LiteralSuggestion]


class SuggestionSource(ABC):
    """Looks up suggestions for a search term."""

    @abstractmethod
    async def lookup(self, term: str) -> List[Suggestion]:
        pass


class SparqlSuggestionSource(SuggestionSource):
    """
    Suggestions from a SPARQL query template.

    ``LANGUAGE`` and ``SEARCH_TERM`` are substituted in the query, and
    ``SEARCH_TERM`` in the source URL. Rows binding ``?uri`` become
    reference suggestions (``?label`` and ``?image`` optional); rows binding
    ``?value`` become literal suggestions.
    """

    def __init__(self, query_template: str, source_template: str, language: str = "en",
                 engine: Optional[QueryEngine] = None, proxy: Optional[str] = None):
        self.query_template = query_template
        self.source_template = source_template
        self.language = language
        self.proxy = proxy
        self._engine = engine

    def build_query(self, term: str) -> str:
        return self.query_template.replace("LANGUAGE", self.language).replace("SEARCH_TERM", term)

    def build_source(self, term: str) -> str:
        return self.source_template.replace("SEARCH_TERM", term)

    async def lookup(self, term: str) -> List[Suggestion]:
        engine = self._engine or get_query_engine()
        bindings = await engine.query(self.build_query(term), [self.build_source(term)], self.proxy)

        suggestions: List[Suggestion] = []
        for binding in bindings:
            label = binding.get("label")
            uri = binding.get("uri")
            if uri is not None:
                image = binding.get("image")
                suggestions.append(ReferenceSuggestion(
                    label=str(label) if label is not None else str(uri),
                    uri=str(uri),
                    image=str(image) if image is not None else None,
                ))
            elif binding.get("value") is not None:
                value = str(binding["value"])
                suggestions.append(LiteralSuggestion(str(label) if label is not None else value, value))
        return suggestions


def parse_lookup_xml(xml_text: str, uri_prefix: str = "http://dbpedia.org") -> List[ReferenceSuggestion]:
    """Parse a DBpedia lookup XML response, keeping only uri_prefix resources."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise LookupServiceError(f"Invalid lookup response: {e}") from e

    suggestions = []
    for result in root.iter("Result"):
        label = result.findtext("Label")
        uri = result.findtext("URI")
        # Language editions of the same resource live under other hosts
        if label and uri and uri.startswith(uri_prefix):
            suggestions.append(ReferenceSuggestion(label=label, uri=uri))
    return suggestions


class DbpediaLookupSource(SuggestionSource):
    """Free-text entity lookup against the DBpedia prefix API."""

    def __init__(self, http: Optional[HttpSession] = None, url: Optional[str] = None,
                 proxy: Optional[str] = None):
        self.http = http or HttpSession()
        self.url = url or get_form_config().dbpedia_lookup_url
        self.proxy = proxy

    async def lookup(self, term: str) -> List[Suggestion]:
        text, _ = await self.http.get_text(self.url, params={"query": term}, proxy=self.proxy)
        return list(parse_lookup_xml(text))
