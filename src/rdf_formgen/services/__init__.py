"""
Lookup services.

Reference metadata cache, autocomplete engine and the default SPARQL /
linked-data / free-text lookup implementations they consume.
"""

from .exceptions import LookupServiceError
from .http_session import HttpSession
from .query_engine import SparqlHttpEngine, parse_sparql_json
from .traversal import LinkedDataPath, LinkedDataPathFactory, expand_predicate
from .meta_cache import MetaCache, ReferenceMeta, Projection, ProjectionState, fetch_object_by_predicates
from .suggestion_sources import (
    SuggestionSource,
    Suggestion,
    ReferenceSuggestion,
    LiteralSuggestion,
    SparqlSuggestionSource,
    DbpediaLookupSource,
    parse_lookup_xml,
)
from .suggestion_engine import SuggestionEngine

__all__ = [
    "LookupServiceError",
    "HttpSession",
    "SparqlHttpEngine",
    "parse_sparql_json",
    "LinkedDataPath",
    "LinkedDataPathFactory",
    "expand_predicate",
    "MetaCache",
    "ReferenceMeta",
    "Projection",
    "ProjectionState",
    "fetch_object_by_predicates",
    "SuggestionSource",
    "Suggestion",
    "ReferenceSuggestion",
    "LiteralSuggestion",
    "SparqlSuggestionSource",
    "DbpediaLookupSource",
    "parse_lookup_xml",
    "SuggestionEngine",
]
