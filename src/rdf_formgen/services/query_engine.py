"""
SPARQL query execution over the SPARQL 1.1 protocol.

Sources are SPARQL endpoints; results come back as an ordered list of
bindings, each mapping a variable name (without "?") to an rdflib term.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from rdflib import BNode, Literal, URIRef
from rdflib.term import Node

from .exceptions import LookupServiceError
from .http_session import HttpSession

logger = logging.getLogger(__name__)

SPARQL_RESULTS_JSON = "application/sparql-results+json"

Binding = Dict[str, Node]


def term_from_json(value: Dict[str, Any]) -> Node:
    """Convert one SPARQL JSON result term to an rdflib node."""
    term_type = value.get("type")
    if term_type == "uri":
        return URIRef(value["value"])
    if term_type == "bnode":
        return BNode(value["value"])
    # "literal" and the legacy "typed-literal"
    return Literal(
        value.get("value", ""),
        lang=value.get("xml:lang"),
        datatype=value.get("datatype"),
    )


def parse_sparql_json(payload: Dict[str, Any]) -> List[Binding]:
    """Convert a SPARQL JSON results document to a list of bindings."""
    rows = payload.get("results", {}).get("bindings", [])
    return [
        {name: term_from_json(term) for name, term in row.items()}
        for row in rows
    ]


class SparqlHttpEngine:
    """
    QueryEngine implementation that sends SELECT queries to SPARQL endpoints.

    Independent calls share nothing but the HTTP session, so concurrent
    queries from several widgets are not ordered against each other.
    """

    def __init__(self, http: Optional[HttpSession] = None):
        self.http = http or HttpSession()

    async def query(self, query: str, sources: Sequence[str],
                    proxy: Optional[str] = None) -> List[Binding]:
        """
        Execute query against each source in turn.

        Returns:
            Bindings from all sources, in source order

        Raises:
            LookupServiceError: If a source cannot be queried or answers garbage
        """
        bindings: List[Binding] = []
        for source in sources:
            try:
                payload = await self.http.get_json(
                    source,
                    params={"query": query},
                    headers={"Accept": SPARQL_RESULTS_JSON},
                    proxy=proxy,
                )
            except ValueError as e:
                raise LookupServiceError(f"Invalid SPARQL JSON from {source}: {e}") from e
            if not isinstance(payload, dict):
                raise LookupServiceError(f"Invalid SPARQL JSON from {source}: not a results document")
            rows = parse_sparql_json(payload)
            logger.debug(f"SPARQL {source}: {len(rows)} binding(s)")
            bindings.extend(rows)
        return bindings

    async def close(self):
        await self.http.close()
