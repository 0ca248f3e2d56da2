"""
Linked-data entity traversal.

A path is created for one subject IRI and stays lazy until a predicate is
read: the subject document is then dereferenced once, parsed with rdflib and
re-walked for every later predicate.
"""

import asyncio
import logging
from typing import Dict, List, Mapping, Optional

from rdflib import Graph, URIRef
from rdflib.term import Node

from .exceptions import LookupServiceError
from .http_session import HttpSession

logger = logging.getLogger(__name__)

RDF_ACCEPT = "text/turtle, application/ld+json;q=0.9, application/rdf+xml;q=0.8"

CONTENT_TYPE_FORMATS = {
    "text/turtle": "turtle",
    "application/x-turtle": "turtle",
    "application/ld+json": "json-ld",
    "application/json": "json-ld",
    "application/rdf+xml": "xml",
    "application/n-triples": "nt",
    "text/n3": "n3",
}


def expand_predicate(predicate: str, context: Mapping[str, str]) -> str:
    """Expand a prefixed name ("rdfs:label") using the context mapping."""
    prefix, sep, local = predicate.partition(":")
    if sep and prefix in context and not local.startswith("//"):
        return f"{context[prefix]}{local}"
    return predicate


class LinkedDataPath:
    """
    Lazy, re-walkable path rooted at one subject.

    Args:
        subject: Subject IRI
        context: Prefix to namespace mapping ("@language" entries are ignored)
        http: Session used to dereference the subject
        proxy: Optional URL prefix for the request
    """

    def __init__(self, subject: str, context: Mapping[str, str],
                 http: HttpSession, proxy: Optional[str] = None):
        self.subject = subject
        self.context: Dict[str, str] = {k: v for k, v in context.items() if not k.startswith("@")}
        self._http = http
        self._proxy = proxy
        self._graph_task: Optional[asyncio.Future] = None

    async def graph(self) -> Graph:
        if self._graph_task is None:
            self._graph_task = asyncio.ensure_future(self._load())
        return await self._graph_task

    async def _load(self) -> Graph:
        text, content_type = await self._http.get_text(
            self.subject, headers={"Accept": RDF_ACCEPT}, proxy=self._proxy
        )
        rdf_format = CONTENT_TYPE_FORMATS.get(content_type, "turtle")
        graph = Graph()
        try:
            graph.parse(data=text, format=rdf_format, publicID=self.subject)
        except Exception as e:
            raise LookupServiceError(f"Could not parse {self.subject} as {rdf_format}: {e}") from e
        logger.debug(f"Loaded {len(graph)} triple(s) for {self.subject}")
        return graph

    async def values(self, predicate: str) -> List[Node]:
        """All objects of (subject, predicate, ?o)."""
        graph = await self.graph()
        iri = URIRef(expand_predicate(predicate, self.context))
        return list(graph.objects(URIRef(self.subject), iri))

    def __str__(self) -> str:
        return self.subject


class LinkedDataPathFactory:
    """PathFactory that dereferences subjects over HTTP."""

    def __init__(self, http: Optional[HttpSession] = None, proxy: Optional[str] = None):
        self.http = http or HttpSession()
        self.proxy = proxy

    def create(self, subject: str, context: Mapping[str, str],
               proxy: Optional[str] = None) -> LinkedDataPath:
        return LinkedDataPath(subject, context, self.http, proxy or self.proxy)
