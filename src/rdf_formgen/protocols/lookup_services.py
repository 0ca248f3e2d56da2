"""Lookup service protocols for pluggable query execution and entity traversal.

Allows applications to provide their own SPARQL engine or traversal library
without field widgets depending on a specific implementation.
"""

from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from rdflib.term import Node


class QueryEngine(Protocol):
    """Protocol for query execution services.

    Example:
        from rdf_formgen.protocols import register_query_engine
        from myapp.sparql import MyEngine

        register_query_engine(MyEngine())
    """

    async def query(self, query: str, sources: Sequence[str],
                    proxy: Optional[str] = None) -> List[Dict[str, Node]]:
        """Execute a query.

        Args:
            query: Query text
            sources: Sources to run the query against
            proxy: Optional proxy configuration forwarded from the record

        Returns:
            Ordered bindings, variable name (without "?") -> term
        """
        ...


class EntityPath(Protocol):
    """Lazy path rooted at one subject."""

    subject: str

    async def values(self, predicate: str) -> List[Node]:
        """All values reached from the subject through predicate.

        Args:
            predicate: Full IRI or a prefixed name known to the path's context
        """
        ...


class PathFactory(Protocol):
    """Protocol for entity traversal factories."""

    def create(self, subject: str, context: Mapping[str, str],
               proxy: Optional[str] = None) -> EntityPath:
        """Create a lazy path for subject.

        Args:
            subject: Subject IRI
            context: Prefix -> namespace mapping
            proxy: URL prefix the path must send its requests through
        """
        ...


# Global instances (set by application, defaults created on first use)
_query_engine: Optional[QueryEngine] = None
_path_factory: Optional[PathFactory] = None


def register_query_engine(engine: Optional[QueryEngine]) -> None:
    """Register a query engine implementation.

    Args:
        engine: Object implementing QueryEngine, or None to restore the default
    """
    global _query_engine
    _query_engine = engine


def get_query_engine() -> QueryEngine:
    """Get the registered query engine, creating the HTTP default if needed."""
    global _query_engine
    if _query_engine is None:
        from rdf_formgen.services.query_engine import SparqlHttpEngine
        _query_engine = SparqlHttpEngine()
    return _query_engine


def register_path_factory(factory: Optional[PathFactory]) -> None:
    """Register an entity traversal factory.

    Args:
        factory: Object implementing PathFactory, or None to restore the default
    """
    global _path_factory
    _path_factory = factory


def get_path_factory() -> PathFactory:
    """Get the registered path factory, creating the linked-data default if needed."""
    global _path_factory
    if _path_factory is None:
        from rdf_formgen.services.traversal import LinkedDataPathFactory
        _path_factory = LinkedDataPathFactory()
    return _path_factory
