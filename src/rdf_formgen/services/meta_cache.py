"""
Reference metadata cache.

Memoizes, per reference IRI, one traversal path plus its two display
projections (label and thumbnail). Each projection resolves at most once,
walking an ordered predicate list and taking the first predicate that yields
a value. Failures and misses resolve to None ("no value").

Entries live as long as the owning widget; nothing is evicted until clear()
is called on widget destruction.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from rdf_formgen.protocols.form_config import get_form_config
from rdf_formgen.protocols.lookup_services import EntityPath, PathFactory, get_path_factory
from rdf_formgen.values.value_nodes import Reference, ValueNode

logger = logging.getLogger(__name__)


async def fetch_object_by_predicates(path: EntityPath, language: str,
                                     predicates: Sequence[str]) -> Optional[str]:
    """
    First value found along an ordered predicate list.

    Within one predicate a literal in ``language`` wins over other values.

    Returns:
        The value as a string, or None when no predicate yields anything
    """
    for predicate in predicates:
        values = await path.values(predicate)
        if not values:
            continue
        preferred = [value for value in values if getattr(value, "language", None) == language]
        return str(preferred[0] if preferred else values[0])
    return None


class ProjectionState(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


class Projection:
    """
    One lazily resolved display property of a reference.

    Awaiting the projection (or calling start()) launches the resolution the
    first time; later awaits share the same task.
    """

    def __init__(self, name: str, resolver: Callable[[], Awaitable[Optional[str]]],
                 on_resolved: Optional[Callable[[], None]] = None):
        self.name = name
        self._resolver = resolver
        self._on_resolved = on_resolved
        self._task: Optional[asyncio.Future] = None
        self._value: Optional[str] = None
        self.state = ProjectionState.PENDING

    @property
    def loading(self) -> bool:
        return self.state is ProjectionState.PENDING

    @property
    def value(self) -> Optional[str]:
        return self._value

    def start(self) -> asyncio.Future:
        if self._task is None:
            self._task = asyncio.ensure_future(self._run())
        return self._task

    async def _run(self) -> Optional[str]:
        try:
            value = await self._resolver()
        except Exception as e:
            logger.warning(f"Could not resolve {self.name}: {e}")
            value = None
        self._value = value
        self.state = ProjectionState.RESOLVED
        if self._on_resolved is not None:
            self._on_resolved()
        return value

    def detach(self) -> None:
        """Stop reporting resolution; the value is still stored."""
        self._on_resolved = None

    def __await__(self):
        return self.start().__await__()


class ReferenceMeta:
    """Traversal handle for one reference, with label and thumbnail projections."""

    def __init__(self, uri: str, path: EntityPath, language: str,
                 label_predicates: Sequence[str], thumbnail_predicates: Sequence[str],
                 on_resolved: Optional[Callable[[], None]] = None):
        self.uri = uri
        self.path = path
        self.label = Projection(
            f"label of {uri}",
            lambda: fetch_object_by_predicates(path, language, label_predicates),
            on_resolved,
        )
        self.thumbnail = Projection(
            f"thumbnail of {uri}",
            lambda: fetch_object_by_predicates(path, language, thumbnail_predicates),
            on_resolved,
        )

    def start(self) -> None:
        """Kick off both projections (idempotent)."""
        self.label.start()
        self.thumbnail.start()

    def detach(self) -> None:
        self.label.detach()
        self.thumbnail.detach()


class MetaCache:
    """
    Per-widget cache of ReferenceMeta handles keyed by IRI.

    Args:
        path_factory: Entity traversal factory (defaults to the registered one)
        language: Interface language used to pick labels
        on_resolved: Called whenever a projection finishes (typically a redraw request)
        context: Prefix mapping for traversal (defaults to FormGenConfig.path_context)
        proxy: URL prefix forwarded to every traversal path
    """

    def __init__(self, path_factory: Optional[PathFactory] = None, language: str = "en",
                 on_resolved: Optional[Callable[[], None]] = None,
                 context: Optional[Mapping[str, str]] = None,
                 proxy: Optional[str] = None):
        config = get_form_config()
        self._path_factory = path_factory
        self.proxy = proxy
        self.language = language
        self._on_resolved = on_resolved
        self.context: Dict[str, str] = dict(context if context is not None else config.path_context)
        self.context["@language"] = language
        self._label_predicates: List[str] = list(config.label_predicates)
        self._thumbnail_predicates: List[str] = list(config.thumbnail_predicates)
        self._entries: Dict[str, ReferenceMeta] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, uri: str) -> bool:
        return uri in self._entries

    def resolve(self, uri: str) -> ReferenceMeta:
        """Cached handle for uri, building its traversal path on first use."""
        meta = self._entries.get(uri)
        if meta is not None:
            return meta

        factory = self._path_factory or get_path_factory()
        path = factory.create(uri, self.context, self.proxy)
        meta = ReferenceMeta(
            uri, path, self.language,
            self._label_predicates, self._thumbnail_predicates,
            self._on_resolved,
        )
        self._entries[uri] = meta
        logger.debug(f"MetaCache: new traversal for {uri} ({len(self._entries)} cached)")
        return meta

    def get(self, uri: str) -> Optional[ReferenceMeta]:
        return self._entries.get(uri)

    def update(self, nodes: Iterable[Optional[ValueNode]]) -> None:
        """Make sure every non-empty reference among nodes has an entry."""
        for node in nodes:
            if isinstance(node, Reference) and node.uri:
                self.resolve(node.uri)

    def clear(self) -> None:
        """Drop every entry; projections still running finish silently."""
        for meta in self._entries.values():
            meta.detach()
        self._entries.clear()
