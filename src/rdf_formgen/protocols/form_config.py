"""Base configuration class for field widgets.

Provides hooks for applications to customize timing, lookup and metadata
resolution behavior.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass, field


DEFAULT_PATH_CONTEXT: Dict[str, str] = {
    "schema": "http://schema.org/",
    "dbo": "http://dbpedia.org/ontology/",
    "dbp": "http://dbpedia.org/property/",
    "foaf": "http://xmlns.com/foaf/0.1/",
    "dc": "http://purl.org/dc/terms/",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
}


@dataclass
class FormGenConfig:
    """Base configuration for field widget behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        render_window_ms: Coalescing window for redraw requests
        search_debounce_ms: Quiet period before an autocomplete lookup fires
        min_search_chars: Shortest search term that triggers a lookup
        path_context: Prefix to namespace mapping used by entity traversal
        label_predicates: Ordered predicates tried for a reference label
        thumbnail_predicates: Ordered predicates tried for a reference thumbnail
        dbpedia_lookup_url: Free-text entity lookup endpoint
        request_timeout_s: Total timeout for a single HTTP lookup
        user_agent: User-Agent header sent with lookups
    """

    render_window_ms: int = 100
    search_debounce_ms: int = 300
    min_search_chars: int = 4
    path_context: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PATH_CONTEXT))
    label_predicates: List[str] = field(
        default_factory=lambda: ["rdfs:label", "foaf:name", "schema:name"]
    )
    thumbnail_predicates: List[str] = field(
        default_factory=lambda: ["dbo:thumbnail", "foaf:depiction", "schema:image"]
    )
    dbpedia_lookup_url: str = "https://lookup.dbpedia.org/api/prefix"
    request_timeout_s: float = 30.0
    user_agent: str = "rdf-formgen/0.1 aiohttp"


# Global config instance (set by application)
_form_config: Optional[FormGenConfig] = None


def set_form_config(config: FormGenConfig) -> None:
    """Set the global field widget configuration.

    Args:
        config: FormGenConfig instance
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormGenConfig:
    """Get the current field widget configuration.

    Returns:
        Current FormGenConfig or default if not set
    """
    if _form_config is None:
        return FormGenConfig()
    return _form_config
