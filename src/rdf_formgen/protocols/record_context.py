"""Record context protocol: what a field widget reads from its form."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol


class RecordContext(Protocol):
    """Read-only view of the surrounding record.

    Attributes:
        languages: Configured translation languages, code -> display name
        language: Current interface language code
        proxy: Optional proxy URL prefix forwarded to lookups
    """

    languages: Mapping[str, str]
    language: str
    proxy: Optional[str]

    def values_for(self, binding: str) -> Any:
        """Current wire values for binding (a value, a list, or None)."""
        ...


@dataclass
class ExpandedRecord:
    """RecordContext over an expanded JSON-LD record held in memory."""

    expanded_data: Dict[str, Any] = field(default_factory=dict)
    languages: Dict[str, str] = field(default_factory=dict)
    language: str = "en"
    proxy: Optional[str] = None

    def values_for(self, binding: str) -> Any:
        return self.expanded_data.get(binding)
