"""Read-only field definition supplied by the surrounding form."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .value_nodes import ValueKind


@dataclass(frozen=True)
class FieldDefinition:
    """
    Definition of one editable attribute.

    Attributes:
        binding: Attribute identifier (predicate IRI) the values live under
        widget_type: Registered widget variant name (e.g. "text", "checkbox")
        required: Index 0 must hold a value
        multiple: More than one value may exist
        translatable: Values may carry language tags
        kind: Declared value shape (literal or reference)
        placeholder: Placeholder text for empty slots
        label: Display label per language code
        description: Help text per language code
        save_empty_value: Persist an explicit empty marker for missing values
        auto_complete_query: SPARQL template with LANGUAGE / SEARCH_TERM slots
        auto_complete_source: Endpoint URL template with a SEARCH_TERM slot
    """
    binding: str
    widget_type: str = "text"
    required: bool = False
    multiple: bool = False
    translatable: bool = False
    kind: ValueKind = ValueKind.LITERAL
    placeholder: str = ""
    label: Dict[str, str] = field(default_factory=dict)
    description: Dict[str, str] = field(default_factory=dict)
    save_empty_value: bool = False
    auto_complete_query: Optional[str] = None
    auto_complete_source: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldDefinition':
        """
        Build a definition from a form-definition mapping.

        Accepts both snake_case and the camelCase keys used by form
        definition documents (``saveEmptyValue``, ``autoCompleteQuery``...).
        """
        def pick(*names, default=None):
            for name in names:
                if name in data:
                    return data[name]
            return default

        kind = pick("kind", default=ValueKind.LITERAL)
        if not isinstance(kind, ValueKind):
            kind = ValueKind(kind)
        widget_type = pick("widget_type", "type", default="text")
        if widget_type == "reference" and "kind" not in data:
            kind = ValueKind.REFERENCE

        return cls(
            binding=data["binding"],
            widget_type=widget_type,
            required=bool(pick("required", default=False)),
            multiple=bool(pick("multiple", default=False)),
            translatable=bool(pick("translatable", default=False)),
            kind=kind,
            placeholder=pick("placeholder", default="") or "",
            label=_localized(pick("label", default={})),
            description=_localized(pick("description", default={})),
            save_empty_value=bool(pick("save_empty_value", "saveEmptyValue", default=False)),
            auto_complete_query=pick("auto_complete_query", "autoCompleteQuery"),
            auto_complete_source=pick("auto_complete_source", "autoCompleteSource"),
        )


def _localized(value: Any) -> Dict[str, str]:
    # A plain string applies to every language; keyed by the empty code
    if isinstance(value, str):
        return {"": value}
    return dict(value or {})
