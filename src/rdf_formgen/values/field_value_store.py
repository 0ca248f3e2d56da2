"""
Ordered value store for one attribute.

FieldValueStore owns the ValueNodes of a single binding and is the unit of
mutation for every field widget. All mutators are synchronous and total:
requests that are out of range or would break an invariant are absorbed as
no-ops, because they come from user input racing the redraw, not from
programming errors.

Invariants:
- All nodes share one variant: all Literal, all LocalizedLiteral, or all
  Reference.
- Language tags are unique across the store.
- The last value of a required field cannot be removed.
- Without ``multiple`` add_item() never grows the store beyond one value
  (translations are one value per language).
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .field_definition import FieldDefinition
from .value_nodes import (
    Literal, LocalizedLiteral, Reference, ValueKind, ValueNode,
    blank_like, merge_node, node_from_wire, node_to_wire,
)

logger = logging.getLogger(__name__)


class FieldValueStore:
    """
    Ordered, index-addressable ValueNodes for one binding.

    Args:
        field: Definition of the attribute (never mutated)
        values: Existing wire values (a single value, a list, or None)
        languages: Configured translation languages, code -> display name
        interface_language: Current UI language code
    """

    def __init__(self, field: FieldDefinition, values: Any = None,
                 languages: Optional[Mapping[str, str]] = None,
                 interface_language: str = "en"):
        self.field = field
        self.languages = dict(languages or {})
        self.interface_language = interface_language

        if values is None:
            values = []
        elif not isinstance(values, list):
            values = [values]
        self._nodes: List[ValueNode] = [node_from_wire(raw, field.kind) for raw in values]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(list(self._nodes))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, index: int) -> Optional[ValueNode]:
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def get_all(self) -> List[ValueNode]:
        return list(self._nodes)

    @property
    def has_translations(self) -> bool:
        return bool(self._nodes) and isinstance(self._nodes[0], LocalizedLiteral)

    @property
    def used_languages(self) -> List[str]:
        return [node.language for node in self._nodes if isinstance(node, LocalizedLiteral)]

    @property
    def unused_languages(self) -> List[str]:
        used = set(self.used_languages)
        return [code for code in self.languages if code not in used]

    @property
    def another_translation_is_possible(self) -> bool:
        return self.field.translatable and self.has_translations and bool(self.unused_languages)

    def items_to_render(self) -> List[Optional[ValueNode]]:
        """Nodes to draw; an empty store still shows one (synthetic) slot."""
        return list(self._nodes) if self._nodes else [None]

    def is_required(self, index: int) -> bool:
        return index == 0 and self.field.required

    def show_remove_button(self, index: int) -> bool:
        if index >= len(self._nodes):
            return False
        return index > 0 or not self.field.required

    def language_options(self, index: int) -> List[str]:
        """Languages a slot may switch to: every unused one plus its own."""
        options = self.unused_languages
        node = self.get(index)
        if isinstance(node, LocalizedLiteral):
            options.append(node.language)
        return options

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set(self, index: int, node: Optional[ValueNode] = None, **changes: Any) -> None:
        """
        Merge an update into the node at index, creating it at the end.

        Args:
            index: Slot to update; ``len(store)`` appends a new node
            node: Complete replacement node (takes precedence over changes)
            **changes: Partial update (text, language, uri, datatype)
        """
        if index < 0 or index > len(self._nodes):
            logger.debug(f"{self.field.binding}: ignoring set() on index {index} (len={len(self._nodes)})")
            return

        current = self.get(index)
        new_node = node if node is not None else merge_node(current, changes, self.field.kind)

        candidate = list(self._nodes)
        if index == len(candidate):
            if not self._can_append(new_node):
                logger.debug(f"{self.field.binding}: append refused by multiplicity")
                return
            candidate.append(new_node)
        else:
            candidate[index] = new_node

        if not self._is_consistent(candidate):
            logger.debug(f"{self.field.binding}: ignoring set() that would mix shapes or languages")
            return
        self._nodes = candidate

    def set_value(self, raw_text: Optional[str], index: int) -> None:
        """Write raw input into whichever field the slot exposes."""
        if raw_text is None:
            return
        current = self.get(index)
        if isinstance(current, Reference):
            self.set(index, uri=raw_text)
        elif current is not None:
            self.set(index, text=raw_text)
        elif self.field.kind is ValueKind.REFERENCE:
            self.set(index, Reference(raw_text))
        else:
            self.set(index, Literal(raw_text))

    def set_language(self, index: int, language: str) -> None:
        node = self.get(index)
        if not isinstance(node, LocalizedLiteral) or node.language == language:
            return
        if language in self.used_languages:
            logger.debug(f"{self.field.binding}: language '{language}' already used")
            return
        self._nodes[index] = LocalizedLiteral(node.text, language)

    def add_item(self) -> None:
        """Append an empty node shaped like the first one."""
        if not self.field.multiple and self._nodes:
            return
        if self.has_translations:
            # A cloned language tag would duplicate; pick a free language instead
            self.add_translation()
            return
        first = self._nodes[0] if self._nodes else None
        self._nodes.append(blank_like(first, self.field.kind))

    def add_translation(self) -> None:
        """Append an empty literal tagged with the first unused language."""
        if not self.field.translatable or self.field.kind is ValueKind.REFERENCE:
            return
        if self._nodes and not self.has_translations:
            return
        unused = self.unused_languages
        if not unused:
            return
        self._nodes.append(LocalizedLiteral("", unused[0]))

    def remove_item(self, index: int) -> None:
        if not 0 <= index < len(self._nodes):
            logger.debug(f"{self.field.binding}: ignoring remove_item({index})")
            return
        if index == 0 and self.field.required and len(self._nodes) < 2:
            logger.debug(f"{self.field.binding}: last required value is not removable")
            return
        del self._nodes[index]

    def enable_translations(self) -> None:
        """
        Tag every value with a language.

        The first value gets the interface language, the following values the
        remaining configured languages in order. Values left without a free
        language are dropped.
        """
        if not self.field.translatable or self.field.kind is ValueKind.REFERENCE:
            return
        if self.has_translations:
            return

        languages = [self.interface_language] + [
            code for code in self.languages if code != self.interface_language
        ]
        if not self._nodes:
            self._nodes = [LocalizedLiteral("", languages[0])]
            return

        if len(self._nodes) > len(languages):
            logger.warning(
                f"{self.field.binding}: {len(self._nodes) - len(languages)} value(s) "
                f"dropped, no free language left"
            )
        self._nodes = [
            LocalizedLiteral(getattr(node, "text", ""), language)
            for node, language in zip(self._nodes, languages)
        ]

    def remove_translations(self) -> None:
        """Collapse to one untagged value carrying the first value's text."""
        if not self.has_translations:
            return
        self._nodes = [Literal(self._nodes[0].text)]

    def replace_all(self, nodes: Iterable[Union[ValueNode, Any]]) -> None:
        """Replace the whole collection (external value change)."""
        built = [n if isinstance(n, (Literal, LocalizedLiteral, Reference))
                 else node_from_wire(n, self.field.kind) for n in nodes]
        if not self._is_consistent(built):
            logger.warning(f"{self.field.binding}: rejected inconsistent replacement values")
            return
        self._nodes = built

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self, empty_marker: str = "") -> Optional[List[dict]]:
        """
        Current values in wire shape.

        With ``save_empty_value`` a translated store is padded with one
        ``empty_marker`` value per configured language it lacks, and an empty
        untranslated store gets a single ``empty_marker`` value.

        Returns:
            List of wire dicts, or None when there is nothing to persist
        """
        values = [node_to_wire(node) for node in self._nodes]

        if self.field.save_empty_value:
            if self.has_translations:
                for language in self.unused_languages:
                    values.append({"@value": empty_marker, "@language": language})
            elif not values:
                # Only a missing value gets the marker; a filled value is never doubled
                values.append({"@value": empty_marker})

        return values or None

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def _can_append(self, node: ValueNode) -> bool:
        if not self._nodes or self.field.multiple:
            return True
        return isinstance(node, LocalizedLiteral) and self.has_translations

    @staticmethod
    def _is_consistent(nodes: List[ValueNode]) -> bool:
        if len({type(node) for node in nodes}) > 1:
            return False
        languages = [node.language for node in nodes if isinstance(node, LocalizedLiteral)]
        return len(languages) == len(set(languages))
