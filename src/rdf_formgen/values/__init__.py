"""
Value model.

The ValueNode union, field definitions and the per-attribute value store.
"""

from .value_nodes import (
    Literal,
    LocalizedLiteral,
    Reference,
    ValueKind,
    ValueNode,
    node_from_wire,
    node_to_wire,
    node_text,
)
from .field_definition import FieldDefinition
from .field_value_store import FieldValueStore

__all__ = [
    "Literal",
    "LocalizedLiteral",
    "Reference",
    "ValueKind",
    "ValueNode",
    "node_from_wire",
    "node_to_wire",
    "node_text",
    "FieldDefinition",
    "FieldValueStore",
]
