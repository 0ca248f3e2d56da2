"""
ValueNode: the tagged union for one value of a multi-valued attribute.

The variant is fixed when the node is built from its wire form; nothing
downstream re-infers the shape from which keys happen to be present.

Wire shapes (JSON-LD expanded values):
    Literal           {"@value": text}            (bare strings accepted on input)
    LocalizedLiteral  {"@value": text, "@language": language}
    Reference         {"@id": uri}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class ValueKind(Enum):
    """Declared shape of an attribute's values."""
    LITERAL = "literal"
    REFERENCE = "reference"


@dataclass(frozen=True)
class Literal:
    text: str = ""
    datatype: Optional[str] = None


@dataclass(frozen=True)
class LocalizedLiteral:
    text: str
    language: str


@dataclass(frozen=True)
class Reference:
    uri: str = ""


ValueNode = Union[Literal, LocalizedLiteral, Reference]


def _lexical(value: Any) -> str:
    # JSON-LD native booleans serialize as xsd:boolean lexical forms
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def node_from_wire(raw: Any, kind: ValueKind = ValueKind.LITERAL) -> ValueNode:
    """
    Build a ValueNode from one wire value.

    Args:
        raw: A JSON-LD value object, node reference or bare scalar
        kind: Declared shape, used for bare scalars only

    Returns:
        The matching ValueNode variant
    """
    if isinstance(raw, dict):
        if "@id" in raw:
            return Reference(_lexical(raw["@id"]))
        text = _lexical(raw.get("@value"))
        if raw.get("@language"):
            return LocalizedLiteral(text, raw["@language"])
        return Literal(text, raw.get("@type"))
    if kind is ValueKind.REFERENCE:
        return Reference(_lexical(raw))
    return Literal(_lexical(raw))


def node_to_wire(node: ValueNode) -> Dict[str, str]:
    """Return the JSON-LD wire dict for a ValueNode."""
    if isinstance(node, Reference):
        return {"@id": node.uri}
    if isinstance(node, LocalizedLiteral):
        return {"@value": node.text, "@language": node.language}
    wire = {"@value": node.text}
    if node.datatype:
        wire["@type"] = node.datatype
    return wire


def blank_like(node: Optional[ValueNode], kind: ValueKind) -> ValueNode:
    """Empty node with the same shape (and language) as node."""
    if isinstance(node, Reference):
        return Reference("")
    if isinstance(node, LocalizedLiteral):
        return LocalizedLiteral("", node.language)
    if isinstance(node, Literal):
        return Literal("", node.datatype)
    return Reference("") if kind is ValueKind.REFERENCE else Literal("")


def merge_node(node: Optional[ValueNode], changes: Dict[str, Any], kind: ValueKind) -> ValueNode:
    """
    Apply a partial update to a node.

    The shape is preserved unless the update changes it explicitly: a ``uri``
    turns the slot into a Reference, ``text``/``language`` on a Reference turn
    it into a literal, ``language=None`` drops a language tag.
    """
    if "uri" in changes:
        return Reference(_lexical(changes["uri"]))

    if isinstance(node, Reference) and not ({"text", "language"} & changes.keys()):
        return node

    if node is None and not changes:
        return blank_like(None, kind)

    text = changes.get("text", getattr(node, "text", ""))
    language = changes.get("language", getattr(node, "language", None))
    if language:
        return LocalizedLiteral(_lexical(text), language)
    return Literal(_lexical(text), changes.get("datatype", getattr(node, "datatype", None)))


def node_text(node: Optional[ValueNode]) -> str:
    """Editable text of a node: the literal text or the reference uri."""
    if node is None:
        return ""
    if isinstance(node, Reference):
        return node.uri
    return node.text
