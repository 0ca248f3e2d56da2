"""
rdf-formgen: reactive PyQt6 field widgets for linked-data records.

Edits multi-valued, optionally language-tagged, optionally reference-typed
attributes of a JSON-LD record.

Architecture:
- Tier 1 (Core): clocks, debounce timer and the render-coalescing scheduler
- Tier 2 (Values): ValueNode union, FieldDefinition and FieldValueStore
- Tier 3 (Services): reference metadata cache, autocomplete engine and the
  SPARQL / linked-data lookup services they consume
- Tier 4 (Forms): FieldWidget controller, variant registry and built-in widgets
"""

__version__ = "0.1.0"

from .values import (
    Literal,
    LocalizedLiteral,
    Reference,
    ValueKind,
    FieldDefinition,
    FieldValueStore,
)
from .core import RenderScheduler, ManualClock, AsyncioClock
from .forms import FieldWidget, InteractionEvent, UserInput, create_field_widget

__all__ = [
    "__version__",
    "Literal",
    "LocalizedLiteral",
    "Reference",
    "ValueKind",
    "FieldDefinition",
    "FieldValueStore",
    "RenderScheduler",
    "ManualClock",
    "AsyncioClock",
    "FieldWidget",
    "InteractionEvent",
    "UserInput",
    "create_field_widget",
]
