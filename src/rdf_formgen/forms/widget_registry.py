"""
Field widget registry with metaclass auto-registration.

Variants auto-register when their classes are defined, keyed by their
``widget_type``; the form asks the registry for a widget by the type string
of a field definition.

Design:
- WidgetMeta metaclass handles auto-registration
- WIDGET_IMPLEMENTATIONS: widget_type -> variant class
- WIDGET_CAPABILITIES: which capability ABCs each variant implements
- Unknown types are configuration errors: logged, no widget created
"""

from abc import ABCMeta
from typing import Any, Callable, Dict, List, Optional, Set, Type
import logging

logger = logging.getLogger(__name__)

# Maps widget_type -> field widget class
WIDGET_IMPLEMENTATIONS: Dict[str, Type] = {}

# Maps field widget class -> set of capability ABCs
WIDGET_CAPABILITIES: Dict[Type, Set[Type]] = {}


class WidgetMeta(ABCMeta):
    """
    Metaclass for automatic field widget registration.

    1. Only registers concrete classes (no abstract methods left)
    2. Requires a ``widget_type`` class attribute
    3. Populates WIDGET_IMPLEMENTATIONS and WIDGET_CAPABILITIES

    Example:
        class Color(FieldWidget):
            widget_type = "color"

            def template_item(self, index, node):
                ...
    """

    def __new__(cls, name, bases, attrs):
        new_class = super().__new__(cls, name, bases, attrs)

        abstract_methods = getattr(new_class, '__abstractmethods__', None)
        if abstract_methods:
            logger.debug(f"Skipping registration for {name} - abstract methods remaining: {set(abstract_methods)}")
            return new_class

        widget_type = attrs.get('widget_type')
        if widget_type is None:
            logger.debug(f"Skipping registration for {name} - no widget_type attribute")
            return new_class

        if widget_type in WIDGET_IMPLEMENTATIONS:
            existing = WIDGET_IMPLEMENTATIONS[widget_type]
            logger.warning(
                f"Widget type '{widget_type}' already registered to {existing.__name__}. "
                f"Overwriting with {name}."
            )

        WIDGET_IMPLEMENTATIONS[widget_type] = new_class

        from rdf_formgen.protocols import ItemTemplating, Serializable, InteractionHandling
        WIDGET_CAPABILITIES[new_class] = {
            abc_type for abc_type in (ItemTemplating, Serializable, InteractionHandling)
            if issubclass(new_class, abc_type)
        }

        logger.debug(f"Auto-registered {name} as '{widget_type}'")
        return new_class


def _ensure_builtin_widgets() -> None:
    # Importing the package defines (and so registers) the built-in variants
    import rdf_formgen.widgets  # noqa: F401


def get_widget_class(widget_type: str) -> Type:
    """
    Get widget class by type.

    Raises:
        KeyError: If widget_type not registered
    """
    _ensure_builtin_widgets()
    if widget_type not in WIDGET_IMPLEMENTATIONS:
        raise KeyError(
            f"No widget registered with type '{widget_type}'. "
            f"Available widgets: {list(WIDGET_IMPLEMENTATIONS.keys())}"
        )
    return WIDGET_IMPLEMENTATIONS[widget_type]


def create_field_widget(widget_type: str, field: Any, context: Any,
                        render: Callable[[], object], **services: Any) -> Optional[Any]:
    """
    Instantiate the variant registered for widget_type.

    Args:
        widget_type: Type string from the field definition
        field: FieldDefinition
        context: RecordContext the values are read from
        render: Downstream redraw trigger
        **services: Forwarded to the widget constructor (clock, path_factory...)

    Returns:
        The widget, or None if the type is unknown (the field is left out)
    """
    try:
        widget_class = get_widget_class(widget_type)
    except KeyError as e:
        logger.error(f"Could not find field widget: {e}")
        return None
    return widget_class(field, context, render, **services)


def get_widget_capabilities(widget_class: Type) -> Set[Type]:
    return WIDGET_CAPABILITIES.get(widget_class, set())


def list_widgets_with_capability(capability: Type) -> List[Type]:
    """All registered variants implementing capability."""
    return [
        widget_class
        for widget_class, capabilities in WIDGET_CAPABILITIES.items()
        if capability in capabilities
    ]
