"""
Field widget controllers.

The FieldWidget default implementation, its interaction channel and the
variant registry.
"""

from .interaction import UserInput, InteractionEvent, FieldSignals
from .widget_registry import (
    WidgetMeta,
    WIDGET_IMPLEMENTATIONS,
    get_widget_class,
    create_field_widget,
    get_widget_capabilities,
    list_widgets_with_capability,
)
from .field_widget import FieldWidget, MenuAction

__all__ = [
    "UserInput",
    "InteractionEvent",
    "FieldSignals",
    "WidgetMeta",
    "WIDGET_IMPLEMENTATIONS",
    "get_widget_class",
    "create_field_widget",
    "get_widget_capabilities",
    "list_widgets_with_capability",
    "FieldWidget",
    "MenuAction",
]
