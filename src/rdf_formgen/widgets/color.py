"""Colour field storing "#rrggbb" literals."""

from typing import Any, Optional

from PyQt6.QtWidgets import QWidget

from rdf_formgen.forms.field_widget import FieldWidget
from rdf_formgen.forms.interaction import UserInput
from rdf_formgen.protocols import ColorAdapter
from rdf_formgen.values import node_text


class Color(FieldWidget):

    widget_type = "color"

    def template_item(self, index: int, node: Optional[Any]) -> QWidget:
        item = ColorAdapter()
        item.set_value(node_text(node))
        item.set_placeholder(self.field.placeholder)
        item.connect_change_signal(
            lambda value: self.on(UserInput("change", value, item), index)
        )
        return item
