"""
Boolean field.

Values are the literals "true" / "false". A click writes the tagged value
for the slot, keeping the slot's language when the field is translated, and
"false" is the marker persisted for missing values.
"""

from typing import Any, Optional

from PyQt6.QtWidgets import QWidget

from rdf_formgen.forms.field_widget import FieldWidget
from rdf_formgen.forms.interaction import UserInput
from rdf_formgen.protocols import CheckBoxAdapter
from rdf_formgen.values import Literal, LocalizedLiteral, node_text


class Checkbox(FieldWidget):

    widget_type = "checkbox"
    empty_marker = "false"

    def on(self, event: UserInput, index: int) -> None:
        if event.type == "click":
            value = "true" if event.value else "false"
            current = self.store.get(index)
            if isinstance(current, LocalizedLiteral):
                self.store.set(index, LocalizedLiteral(value, current.language))
            else:
                self.store.set(index, Literal(value))
        self.emit(event, index)
        self.request_render()

    def template_item(self, index: int, node: Optional[Any]) -> QWidget:
        item = CheckBoxAdapter()
        item.set_value(node_text(node) == "true")
        item.connect_change_signal(
            lambda checked: self.on(UserInput("click", checked, item), index)
        )
        return item
