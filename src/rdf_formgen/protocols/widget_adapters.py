"""
Qt input widgets implementing the item adapter ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QCheckBox.isChecked() vs a colour button's hex name
- textEdited vs clicked vs colorChanged
"""

from typing import Any, Callable, Optional
from abc import ABCMeta

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QCheckBox, QColorDialog, QLineEdit, QPushButton

from .widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable, ChangeSignalEmitter
)

# Order matters: Qt's metaclass first so QObject construction works, ABCMeta for abstract checks
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class LineEditAdapter(QLineEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Single-line text input.

    Reports edits made by the user only (textEdited), so programmatic
    set_value() during a redraw never feeds back into the store.
    """

    def get_value(self) -> Any:
        return self.text()

    def set_value(self, value: Any) -> None:
        self.setText("" if value is None else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textEdited.connect(lambda _text: callback(self.get_value()))


class CheckBoxAdapter(QCheckBox, ValueGettable, ValueSettable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Boolean toggle.

    Returns bool values, treats None as False.
    """

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value) if value is not None else False)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.clicked.connect(lambda _checked: callback(self.get_value()))


class ColorAdapter(QPushButton, ValueGettable, ValueSettable, PlaceholderCapable,
                   ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Colour swatch button; value is a "#rrggbb" string.

    Clicking opens a QColorDialog; picking a colour emits colorChanged.
    """

    colorChanged = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._color: Optional[QColor] = None
        self.clicked.connect(self._pick_color)

    def get_value(self) -> Any:
        return self._color.name() if self._color is not None else None

    def set_value(self, value: Any) -> None:
        color = QColor(str(value)) if value else None
        self._color = color if color is not None and color.isValid() else None
        self.setText(self.get_value() or "")
        self.setStyleSheet(f"background-color: {self._color.name()};" if self._color else "")

    def set_placeholder(self, text: str) -> None:
        if self._color is None:
            self.setText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.colorChanged.connect(callback)

    def _pick_color(self) -> None:
        color = QColorDialog.getColor(self._color or QColor("#000000"), self)
        if color.isValid():
            self.set_value(color.name())
            self.colorChanged.emit(color.name())
