"""
Interaction events and the per-widget event channel.

Every value-affecting interaction is reported on the owning widget's
FieldSignals.interaction signal, synchronously, as one InteractionEvent.
There is no global bus: listeners connect to the widget they care about.
"""

from dataclasses import dataclass
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal


@dataclass(frozen=True)
class UserInput:
    """Raw input from an item widget."""
    type: str                 # "change", "keyup", "click", "search"
    value: Any                # Value carried by the input widget
    source: Any = None        # Originating Qt widget, if any


@dataclass(frozen=True)
class InteractionEvent:
    """Immutable event emitted after an interaction was applied."""
    original_event: UserInput
    index: int
    value: Any

    @property
    def type(self) -> str:
        return self.original_event.type


class FieldSignals(QObject):
    """Signals owned by one field widget."""

    interaction = pyqtSignal(object)  # InteractionEvent
