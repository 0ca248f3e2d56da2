"""
Widget ABC contracts.

Two families:
- Item adapter capabilities (ValueGettable, ValueSettable, PlaceholderCapable,
  ChangeSignalEmitter) implemented by the Qt input widgets drawn per value.
- Field widget capabilities (ItemTemplating, Serializable, InteractionHandling)
  implemented by every registered field widget variant.

Explicit inheritance over duck typing: the registry records which of these a
variant implements.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional


class ValueGettable(ABC):
    """Input widget that can report its current value."""

    @abstractmethod
    def get_value(self) -> Any:
        """
        Returns:
            The widget's current value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """Input widget that can display a value."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Args:
            value: The value to show. None clears the widget.
        """
        pass


class PlaceholderCapable(ABC):
    """Input widget that can show placeholder text for an empty slot."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class ChangeSignalEmitter(ABC):
    """
    Input widget that reports user edits.

    Hides the per-widget signal names (textEdited vs clicked vs colorChanged)
    behind one connect call.
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Args:
            callback: Called with the new value after each user edit.
        """
        pass


class ItemTemplating(ABC):
    """Field widget that can build the input for one value slot."""

    @abstractmethod
    def template_item(self, index: int, node: Optional[Any]) -> Any:
        """
        Build the input widget for slot index.

        Args:
            index: Slot index
            node: ValueNode in that slot, or None for the synthetic empty slot

        Returns:
            A QWidget wired to the field widget's interaction handler
        """
        pass


class Serializable(ABC):
    """Field widget whose values can be written back to the record."""

    @abstractmethod
    def serialize(self) -> Optional[List[dict]]:
        """
        Returns:
            Wire values for the binding, or None if nothing is to be saved
        """
        pass


class InteractionHandling(ABC):
    """Field widget that turns raw user input into value mutations."""

    @abstractmethod
    def on(self, event: Any, index: int) -> None:
        """
        Handle one user interaction on slot index.

        Args:
            event: The raw UserInput
            index: Slot the input happened on
        """
        pass
