"""
Built-in field widget variants.

Importing this package registers every variant with the widget registry.
"""

from .text import Text
from .color import Color
from .checkbox import Checkbox
from .reference import ReferenceField

__all__ = [
    "Text",
    "Color",
    "Checkbox",
    "ReferenceField",
]
