"""
Widget protocols, adapters and pluggable service registration.

ABC-based widget contracts, configuration and the lookup-service protocols
field widgets consume.
"""

from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    PlaceholderCapable,
    ChangeSignalEmitter,
    ItemTemplating,
    Serializable,
    InteractionHandling,
)
from .widget_adapters import (
    LineEditAdapter,
    CheckBoxAdapter,
    ColorAdapter,
    PyQtWidgetMeta,
)
from .form_config import FormGenConfig, set_form_config, get_form_config
from .lookup_services import (
    QueryEngine,
    EntityPath,
    PathFactory,
    register_query_engine,
    get_query_engine,
    register_path_factory,
    get_path_factory,
)
from .record_context import RecordContext, ExpandedRecord

__all__ = [
    "ValueGettable",
    "ValueSettable",
    "PlaceholderCapable",
    "ChangeSignalEmitter",
    "ItemTemplating",
    "Serializable",
    "InteractionHandling",
    "LineEditAdapter",
    "CheckBoxAdapter",
    "ColorAdapter",
    "PyQtWidgetMeta",
    "FormGenConfig",
    "set_form_config",
    "get_form_config",
    "QueryEngine",
    "EntityPath",
    "PathFactory",
    "register_query_engine",
    "get_query_engine",
    "register_path_factory",
    "get_path_factory",
    "RecordContext",
    "ExpandedRecord",
]
