"""
Field widget controller.

FieldWidget is the default implementation behind the field widget capability
interface. One instance per attribute wires user input into FieldValueStore
mutations, starts metadata and suggestion lookups, and asks its
RenderScheduler for a redraw at the end of every mutation path.

Variants subclass it, set ``widget_type`` and override only the operations
they change (usually template_item, sometimes on or serialize).
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtWidgets import QWidget

from rdf_formgen.core.clock import Clock
from rdf_formgen.core.render_scheduler import RenderScheduler
from rdf_formgen.protocols import (
    ItemTemplating, Serializable, InteractionHandling,
    LineEditAdapter, PathFactory, QueryEngine, RecordContext,
)
from rdf_formgen.services.meta_cache import MetaCache, ReferenceMeta
from rdf_formgen.services.suggestion_engine import SuggestionEngine
from rdf_formgen.services.suggestion_sources import (
    LiteralSuggestion, ReferenceSuggestion, SparqlSuggestionSource, SuggestionSource,
)
from rdf_formgen.values import FieldDefinition, FieldValueStore, Reference, node_text
from .interaction import FieldSignals, InteractionEvent, UserInput
from .widget_registry import WidgetMeta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuAction:
    """Entry of the field menu; ``method`` names the FieldWidget action to run."""
    method: str
    label: str


class FieldWidget(ItemTemplating, Serializable, InteractionHandling, metaclass=WidgetMeta):
    """
    Controller for one attribute.

    Args:
        field: Definition of the attribute
        context: Record the values are read from
        render: Downstream redraw trigger (no arguments, return ignored)
        clock: Clock for redraw coalescing and search debounce
        path_factory: Entity traversal factory for reference metadata
        query_engine: Query engine for SPARQL autocomplete
        suggestion_source: Explicit autocomplete source (overrides the field's query)
    """

    # Value written for missing values when the field persists empty values
    empty_marker = ""

    def __init__(self, field: FieldDefinition, context: RecordContext,
                 render: Callable[[], object], *,
                 clock: Optional[Clock] = None,
                 path_factory: Optional[PathFactory] = None,
                 query_engine: Optional[QueryEngine] = None,
                 suggestion_source: Optional[SuggestionSource] = None):
        self.field = field
        self.context = context
        self.signals = FieldSignals()
        self.store = FieldValueStore(
            field, context.values_for(field.binding), context.languages, context.language
        )
        self.scheduler = RenderScheduler(render, clock=clock)
        self.metas = MetaCache(
            path_factory, context.language, on_resolved=self.request_render, proxy=context.proxy
        )

        source = suggestion_source or self._build_suggestion_source(query_engine)
        self.suggestions: Optional[SuggestionEngine] = (
            SuggestionEngine(source, on_results=self._on_suggestions, clock=clock)
            if source is not None else None
        )

        self.expanded: Dict[int, bool] = {}
        self.menu_is_open = False
        self._destroyed = False

    def _build_suggestion_source(self, query_engine: Optional[QueryEngine]) -> Optional[SuggestionSource]:
        if self.field.auto_complete_query and self.field.auto_complete_source:
            return SparqlSuggestionSource(
                self.field.auto_complete_query,
                self.field.auto_complete_source,
                language=self.context.language,
                engine=query_engine,
                proxy=self.context.proxy,
            )
        return None

    # ------------------------------------------------------------------
    # Display data
    # ------------------------------------------------------------------

    @property
    def label(self) -> str:
        label = self.field.label.get(self.context.language) or self.field.label.get("", "")
        return label[:1].upper() + label[1:]

    @property
    def description(self) -> str:
        return self.field.description.get(self.context.language) or self.field.description.get("", "")

    def menu_actions(self) -> List[MenuAction]:
        actions = []
        if self.field.translatable and not self.store.has_translations:
            actions.append(MenuAction("enable_translations", "Create translation"))
        if self.field.translatable and self.store.has_translations:
            actions.append(MenuAction("remove_translations", "Remove translations"))
        return actions

    def can_add_item(self) -> bool:
        return self.field.multiple

    def can_add_translation(self) -> bool:
        return self.store.another_translation_is_possible

    # ------------------------------------------------------------------
    # Actions (every one ends in a redraw request)
    # ------------------------------------------------------------------

    def request_render(self) -> None:
        if self._destroyed:
            return
        self.scheduler.request_render()

    def run_action(self, method: str) -> None:
        """Run a menu action by name."""
        if method not in {action.method for action in self.menu_actions()}:
            logger.debug(f"{self.field.binding}: menu action '{method}' not available")
            return
        getattr(self, method)()

    def toggle_menu(self) -> None:
        self.menu_is_open = not self.menu_is_open
        self.request_render()

    def add_item(self) -> None:
        self.store.add_item()
        self.request_render()

    def add_translation(self) -> None:
        self.store.add_translation()
        self.request_render()

    def remove_item(self, index: int) -> None:
        before = len(self.store)
        self.store.remove_item(index)
        if len(self.store) == before:
            self.request_render()
            return
        # Later slots shift down, so their suggestion state no longer matches
        if self.suggestions is not None:
            self.suggestions.clear_from(index)
        self.expanded = {i: flag for i, flag in self.expanded.items() if i < index}
        self.request_render()

    def reload(self) -> None:
        """Re-read the values from the record after an external change."""
        self.store.replace_all(_as_list(self.context.values_for(self.field.binding)))
        if self.suggestions is not None:
            self.suggestions.clear_from(0)
        self.expanded.clear()
        self.update_metas()
        self.request_render()

    def enable_translations(self) -> None:
        self.store.enable_translations()
        self.menu_is_open = False
        self.request_render()

    def remove_translations(self) -> None:
        self.store.remove_translations()
        self.menu_is_open = False
        self.request_render()

    def set_language(self, index: int, language: str) -> None:
        self.store.set_language(index, language)
        self.request_render()

    def on(self, event: UserInput, index: int) -> None:
        """Apply raw input to slot index, then notify listeners."""
        self.store.set_value(event.value, index)
        self.emit(event, index)
        self.request_render()

    def emit(self, event: UserInput, index: int) -> None:
        self.signals.interaction.emit(InteractionEvent(event, index, event.value))

    def search(self, index: int, term: str) -> None:
        if self.suggestions is not None:
            self.suggestions.search(index, term)

    def select_suggestion(self, index: int, position: int) -> None:
        """Apply the chosen suggestion to slot index."""
        if self.suggestions is None:
            return
        suggestion = self.suggestions.select(index, position)
        if suggestion is None:
            return

        if isinstance(suggestion, ReferenceSuggestion):
            self.store.set(index, Reference(suggestion.uri))
        elif isinstance(suggestion, LiteralSuggestion):
            self.store.set_value(suggestion.value, index)

        self.suggestions.clear(index)
        self.expanded[index] = False
        self.update_metas()
        self.request_render()

    def remove_reference(self, index: int) -> None:
        if isinstance(self.store.get(index), Reference):
            self.store.set(index, uri="")
            self.request_render()

    def update_metas(self) -> None:
        self.metas.update(self.store.get_all())

    def reference_meta(self, index: int) -> Optional[ReferenceMeta]:
        """
        Metadata handle for the reference in slot index, resolution started.

        Projections call back into request_render() when they finish, so a
        redraw that shows "loading" is followed by one that shows the value.
        """
        node = self.store.get(index)
        if not isinstance(node, Reference) or not node.uri:
            return None
        meta = self.metas.resolve(node.uri)
        meta.start()
        return meta

    def _on_suggestions(self, index: int) -> None:
        self.expanded[index] = True
        self.request_render()

    # ------------------------------------------------------------------
    # Capability interface defaults
    # ------------------------------------------------------------------

    def template_item(self, index: int, node: Optional[Any]) -> QWidget:
        item = LineEditAdapter()
        item.set_value(node_text(node))
        item.set_placeholder(self.field.placeholder)
        item.connect_change_signal(
            lambda value: self.on(UserInput("change", value, item), index)
        )
        return item

    def serialize(self) -> Optional[List[dict]]:
        return self.store.serialize(self.empty_marker)

    def destroy(self) -> None:
        """Release timers and caches; the widget is not used afterwards."""
        self._destroyed = True
        self.scheduler.cancel()
        if self.suggestions is not None:
            self.suggestions.close()
        self.metas.clear()


def _as_list(values: Any) -> List[Any]:
    if values is None:
        return []
    return values if isinstance(values, list) else [values]
