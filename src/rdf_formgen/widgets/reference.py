"""
Reference field: values are entity IRIs picked through autocomplete.

Typing in an empty slot searches (SPARQL query from the field definition, or
the DBpedia lookup when the field has none); a filled slot shows the
resolved label of the entity instead of its IRI.
"""

from typing import Any, Optional

from PyQt6.QtWidgets import QLabel, QListWidget, QPushButton, QVBoxLayout, QWidget

from rdf_formgen.forms.field_widget import FieldWidget
from rdf_formgen.forms.interaction import UserInput
from rdf_formgen.protocols import LineEditAdapter, QueryEngine
from rdf_formgen.services.suggestion_sources import DbpediaLookupSource, SuggestionSource
from rdf_formgen.values import Reference

LOADING_TEXT = "Loading..."


class ReferenceField(FieldWidget):

    widget_type = "reference"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.update_metas()

    def _build_suggestion_source(self, query_engine: Optional[QueryEngine]) -> Optional[SuggestionSource]:
        source = super()._build_suggestion_source(query_engine)
        if source is None:
            source = DbpediaLookupSource(proxy=self.context.proxy)
        return source

    def on(self, event: UserInput, index: int) -> None:
        if event.type == "search":
            self.search(index, event.value)
            self.emit(event, index)
            return
        super().on(event, index)

    def display_label(self, index: int) -> str:
        """Label text for slot index: resolved label, loading text, or the IRI."""
        meta = self.reference_meta(index)
        if meta is None:
            return ""
        if meta.label.loading:
            return LOADING_TEXT
        return meta.label.value or meta.uri

    def display_thumbnail(self, index: int) -> Optional[str]:
        meta = self.reference_meta(index)
        if meta is None or meta.thumbnail.loading:
            return None
        return meta.thumbnail.value

    def template_item(self, index: int, node: Optional[Any]) -> QWidget:
        item = QWidget()
        layout = QVBoxLayout(item)
        layout.setContentsMargins(0, 0, 0, 0)

        if isinstance(node, Reference) and node.uri:
            label = QLabel(self.display_label(index))
            label.setToolTip(node.uri)
            layout.addWidget(label)
            clear_button = QPushButton("×")
            clear_button.clicked.connect(lambda: self.remove_reference(index))
            layout.addWidget(clear_button)
            return item

        search_input = LineEditAdapter()
        search_input.set_placeholder(self.field.placeholder)
        search_input.connect_change_signal(
            lambda term: self.on(UserInput("search", term, search_input), index)
        )
        layout.addWidget(search_input)

        results = self.suggestions.results(index) if self.suggestions is not None else []
        if results and self.expanded.get(index):
            suggestion_list = QListWidget()
            for suggestion in results:
                suggestion_list.addItem(suggestion.label)
            suggestion_list.currentRowChanged.connect(
                lambda row: self.select_suggestion(index, row)
            )
            layout.addWidget(suggestion_list)
        return item
