"""Tests for the value model and FieldValueStore."""

import pytest

from rdf_formgen.values import (
    FieldDefinition, FieldValueStore, Literal, LocalizedLiteral, Reference, ValueKind,
    node_from_wire, node_to_wire,
)

LANGUAGES = {"en": "English", "fr": "Français", "de": "Deutsch"}


def make_store(values=None, languages=None, language="en", **field_options):
    field = FieldDefinition(binding="http://schema.org/name", **field_options)
    return FieldValueStore(field, values, LANGUAGES if languages is None else languages, language)


class TestValueNodes:

    def test_wire_shapes(self):
        assert node_from_wire("Paris") == Literal("Paris")
        assert node_from_wire({"@value": "Paris", "@language": "fr"}) == LocalizedLiteral("Paris", "fr")
        assert node_from_wire({"@id": "http://dbpedia.org/resource/Paris"}) == Reference(
            "http://dbpedia.org/resource/Paris"
        )
        assert node_from_wire({"@value": True}) == Literal("true")

    def test_bare_scalar_follows_declared_kind(self):
        assert node_from_wire("http://example.org/a", ValueKind.REFERENCE) == Reference("http://example.org/a")

    def test_datatype_survives(self):
        raw = {"@value": "2020-01-01", "@type": "http://www.w3.org/2001/XMLSchema#date"}
        assert node_to_wire(node_from_wire(raw)) == raw


class TestConstruction:

    def test_single_value_is_wrapped(self):
        store = make_store({"@value": "Paris"})
        assert store.get_all() == [Literal("Paris")]

    def test_empty_store_renders_one_synthetic_slot(self):
        store = make_store(None, required=True)
        assert len(store) == 0
        assert store.items_to_render() == [None]
        assert store.is_required(0)
        assert not store.is_required(1)

    def test_get_out_of_range_is_none(self):
        store = make_store(["a"])
        assert store.get(1) is None
        assert store.get(-1) is None


class TestMutation:

    def test_set_value_writes_text_or_uri(self):
        store = make_store(["a"], multiple=True)
        store.set_value("b", 0)
        assert store.get(0) == Literal("b")

        refs = make_store([{"@id": "http://example.org/a"}], kind=ValueKind.REFERENCE)
        refs.set_value("http://example.org/b", 0)
        assert refs.get(0) == Reference("http://example.org/b")

    def test_set_value_creates_literal_in_empty_slot(self):
        store = make_store()
        store.set_value("hello", 0)
        assert store.get_all() == [Literal("hello")]

    def test_set_value_beyond_end_is_ignored(self):
        store = make_store()
        store.set_value("hello", 3)
        assert len(store) == 0

    def test_set_merges_and_preserves_shape(self):
        store = make_store([{"@value": "Paris", "@language": "en"}], translatable=True)
        store.set(0, text="London")
        assert store.get(0) == LocalizedLiteral("London", "en")

    def test_set_with_uri_converts_slot_to_reference(self):
        store = make_store(["Par"])
        store.set(0, uri="http://dbpedia.org/resource/Paris")
        assert store.get(0) == Reference("http://dbpedia.org/resource/Paris")

    def test_set_refuses_to_mix_shapes(self):
        store = make_store(["a", "b"], multiple=True)
        store.set(1, uri="http://example.org/b")
        assert store.get_all() == [Literal("a"), Literal("b")]

    def test_set_language_refuses_duplicates(self):
        store = make_store(
            [{"@value": "Paris", "@language": "en"}, {"@value": "Paris", "@language": "fr"}],
            translatable=True,
        )
        store.set_language(1, "en")
        assert store.get(1).language == "fr"
        store.set_language(1, "de")
        assert store.get(1) == LocalizedLiteral("Paris", "de")
        assert store.language_options(1) == ["fr", "de"]

    def test_add_item_clones_shape_of_first(self):
        store = make_store([{"@id": "http://example.org/a"}], kind=ValueKind.REFERENCE, multiple=True)
        store.add_item()
        assert store.get_all() == [Reference("http://example.org/a"), Reference("")]

    def test_add_item_without_multiple_is_capped(self):
        store = make_store(["a"])
        store.add_item()
        assert len(store) == 1

    def test_add_item_on_translations_uses_free_language(self):
        store = make_store([{"@value": "Paris", "@language": "en"}], translatable=True, multiple=True)
        store.add_item()
        assert store.used_languages == ["en", "fr"]

    def test_remove_item_shifts_indices(self):
        store = make_store(["a", "b", "c"], multiple=True)
        store.remove_item(1)
        assert store.get_all() == [Literal("a"), Literal("c")]

    def test_remove_last_required_value_is_ignored(self):
        store = make_store(["a"], required=True)
        store.remove_item(0)
        assert store.get_all() == [Literal("a")]
        assert not store.show_remove_button(0)

    def test_remove_first_of_two_required_values(self):
        store = make_store(["a", "b"], required=True, multiple=True)
        store.remove_item(0)
        assert store.get_all() == [Literal("b")]

    def test_remove_invalid_index_is_ignored(self):
        store = make_store(["a"])
        store.remove_item(5)
        store.remove_item(-1)
        assert len(store) == 1


class TestTranslations:

    def test_add_translation_scenario(self):
        store = make_store(
            [{"@value": "Paris", "@language": "en"}],
            languages={"en": "English", "fr": "Français"},
            translatable=True,
        )
        store.add_translation()
        assert store.serialize() == [
            {"@value": "Paris", "@language": "en"},
            {"@value": "", "@language": "fr"},
        ]

    def test_add_translation_never_duplicates(self):
        store = make_store([{"@value": "Paris", "@language": "en"}], translatable=True)
        for _ in range(5):
            store.add_translation()
        assert sorted(store.used_languages) == ["de", "en", "fr"]
        assert not store.another_translation_is_possible

        before = store.get_all()
        store.add_translation()
        assert store.get_all() == before

    def test_add_translation_needs_translated_store(self):
        store = make_store(["Paris"], translatable=True)
        store.add_translation()
        assert store.get_all() == [Literal("Paris")]

    def test_enable_then_remove_translations_restores_first_text(self):
        store = make_store(["Paris", "Lutetia"], translatable=True, multiple=True)
        store.enable_translations()
        assert store.has_translations
        assert store.get(0) == LocalizedLiteral("Paris", "en")
        assert store.used_languages == ["en", "fr"]

        store.remove_translations()
        assert store.get_all() == [Literal("Paris")]

    def test_enable_translations_uses_interface_language(self):
        store = make_store(["Paris"], language="fr", translatable=True)
        store.enable_translations()
        assert store.get_all() == [LocalizedLiteral("Paris", "fr")]

    def test_enable_translations_requires_translatable(self):
        store = make_store(["Paris"])
        store.enable_translations()
        assert not store.has_translations

    def test_another_translation_is_possible(self):
        store = make_store([{"@value": "Paris", "@language": "en"}], translatable=True)
        assert store.another_translation_is_possible
        untranslated = make_store(["Paris"], translatable=True)
        assert not untranslated.another_translation_is_possible


class TestSerialize:

    def test_empty_store_serializes_to_none(self):
        assert make_store().serialize() is None

    def test_persist_empty_pads_missing_languages(self):
        store = make_store(
            [{"@value": "true", "@language": "en"}], translatable=True, save_empty_value=True
        )
        assert store.serialize("false") == [
            {"@value": "true", "@language": "en"},
            {"@value": "false", "@language": "fr"},
            {"@value": "false", "@language": "de"},
        ]
        # Padding is not written back into the store
        assert len(store) == 1

    def test_persist_empty_marks_untranslated_store(self):
        store = make_store(save_empty_value=True)
        assert store.serialize("false") == [{"@value": "false"}]

    def test_persist_empty_does_not_mark_filled_untranslated_store(self):
        store = make_store(["true"], save_empty_value=True)
        assert store.serialize("false") == [{"@value": "true"}]

    def test_replace_all_accepts_wire_and_nodes(self):
        store = make_store(["a"], multiple=True)
        store.replace_all([Literal("b"), {"@value": "c"}])
        assert store.get_all() == [Literal("b"), Literal("c")]

    def test_replace_all_refuses_mixed_shapes(self):
        store = make_store(["a"], multiple=True)
        store.replace_all(["b", {"@id": "http://example.org/x"}])
        assert store.get_all() == [Literal("a")]

    @pytest.mark.parametrize("values, options", [
        (["a", "b"], {"multiple": True}),
        ([{"@value": "Paris", "@language": "en"}, {"@value": "Paris", "@language": "fr"}],
         {"translatable": True}),
        ([{"@id": "http://example.org/a"}], {"kind": ValueKind.REFERENCE}),
    ])
    def test_serialize_reconstructs_equivalent_store(self, values, options):
        store = make_store(values, **options)
        rebuilt = make_store(store.serialize(), **options)
        assert rebuilt.get_all() == store.get_all()


def test_field_definition_from_camel_case_dict():
    field = FieldDefinition.from_dict({
        "binding": "http://schema.org/about",
        "type": "reference",
        "multiple": True,
        "saveEmptyValue": True,
        "autoCompleteQuery": "SELECT ?uri WHERE {}",
        "label": {"en": "about"},
    })
    assert field.widget_type == "reference"
    assert field.kind is ValueKind.REFERENCE
    assert field.save_empty_value
    assert field.auto_complete_query == "SELECT ?uri WHERE {}"
    assert field.label == {"en": "about"}
