"""Tests for owning entities: accessors, type sequence, unknown keys and (de)serialization."""

import copy
from datetime import datetime, timedelta, timezone

import pytest

from activity_vocab import (
    Accept,
    Activity,
    Collection,
    CollectionPage,
    Create,
    Image,
    IntransitiveActivity,
    Link,
    Note,
    OrderedCollection,
    OrderedCollectionPage,
    Person,
    Place,
    Question,
)


# ═══════════════════════════════════════════════════════════════════
# Generated accessors
# ═══════════════════════════════════════════════════════════════════


class TestFunctionalAccessors:
    def test_single_kind_uses_has(self):
        note = Note()
        assert not note.has_id()
        note.set_id("https://example.com/notes/1")
        assert note.has_id()
        assert note.get_id() == "https://example.com/notes/1"

    def test_clear(self):
        note = Note()
        note.set_id("https://example.com/notes/1")
        note.clear_id()
        assert not note.has_id()

    def test_get_absent_raises(self):
        with pytest.raises(LookupError):
            Note().get_id()

    def test_several_kinds(self):
        place = Place()
        place.set_units_units_value("km")
        assert place.is_units_units_value()
        assert not place.is_units_any_uri()
        with pytest.raises(LookupError):
            place.get_units_any_uri()

    def test_set_replaces_other_kind(self):
        place = Place()
        place.set_units_units_value("km")
        place.set_units_any_uri("https://example.com/units/furlong")
        assert place.get_units_any_uri() == "https://example.com/units/furlong"
        assert not place.is_units_units_value()
        assert place.serialize()["units"] == "https://example.com/units/furlong"

    def test_set_validates(self):
        with pytest.raises(ValueError):
            Note().set_id("not an iri")
        with pytest.raises(TypeError):
            Image().set_width("wide")

    def test_set_reference(self):
        page = CollectionPage()
        page.set_part_of_collection(Collection())
        assert page.is_part_of_collection()
        assert isinstance(page.get_part_of_collection(), Collection)

    def test_set_reference_rejects_non_conforming(self):
        with pytest.raises(TypeError):
            CollectionPage().set_part_of_collection(OrderedCollection())

    def test_unknown(self):
        place = Place()
        assert not place.has_unknown_units()
        assert place.get_unknown_units() is None
        place.set_unknown_units({"custom": "lightyears"})
        assert place.has_unknown_units()
        assert place.get_unknown_units() == {"custom": "lightyears"}
        assert not place.is_units_units_value()

    def test_float_normalized(self):
        place = Place()
        place.set_latitude(51)
        assert place.get_latitude() == 51.0
        assert isinstance(place.get_latitude(), float)


class TestSequenceAccessors:
    def test_append_prepend_order(self):
        note = Note()
        note.append_to_iri("https://example.com/b")
        note.prepend_to_iri("https://example.com/a")
        note.append_to_object(Person())
        assert note.to_len() == 3
        assert note.get_to_iri(0) == "https://example.com/a"
        assert note.get_to_iri(1) == "https://example.com/b"
        assert note.is_to_object(2)

    def test_several_kinds_per_index(self):
        q = Question()
        when = datetime(2024, 5, 1, tzinfo=timezone.utc)
        q.append_closed_boolean(True)
        q.append_closed_date_time(when)
        assert q.closed_len() == 2
        assert q.is_closed_boolean(0)
        assert not q.is_closed_date_time(0)
        assert q.get_closed_date_time(1) == when
        with pytest.raises(LookupError):
            q.get_closed_date_time(0)

    def test_remove(self):
        note = Note()
        note.append_tag_iri("https://example.com/t/1")
        note.append_tag_iri("https://example.com/t/2")
        note.remove_tag_iri(0)
        assert note.tag_len() == 1
        assert note.get_tag_iri(0) == "https://example.com/t/2"

    def test_index_out_of_range(self):
        note = Note()
        with pytest.raises(IndexError):
            note.get_to_iri(0)
        with pytest.raises(IndexError):
            note.is_to_iri(-1)
        with pytest.raises(IndexError):
            note.remove_to_iri(0)

    def test_index_must_be_int(self):
        note = Note()
        note.append_to_iri("https://example.com/a")
        with pytest.raises(TypeError):
            note.get_to_iri("0")
        with pytest.raises(TypeError):
            note.get_to_iri(True)

    def test_get_wrong_kind(self):
        note = Note()
        note.append_to_iri("https://example.com/a")
        with pytest.raises(LookupError):
            note.get_to_object(0)

    def test_clear(self):
        note = Note()
        note.append_content_string("hi")
        note.clear_content()
        assert note.content_len() == 0

    def test_unknown_is_first(self):
        note = Note()
        note.append_content_string("hi")
        note.set_unknown_content({"x": 1})
        assert note.content_len() == 2
        assert note.has_unknown_content()
        assert note.get_unknown_content() == {"x": 1}
        assert note.is_content_string(1)

    def test_set_unknown_replaces_front_unknown(self):
        note = Note()
        note.append_content_string("hi")
        note.set_unknown_content({"x": 1})
        note.set_unknown_content({"x": 2})
        assert note.content_len() == 2
        assert note.get_unknown_content() == {"x": 2}
        assert note.serialize()["content"] == [{"x": 2}, "hi"]

    def test_unknown_absent(self):
        note = Note()
        note.append_content_string("hi")
        assert not note.has_unknown_content()
        assert note.get_unknown_content() is None

    def test_object_accessors_drop_suffix(self):
        accept = Accept()
        accept.append_object(Note())
        accept.append_object_iri("https://example.com/notes/1")
        assert accept.is_object(0)
        assert accept.is_object_iri(1)

    def test_accessor_metadata(self):
        assert Note.append_to_iri.__name__ == "append_to_iri"
        assert "to" in Note.append_to_iri.__doc__


class TestLanguageMaps:
    def test_set_and_get(self):
        note = Note()
        note.set_content_map("en", "Hello")
        note.set_content_map("fr", "Bonjour")
        assert note.content_map_languages() == {"en", "fr"}
        assert note.get_content_map("fr") == "Bonjour"

    def test_missing_language_is_empty(self):
        assert Note().get_content_map("de") == ""

    def test_clear(self):
        note = Note()
        note.set_name_map("en", "x")
        note.clear_name_map()
        assert note.name_map_languages() == set()
        assert "nameMap" not in note.serialize()

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            Note().set_summary_map("en", 3)

    def test_independent_of_plain_values(self):
        note = Note()
        note.append_content_string("plain")
        note.set_content_map("en", "mapped")
        assert note.serialize() == {
            "type": "Note",
            "content": "plain",
            "contentMap": {"en": "mapped"},
        }


# ═══════════════════════════════════════════════════════════════════
# Inheritance
# ═══════════════════════════════════════════════════════════════════


class TestInheritance:
    def test_subtype_inherits_properties(self):
        assert "actor" in Accept.properties
        assert "content" in Accept.properties

    def test_intransitive_drops_object(self):
        assert "object" not in IntransitiveActivity.properties
        with pytest.raises(AttributeError):
            IntransitiveActivity().append_object
        with pytest.raises(AttributeError):
            Question().object_len

    def test_ordered_collection_swaps_items(self):
        assert "items" not in OrderedCollection.properties
        assert "orderedItems" in OrderedCollection.properties
        with pytest.raises(AttributeError):
            OrderedCollection().items_len
        oc = OrderedCollection()
        oc.append_ordered_items_iri("https://example.com/1")
        assert oc.ordered_items_len() == 1

    def test_ordered_collection_page_paging(self):
        page = OrderedCollectionPage()
        page.set_next_ordered_collection_page(OrderedCollectionPage())
        page.set_start_index(20)
        assert page.is_next_ordered_collection_page()
        assert page.get_start_index() == 20
        with pytest.raises(AttributeError):
            page.set_next_collection_page
        with pytest.raises(AttributeError):
            page.items_len

    def test_ordered_page_keeps_part_of(self):
        page = OrderedCollectionPage()
        page.set_part_of_iri("https://example.com/outbox")
        assert page.get_part_of_iri() == "https://example.com/outbox"

    def test_collection_keeps_unordered_current(self):
        c = Collection()
        c.set_current_collection_page(CollectionPage())
        assert c.is_current_collection_page()

    def test_shared_clear_accessor_targets_own_property(self):
        oc = OrderedCollection()
        oc.set_first_iri("https://example.com/p/1")
        oc.clear_first()
        assert not oc.is_first_iri()

    def test_link_family(self):
        assert Link.family == "link"
        assert "href" in Link.properties
        assert "content" not in Link.properties


# ═══════════════════════════════════════════════════════════════════
# Type sequence
# ═══════════════════════════════════════════════════════════════════


class TestTypeSequence:
    def test_empty_by_default(self):
        assert Note().type_len() == 0

    def test_canonical_type_added_on_output(self):
        assert Note().serialize() == {"type": "Note"}

    def test_serialize_does_not_mutate(self):
        note = Note()
        note.serialize()
        assert note.type_len() == 0

    def test_extra_types_kept(self):
        note = Note()
        note.append_type("https://example.com/ns#Memo")
        assert note.serialize()["type"] == ["https://example.com/ns#Memo", "Note"]

    def test_explicit_canonical_not_duplicated(self):
        note = Note()
        note.append_type("Note")
        assert note.serialize()["type"] == "Note"

    def test_prepend_remove(self):
        note = Note()
        note.append_type("B")
        note.prepend_type("A")
        assert note.get_type(0) == "A"
        note.remove_type(0)
        assert note.get_type(0) == "B"
        with pytest.raises(IndexError):
            note.get_type(1)


# ═══════════════════════════════════════════════════════════════════
# Unknown keys
# ═══════════════════════════════════════════════════════════════════


class TestUnknownKeys:
    def test_add_and_get(self):
        note = Note()
        note.add_unknown("sensitive", True)
        assert note.has_unknown("sensitive")
        assert note.get_unknown("sensitive") is True
        assert note.serialize()["sensitive"] is True

    def test_missing_raises(self):
        with pytest.raises(KeyError):
            Note().get_unknown("nope")

    def test_remove_missing_is_silent(self):
        note = Note()
        note.remove_unknown("nope")
        assert not note.has_unknown("nope")

    @pytest.mark.parametrize("key", ["type", "@context", "content", "contentMap"])
    def test_reserved_keys_rejected(self, key):
        with pytest.raises(ValueError):
            Note().add_unknown(key, "x")

    def test_dropped_property_name_is_extension(self):
        activity = IntransitiveActivity()
        activity.add_unknown("object", "https://example.com/x")
        assert activity.serialize()["object"] == "https://example.com/x"

    def test_declared_property_wins_over_unknown_key(self):
        note = Note.from_dict({"type": "Note", "content": "hi", "x:extra": 1})
        out = note.serialize()
        assert out["content"] == "hi"
        assert out["x:extra"] == 1


# ═══════════════════════════════════════════════════════════════════
# Serialization
# ═══════════════════════════════════════════════════════════════════


class TestSerialize:
    def test_single_value_collapses(self):
        note = Note()
        note.append_to_iri("https://example.com/a")
        assert note.serialize()["to"] == "https://example.com/a"

    def test_several_values_list(self):
        note = Note()
        note.append_to_iri("https://example.com/a")
        note.append_to_iri("https://example.com/b")
        assert note.serialize()["to"] == ["https://example.com/a", "https://example.com/b"]

    def test_empty_sequence_omitted(self):
        note = Note()
        note.append_to_iri("https://example.com/a")
        note.remove_to_iri(0)
        assert "to" not in note.serialize()

    def test_remove_down_to_one_collapses(self):
        note = Note()
        note.append_tag_iri("https://example.com/t/1")
        note.append_tag_iri("https://example.com/t/2")
        assert isinstance(note.serialize()["tag"], list)
        note.remove_tag_iri(0)
        assert note.serialize()["tag"] == "https://example.com/t/2"

    def test_lone_list_unknown_stays_wrapped(self):
        note = Note()
        note.set_unknown_tag(["a", "b"])
        assert note.serialize()["tag"] == [["a", "b"]]

    def test_nested(self):
        create = Create()
        note = Note()
        note.append_content_string("hello")
        create.append_object(note)
        create.append_actor_iri("https://example.com/alice")
        assert create.serialize() == {
            "type": "Create",
            "actor": "https://example.com/alice",
            "object": {"type": "Note", "content": "hello"},
        }

    def test_scalar_formats(self):
        note = Note()
        note.set_published(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        note.set_duration(timedelta(minutes=5))
        out = note.serialize()
        assert out["published"] == "2024-01-02T03:04:05Z"
        assert out["duration"] == "PT5M"

    def test_depth_limit(self):
        outer = Create()
        inner = Create()
        inner.append_object(Note())
        outer.append_object(inner)
        with pytest.raises(ValueError, match="depth"):
            outer.serialize(limits={"max_graph_depth": 1})
        assert outer.serialize(limits={"max_graph_depth": 2})["object"]["object"] == {
            "type": "Note"
        }

    def test_output_detached_from_unknown(self):
        note = Note()
        note.add_unknown("x:list", [1, 2])
        out = note.serialize()
        out["x:list"].append(3)
        assert note.get_unknown("x:list") == [1, 2]


class TestDeserialize:
    def test_replaces_state(self):
        note = Note()
        note.append_content_string("old")
        note.deserialize({"type": "Note", "name": "new"})
        assert note.content_len() == 0
        assert note.get_name_string(0) == "new"

    def test_atomic_on_error(self):
        note = Note()
        note.append_content_string("keep")
        deep = {"type": "Note"}
        for _ in range(5):
            deep = {"type": "Note", "attachment": deep}
        with pytest.raises(ValueError):
            note.deserialize(deep, limits={"max_graph_depth": 2})
        assert note.get_content_string(0) == "keep"

    def test_rejects_non_dict(self):
        with pytest.raises(TypeError):
            Note().deserialize(["Note"])

    def test_functional_list_is_unknown(self):
        note = Note.from_dict({"type": "Note", "id": ["https://a", "https://b"]})
        assert note.has_unknown_id()
        assert note.serialize()["id"] == ["https://a", "https://b"]

    def test_invalid_language_map_is_extension(self):
        doc = {"type": "Note", "contentMap": {"en": 3}}
        note = Note.from_dict(doc)
        assert note.content_map_languages() == set()
        assert note.has_unknown("contentMap")
        assert note.serialize() == doc

    def test_empty_language_map_kept(self):
        doc = {"type": "Note", "nameMap": {}}
        assert Note.from_dict(doc).serialize() == doc

    def test_input_not_mutated(self):
        doc = {"type": ["Note", "x:Memo"], "to": ["https://a"], "x:y": {"z": [1]}}
        snapshot = copy.deepcopy(doc)
        Note.from_dict(doc).serialize()
        assert doc == snapshot

    def test_embedded_link(self):
        note = Note.from_dict({
            "type": "Note",
            "url": {"type": "Link", "href": "https://example.com/n/1"},
        })
        assert note.is_url_link(0)
        assert note.get_url_link(0).get_href() == "https://example.com/n/1"


class TestEquality:
    def test_equal_after_round_trip(self):
        doc = {"type": "Note", "content": "hi", "x:y": 1}
        assert Note.from_dict(doc) == Note.from_dict(doc)

    def test_explicit_canonical_type_is_equal(self):
        a = Note()
        b = Note()
        b.append_type("Note")
        assert a == b

    def test_different_classes(self):
        assert Note() != Person()

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Note())

    def test_repr(self):
        note = Note()
        assert repr(note) == "<Note>"
        note.set_id("https://example.com/n/1")
        assert repr(note) == "<Note 'https://example.com/n/1'>"


class TestActivityIsObject:
    def test_activity_embeds_as_object(self):
        create = Create.from_dict({
            "type": "Create",
            "object": {"type": "Accept", "object": {"type": "Note"}},
        })
        inner = create.get_object(0)
        assert isinstance(inner, Accept)
        assert isinstance(inner, Activity)
        assert isinstance(inner.get_object(0), Note)
