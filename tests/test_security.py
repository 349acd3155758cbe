"""Tests for resource limits on untrusted documents."""

import pytest

from activity_vocab import DEFAULT_RESOURCE_LIMITS, Note, enforce_resource_limits, from_dict


class TestEnforceResourceLimits:
    def test_valid_document(self):
        enforce_resource_limits({"type": "Note", "content": "hi"})  # Should not raise

    def test_none_raises(self):
        with pytest.raises(TypeError, match="must not be None"):
            enforce_resource_limits(None)

    def test_invalid_json_string(self):
        with pytest.raises(ValueError, match="not valid JSON"):
            enforce_resource_limits("{not json}")

    def test_non_serializable_dict(self):
        with pytest.raises(TypeError, match="not JSON-serializable"):
            enforce_resource_limits({"type": "Note", "content": object()})

    def test_wrong_type(self):
        with pytest.raises(TypeError, match="must be a str, dict, or list"):
            enforce_resource_limits(42)

    def test_size_limit_string(self):
        with pytest.raises(ValueError, match="exceeds limit"):
            enforce_resource_limits('{"type": "Note"}', {"max_document_size": 2})

    def test_size_limit_dict(self):
        with pytest.raises(ValueError, match="exceeds limit"):
            enforce_resource_limits({"type": "Note"}, {"max_document_size": 2})

    def test_depth_limit(self):
        nested = {"object": {"object": {"object": {"type": "Note"}}}}
        with pytest.raises(ValueError, match="depth"):
            enforce_resource_limits(nested, {"max_graph_depth": 2})

    def test_list_document(self):
        enforce_resource_limits([{"type": "Note"}, {"type": "Person"}])  # Should not raise

    def test_deeply_nested_capped(self):
        """Extremely deep structures don't cause stack overflow."""
        doc: dict = {}
        current = doc
        for _ in range(600):
            current["object"] = {}
            current = current["object"]
        with pytest.raises(ValueError, match="depth"):
            enforce_resource_limits(doc, {"max_graph_depth": 50})

    def test_defaults(self):
        assert DEFAULT_RESOURCE_LIMITS["max_graph_depth"] == 100
        assert DEFAULT_RESOURCE_LIMITS["max_document_size"] == 10 * 1024 * 1024


class TestEntityDepth:
    def _chain(self, levels):
        doc = {"type": "Note"}
        for _ in range(levels):
            doc = {"type": "Create", "object": doc}
        return doc

    def test_within_default_limit(self):
        entity = from_dict(self._chain(50))
        assert entity.serialize() == self._chain(50)

    def test_beyond_default_limit(self):
        with pytest.raises(ValueError, match="exceeds limit 100"):
            from_dict(self._chain(150))

    def test_custom_limit(self):
        with pytest.raises(ValueError, match="exceeds limit 3"):
            from_dict(self._chain(5), limits={"max_graph_depth": 3})

    def test_serialize_limit(self):
        entity = from_dict(self._chain(5))
        with pytest.raises(ValueError):
            entity.serialize(limits={"max_graph_depth": 2})

    def test_unknown_values_kept_opaque(self):
        doc = {"type": "Note", "x:deep": self._chain(10)}
        note = Note.from_dict(doc)
        assert note.get_unknown("x:deep") == self._chain(10)

    def test_unknown_values_count_toward_document_depth(self):
        doc = {"type": "Note", "x:deep": self._chain(10)}
        with pytest.raises(ValueError, match="Document depth exceeds limit 5"):
            Note.from_dict(doc, limits={"max_graph_depth": 5})


class TestOpaqueNesting:
    @staticmethod
    def _nested_list(levels):
        value = []
        for _ in range(levels):
            value = [value]
        return value

    def test_extension_key(self):
        doc = {"type": "Note", "x:ext": self._nested_list(600)}
        with pytest.raises(ValueError, match="depth"):
            from_dict(doc)

    def test_unknown_property_value(self):
        doc = {"type": "Note", "tag": self._nested_list(600)}
        with pytest.raises(ValueError, match="depth"):
            Note.from_dict(doc)

    def test_deserialize_leaves_entity_unchanged(self):
        note = Note.from_dict({"type": "Note", "name": "keep"})
        with pytest.raises(ValueError, match="depth"):
            note.deserialize({"type": "Note", "x:ext": self._nested_list(600)})
        assert note.get_name_string(0) == "keep"

    def test_beyond_interpreter_recursion(self):
        doc = {"type": "Note", "x:ext": self._nested_list(5000)}
        with pytest.raises(ValueError):
            from_dict(doc)

    def test_non_dict_still_type_error(self):
        with pytest.raises(TypeError, match="expects a dict"):
            Note.from_dict("Note")
