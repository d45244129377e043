"""
Unit tests for the descriptor document parser.
"""

import json

import pytest
from descriptor_schema.descriptors import (
    UNDEFINED,
    BooleanDescriptor,
    BrandDescriptor,
    NumberDescriptor,
    OptionalDescriptor,
    StringDescriptor,
    TemplateLiteralDescriptor,
    UnknownDescriptor,
    array,
    dictionary,
    intersect,
    literal,
    load_descriptor_file,
    parse_descriptor,
    record,
    tuple_of,
    union,
)


class TestParseLeaves:
    """Test parsing leaf nodes."""

    def test_primitives(self):
        """Test primitive tags."""
        assert parse_descriptor({"tag": "string"}) == StringDescriptor()
        assert parse_descriptor({"tag": "number"}) == NumberDescriptor()
        assert parse_descriptor({"tag": "boolean"}) == BooleanDescriptor()
        assert parse_descriptor({"tag": "unknown"}) == UnknownDescriptor()
        assert parse_descriptor({"tag": "never"}).tag == "never"
        assert parse_descriptor({"tag": "void"}).tag == "void"

    def test_template_literal(self):
        """Test template literal keeps its pattern."""
        descriptor = parse_descriptor({"tag": "template-literal-string", "pattern": "v[0-9]+"})

        assert descriptor == TemplateLiteralDescriptor(pattern="v[0-9]+")

    def test_literals(self):
        """Test literal values, including null and the missing-value literal."""
        assert parse_descriptor({"tag": "literal", "value": "GET"}) == literal("GET")
        assert parse_descriptor({"tag": "literal", "value": None}).value is None
        assert parse_descriptor({"tag": "literal"}).value is UNDEFINED

    def test_non_scalar_literal(self):
        """Test literal values must be scalars."""
        with pytest.raises(ValueError, match="must be a scalar"):
            parse_descriptor({"tag": "literal", "value": [1]})


class TestParseComposites:
    """Test parsing nested nodes."""

    def test_wrappers(self):
        """Test optional and brand nodes."""
        assert parse_descriptor({"tag": "optional", "underlying": {"tag": "string"}}) == (
            OptionalDescriptor(underlying=StringDescriptor())
        )
        assert parse_descriptor({"tag": "brand", "brand": "UserId", "entity": {"tag": "string"}}) == (
            BrandDescriptor(brand="UserId", entity=StringDescriptor())
        )

    def test_collections(self):
        """Test array, dictionary, tuple, intersect and union nodes."""
        assert parse_descriptor({"tag": "array", "element": {"tag": "number"}}) == array(NumberDescriptor())
        assert parse_descriptor(
            {"tag": "dictionary", "key": "number", "value": {"tag": "string"}}
        ) == dictionary("number", StringDescriptor())
        assert parse_descriptor(
            {"tag": "tuple", "components": [{"tag": "string"}, {"tag": "number"}]}
        ) == tuple_of(StringDescriptor(), NumberDescriptor())
        assert parse_descriptor(
            {"tag": "intersect", "intersectees": [{"tag": "string"}, {"tag": "string"}]}
        ) == intersect(StringDescriptor(), StringDescriptor())
        assert parse_descriptor(
            {"tag": "union", "alternatives": [{"tag": "string"}, {"tag": "literal"}]}
        ) == union(StringDescriptor(), literal())

    def test_dictionary_key_defaults_to_string(self):
        """Test a dictionary without key kind uses string keys."""
        assert parse_descriptor({"tag": "dictionary", "value": {"tag": "number"}}).key == "string"

    def test_record(self):
        """Test record fields, optional wrappers and optional_fields."""
        document = {
            "tag": "record",
            "fields": {
                "name": {"tag": "string"},
                "nickname": {"tag": "optional", "underlying": {"tag": "string"}},
                "age": {"tag": "number"},
            },
            "optional_fields": ["age"],
        }

        assert parse_descriptor(document) == record({
            "name": StringDescriptor(),
            "nickname": StringDescriptor().optional(),
            "age": NumberDescriptor().optional(),
        })

    def test_record_field_order(self):
        """Test fields keep document order."""
        document = {"tag": "record", "fields": {"z": {"tag": "string"}, "a": {"tag": "string"}}}

        assert list(parse_descriptor(document).fields) == ["z", "a"]

    def test_partial_record(self):
        """Test the partial flag."""
        descriptor = parse_descriptor({"tag": "record", "fields": {}, "partial": True})

        assert descriptor.is_partial


class TestParseErrors:
    """Test malformed documents."""

    @pytest.mark.parametrize(
        "document, message",
        [
            ({"tag": "bigint"}, "Unsupported descriptor tag"),
            ({"type": "string"}, "missing its 'tag'"),
            ("string", "must be an object"),
            ({"tag": "constraint"}, "cannot be loaded from a document"),
            ({"tag": "array"}, "missing 'element'"),
            ({"tag": "union", "alternatives": {"tag": "string"}}, "must be list"),
            ({"tag": "dictionary", "key": "boolean", "value": {"tag": "string"}}, "Invalid dictionary key kind"),
            ({"tag": "record", "fields": {}, "optional_fields": ["ghost"]}, "Unknown optional fields: ghost"),
            ({"tag": "record", "fields": []}, "must be an object"),
        ],
    )
    def test_invalid_documents(self, document, message):
        """Test each malformed document raises ValueError."""
        with pytest.raises(ValueError, match=message):
            parse_descriptor(document)


class TestLoadDescriptorFile:
    """Test loading descriptors from files."""

    def test_load_file(self, tmp_path):
        """Test loading a valid descriptor file."""
        path = tmp_path / "user.json"
        path.write_text(json.dumps({"tag": "array", "element": {"tag": "string"}}))

        assert load_descriptor_file(path) == array(StringDescriptor())

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ValueError."""
        with pytest.raises(ValueError, match="not found"):
            load_descriptor_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test a file with broken JSON raises ValueError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_descriptor_file(path)
