"""
Unit tests for descriptor -> JSON Schema transformation.
"""

import pytest
from descriptor_schema.descriptors import (
    UNDEFINED,
    BooleanDescriptor,
    BrandDescriptor,
    ConstraintDescriptor,
    NeverDescriptor,
    NumberDescriptor,
    StringDescriptor,
    TemplateLiteralDescriptor,
    UnknownDescriptor,
    VoidDescriptor,
    array,
    dictionary,
    intersect,
    literal,
    record,
    tuple_of,
    union,
)
from descriptor_schema.schema import transform_to_json_schema


def transform(descriptor, cut_off=True, override=None, fallback=True):
    return transform_to_json_schema(descriptor, cut_off, override, fallback)


class TestPrimitives:
    """Test leaf descriptors."""

    @pytest.mark.parametrize(
        "descriptor, expected",
        [
            (StringDescriptor(), {"type": "string"}),
            (NumberDescriptor(), {"type": "number"}),
            (BooleanDescriptor(), {"type": "boolean"}),
            (TemplateLiteralDescriptor(pattern=r"user-\d+"), {"type": "string"}),
        ],
    )
    def test_primitive_types(self, descriptor, expected):
        """Test primitives produce exactly their type."""
        assert transform(descriptor) == expected

    @pytest.mark.parametrize("cut_off", [True, False])
    def test_never_void_and_unknown(self, cut_off):
        """Test never/void match nothing and unknown matches anything."""
        assert transform(NeverDescriptor(), cut_off) is False
        assert transform(VoidDescriptor(), cut_off) is False
        assert transform(UnknownDescriptor(), cut_off) is True


class TestLiterals:
    """Test literal descriptors."""

    def test_null_literal(self):
        """Test None literal is the null type without const."""
        assert transform(literal(None)) == {"type": "null"}

    def test_undefined_literal(self):
        """Test the UNDEFINED literal matches nothing."""
        assert transform(literal(UNDEFINED)) is False
        assert transform(literal()) is False

    @pytest.mark.parametrize(
        "value, type_name",
        [("literal", "string"), (True, "boolean"), (False, "boolean"), (1, "number"), (1.5, "number")],
    )
    def test_scalar_literals(self, value, type_name):
        """Test scalar literals carry type and const."""
        assert transform(literal(value)) == {"type": type_name, "const": value}

    def test_big_integer_literal_uses_fallback(self):
        """Test integers beyond the safe range go to the fallback."""
        seen = []
        descriptor = literal(2 ** 60)

        schema = transform(descriptor, fallback=lambda d: seen.append(d) or {"type": "integer"})

        assert schema == {"type": "integer"}
        assert seen == [descriptor]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_literal_uses_fallback(self, value):
        """Test NaN and infinities go to the fallback."""
        seen = []

        schema = transform(literal(value), fallback=lambda d: seen.append(d) or {"type": "number"})

        assert schema == {"type": "number"}
        assert len(seen) == 1
        assert seen[0].value is value

    def test_largest_safe_integer_is_a_number(self):
        """Test the largest safe integer is still an ordinary number literal."""
        value = 2 ** 53 - 1
        assert transform(literal(value)) == {"type": "number", "const": value}


class TestWrappers:
    """Test constraint, optional and brand descriptors."""

    def test_constraint_is_transparent(self):
        """Test constraints don't change the schema."""
        descriptor = StringDescriptor().with_constraint(lambda value: True)
        assert transform(descriptor) == {"type": "string"}

    def test_optional_is_transparent(self):
        """Test optional doesn't change the schema."""
        assert transform(NumberDescriptor().optional()) == {"type": "number"}

    def test_brand_is_transparent(self):
        """Test brand renders its entity."""
        assert transform(BrandDescriptor(brand="UserId", entity=StringDescriptor())) == {"type": "string"}


class TestComposites:
    """Test arrays, records, dictionaries and tuples."""

    def test_array(self):
        """Test array items come from the element."""
        assert transform(array(StringDescriptor())) == {
            "type": "array",
            "items": {"type": "string"},
        }

    def test_record_requiredness(self):
        """Test optional fields are listed in properties but not in required."""
        descriptor = record({"p": StringDescriptor(), "q": StringDescriptor().optional()})

        assert transform(descriptor) == {
            "type": "object",
            "properties": {"p": {"type": "string"}, "q": {"type": "string"}},
            "additionalProperties": False,
            "required": ["p"],
        }

    def test_record_without_required_fields_omits_required(self):
        """Test required is left out when every field is optional."""
        schema = transform(record({"q": StringDescriptor().optional()}))

        assert "required" not in schema
        assert schema["properties"] == {"q": {"type": "string"}}

    def test_record_partial_flag_does_not_decide_requiredness(self):
        """Test the field's own optional tag is the source of truth."""
        schema = transform(record({"p": StringDescriptor()}, is_partial=True))

        assert schema["required"] == ["p"]

    def test_record_keeps_field_order(self):
        """Test properties and required keep declaration order."""
        schema = transform(record({"z": StringDescriptor(), "a": NumberDescriptor(), "m": BooleanDescriptor()}))

        assert list(schema["properties"]) == ["z", "a", "m"]
        assert schema["required"] == ["z", "a", "m"]

    def test_nested_record_undefined_union_is_not_cut(self):
        """Test only the top-level position cuts undefined alternatives."""
        schema = transform(record({"value": union(StringDescriptor(), literal())}))

        assert schema["properties"]["value"] == {"anyOf": [{"type": "string"}, False]}

    @pytest.mark.parametrize("key", ["string", "number"])
    def test_dictionary(self, key):
        """Test dictionaries describe key kind and value schema."""
        assert transform(dictionary(key, NumberDescriptor())) == {
            "type": "object",
            "propertyNames": {"type": key},
            "additionalProperties": {"type": "number"},
        }

    def test_symbol_dictionary_uses_fallback_once(self):
        """Test symbol-keyed dictionaries hand the descriptor to the fallback exactly once."""
        seen = []
        sentinel = {"description": "unsupported"}
        descriptor = dictionary("symbol", StringDescriptor())

        schema = transform(descriptor, fallback=lambda d: seen.append(d) or sentinel)

        assert schema is sentinel
        assert seen == [descriptor]

    def test_tuple(self):
        """Test tuples pin their length and positional items."""
        schema = transform_to_json_schema(
            tuple_of(StringDescriptor(), NumberDescriptor()), True, None, lambda d: None
        )

        assert schema == {
            "type": "array",
            "minItems": 2,
            "maxItems": 2,
            "items": [{"type": "string"}, {"type": "number"}],
        }


class TestIntersections:
    """Test intersect descriptors."""

    def test_intersect_of_different_types(self):
        """Test no type is hoisted when branches disagree."""
        schema = transform(intersect(StringDescriptor(), NumberDescriptor()))

        assert schema == {"allOf": [{"type": "string"}, {"type": "number"}]}
        assert "type" not in schema

    def test_intersect_of_same_type_hoists_it(self):
        """Test a type shared by every branch is hoisted."""
        schema = transform(intersect(StringDescriptor(), TemplateLiteralDescriptor(pattern="a.*")))

        assert schema == {"type": "string", "allOf": [{"type": "string"}, {"type": "string"}]}

    def test_intersect_of_literals_is_not_compressed(self):
        """Test enum compression only applies to unions."""
        schema = transform(intersect(literal("a"), literal("b")))

        assert "enum" not in schema
        assert schema["allOf"] == [{"type": "string", "const": "a"}, {"type": "string", "const": "b"}]


class TestUnions:
    """Test union descriptors."""

    def test_union_of_different_types(self):
        """Test different branch types stay as anyOf without hoisting."""
        assert transform(union(StringDescriptor(), NumberDescriptor())) == {
            "anyOf": [{"type": "string"}, {"type": "number"}]
        }

    def test_union_of_same_type_hoists_it(self):
        """Test a shared branch type is hoisted."""
        schema = transform(union(StringDescriptor(), TemplateLiteralDescriptor(pattern="x")))

        assert schema == {"type": "string", "anyOf": [{"type": "string"}, {"type": "string"}]}

    def test_nested_unions_are_flattened(self):
        """Test a union of unions equals the flat union of its leaves, in order."""
        nested = union(
            StringDescriptor(),
            union(NumberDescriptor(), union(BooleanDescriptor(), literal(None))),
        )
        flat = union(StringDescriptor(), NumberDescriptor(), BooleanDescriptor(), literal(None))

        assert transform(nested) == transform(flat)
        assert transform(nested, cut_off=False) == transform(flat, cut_off=False)
        assert transform(nested) == {
            "anyOf": [{"type": "string"}, {"type": "number"}, {"type": "boolean"}, {"type": "null"}]
        }

    def test_union_of_same_type_literals_becomes_enum(self):
        """Test literal unions compress to a single enum."""
        assert transform(union(literal("one"), literal("two"))) == {
            "type": "string",
            "enum": ["one", "two"],
        }

    def test_union_of_mixed_literals_becomes_enum_with_type_list(self):
        """Test heterogeneous literal unions list every distinct type."""
        assert transform(union(literal("literal"), literal(1))) == {
            "type": ["string", "number"],
            "enum": ["literal", 1],
        }

    def test_enum_type_list_keeps_first_appearance_order(self):
        """Test distinct types are listed once, in order of first appearance."""
        schema = transform(union(literal(1), literal("a"), literal(2), literal(True)))

        assert schema == {"type": ["number", "string", "boolean"], "enum": [1, "a", 2, True]}

    def test_union_with_non_literal_is_not_compressed(self):
        """Test compression is skipped when any branch lacks a const."""
        schema = transform(union(literal("a"), StringDescriptor()))

        assert schema == {
            "type": "string",
            "anyOf": [{"type": "string", "const": "a"}, {"type": "string"}],
        }

    def test_null_literal_prevents_compression(self):
        """Test null branches have no const and keep the anyOf form."""
        schema = transform(union(literal("a"), literal(None)))

        assert schema == {"anyOf": [{"type": "string", "const": "a"}, {"type": "null"}]}


class TestTopLevelUndefined:
    """Test cutting undefined alternatives at the top level."""

    def test_cut_off_single_remaining_alternative(self):
        """Test X | undefined becomes X at the top level."""
        assert transform(union(StringDescriptor(), literal())) == transform(StringDescriptor())
        assert transform(union(StringDescriptor(), literal())) == {"type": "string"}

    def test_no_cut_off_when_disabled(self):
        """Test the undefined branch is kept when cutting is disabled."""
        assert transform(union(StringDescriptor(), literal()), cut_off=False) == {
            "anyOf": [{"type": "string"}, False]
        }

    def test_cut_off_through_constraint(self):
        """Test a constrained undefined literal is still recognised as undefined."""
        undefined = literal().with_constraint(lambda value: True)

        assert transform(union(StringDescriptor(), undefined)) == {"type": "string"}

    def test_cut_off_leaves_union_of_remaining(self):
        """Test several remaining alternatives form a new union."""
        assert transform(union(StringDescriptor(), NumberDescriptor(), literal())) == {
            "anyOf": [{"type": "string"}, {"type": "number"}]
        }

    def test_cut_off_remaining_literals_are_compressed(self):
        """Test the rebuilt union still gets enum compression."""
        assert transform(union(literal("one"), literal("two"), literal())) == {
            "type": "string",
            "enum": ["one", "two"],
        }

    def test_cut_off_applies_after_flattening(self):
        """Test undefined nested inside a union of unions is cut as well."""
        descriptor = union(StringDescriptor(), union(NumberDescriptor(), literal()))

        assert transform(descriptor) == {"anyOf": [{"type": "string"}, {"type": "number"}]}

    def test_only_undefined_alternatives(self):
        """Test a top-level union of only undefined goes to the fallback with None."""
        seen = []

        schema = transform(union(literal(), literal()), fallback=lambda d: seen.append(d) or "FALLBACK")

        assert schema == "FALLBACK"
        assert seen == [None]

    def test_only_undefined_alternatives_reach_override(self):
        """Test the override is consulted for the empty remainder."""
        seen = []

        def override(descriptor, cut_off):
            seen.append(descriptor)
            return {"not": {}} if descriptor is None else None

        assert transform(union(literal(), literal()), override=override) == {"not": {}}
        assert seen[-1] is None

    def test_only_undefined_alternatives_with_strict_fallback(self):
        """Test a raising fallback surfaces the empty remainder."""

        def fallback(descriptor):
            raise ValueError("unsupported")

        with pytest.raises(ValueError, match="unsupported"):
            transform(union(literal(), literal()), fallback=fallback)

    def test_optional_alternative_is_not_cut(self):
        """Test alternatives that merely allow undefined are kept."""
        descriptor = union(StringDescriptor(), NumberDescriptor().optional())

        assert transform(descriptor) == {"anyOf": [{"type": "string"}, {"type": "number"}]}


class TestHooks:
    """Test override and fallback hooks."""

    def test_override_replaces_everything(self):
        """Test an override answering every node determines the whole output."""
        fixed = {"description": "fixed"}
        descriptor = record({"a": array(union(StringDescriptor(), literal(1)))})

        assert transform(descriptor, override=lambda d, cut_off: fixed) == fixed

    def test_override_applies_to_nested_nodes(self):
        """Test overrides are consulted at every nested position."""

        def override(descriptor, cut_off):
            if isinstance(descriptor, ConstraintDescriptor) and descriptor.name == "integer":
                return {"type": "integer"}
            return None

        integer = NumberDescriptor().with_constraint(lambda value: float(value).is_integer(), name="integer")
        schema = transform(record({"count": integer, "ratio": NumberDescriptor()}), override=override)

        assert schema["properties"] == {"count": {"type": "integer"}, "ratio": {"type": "number"}}

    def test_override_receives_cut_off_flag(self):
        """Test overrides see the caller's cut-off flag at every call."""
        seen = []

        def override(descriptor, cut_off):
            seen.append((descriptor.tag, cut_off))
            return None

        transform(array(StringDescriptor()), cut_off=False, override=override)

        assert seen == [("array", False), ("string", False)]

    def test_override_wins_over_top_level_cut_off(self):
        """Test overrides are consulted before the undefined cut-off."""
        descriptor = union(StringDescriptor(), literal())

        def override(d, cut_off):
            return {"description": "union"} if d is descriptor else None

        assert transform(descriptor, override=override) == {"description": "union"}

    def test_static_fallback_for_unrecognised_input(self):
        """Test inputs without a tag resolve to the static fallback."""
        assert transform_to_json_schema(None, True, None, "hello") == "hello"
        assert transform_to_json_schema(object(), True, None, False) is False

    def test_fallback_not_used_for_supported_shapes(self):
        """Test the fallback is left alone when a schema can be produced."""

        def fallback(descriptor):
            raise AssertionError("fallback must not be called")

        assert transform(record({"a": StringDescriptor()}), fallback=fallback)["required"] == ["a"]

    def test_raising_fallback_makes_transformation_strict(self):
        """Test a raising fallback turns unsupported shapes into errors."""

        def fallback(descriptor):
            raise ValueError("unsupported")

        with pytest.raises(ValueError, match="unsupported"):
            transform(array(literal(2 ** 60)), fallback=fallback)

    def test_transformation_is_repeatable(self):
        """Test equal input gives equal, freshly built output."""
        descriptor = record({"a": union(literal("x"), literal("y"))})

        first = transform(descriptor)
        second = transform(descriptor)

        assert first == second
        assert first is not second
