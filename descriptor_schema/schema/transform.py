"""
Descriptor to JSON Schema transformation.

This module is the main entry point for turning a descriptor tree into a JSON
Schema document. It handles:
    - Every descriptor tag (primitives, literals, wrappers, composites)
    - Caller overrides, consulted before structural dispatch at every node
    - Fallbacks for shapes JSON Schema can't express
    - Top-level `X | undefined` cut-off (absence becomes optionality, not a branch)
    - Union flattening, common type hoisting and enum compression

Usage:
    ```python
    from descriptor_schema.descriptors import literal, union
    from descriptor_schema.schema import transform_to_json_schema

    descriptor = union(literal("one"), literal("two"), literal())

    transform_to_json_schema(descriptor, True, None, True)
    # {"type": "string", "enum": ["one", "two"]}

    transform_to_json_schema(descriptor, False, None, True)
    # {"anyOf": [{"type": "string", "const": "one"}, {"type": "string", "const": "two"}, False]}
    ```
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from descriptor_schema.descriptors.types import UNDEFINED, UnionDescriptor, is_big_integer, is_non_finite
from descriptor_schema.schema.common import (
    FallbackValue,
    JSONSchema,
    Override,
    flatten_deep_structures,
    get_fallback_value,
    try_to_compress_union_of_maybe_enums,
    try_to_hoist_common_type,
)
from descriptor_schema.schema.possibility import get_undefined_possibility

logger = logging.getLogger(__name__)


def transform_to_json_schema(
    descriptor: Any,
    cut_off_top_level_undefined: bool,
    override: Optional[Override],
    fallback_value: FallbackValue,
) -> JSONSchema:
    """
    Transform a descriptor tree into a JSON Schema.

    Args:
        descriptor: Root of the descriptor tree
        cut_off_top_level_undefined: If True, a top-level union containing the
            UNDEFINED literal is rendered as the union of its other alternatives
        override: Optional callback `(descriptor, cut_off_top_level_undefined)`
            returning a schema to use instead of the computed one, or None
        fallback_value: Schema, or callback `(descriptor) -> schema`, used when
            a descriptor has no JSON Schema rendering

    Returns:
        JSONSchema: Schema object, or True/False

    Note:
        This never raises for well-formed trees. Unsupported shapes (big
        integer and NaN/infinite literals, symbol-keyed dictionaries, unknown
        tags, a top-level union of only undefined) resolve to the fallback;
        pass a raising callback to fail instead.
    """
    context = _TransformContext(
        cut_off_top_level_undefined=cut_off_top_level_undefined,
        override=override,
        fallback_value=fallback_value,
    )
    return context.transform(descriptor, top_level=True)


@dataclass(frozen=True)
class _TransformContext:
    """Hooks threaded through every recursive call."""

    cut_off_top_level_undefined: bool
    override: Optional[Override]
    fallback_value: FallbackValue

    def transform(self, descriptor: Any, top_level: bool = False) -> JSONSchema:
        schema = None
        if self.override is not None:
            schema = self.override(descriptor, self.cut_off_top_level_undefined)

        if schema is None:
            if top_level and self.cut_off_top_level_undefined and _tag_of(descriptor) == "union":
                schema = self._try_transform_top_level_union(descriptor)
            if schema is None:
                schema = _transform_by_tag(self, descriptor)

        if schema is None:
            logger.debug("No JSON Schema rendering for %r, using fallback", descriptor)
            schema = get_fallback_value(descriptor, self.fallback_value)
        return schema

    def _try_transform_top_level_union(self, descriptor: Any) -> Optional[JSONSchema]:
        """
        Cut UNDEFINED alternatives out of a top-level union.

        Returns:
            Schema of the remaining alternatives, or None if nothing was cut
        """
        alternatives = _flatten_union(descriptor)
        present = [a for a in alternatives if get_undefined_possibility(a) is not True]
        if len(present) == len(alternatives):
            return None

        logger.debug("Cut %d undefined alternative(s) from top-level union", len(alternatives) - len(present))
        if len(present) <= 1:
            # Nothing left is an absent descriptor: override, then fallback
            return self.transform(present[0] if present else None)
        return self.transform(UnionDescriptor(alternatives=present))


def _tag_of(descriptor: Any) -> Optional[str]:
    return getattr(descriptor, "tag", None)


def _flatten_union(descriptor: Any) -> List[Any]:
    return list(
        flatten_deep_structures(
            descriptor.alternatives,
            lambda item: item.alternatives if _tag_of(item) == "union" else None,
        )
    )


def _literal_type_name(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def _transform_by_tag(context: _TransformContext, descriptor: Any) -> Optional[JSONSchema]:
    """
    Structural dispatch on the descriptor tag.

    Args:
        context: Hooks used for nested descriptors
        descriptor: Descriptor to transform

    Returns:
        JSONSchema, or None if the descriptor has no rendering
    """
    tag = _tag_of(descriptor)

    if tag in ("string", "template-literal-string"):
        return {"type": "string"}
    elif tag == "number":
        return {"type": "number"}
    elif tag == "boolean":
        return {"type": "boolean"}
    elif tag in ("never", "void"):
        return False
    elif tag == "unknown":
        return True
    elif tag == "literal":
        return _transform_literal(descriptor.value)
    elif tag in ("constraint", "optional"):
        return context.transform(descriptor.underlying)
    elif tag == "brand":
        return context.transform(descriptor.entity)
    elif tag == "array":
        return {"type": "array", "items": context.transform(descriptor.element)}
    elif tag == "record":
        return _transform_record(context, descriptor)
    elif tag == "dictionary":
        if descriptor.key == "symbol":
            return None
        return {
            "type": "object",
            "propertyNames": {"type": descriptor.key},
            "additionalProperties": context.transform(descriptor.value),
        }
    elif tag == "tuple":
        components = descriptor.components
        return {
            "type": "array",
            "minItems": len(components),
            "maxItems": len(components),
            "items": [context.transform(c) for c in components],
        }
    elif tag == "intersect":
        schema = {"allOf": [context.transform(i) for i in descriptor.intersectees]}
        return try_to_hoist_common_type(schema, "allOf")
    elif tag == "union":
        schema = {"anyOf": [context.transform(a) for a in _flatten_union(descriptor)]}
        schema = try_to_hoist_common_type(schema, "anyOf")
        return try_to_compress_union_of_maybe_enums(schema)
    else:
        return None


def _transform_literal(value: Any) -> Optional[JSONSchema]:
    if value is None:
        return {"type": "null"}
    if value is UNDEFINED:
        return False
    if is_big_integer(value) or is_non_finite(value):
        return None

    type_name = _literal_type_name(value)
    if type_name is None:
        return None
    return {"type": type_name, "const": value}


def _transform_record(context: _TransformContext, descriptor: Any) -> JSONSchema:
    """
    Transform a record. Requiredness comes from each field's own `optional`
    tag; the legacy `is_partial` flag is not consulted.
    """
    fields = descriptor.fields
    schema = {
        "type": "object",
        "properties": {name: context.transform(f) for name, f in fields.items()},
        "additionalProperties": False,
    }
    required = [name for name, f in fields.items() if _tag_of(f) != "optional"]
    if required:
        schema["required"] = required
    return schema
