"""
JSON Schema helpers shared by the transformer and the content-type registry.

This module defines the JSON Schema value types and the post-processing steps
applied to composite schemas:
    - flattening nested structures (unions of unions)
    - hoisting a `type` shared by every branch of `allOf`/`anyOf`
    - compressing a union of single-value schemas into an `enum`
    - resolving the caller's fallback value
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar, Union

# A JSON Schema is either a boolean (True matches anything, False nothing) or an object
JSONSchemaObject = Dict[str, Any]
JSONSchema = Union[bool, JSONSchemaObject]

# override(descriptor, cut_off_top_level_undefined) -> schema, or None to not override
Override = Callable[[Any, bool], Optional[JSONSchema]]

# Either a schema used as-is, or a callback receiving the unsupported descriptor
FallbackValue = Union[JSONSchema, Callable[[Any], Optional[JSONSchema]], None]

T = TypeVar("T")


def flatten_deep_structures(
    items: Iterable[T],
    get_children: Callable[[T], Optional[Iterable[T]]],
) -> Iterator[T]:
    """
    Flatten arbitrarily nested structures, keeping left-to-right leaf order.

    Args:
        items: Top-level items
        get_children: Returns the children of a nested item, or None for a leaf

    Yields:
        Leaf items in original order

    Example:
        ```python
        nested = [1, [2, [3, 4]], 5]
        list(flatten_deep_structures(nested, lambda i: i if isinstance(i, list) else None))
        # [1, 2, 3, 4, 5]
        ```
    """
    for item in items:
        children = get_children(item)
        if children is None:
            yield item
        else:
            yield from flatten_deep_structures(children, get_children)


def try_to_hoist_common_type(schema: JSONSchema, key: str) -> JSONSchema:
    """
    Add a top-level `type` when every branch under `key` has the same single type.

    Args:
        schema: Schema with an `allOf` or `anyOf` list
        key: "allOf" or "anyOf"

    Returns:
        JSONSchema: New schema with hoisted `type`, or the input unchanged
    """
    if not isinstance(schema, dict):
        return schema
    branches = schema.get(key)
    if not branches:
        return schema

    branch_types = [branch.get("type") if isinstance(branch, dict) else None for branch in branches]
    if all(isinstance(t, str) for t in branch_types) and len(set(branch_types)) == 1:
        return {"type": branch_types[0], **schema}
    return schema


def try_to_compress_union_of_maybe_enums(schema: JSONSchema) -> JSONSchema:
    """
    Compress an `anyOf` of single-value schemas into one `enum` schema.

    Compression happens only if every branch has a `const` and a single
    `type`; otherwise the schema is returned unchanged.

    Args:
        schema: Schema possibly holding an `anyOf` list

    Returns:
        JSONSchema: `{"type": ..., "enum": [...]}` or the input unchanged

    Example:
        ```python
        try_to_compress_union_of_maybe_enums({
            "anyOf": [
                {"type": "string", "const": "a"},
                {"type": "number", "const": 1},
            ]
        })
        # {"type": ["string", "number"], "enum": ["a", 1]}
        ```
    """
    if not isinstance(schema, dict):
        return schema
    branches = schema.get("anyOf")
    if not branches:
        return schema

    if not all(
        isinstance(branch, dict) and "const" in branch and isinstance(branch.get("type"), str)
        for branch in branches
    ):
        return schema

    distinct_types: List[str] = list(dict.fromkeys(branch["type"] for branch in branches))
    return {
        "type": distinct_types[0] if len(distinct_types) == 1 else distinct_types,
        "enum": [branch["const"] for branch in branches],
    }


def get_fallback_value(descriptor: Any, fallback_value: FallbackValue) -> Optional[JSONSchema]:
    """Resolve the fallback: call it with the descriptor if it is a callback."""
    if callable(fallback_value):
        return fallback_value(descriptor)
    return fallback_value
