"""
Descriptor to JSON Schema module.

This module converts descriptor trees into JSON Schema documents.

Components:
    - transform: Recursive descriptor -> JSON Schema transformation
    - possibility: Whether a descriptor represents an absent value
    - common: JSON Schema types and post-processing helpers (hoisting, enum compression)
    - registry: Per-content-type schema functions with fixed override/fallback

Example:
    ```python
    from descriptor_schema.descriptors import StringDescriptor, NumberDescriptor, tuple_of
    from descriptor_schema.schema import transform_to_json_schema

    schema = transform_to_json_schema(
        tuple_of(StringDescriptor(), NumberDescriptor()), True, None, True
    )
    # {"type": "array", "minItems": 2, "maxItems": 2,
    #  "items": [{"type": "string"}, {"type": "number"}]}
    ```
"""

from descriptor_schema.schema.common import (
    JSONSchema,
    JSONSchemaObject,
    Override,
    FallbackValue,
    flatten_deep_structures,
    try_to_hoist_common_type,
    try_to_compress_union_of_maybe_enums,
    get_fallback_value,
)
from descriptor_schema.schema.possibility import UndefinedPossibility, get_undefined_possibility
from descriptor_schema.schema.transform import transform_to_json_schema
from descriptor_schema.schema.registry import (
    JsonSchemaFunctionality,
    SchemaFunctionalityConfig,
    create_json_schema_functionality,
    create_from_config,
)

__all__ = [
    "JSONSchema",
    "JSONSchemaObject",
    "Override",
    "FallbackValue",
    "flatten_deep_structures",
    "try_to_hoist_common_type",
    "try_to_compress_union_of_maybe_enums",
    "get_fallback_value",
    "UndefinedPossibility",
    "get_undefined_possibility",
    "transform_to_json_schema",
    "JsonSchemaFunctionality",
    "SchemaFunctionalityConfig",
    "create_json_schema_functionality",
    "create_from_config",
]
