"""
descriptor-schema: JSON Schema from structural type descriptors

descriptor-schema turns a descriptor tree - a small immutable description of a
data shape (strings, literals, records, unions, ...) - into an equivalent JSON
Schema document. It is meant for describing request and response bodies,
parameters and headers statically, e.g. for API documentation.

Key Features:
    - Every structural shape: arrays, records, dictionaries, tuples, intersections, unions
    - Union flattening, common type hoisting and literal enum compression
    - Top-level `X | undefined` rendered as X (absence is optionality, not a branch)
    - Caller override and fallback hooks at every node
    - Descriptors from JSON documents, Python annotations or Pydantic models
    - Per-content-type schema functions and uniform validators

Quick Start:
    ```python
    from descriptor_schema import transform_to_json_schema
    from descriptor_schema.descriptors import StringDescriptor, record

    user = record({
        "name": StringDescriptor(),
        "nickname": StringDescriptor().optional(),
    })

    transform_to_json_schema(user, True, None, True)
    # {
    #     "type": "object",
    #     "properties": {"name": {"type": "string"}, "nickname": {"type": "string"}},
    #     "additionalProperties": False,
    #     "required": ["name"],
    # }
    ```
"""

__version__ = "0.1.0"

from descriptor_schema.schema import (  # noqa: F401
    transform_to_json_schema,
    get_undefined_possibility,
    create_json_schema_functionality,
)
from descriptor_schema.descriptors import UNDEFINED, TypeDescriptor  # noqa: F401

__all__ = [
    "transform_to_json_schema",
    "get_undefined_possibility",
    "create_json_schema_functionality",
    "UNDEFINED",
    "TypeDescriptor",
]
