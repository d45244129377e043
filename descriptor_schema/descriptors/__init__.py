"""
Type descriptor module.

This module holds the immutable descriptor tree describing data shapes, plus the
two ways of building one besides constructing it by hand.

Components:
    - types: Descriptor classes, the UNDEFINED sentinel and validation outcomes
    - parser: Build descriptors from JSON documents
    - pydantic_adapter: Reflect Python annotations and Pydantic models

Example:
    ```python
    from descriptor_schema.descriptors import StringDescriptor, record

    user = record({
        "name": StringDescriptor(),
        "nickname": StringDescriptor().optional(),
    })
    user.validate({"name": "Alice"}).success  # True
    ```
"""

from descriptor_schema.descriptors.types import (
    UNDEFINED,
    ArrayDescriptor,
    BooleanDescriptor,
    BrandDescriptor,
    ConstraintDescriptor,
    DictionaryDescriptor,
    Failure,
    IntersectDescriptor,
    LiteralDescriptor,
    NeverDescriptor,
    NumberDescriptor,
    OptionalDescriptor,
    RecordDescriptor,
    StringDescriptor,
    Success,
    TemplateLiteralDescriptor,
    TupleDescriptor,
    TypeDescriptor,
    UnionDescriptor,
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
from descriptor_schema.descriptors.parser import parse_descriptor, load_descriptor_file
from descriptor_schema.descriptors.pydantic_adapter import (
    reflect_annotation,
    reflect_model,
    is_pydantic_model,
)

__all__ = [
    "UNDEFINED",
    "TypeDescriptor",
    "StringDescriptor",
    "NumberDescriptor",
    "BooleanDescriptor",
    "TemplateLiteralDescriptor",
    "LiteralDescriptor",
    "UnknownDescriptor",
    "NeverDescriptor",
    "VoidDescriptor",
    "ConstraintDescriptor",
    "OptionalDescriptor",
    "BrandDescriptor",
    "ArrayDescriptor",
    "RecordDescriptor",
    "DictionaryDescriptor",
    "TupleDescriptor",
    "IntersectDescriptor",
    "UnionDescriptor",
    "Success",
    "Failure",
    "literal",
    "array",
    "record",
    "dictionary",
    "tuple_of",
    "intersect",
    "union",
    "parse_descriptor",
    "load_descriptor_file",
    "reflect_annotation",
    "reflect_model",
    "is_pydantic_model",
]
