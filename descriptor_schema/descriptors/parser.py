"""
Descriptor document parser - converts JSON documents to descriptor trees.

This module reads descriptor trees written as plain JSON, which is how the CLI
accepts them. Every node is an object with a "tag" key and the payload for
that tag:

    {"tag": "string"}
    {"tag": "literal", "value": "GET"}
    {"tag": "literal"}                                   # the UNDEFINED literal
    {"tag": "optional", "underlying": {...}}
    {"tag": "brand", "brand": "UserId", "entity": {...}}
    {"tag": "array", "element": {...}}
    {"tag": "record", "fields": {"name": {...}}, "partial": false}
    {"tag": "dictionary", "key": "string", "value": {...}}
    {"tag": "tuple", "components": [{...}, {...}]}
    {"tag": "union", "alternatives": [{...}, {...}]}

Usage:
    ```python
    from descriptor_schema.descriptors import parse_descriptor

    document = {
        "tag": "record",
        "fields": {
            "name": {"tag": "string"},
            "nickname": {"tag": "optional", "underlying": {"tag": "string"}}
        }
    }

    descriptor = parse_descriptor(document)
    ```
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from descriptor_schema.descriptors.types import (
    DICTIONARY_KEY_KINDS,
    UNDEFINED,
    ArrayDescriptor,
    BooleanDescriptor,
    BrandDescriptor,
    DictionaryDescriptor,
    IntersectDescriptor,
    LiteralDescriptor,
    NeverDescriptor,
    NumberDescriptor,
    OptionalDescriptor,
    RecordDescriptor,
    StringDescriptor,
    TemplateLiteralDescriptor,
    TupleDescriptor,
    TypeDescriptor,
    UnionDescriptor,
    UnknownDescriptor,
    VoidDescriptor,
)

_LEAVES = {
    "string": StringDescriptor,
    "number": NumberDescriptor,
    "boolean": BooleanDescriptor,
    "unknown": UnknownDescriptor,
    "never": NeverDescriptor,
    "void": VoidDescriptor,
}


def parse_descriptor(document: Dict[str, Any]) -> TypeDescriptor:
    """
    Parse a JSON descriptor document into a TypeDescriptor tree.

    Args:
        document: Descriptor document (see module docstring)

    Returns:
        TypeDescriptor: Root of the descriptor tree

    Raises:
        ValueError: If the document uses an unknown tag or a malformed payload

    Note:
        The "constraint" tag cannot be expressed in JSON since its predicate is
        code; constrained descriptors are built in Python instead.
    """
    if not isinstance(document, dict):
        raise ValueError(f"Descriptor must be an object, got: {type(document).__name__}")

    tag = document.get("tag")
    if tag is None:
        raise ValueError("Descriptor is missing its 'tag'")

    if tag in _LEAVES:
        return _LEAVES[tag]()
    elif tag == "template-literal-string":
        return TemplateLiteralDescriptor(pattern=_require(document, "pattern", str))
    elif tag == "literal":
        return _parse_literal(document)
    elif tag == "optional":
        return OptionalDescriptor(underlying=_parse_child(document, "underlying"))
    elif tag == "brand":
        return BrandDescriptor(
            brand=_require(document, "brand", str),
            entity=_parse_child(document, "entity"),
        )
    elif tag == "array":
        return ArrayDescriptor(element=_parse_child(document, "element"))
    elif tag == "record":
        return _parse_record(document)
    elif tag == "dictionary":
        return _parse_dictionary(document)
    elif tag == "tuple":
        return TupleDescriptor(components=_parse_children(document, "components"))
    elif tag == "intersect":
        return IntersectDescriptor(intersectees=_parse_children(document, "intersectees"))
    elif tag == "union":
        return UnionDescriptor(alternatives=_parse_children(document, "alternatives"))
    elif tag == "constraint":
        raise ValueError("Tag 'constraint' cannot be loaded from a document - build it in Python")
    else:
        raise ValueError(f"Unsupported descriptor tag: {tag}")


def load_descriptor_file(descriptor_path: Path) -> TypeDescriptor:
    """
    Load and parse a descriptor JSON file.

    Args:
        descriptor_path: Path to descriptor JSON file

    Returns:
        TypeDescriptor: Parsed descriptor tree

    Raises:
        ValueError: If file doesn't exist, isn't valid JSON, or isn't a valid descriptor
    """
    if not descriptor_path.exists():
        raise ValueError(f"Descriptor file not found: {descriptor_path}")

    try:
        with open(descriptor_path) as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in descriptor file: {e}")

    return parse_descriptor(document)


def _parse_literal(document: Dict[str, Any]) -> LiteralDescriptor:
    """
    Parse a literal node. A missing "value" key means the UNDEFINED literal.

    Args:
        document: Descriptor document with tag=literal

    Returns:
        LiteralDescriptor: Parsed literal
    """
    if "value" not in document:
        return LiteralDescriptor(value=UNDEFINED)

    value = document["value"]
    if value is not None and not isinstance(value, (bool, int, float, str)):
        raise ValueError(f"Literal value must be a scalar, got: {type(value).__name__}")
    return LiteralDescriptor(value=value)


def _parse_record(document: Dict[str, Any]) -> RecordDescriptor:
    """
    Parse a record node.

    Fields may be marked optional either by wrapping them in an "optional"
    node or by listing their names under "optional_fields".

    Args:
        document: Descriptor document with tag=record

    Returns:
        RecordDescriptor: Parsed record
    """
    raw_fields = document.get("fields", {})
    if not isinstance(raw_fields, dict):
        raise ValueError("Record 'fields' must be an object")

    optional_names = set(document.get("optional_fields", []))
    unknown_names = optional_names - set(raw_fields)
    if unknown_names:
        raise ValueError(f"Unknown optional fields: {', '.join(sorted(unknown_names))}")

    fields = {}
    for field_name, field_document in raw_fields.items():
        field_descriptor = parse_descriptor(field_document)
        if field_name in optional_names and field_descriptor.tag != "optional":
            field_descriptor = OptionalDescriptor(underlying=field_descriptor)
        fields[field_name] = field_descriptor

    return RecordDescriptor(fields=fields, is_partial=bool(document.get("partial", False)))


def _parse_dictionary(document: Dict[str, Any]) -> DictionaryDescriptor:
    """
    Parse a dictionary node.

    Args:
        document: Descriptor document with tag=dictionary

    Returns:
        DictionaryDescriptor: Parsed dictionary
    """
    key = document.get("key", "string")
    if key not in DICTIONARY_KEY_KINDS:
        raise ValueError(f"Invalid dictionary key kind: {key}")
    return DictionaryDescriptor(key=key, value=_parse_child(document, "value"))


def _parse_child(document: Dict[str, Any], key: str) -> TypeDescriptor:
    return parse_descriptor(_require(document, key, dict))


def _parse_children(document: Dict[str, Any], key: str) -> List[TypeDescriptor]:
    return [parse_descriptor(child) for child in _require(document, key, list)]


def _require(document: Dict[str, Any], key: str, expected_type: type) -> Any:
    if key not in document:
        raise ValueError(f"Descriptor with tag '{document['tag']}' is missing '{key}'")
    value = document[key]
    if not isinstance(value, expected_type):
        raise ValueError(
            f"'{key}' of '{document['tag']}' must be {expected_type.__name__}, got: {type(value).__name__}"
        )
    return value
