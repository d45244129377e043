"""
CLI command implementations.

This module contains the business logic for each CLI command:
- schema: Print the JSON Schema of a descriptor or Pydantic model
- validate: Validate a JSON document against that schema
"""

import importlib
import json
import logging
from pathlib import Path
from typing import Any, Optional

from descriptor_schema.descriptors import TypeDescriptor, load_descriptor_file, reflect_model
from descriptor_schema.schema import JSONSchema, transform_to_json_schema
from descriptor_schema.validation import check_schema, validate

from .display import (
    console,
    print_error,
    print_header,
    print_info,
    print_json,
    print_schema,
    print_separator,
    print_success,
    print_violations,
)

logger = logging.getLogger(__name__)


def load_model(model_ref: str) -> TypeDescriptor:
    """
    Import a Pydantic model given as "package.module:ClassName" and reflect it.

    Args:
        model_ref: Import reference of the model

    Returns:
        TypeDescriptor: Record descriptor of the model

    Raises:
        ValueError: If the reference is malformed or can't be imported
    """
    module_name, _, attribute = model_ref.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Model reference must look like 'module:ClassName', got: {model_ref}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}")

    model = getattr(module, attribute, None)
    if model is None:
        raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'")
    return reflect_model(model)


def load_descriptor(descriptor_path: Optional[Path], model_ref: Optional[str]) -> TypeDescriptor:
    """
    Load the descriptor from exactly one of a descriptor file or a model reference.

    Raises:
        ValueError: If neither or both sources are given, or loading fails
    """
    if (descriptor_path is None) == (model_ref is None):
        raise ValueError("Provide exactly one of --descriptor or --model")
    if descriptor_path is not None:
        return load_descriptor_file(descriptor_path)
    return load_model(model_ref)


def _reject_unsupported(descriptor: Any) -> JSONSchema:
    described = descriptor.describe() if isinstance(descriptor, TypeDescriptor) else repr(descriptor)
    raise ValueError(f"No JSON Schema rendering for: {described}")


def build_schema(descriptor: TypeDescriptor, keep_undefined: bool, strict: bool) -> JSONSchema:
    """
    Transform a descriptor and check the result is valid JSON Schema.

    Args:
        descriptor: Descriptor to transform
        keep_undefined: Keep top-level `| undefined` as an anyOf branch
        strict: Fail on shapes without a rendering instead of accepting anything

    Returns:
        JSONSchema: The checked schema
    """
    fallback = _reject_unsupported if strict else True
    schema = transform_to_json_schema(descriptor, not keep_undefined, None, fallback)
    check_schema(schema)
    return schema


def schema_command(
    descriptor_path: Optional[Path],
    model_ref: Optional[str],
    keep_undefined: bool,
    strict: bool,
    output_path: Optional[Path],
) -> None:
    """
    Execute the schema command.

    Args:
        descriptor_path: Path to descriptor JSON file
        model_ref: Pydantic model reference ("module:ClassName")
        keep_undefined: Keep top-level undefined alternatives
        strict: Fail on unsupported shapes
        output_path: Optional path to save the schema
    """
    print_header("descriptor-schema - JSON Schema")

    try:
        descriptor = load_descriptor(descriptor_path, model_ref)
        print_success(f"Loaded descriptor: {descriptor.describe()}")
        schema = build_schema(descriptor, keep_undefined, strict)
    except ValueError as e:
        print_error(str(e))
        raise SystemExit(1)

    print_schema(schema)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(schema, f, indent=2)
        print_success(f"Schema saved to: {output_path}")


def validate_command(
    json_path: Path,
    descriptor_path: Optional[Path],
    model_ref: Optional[str],
    show_schema: bool,
) -> None:
    """
    Execute the validate command.

    Args:
        json_path: Path to JSON file to validate
        descriptor_path: Path to descriptor JSON file
        model_ref: Pydantic model reference ("module:ClassName")
        show_schema: Whether to display the schema
    """
    print_header("descriptor-schema - Validate JSON")

    try:
        descriptor = load_descriptor(descriptor_path, model_ref)
        schema = build_schema(descriptor, keep_undefined=False, strict=False)
    except ValueError as e:
        print_error(str(e))
        raise SystemExit(1)

    if show_schema:
        print_schema(schema)

    if not json_path.exists():
        print_error(f"JSON file not found: {json_path}")
        raise SystemExit(1)

    output = json_path.read_text()
    print_separator()
    print_info("Validating...")

    result = validate(output, schema)

    console.print()
    if result.is_valid:
        print_success("Validation passed!")
        print_json(result.parsed_output, title="Input JSON")
    else:
        print_error("Validation failed")
        print_violations(result.errors)
        raise SystemExit(1)
