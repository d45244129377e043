"""
JSON Schema checks for generated schemas and the documents they describe.

Generated schemas are ordinary Draft 7 JSON Schema, so they can be checked with
the jsonschema library:
    1. check_schema(): is the generated schema itself valid JSON Schema?
    2. validate(): does a JSON document conform to the generated schema?

Usage:
    ```python
    from descriptor_schema.validation import validate

    schema = transform_to_json_schema(user_descriptor, True, None, True)
    result = validate('{"name": "Alice"}', schema)
    if not result.is_valid:
        for violation in result.errors:
            print(f"{violation.path}: {violation.message}")
    ```
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from descriptor_schema.schema.common import JSONSchema

logger = logging.getLogger(__name__)


@dataclass
class SchemaViolation:
    """
    Represents a single place where a document violates a schema.

    Attributes:
        path: JSON path to the violation (e.g. ".user.address.zipcode")
        message: Human-readable error message
        schema_path: Path in schema that failed
        validator: Keyword that failed (e.g. "type", "required")
        expected: What was expected
        actual: What was found
    """
    path: str
    message: str
    schema_path: str
    validator: str
    expected: Any
    actual: Any


@dataclass
class ValidationResult:
    """
    Result of validating JSON against a schema.

    Attributes:
        is_valid: Whether the document is valid
        errors: List of violations (empty if valid)
        raw_output: Original JSON text
        parsed_output: Parsed JSON (None if parsing or validation failed)
    """
    is_valid: bool
    errors: List[SchemaViolation]
    raw_output: str
    parsed_output: Optional[Any]


def check_schema(schema: JSONSchema) -> None:
    """
    Check that a schema is valid Draft 7 JSON Schema.

    Args:
        schema: Schema to check (object or boolean)

    Raises:
        ValueError: If the schema is not valid JSON Schema
    """
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Invalid JSON Schema: {e.message}") from e


def validate(output: str, schema: JSONSchema) -> ValidationResult:
    """
    Validate JSON text against a schema.

    Args:
        output: JSON string to validate
        schema: JSON Schema (object or boolean)

    Returns:
        ValidationResult: Validation result with every violation found

    Example:
        ```python
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"]
        }

        result = validate('{"name": "Alice"}', schema)
        assert result.is_valid

        result = validate('{"age": 25}', schema)
        assert not result.is_valid
        print(result.errors[0].message)  # "'name' is a required property"
        ```
    """
    try:
        parsed = json.loads(output)
    except json.JSONDecodeError as e:
        return ValidationResult(
            is_valid=False,
            errors=[
                SchemaViolation(
                    path="",
                    message=f"Invalid JSON: {e.msg}",
                    schema_path="",
                    validator="json",
                    expected="valid JSON",
                    actual=f"parse error at position {e.pos}"
                )
            ],
            raw_output=output,
            parsed_output=None
        )

    validator = Draft7Validator(schema)
    errors = [_convert_jsonschema_error(error, parsed) for error in validator.iter_errors(parsed)]
    logger.debug("Document checked against schema: %d violation(s)", len(errors))

    is_valid = len(errors) == 0
    return ValidationResult(
        is_valid=is_valid,
        errors=errors,
        raw_output=output,
        parsed_output=parsed if is_valid else None
    )


def _convert_jsonschema_error(error: Any, data: Any) -> SchemaViolation:
    """
    Convert a jsonschema ValidationError to a SchemaViolation.

    Args:
        error: jsonschema ValidationError
        data: The document being validated

    Returns:
        SchemaViolation: Our violation representation
    """
    path = "." + ".".join(str(p) for p in error.path) if error.path else "root"

    actual = data
    for key in error.path:
        if isinstance(actual, dict):
            actual = actual.get(key, "MISSING")
        elif isinstance(actual, list):
            try:
                actual = actual[int(key)]
            except (IndexError, ValueError):
                actual = "INVALID_INDEX"
        else:
            actual = "UNKNOWN"

    schema_path = "." + ".".join(str(p) for p in error.schema_path) if error.schema_path else "root"

    # Boolean sub-schemas (e.g. False for never) carry no keywords
    if isinstance(error.schema, dict):
        expected = error.schema.get(error.validator, "see schema")
    else:
        expected = error.schema

    return SchemaViolation(
        path=path,
        message=error.message,
        schema_path=schema_path,
        validator=error.validator,
        expected=expected,
        actual=actual
    )


def format_validation_errors(errors: List[SchemaViolation]) -> str:
    """
    Format violations as a human-readable string.

    Args:
        errors: List of violations

    Returns:
        str: Formatted error message, e.g.

            Validation failed with 1 error(s):

              1. At .age: 'x' is not of type 'number'
                 Expected: number
                 Got: x
    """
    if not errors:
        return "No validation errors"

    lines = [f"Validation failed with {len(errors)} error(s):"]

    for i, error in enumerate(errors, 1):
        lines.append(f"\n  {i}. At {error.path}: {error.message}")
        lines.append(f"     Expected: {error.expected}")
        lines.append(f"     Got: {error.actual}")

    return "\n".join(lines)


def quick_validate(output: str, schema: JSONSchema) -> bool:
    """Validate and return just True/False."""
    return validate(output, schema).is_valid
