"""
Error formatter - convert descriptor validation failures to user-facing error objects.
"""

import json
from typing import Sequence

from descriptor_schema.descriptors.types import Failure


def get_human_readable_error_message(errors: Sequence[Failure]) -> str:
    """
    Join failure messages into one text, one line per failure.

    Args:
        errors: Validation failures

    Returns:
        str: Messages, each followed by " (details: <json>)" when the failure has details

    Example:
        ```python
        outcome = NumberDescriptor().validate("not-a-number")
        get_human_readable_error_message([outcome])
        # "Expected number, but was string"
        ```
    """
    lines = []
    for error in errors:
        line = error.message
        if error.details:
            line += f" (details: {json.dumps(error.details, default=str)})"
        lines.append(line)
    return "\n".join(lines)


def create_error_object(errors: Sequence[Failure]) -> "DataValidatorResultError":
    """
    Wrap failures into a DataValidatorResultError.

    Args:
        errors: Validation failures

    Returns:
        DataValidatorResultError: Error result carrying the failures as error_info
    """
    # Deferred: the adapter module depends on this one
    from descriptor_schema.validation.adapter import DataValidatorResultError

    return DataValidatorResultError(error_info=list(errors))
