"""
Validator adapter - uniform success/error results over descriptor validation.

Descriptors report `Success`/`Failure`. Code consuming validators (URL and query
parameters, state, request and response bodies) expects one result shape
instead, so this module wraps descriptors into `DataValidator` callables that
return either `DataValidatorResultSuccess` or `DataValidatorResultError`.

Every DataValidator exposes the descriptor it wraps through `reflect`, which is
how the JSON Schema registry reaches the descriptor tree.

Usage:
    ```python
    from descriptor_schema.descriptors import NumberDescriptor
    from descriptor_schema.validation import from_decoder

    validator = from_decoder(NumberDescriptor())
    validator(123)      # DataValidatorResultSuccess(data=123)
    validator("123")    # DataValidatorResultError(error_info=[Failure(...)])
    ```
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from descriptor_schema.descriptors.types import Failure, TypeDescriptor, ValidationOutcome
from descriptor_schema.validation.error_formatter import get_human_readable_error_message


@dataclass(frozen=True)
class DataValidatorResultSuccess:
    """
    Successful validator result.

    Attributes:
        data: The validated value
    """

    data: Any
    error: str = field(default="none", init=False)


@dataclass(frozen=True)
class DataValidatorResultError:
    """
    Failed validator result.

    Attributes:
        error_info: Failures (or a plain message) explaining the rejection
        erroneous_properties: Names of offending properties, for record-like inputs
    """

    error_info: Union[List[Failure], str]
    erroneous_properties: Optional[List[str]] = None
    error: str = field(default="error", init=False)

    def get_human_readable_message(self) -> str:
        if isinstance(self.error_info, str):
            return self.error_info
        return get_human_readable_error_message(self.error_info)


DataValidatorResult = Union[DataValidatorResultSuccess, DataValidatorResultError]


def transform_library_result_to_model_result(outcome: ValidationOutcome) -> DataValidatorResult:
    """
    Wrap a descriptor validation outcome into a validator result.

    Args:
        outcome: Success or Failure from TypeDescriptor.validate()

    Returns:
        DataValidatorResult: Success with data, or error carrying [failure]
    """
    if outcome.success:
        return DataValidatorResultSuccess(data=outcome.value)
    return DataValidatorResultError(error_info=[outcome])


class DataValidator:
    """
    Callable validator wrapping a descriptor.

    Attributes:
        descriptor: The wrapped descriptor
    """

    def __init__(self, descriptor: TypeDescriptor):
        self.descriptor = descriptor

    @property
    def reflect(self) -> TypeDescriptor:
        """The descriptor tree behind this validator."""
        return self.descriptor.reflect

    def __call__(self, value: Any) -> DataValidatorResult:
        return transform_library_result_to_model_result(self.descriptor.validate(value))

    def __repr__(self) -> str:
        return f"DataValidator({self.descriptor.describe()})"


def from_decoder(descriptor: TypeDescriptor) -> DataValidator:
    """Create a validator for incoming (decoded) data."""
    return DataValidator(descriptor)


def from_encoder(descriptor: TypeDescriptor) -> DataValidator:
    """
    Create a validator for outgoing (encoded) data.

    Descriptors have no separate encoding step, so this checks the value with
    the same descriptor as from_decoder().
    """
    return DataValidator(descriptor)


def get_reflect(validation: Any) -> Any:
    """Descriptor behind a validator or descriptor, or None if it has none."""
    return getattr(validation, "reflect", None)
