"""
State validator factory.

Endpoints declare which pieces of request state (e.g. the authenticated user,
a database handle) they need and whether each piece is mandatory. The factory
turns such a declaration into one record validator over the state object.

Usage:
    ```python
    factory = create_state_validator_factory({
        "user_id": StatePropertyValidation(StringDescriptor(), is_authenticated=True),
        "trace_id": StatePropertyValidation(StringDescriptor()),
    })

    info = factory({"user_id": True, "trace_id": False})
    info.validator({"user_id": "u-1"})   # success
    info.validator({})                    # error, erroneous_properties == ["user_id"]
    ```
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from descriptor_schema.descriptors.types import RecordDescriptor, TypeDescriptor
from descriptor_schema.validation.adapter import (
    DataValidator,
    DataValidatorResult,
    DataValidatorResultError,
    DataValidatorResultSuccess,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatePropertyValidation:
    """
    Validation for one state property.

    Attributes:
        validation: Descriptor for the property value
        is_authenticated: Whether the property exists only for authenticated requests
    """

    validation: TypeDescriptor
    is_authenticated: bool = False


class StateValidator(DataValidator):
    """Record validator that also reports which state properties were rejected."""

    def __call__(self, value: Any) -> DataValidatorResult:
        outcome = self.descriptor.validate(value)
        if outcome.success:
            return DataValidatorResultSuccess(data=outcome.value)
        return DataValidatorResultError(
            error_info=[outcome],
            erroneous_properties=list((outcome.details or {}).keys()),
        )


@dataclass(frozen=True)
class StateValidatorInfo:
    """
    Result of the state validator factory.

    Attributes:
        validator: Validator for the whole state object
        validation: Property name -> mandatory flag, as requested
    """

    validator: StateValidator
    validation: Mapping[str, bool]


StateValidatorFactory = Callable[[Mapping[str, bool]], StateValidatorInfo]


def create_state_validator_factory(
    validation: Mapping[str, StatePropertyValidation],
) -> StateValidatorFactory:
    """
    Create a factory building state validators from property requirements.

    Args:
        validation: All known state properties, name -> StatePropertyValidation

    Returns:
        Callable taking name -> mandatory flag and returning StateValidatorInfo

    Raises:
        ValueError: (from the returned factory) if a requested property is unknown
    """

    def create_state_validator(spec: Mapping[str, bool]) -> StateValidatorInfo:
        unknown = [name for name in spec if name not in validation]
        if unknown:
            raise ValueError(f"Unknown state properties: {', '.join(unknown)}")

        fields: Dict[str, TypeDescriptor] = {}
        for name, mandatory in spec.items():
            if mandatory:
                fields[name] = validation[name].validation
        for name, mandatory in spec.items():
            if not mandatory:
                fields[name] = validation[name].validation.optional()

        logger.debug("Created state validator for %s", list(fields))
        return StateValidatorInfo(
            validator=StateValidator(RecordDescriptor(fields=fields)),
            validation=dict(spec),
        )

    return create_state_validator
