"""
Validation layer module.

This module wraps descriptors into uniform validators and checks documents
against generated JSON Schemas.

Components:
    - adapter: DataValidator and success/error results over descriptor validation
    - error_formatter: Human-readable messages and error objects from failures
    - methods: HTTP method name validators
    - url: URL path parameter and query parameter validators
    - state: State validator factory
    - validator: jsonschema-based checks of generated schemas and documents

Example:
    ```python
    from descriptor_schema.descriptors import NumberDescriptor
    from descriptor_schema.validation import from_decoder

    validator = from_decoder(NumberDescriptor())
    result = validator("not-a-number")
    if result.error == "error":
        print(result.get_human_readable_message())
        # Expected number, but was string
    ```
"""

from descriptor_schema.validation.adapter import (
    DataValidator,
    DataValidatorResult,
    DataValidatorResultSuccess,
    DataValidatorResultError,
    transform_library_result_to_model_result,
    from_decoder,
    from_encoder,
    get_reflect,
)
from descriptor_schema.validation.error_formatter import (
    get_human_readable_error_message,
    create_error_object,
)
from descriptor_schema.validation.url import (
    QueryParameterSpec,
    QueryValidation,
    UrlParameterInfo,
    query,
    url_parameter,
    default_parameter_reg_exp,
)
from descriptor_schema.validation.state import (
    StatePropertyValidation,
    StateValidatorInfo,
    create_state_validator_factory,
)
from descriptor_schema.validation.validator import (
    check_schema,
    validate,
    quick_validate,
    ValidationResult,
    SchemaViolation,
    format_validation_errors
)

__all__ = [
    "DataValidator",
    "DataValidatorResult",
    "DataValidatorResultSuccess",
    "DataValidatorResultError",
    "transform_library_result_to_model_result",
    "from_decoder",
    "from_encoder",
    "get_reflect",
    "get_human_readable_error_message",
    "create_error_object",
    "QueryParameterSpec",
    "QueryValidation",
    "UrlParameterInfo",
    "query",
    "url_parameter",
    "default_parameter_reg_exp",
    "StatePropertyValidation",
    "StateValidatorInfo",
    "create_state_validator_factory",
    "check_schema",
    "validate",
    "quick_validate",
    "ValidationResult",
    "SchemaViolation",
    "format_validation_errors",
]
