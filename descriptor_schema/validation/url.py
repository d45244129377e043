"""
Validators for URL path parameters and query parameters.

Usage:
    ```python
    from descriptor_schema.descriptors import StringDescriptor
    from descriptor_schema.validation.url import QueryParameterSpec, query, url_parameter

    validation = query({"page": QueryParameterSpec(required=False, decoder=page_descriptor)})
    validation.validators["page"]("2")

    user_id = url_parameter("userId", StringDescriptor(), re.compile(r"\\d+"))
    user_id.validator("123")
    ```
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Pattern

from descriptor_schema.descriptors.types import UNDEFINED, TypeDescriptor
from descriptor_schema.validation.adapter import (
    DataValidator,
    DataValidatorResult,
    DataValidatorResultError,
    DataValidatorResultSuccess,
    from_decoder,
)

DEFAULT_PARAMETER_PATTERN = r"[^/]+"


def default_parameter_reg_exp() -> Pattern[str]:
    """Regex matching one URL path segment, used when a parameter has no own regex."""
    return re.compile(DEFAULT_PARAMETER_PATTERN)


@dataclass(frozen=True)
class QueryParameterSpec:
    """
    Metadata for one query parameter.

    Attributes:
        required: Whether the parameter must be present
        decoder: Descriptor for the parameter value
    """

    required: bool
    decoder: TypeDescriptor


class QueryParameterValidator:
    """Validator for one query parameter, handling absence before the decoder runs."""

    def __init__(self, name: str, spec: QueryParameterSpec):
        self.name = name
        self.spec = spec
        self._validator = from_decoder(spec.decoder)

    @property
    def reflect(self) -> TypeDescriptor:
        return self.spec.decoder.reflect

    def __call__(self, value: Any = UNDEFINED) -> DataValidatorResult:
        if value is UNDEFINED:
            if self.spec.required:
                return DataValidatorResultError(error_info=f'Query parameter "{self.name}" is mandatory.')
            return DataValidatorResultSuccess(data=UNDEFINED)
        return self._validator(value)


@dataclass(frozen=True)
class QueryValidation:
    """
    Validators and metadata for a set of query parameters.

    Attributes:
        validators: Parameter name -> validator
        metadata: Parameter name -> spec, as given
    """

    validators: Dict[str, QueryParameterValidator]
    metadata: Mapping[str, QueryParameterSpec]


def query(spec: Mapping[str, QueryParameterSpec]) -> QueryValidation:
    """
    Create validators for query parameters.

    Args:
        spec: Parameter name -> QueryParameterSpec

    Returns:
        QueryValidation: One validator per parameter, plus the spec as metadata

    Example:
        ```python
        validation = query({"q": QueryParameterSpec(required=True, decoder=StringDescriptor())})
        validation.validators["q"]("123")      # success, data "123"
        validation.validators["q"](UNDEFINED)  # error 'Query parameter "q" is mandatory.'
        ```
    """
    return QueryValidation(
        validators={name: QueryParameterValidator(name, parameter) for name, parameter in spec.items()},
        metadata=spec,
    )


@dataclass(frozen=True)
class UrlParameterInfo:
    """
    A named URL path parameter.

    Attributes:
        name: Parameter name
        decoder: Descriptor for the parameter value
        reg_exp: Regex locating the parameter in the URL path
        validator: Validator built from the decoder
    """

    name: str
    decoder: TypeDescriptor
    reg_exp: Pattern[str]
    validator: DataValidator


def url_parameter(
    name: str,
    decoder: TypeDescriptor,
    reg_exp: Optional[Pattern[str]] = None,
) -> UrlParameterInfo:
    """
    Create a URL path parameter.

    The regex only locates the parameter within a path; the value itself is
    checked by the decoder.

    Args:
        name: Parameter name
        decoder: Descriptor for the value
        reg_exp: Regex for the parameter (default: one path segment)

    Returns:
        UrlParameterInfo: The parameter with its validator
    """
    return UrlParameterInfo(
        name=name,
        decoder=decoder,
        reg_exp=reg_exp if reg_exp is not None else default_parameter_reg_exp(),
        validator=from_decoder(decoder),
    )
