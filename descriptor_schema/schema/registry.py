"""
Content-type schema registry.

Binds the transformer to a fixed override/fallback pair and exposes one schema
function per registered request (decoder) and response (encoder) content type,
plus functions for string-valued positions such as URL parameters, query
parameters and headers.

Usage:
    ```python
    from descriptor_schema.schema import create_json_schema_functionality
    from descriptor_schema.validation import from_decoder

    functionality = create_json_schema_functionality(
        request_body_content_types=["application/json"],
        response_body_content_types=["application/json"],
    )

    body = from_decoder(user_descriptor)
    schema = functionality.decoders["application/json"](body, True)
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from descriptor_schema.schema.common import FallbackValue, JSONSchema, Override
from descriptor_schema.schema.possibility import UndefinedPossibility, get_undefined_possibility
from descriptor_schema.schema.transform import transform_to_json_schema
from descriptor_schema.validation.adapter import get_reflect

logger = logging.getLogger(__name__)

# (decoder or encoder, cut_off_top_level_undefined) -> schema
SchemaFunction = Callable[[Any, bool], JSONSchema]


def _identity(schema: JSONSchema) -> JSONSchema:
    return schema


@dataclass
class SchemaFunctionalityConfig:
    """
    Configuration for a content-type schema registry.

    Attributes:
        request_body_content_types: Content types accepted in request bodies
        response_body_content_types: Content types produced in response bodies
        transform_schema: Post-processing applied to every produced schema
        override: Optional override hook passed to the transformer
        fallback_value: Fallback passed to the transformer (default: True,
            i.e. unsupported shapes accept anything)
    """

    request_body_content_types: Sequence[str]
    response_body_content_types: Sequence[str]
    transform_schema: Callable[[JSONSchema], JSONSchema] = _identity
    override: Optional[Override] = None
    fallback_value: FallbackValue = True


@dataclass
class JsonSchemaFunctionality:
    """
    Schema functions produced by create_json_schema_functionality().

    Attributes:
        decoders: Request content type -> schema function
        encoders: Response content type -> schema function
        string_decoder: Schema function for string-valued inputs
        string_encoder: Schema function for string-valued outputs
        config: Configuration the functions were built from
    """

    decoders: Dict[str, SchemaFunction]
    encoders: Dict[str, SchemaFunction]
    string_decoder: SchemaFunction
    string_encoder: SchemaFunction
    config: Optional[SchemaFunctionalityConfig] = field(repr=False, default=None)

    @staticmethod
    def get_undefined_possibility(validation: Any) -> UndefinedPossibility:
        """Undefined possibility of a decoder or encoder, via its descriptor."""
        return get_undefined_possibility(get_reflect(validation))


def create_json_schema_functionality(
    request_body_content_types: Sequence[str],
    response_body_content_types: Sequence[str],
    transform_schema: Optional[Callable[[JSONSchema], JSONSchema]] = None,
    override: Optional[Override] = None,
    fallback_value: FallbackValue = True,
) -> JsonSchemaFunctionality:
    """
    Create schema functions for the given request and response content types.

    Args:
        request_body_content_types: Content types for which decoder schema functions are made
        response_body_content_types: Content types for which encoder schema functions are made
        transform_schema: Optional post-processing for every produced schema
        override: Optional override hook for the transformer
        fallback_value: Fallback schema or callback for the transformer

    Returns:
        JsonSchemaFunctionality: The schema functions

    Example:
        ```python
        functionality = create_json_schema_functionality(
            request_body_content_types=["application/json"],
            response_body_content_types=["application/json"],
            transform_schema=lambda schema: schema,
        )
        functionality.string_decoder(StringDescriptor(), True)  # {"type": "string"}
        ```
    """
    config = SchemaFunctionalityConfig(
        request_body_content_types=request_body_content_types,
        response_body_content_types=response_body_content_types,
        transform_schema=transform_schema or _identity,
        override=override,
        fallback_value=fallback_value,
    )
    return create_from_config(config)


def create_from_config(config: SchemaFunctionalityConfig) -> JsonSchemaFunctionality:
    """
    Create schema functions from a SchemaFunctionalityConfig.

    Args:
        config: Registry configuration

    Returns:
        JsonSchemaFunctionality: The schema functions
    """
    schema_function = _create_schema_function(config)

    decoders = {content_type: schema_function for content_type in config.request_body_content_types}
    encoders = {content_type: schema_function for content_type in config.response_body_content_types}
    logger.debug(
        "Registered schema functions for request %s and response %s content types",
        list(decoders),
        list(encoders),
    )

    return JsonSchemaFunctionality(
        decoders=decoders,
        encoders=encoders,
        string_decoder=schema_function,
        string_encoder=schema_function,
        config=config,
    )


def _create_schema_function(config: SchemaFunctionalityConfig) -> SchemaFunction:
    def schema_function(validation: Any, cut_off_top_level_undefined: bool) -> JSONSchema:
        return config.transform_schema(
            transform_to_json_schema(
                get_reflect(validation),
                cut_off_top_level_undefined,
                config.override,
                config.fallback_value,
            )
        )

    return schema_function