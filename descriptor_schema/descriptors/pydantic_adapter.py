"""
Pydantic and typing adapter - reflect Python type annotations into descriptor trees.

This lets callers describe their data with ordinary Python annotations or
Pydantic models and still go through the descriptor -> JSON Schema engine:

    ```python
    from pydantic import BaseModel
    from descriptor_schema.descriptors import reflect_model

    class User(BaseModel):
        name: str
        age: int
        email: Optional[str] = None

    descriptor = reflect_model(User)
    # record { name: string; age: WithConstraint<number>; email?: (string | null) }
    ```
"""

import collections.abc
import enum
import types
import typing
from typing import Any, Dict, List, Type

import typing_extensions
from pydantic import BaseModel

from descriptor_schema.descriptors.types import (
    ArrayDescriptor,
    BooleanDescriptor,
    BrandDescriptor,
    DictionaryDescriptor,
    LiteralDescriptor,
    NumberDescriptor,
    OptionalDescriptor,
    RecordDescriptor,
    StringDescriptor,
    TupleDescriptor,
    TypeDescriptor,
    UnionDescriptor,
    UnknownDescriptor,
)

_UNION_ORIGINS = (typing.Union, types.UnionType)
_LITERAL_ORIGINS = (typing.Literal, typing_extensions.Literal)
_ANNOTATED_ORIGINS = (typing.Annotated, typing_extensions.Annotated)
_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def is_integer(value: Any) -> bool:
    """Constraint used for `int` annotations."""
    return isinstance(value, int) or float(value).is_integer()


def is_pydantic_model(annotation: Any) -> bool:
    """Check whether annotation is a Pydantic model class."""
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def reflect_model(model: Type[BaseModel]) -> RecordDescriptor:
    """
    Reflect a Pydantic model class into a record descriptor.

    Fields that are not required (they have a default) become `optional`
    fields. Aliases, when set, are used as the record field names since they
    are the names found in serialized data.

    Args:
        model: Pydantic BaseModel subclass

    Returns:
        RecordDescriptor: One field per model field, in declaration order

    Raises:
        ValueError: If model isn't a Pydantic model or uses unsupported annotations
    """
    if not is_pydantic_model(model):
        raise ValueError(f"Not a Pydantic model: {model!r}")
    return _reflect_model(model, [])


def reflect_annotation(annotation: Any) -> TypeDescriptor:
    """
    Reflect a Python type annotation into a descriptor tree.

    Args:
        annotation: Type annotation (e.g. `str`, `Optional[int]`, `List[User]`)

    Returns:
        TypeDescriptor: Equivalent descriptor

    Raises:
        ValueError: If the annotation can't be expressed as a descriptor
    """
    return _reflect(annotation, [])


def _reflect_model(model: Type[BaseModel], seen: List[type]) -> RecordDescriptor:
    if model in seen:
        raise ValueError(f"Recursive model {model.__name__} is not supported")
    seen = seen + [model]

    fields: Dict[str, TypeDescriptor] = {}
    for field_name, field_info in model.model_fields.items():
        descriptor = _reflect(field_info.annotation, seen)
        if not field_info.is_required():
            descriptor = OptionalDescriptor(underlying=descriptor)
        fields[field_info.alias or field_name] = descriptor

    return RecordDescriptor(fields=fields)


def _reflect(annotation: Any, seen: List[type]) -> TypeDescriptor:
    if annotation is typing.Any or annotation is object:
        return UnknownDescriptor()
    if annotation is None or annotation is type(None):
        return LiteralDescriptor(value=None)

    # NewType instances carry the wrapped type as __supertype__
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return BrandDescriptor(brand=annotation.__name__, entity=_reflect(supertype, seen))

    origin = typing.get_origin(annotation)
    if origin is not None:
        return _reflect_generic(annotation, origin, seen)

    if not isinstance(annotation, type):
        raise ValueError(f"Unsupported annotation: {annotation!r}")

    if is_pydantic_model(annotation):
        return _reflect_model(annotation, seen)
    if issubclass(annotation, enum.Enum):
        return _literals([member.value for member in annotation])
    if issubclass(annotation, bool):
        return BooleanDescriptor()
    if issubclass(annotation, int):
        return NumberDescriptor().with_constraint(is_integer, name="integer")
    if issubclass(annotation, float):
        return NumberDescriptor()
    if issubclass(annotation, str):
        return StringDescriptor()
    if issubclass(annotation, (list, set, frozenset)):
        return ArrayDescriptor(element=UnknownDescriptor())
    if issubclass(annotation, tuple):
        return ArrayDescriptor(element=UnknownDescriptor())
    if issubclass(annotation, dict):
        return DictionaryDescriptor(key="string", value=UnknownDescriptor())

    raise ValueError(f"Unsupported annotation: {annotation.__name__}")


def _reflect_generic(annotation: Any, origin: Any, seen: List[type]) -> TypeDescriptor:
    args = typing.get_args(annotation)

    if origin in _ANNOTATED_ORIGINS:
        return _reflect(args[0], seen)
    if origin in _UNION_ORIGINS:
        return UnionDescriptor(alternatives=[_reflect(arg, seen) for arg in args])
    if origin in _LITERAL_ORIGINS:
        return _literals(list(args))
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return ArrayDescriptor(element=_reflect(args[0], seen))
        return TupleDescriptor(components=[_reflect(arg, seen) for arg in args])
    if origin in _SEQUENCE_ORIGINS:
        element = _reflect(args[0], seen) if args else UnknownDescriptor()
        return ArrayDescriptor(element=element)
    if origin in _MAPPING_ORIGINS:
        if not args:
            return DictionaryDescriptor(key="string", value=UnknownDescriptor())
        return DictionaryDescriptor(key=_key_kind(args[0]), value=_reflect(args[1], seen))

    raise ValueError(f"Unsupported annotation: {annotation!r}")


def _key_kind(annotation: Any) -> str:
    if annotation is str:
        return "string"
    if annotation in (int, float):
        return "number"
    raise ValueError(f"Unsupported dictionary key type: {annotation!r}")


def _literals(values: List[Any]) -> TypeDescriptor:
    literals = [LiteralDescriptor(value=value) for value in values]
    if len(literals) == 1:
        return literals[0]
    return UnionDescriptor(alternatives=literals)
