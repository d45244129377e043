"""
Type descriptor definitions.

This module defines the immutable descriptor tree used to describe the shape of
data independently of any serialization format. The tree is consumed by the
JSON Schema transformer and doubles as a small runtime validation library.

Type Hierarchy:
    TypeDescriptor (abstract)
    ├── Primitives: StringDescriptor, NumberDescriptor, BooleanDescriptor,
    │               TemplateLiteralDescriptor
    ├── Values: LiteralDescriptor, UnknownDescriptor, NeverDescriptor, VoidDescriptor
    ├── Wrappers: ConstraintDescriptor, OptionalDescriptor, BrandDescriptor
    └── Composites: ArrayDescriptor, RecordDescriptor, DictionaryDescriptor,
                    TupleDescriptor, IntersectDescriptor, UnionDescriptor

Each descriptor knows how to:
    - Report its tag (used for structural dispatch)
    - Validate a runtime value, returning Success or Failure
    - Describe itself in a short human-readable form

Python has no `undefined` value, so absence is represented by the UNDEFINED
sentinel. `None` always means JSON `null`.
"""

import json
import math
import re
import types
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Union


# Largest integer that survives a round-trip through an IEEE-754 double
MAX_SAFE_INTEGER = 2 ** 53 - 1

DICTIONARY_KEY_KINDS = ("string", "number", "symbol")


class _Undefined:
    """Marker type for an absent value."""

    _instance: ClassVar[Optional["_Undefined"]] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class Success:
    """
    Successful validation outcome.

    Attributes:
        value: The validated value, unchanged
    """

    value: Any
    success: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    """
    Failed validation outcome.

    Attributes:
        code: Machine-readable failure code (e.g. "TYPE_INCORRECT")
        message: Human-readable message, e.g. "Expected number, but was string"
        details: Per-key messages for composite values (record fields,
            tuple/array indices, dictionary keys)
    """

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    success: ClassVar[bool] = False


ValidationOutcome = Union[Success, Failure]


def is_big_integer(value: Any) -> bool:
    """Check whether value is an integer too large to be a JSON number."""
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_SAFE_INTEGER


def is_non_finite(value: Any) -> bool:
    """Check whether value is a NaN or infinite float, which JSON can't encode."""
    return isinstance(value, float) and not math.isfinite(value)


def type_name_of(value: Any) -> str:
    """
    Get the JSON-flavoured type name of a runtime value.

    Args:
        value: Any Python value

    Returns:
        str: One of "undefined", "null", "boolean", "number", "bigint",
            "string", "array", "object", or the Python class name
    """
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_big_integer(value):
        return "bigint"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _show_literal(value: Any) -> str:
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, (str, bool)) or value is None:
        return json.dumps(value)
    return str(value)


def _same_literal(expected: Any, actual: Any) -> bool:
    if expected is UNDEFINED or expected is None:
        return actual is expected
    if isinstance(expected, bool):
        return isinstance(actual, bool) and actual == expected
    if isinstance(expected, (int, float)):
        return isinstance(actual, (int, float)) and not isinstance(actual, bool) and actual == expected
    return type(actual) is type(expected) and actual == expected


def _type_failure(descriptor: "TypeDescriptor", value: Any) -> Failure:
    return Failure(
        code="TYPE_INCORRECT",
        message=f"Expected {descriptor.describe()}, but was {type_name_of(value)}",
    )


def _content_failure(descriptor: "TypeDescriptor", details: Dict[str, Any]) -> Failure:
    return Failure(
        code="CONTENT_INCORRECT",
        message=f"Expected {descriptor.describe()}, but was incompatible",
        details=details,
    )


def _failure_detail(outcome: Failure) -> Any:
    return outcome.details if outcome.details else outcome.message


@dataclass(frozen=True)
class TypeDescriptor(ABC):
    """
    Abstract base class for all descriptor types.

    Subclasses set the class-level `tag`, which is what the schema transformer
    dispatches on.
    """

    tag: ClassVar[str] = ""

    @abstractmethod
    def validate(self, value: Any) -> ValidationOutcome:
        """
        Check a runtime value against this descriptor.

        Args:
            value: Value to check (UNDEFINED stands for an absent value)

        Returns:
            Success wrapping the value, or Failure describing the mismatch
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable rendering of this descriptor."""
        pass

    @property
    def reflect(self) -> "TypeDescriptor":
        """Descriptors reflect to themselves."""
        return self

    def optional(self) -> "OptionalDescriptor":
        return OptionalDescriptor(underlying=self)

    def with_constraint(
        self,
        constraint: Callable[[Any], Union[bool, str]],
        name: Optional[str] = None,
    ) -> "ConstraintDescriptor":
        return ConstraintDescriptor(underlying=self, constraint=constraint, name=name)

    def with_brand(self, brand: str) -> "BrandDescriptor":
        return BrandDescriptor(brand=brand, entity=self)

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class StringDescriptor(TypeDescriptor):
    """Any string value."""

    tag: ClassVar[str] = "string"

    def validate(self, value: Any) -> ValidationOutcome:
        return Success(value) if isinstance(value, str) else _type_failure(self, value)

    def describe(self) -> str:
        return "string"


@dataclass(frozen=True)
class NumberDescriptor(TypeDescriptor):
    """Any int or float (booleans excluded)."""

    tag: ClassVar[str] = "number"

    def validate(self, value: Any) -> ValidationOutcome:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Success(value)
        return _type_failure(self, value)

    def describe(self) -> str:
        return "number"


@dataclass(frozen=True)
class BooleanDescriptor(TypeDescriptor):
    tag: ClassVar[str] = "boolean"

    def validate(self, value: Any) -> ValidationOutcome:
        return Success(value) if isinstance(value, bool) else _type_failure(self, value)

    def describe(self) -> str:
        return "boolean"


@dataclass(frozen=True)
class TemplateLiteralDescriptor(TypeDescriptor):
    """
    String matching a template, expressed as a regex that must match fully.

    Example:
        TemplateLiteralDescriptor(pattern=r"user-[0-9]+")
    """

    tag: ClassVar[str] = "template-literal-string"

    pattern: str = ".*"

    def validate(self, value: Any) -> ValidationOutcome:
        if not isinstance(value, str):
            return _type_failure(self, value)
        if re.fullmatch(self.pattern, value) is None:
            return Failure(
                code="VALUE_INCORRECT",
                message=f"Expected string matching `{self.pattern}`, but was {json.dumps(value)}",
            )
        return Success(value)

    def describe(self) -> str:
        return f"`{self.pattern}`"


@dataclass(frozen=True)
class LiteralDescriptor(TypeDescriptor):
    """
    Exactly one scalar value.

    Attributes:
        value: None, UNDEFINED, bool, int, float or str. Integers beyond the
            safe integer range are big-integer literals.
    """

    tag: ClassVar[str] = "literal"

    value: Any = UNDEFINED

    def validate(self, value: Any) -> ValidationOutcome:
        if _same_literal(self.value, value):
            return Success(value)
        if type_name_of(value) == type_name_of(self.value):
            return Failure(
                code="VALUE_INCORRECT",
                message=f"Expected literal {self.describe()}, but was {_show_literal(value)}",
            )
        return Failure(
            code="TYPE_INCORRECT",
            message=f"Expected literal {self.describe()}, but was {type_name_of(value)}",
        )

    def describe(self) -> str:
        return _show_literal(self.value)


@dataclass(frozen=True)
class UnknownDescriptor(TypeDescriptor):
    """Accepts everything, including absence."""

    tag: ClassVar[str] = "unknown"

    def validate(self, value: Any) -> ValidationOutcome:
        return Success(value)

    def describe(self) -> str:
        return "unknown"


@dataclass(frozen=True)
class NeverDescriptor(TypeDescriptor):
    """Accepts nothing."""

    tag: ClassVar[str] = "never"

    def validate(self, value: Any) -> ValidationOutcome:
        return Failure(
            code="NOTHING_EXPECTED",
            message=f"Expected nothing, but was {type_name_of(value)}",
        )

    def describe(self) -> str:
        return "never"


@dataclass(frozen=True)
class VoidDescriptor(TypeDescriptor):
    """Accepts only absence."""

    tag: ClassVar[str] = "void"

    def validate(self, value: Any) -> ValidationOutcome:
        return Success(value) if value is UNDEFINED else _type_failure(self, value)

    def describe(self) -> str:
        return "void"


@dataclass(frozen=True)
class ConstraintDescriptor(TypeDescriptor):
    """
    Underlying descriptor refined by a predicate.

    The predicate runs only on values the underlying descriptor accepts. It
    returns True to accept, False to reject with a generic message, or a
    string to reject with that message.

    Attributes:
        underlying: Descriptor checked first
        constraint: Predicate applied to accepted values
        name: Optional name used in failure messages
    """

    tag: ClassVar[str] = "constraint"

    underlying: TypeDescriptor = field(default_factory=lambda: UnknownDescriptor())
    constraint: Callable[[Any], Union[bool, str]] = lambda value: True
    name: Optional[str] = None

    def validate(self, value: Any) -> ValidationOutcome:
        outcome = self.underlying.validate(value)
        if not outcome.success:
            return outcome
        verdict = self.constraint(value)
        if verdict is True:
            return Success(value)
        if isinstance(verdict, str):
            return Failure(code="CONSTRAINT_FAILED", message=verdict)
        return Failure(
            code="CONSTRAINT_FAILED",
            message=f"Failed {self.name or 'constraint'} check",
        )

    def describe(self) -> str:
        return f"WithConstraint<{self.underlying.describe()}>"


@dataclass(frozen=True)
class OptionalDescriptor(TypeDescriptor):
    """Underlying descriptor that may also be absent (record fields)."""

    tag: ClassVar[str] = "optional"

    underlying: TypeDescriptor = field(default_factory=lambda: UnknownDescriptor())

    def validate(self, value: Any) -> ValidationOutcome:
        if value is UNDEFINED:
            return Success(value)
        return self.underlying.validate(value)

    def describe(self) -> str:
        return f"{self.underlying.describe()} | undefined"


@dataclass(frozen=True)
class BrandDescriptor(TypeDescriptor):
    """Nominal wrapper: same runtime shape as `entity`, distinct name."""

    tag: ClassVar[str] = "brand"

    brand: str = ""
    entity: TypeDescriptor = field(default_factory=lambda: UnknownDescriptor())

    def validate(self, value: Any) -> ValidationOutcome:
        return self.entity.validate(value)

    def describe(self) -> str:
        return self.entity.describe()


@dataclass(frozen=True)
class ArrayDescriptor(TypeDescriptor):
    tag: ClassVar[str] = "array"

    element: TypeDescriptor = field(default_factory=lambda: UnknownDescriptor())

    def validate(self, value: Any) -> ValidationOutcome:
        if not isinstance(value, (list, tuple)):
            return _type_failure(self, value)
        details = {}
        for index, item in enumerate(value):
            outcome = self.element.validate(item)
            if not outcome.success:
                details[str(index)] = _failure_detail(outcome)
        return _content_failure(self, details) if details else Success(value)

    def describe(self) -> str:
        return f"{self.element.describe()}[]"


@dataclass(frozen=True)
class RecordDescriptor(TypeDescriptor):
    """
    Object with a fixed, ordered set of named fields.

    A field tagged `optional` may be missing. `is_partial` is the legacy
    whole-record flag: when set, any field may be missing during validation.
    Extra keys are accepted by validation.

    Attributes:
        fields: Ordered mapping field name -> descriptor
        is_partial: Legacy flag making every field optional for validation
    """

    tag: ClassVar[str] = "record"

    fields: Mapping[str, TypeDescriptor] = field(default_factory=dict)
    is_partial: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", types.MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash((tuple(self.fields.items()), self.is_partial))

    def validate(self, value: Any) -> ValidationOutcome:
        if not isinstance(value, Mapping):
            return _type_failure(self, value)
        details = {}
        for name, field_descriptor in self.fields.items():
            field_value = value.get(name, UNDEFINED)
            if field_value is UNDEFINED and self.is_partial:
                continue
            outcome = field_descriptor.validate(field_value)
            if not outcome.success:
                details[name] = _failure_detail(outcome)
        return _content_failure(self, details) if details else Success(value)

    def describe(self) -> str:
        parts = []
        for name, field_descriptor in self.fields.items():
            if field_descriptor.tag == "optional":
                parts.append(f"{name}?: {field_descriptor.underlying.describe()}")
            else:
                parts.append(f"{name}: {field_descriptor.describe()}")
        return "{ " + "; ".join(parts) + " }" if parts else "{}"


@dataclass(frozen=True)
class DictionaryDescriptor(TypeDescriptor):
    """
    Object with arbitrary keys of one kind and values of one descriptor.

    Attributes:
        key: "string", "number" or "symbol"
        value: Descriptor for every value
    """

    tag: ClassVar[str] = "dictionary"

    key: str = "string"
    value: TypeDescriptor = field(default_factory=lambda: UnknownDescriptor())

    def validate(self, value: Any) -> ValidationOutcome:
        if not isinstance(value, Mapping):
            return _type_failure(self, value)
        details = {}
        for item_key, item_value in value.items():
            if not self._key_matches(item_key):
                details[str(item_key)] = f"Expected dictionary key to be a {self.key}, but was {type_name_of(item_key)}"
                continue
            outcome = self.value.validate(item_value)
            if not outcome.success:
                details[str(item_key)] = _failure_detail(outcome)
        return _content_failure(self, details) if details else Success(value)

    def _key_matches(self, item_key: Any) -> bool:
        if self.key == "string":
            return isinstance(item_key, str)
        if self.key == "number":
            if isinstance(item_key, bool):
                return False
            if isinstance(item_key, (int, float)):
                return True
            if isinstance(item_key, str):
                try:
                    float(item_key)
                except ValueError:
                    return False
                return True
            return False
        # Python has no symbols; any key is accepted
        return True

    def describe(self) -> str:
        return f"{{ [_: {self.key}]: {self.value.describe()} }}"


@dataclass(frozen=True)
class TupleDescriptor(TypeDescriptor):
    """Fixed-length array with positional descriptors."""

    tag: ClassVar[str] = "tuple"

    components: Tuple[TypeDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))

    def validate(self, value: Any) -> ValidationOutcome:
        if not isinstance(value, (list, tuple)):
            return _type_failure(self, value)
        if len(value) != len(self.components):
            return Failure(
                code="CONSTRAINT_FAILED",
                message=f"Expected tuple to be of length {len(self.components)}, but was {len(value)}",
            )
        details = {}
        for index, (component, item) in enumerate(zip(self.components, value)):
            outcome = component.validate(item)
            if not outcome.success:
                details[str(index)] = _failure_detail(outcome)
        return _content_failure(self, details) if details else Success(value)

    def describe(self) -> str:
        return "[" + ", ".join(c.describe() for c in self.components) + "]"


@dataclass(frozen=True)
class IntersectDescriptor(TypeDescriptor):
    """Value must satisfy every intersectee."""

    tag: ClassVar[str] = "intersect"

    intersectees: Tuple[TypeDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "intersectees", tuple(self.intersectees))

    def validate(self, value: Any) -> ValidationOutcome:
        for intersectee in self.intersectees:
            outcome = intersectee.validate(value)
            if not outcome.success:
                return outcome
        return Success(value)

    def describe(self) -> str:
        return "(" + " & ".join(i.describe() for i in self.intersectees) + ")"


@dataclass(frozen=True)
class UnionDescriptor(TypeDescriptor):
    """Value must satisfy at least one alternative."""

    tag: ClassVar[str] = "union"

    alternatives: Tuple[TypeDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "alternatives", tuple(self.alternatives))

    def validate(self, value: Any) -> ValidationOutcome:
        for alternative in self.alternatives:
            if alternative.validate(value).success:
                return Success(value)
        return _type_failure(self, value)

    def describe(self) -> str:
        return "(" + " | ".join(a.describe() for a in self.alternatives) + ")"


# Convenience constructors, mirroring how descriptor trees read in type notation

def literal(value: Any = UNDEFINED) -> LiteralDescriptor:
    return LiteralDescriptor(value=value)


def array(element: TypeDescriptor) -> ArrayDescriptor:
    return ArrayDescriptor(element=element)


def record(fields: Mapping, is_partial: bool = False) -> RecordDescriptor:
    return RecordDescriptor(fields=dict(fields), is_partial=is_partial)


def dictionary(key: str, value: TypeDescriptor) -> DictionaryDescriptor:
    if key not in DICTIONARY_KEY_KINDS:
        raise ValueError(f"Invalid dictionary key kind: {key}")
    return DictionaryDescriptor(key=key, value=value)


def tuple_of(*components: TypeDescriptor) -> TupleDescriptor:
    return TupleDescriptor(components=components)


def intersect(*intersectees: TypeDescriptor) -> IntersectDescriptor:
    return IntersectDescriptor(intersectees=intersectees)


def union(*alternatives: TypeDescriptor) -> UnionDescriptor:
    return UnionDescriptor(alternatives=alternatives)
