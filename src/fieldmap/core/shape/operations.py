"""Pure functions over declared types: classification, compatibility, zero values.

The engine never looks at a value to decide how to copy it. It classifies the
declared types of both sides once and dispatches on the resulting pair of
shapes.

Usage:
    shape = classify(list[Address])
    shape.kind      # ShapeKind.SEQUENCE
    shape.element   # Address
"""

from __future__ import annotations

import collections.abc
import copy
import dataclasses
import functools
import numbers
import types
import typing
import warnings
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Literal, TypeVar, Union, get_args, get_origin

from fieldmap.core.shape.models import Shape, ShapeKind

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_MAP_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

_NUMERIC_FAMILY = (int, float, Decimal, Fraction)
_BYTES_FAMILY = (bytes, bytearray)
_ZERO_CONSTRUCTIBLE = (bool, int, float, complex, str, bytes, bytearray, Decimal, Fraction)
_MUTABLE_PRIMITIVES = (set, bytearray, collections.deque)
_NIL_ZERO_KINDS = frozenset(
    {ShapeKind.OPTIONAL, ShapeKind.SEQUENCE, ShapeKind.MAP, ShapeKind.OPAQUE}
)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def is_record_type(tp: Any) -> bool:
    """Check if ``tp`` is a record class (dataclass or Pydantic model).

    Args:
        tp: Candidate type.

    Returns:
        True for dataclass classes and Pydantic model classes.
    """
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    if dataclasses.is_dataclass(tp):
        return True
    return _is_pydantic(tp) and tp.__name__ != "BaseModel"


def is_record(value: Any) -> bool:
    """Check if ``value`` is a record instance."""
    return not isinstance(value, type) and is_record_type(type(value))


def is_frozen_record_type(cls: type) -> bool:
    """Check if instances of a record class reject attribute assignment."""
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]


@functools.cache
def resolve_hints(cls: type) -> dict[str, Any]:
    """Resolve the annotations of a dataclass, tolerating bad forward references.

    Args:
        cls: Dataclass to inspect.

    Returns:
        Mapping of field name to resolved annotation. When resolution fails,
        the raw annotations are returned and unresolved strings classify as
        opaque.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        warnings.warn(
            f"Could not resolve type hints for {describe_type(cls)}: {exc}. "
            f"Unresolved annotations are treated as Any.",
            RuntimeWarning,
            stacklevel=2,
        )
        return {f.name: f.type for f in dataclasses.fields(cls)}


def record_field_types(cls: type) -> tuple[tuple[str, Any], ...]:
    """``(name, declared_type)`` for every declared field of a record class, private ones included."""
    if dataclasses.is_dataclass(cls):
        hints = resolve_hints(cls)
        return tuple((f.name, hints.get(f.name, f.type)) for f in dataclasses.fields(cls))
    return tuple(
        (name, info.annotation)
        for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
    )


def describe_type(tp: Any) -> str:
    """Render a declared type for error messages.

    Builtins render bare (``int``, ``list[str]``), other classes render as
    ``module.QualName``.
    """
    if tp is Any:
        return "Any"
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type) and get_origin(tp) is None:
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    if isinstance(tp, typing.NewType):
        return tp.__name__
    return repr(tp).replace("typing.", "")


def _strip(tp: Any) -> Any:
    """Unwrap Annotated, NewType and ``type`` aliases down to the real type."""
    while True:
        if get_origin(tp) is typing.Annotated:
            tp = get_args(tp)[0]
        elif isinstance(tp, typing.NewType):
            tp = tp.__supertype__
        elif isinstance(tp, typing.TypeAliasType):
            tp = tp.__value__
        else:
            return tp


def _classify(declared: Any) -> Shape:
    tp = _strip(declared)
    if tp is Any or tp is object or tp is type(None) or tp is None:
        return Shape(ShapeKind.OPAQUE, declared)
    if isinstance(tp, (str, typing.ForwardRef, TypeVar)):
        return Shape(ShapeKind.OPAQUE, declared)

    origin = get_origin(tp)
    args = get_args(tp)

    if origin is Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            return Shape(ShapeKind.OPTIONAL, declared, None, (members[0],))
        return Shape(ShapeKind.OPAQUE, declared)

    if origin is Literal:
        return Shape(ShapeKind.OPAQUE, declared)

    if origin in _SEQUENCE_ORIGINS or tp in _SEQUENCE_ORIGINS:
        return Shape(ShapeKind.SEQUENCE, declared, list, (args[0] if args else Any,))

    if origin is tuple or tp is tuple:
        if tp is tuple or (len(args) == 2 and args[1] is Ellipsis):
            return Shape(ShapeKind.SEQUENCE, declared, tuple, (args[0] if args else Any,))
        # Fixed-size tuples are immutable values
        return Shape(ShapeKind.OPAQUE, declared)

    if origin in _MAP_ORIGINS or tp in _MAP_ORIGINS:
        key, value = args if len(args) == 2 else (Any, Any)
        return Shape(ShapeKind.MAP, declared, dict, (key, value))

    if origin is not None:
        # Other generics (set[int], Callable[...]) copy as their runtime class.
        if isinstance(origin, type):
            return Shape(ShapeKind.PRIMITIVE, declared, origin)
        return Shape(ShapeKind.OPAQUE, declared)

    if isinstance(tp, type):
        if is_record_type(tp):
            return Shape(ShapeKind.RECORD, declared, tp)
        return Shape(ShapeKind.PRIMITIVE, declared, tp)

    return Shape(ShapeKind.OPAQUE, declared)


@functools.lru_cache(maxsize=1024)
def _classify_cached(declared: Any) -> Shape:
    return _classify(declared)


def classify(declared: Any) -> Shape:
    """Classify a declared type into its shape.

    Args:
        declared: A type annotation.

    Returns:
        The Shape describing how values of this type are copied.
    """
    try:
        return _classify_cached(declared)
    except TypeError:
        # Unhashable annotation
        return _classify(declared)


def _is_bool_into_number(src: type, dst: type) -> bool:
    return issubclass(src, bool) and not issubclass(dst, bool)


def is_assignable(src: Shape, dst: Shape) -> bool:
    """Check if values of ``src`` can be stored in ``dst`` verbatim.

    Subclasses are assignable to their bases, except that ``bool`` never
    stands in for a number.
    """
    if dst.kind is ShapeKind.OPAQUE:
        return True
    if src.kind is ShapeKind.OPAQUE:
        return False
    if src.kind in (ShapeKind.PRIMITIVE, ShapeKind.RECORD) and dst.kind is src.kind:
        if _is_bool_into_number(src.origin, dst.origin):
            return False
        return src.origin is dst.origin or issubclass(src.origin, dst.origin)
    return src.declared == dst.declared


def is_convertible(src: Shape, dst: Shape) -> bool:
    """Check if ``dst``'s class can convert values of ``src`` (same family, other width)."""
    if src.kind is not ShapeKind.PRIMITIVE or dst.kind is not ShapeKind.PRIMITIVE:
        return False
    s, d = src.origin, dst.origin
    if d is bool or issubclass(s, bool):
        return False
    if issubclass(d, Enum):
        return False
    if issubclass(s, _NUMERIC_FAMILY) and d in _NUMERIC_FAMILY:
        return True
    return issubclass(s, _BYTES_FAMILY) and d in _BYTES_FAMILY


def is_mutable_primitive(shape: Shape) -> bool:
    """Check if a primitive shape holds a mutable builtin container (set, bytearray, deque)."""
    return shape.kind is ShapeKind.PRIMITIVE and issubclass(shape.origin, _MUTABLE_PRIMITIVES)


def detach(value: Any) -> Any:
    """Shallow-copy mutable builtin containers stored under a primitive declaration."""
    if isinstance(value, _MUTABLE_PRIMITIVES):
        return copy.copy(value)
    return value


def is_compatible(src: Shape, dst: Shape) -> bool:
    """Check if the engine has any rule that can copy ``src`` into ``dst``.

    Used for upfront element and value checks on sequences and maps: a pair
    is compatible when it is assignable, convertible, a record/sequence/map
    pair, or an optional pair whose inner types are compatible.
    """
    if dst.kind is ShapeKind.OPAQUE:
        return True
    if src.kind is dst.kind and src.kind in (ShapeKind.RECORD, ShapeKind.SEQUENCE, ShapeKind.MAP):
        return True
    if src.kind is ShapeKind.OPTIONAL and dst.kind is ShapeKind.OPTIONAL:
        return is_compatible(classify(src.inner), classify(dst.inner))
    if src.kind is ShapeKind.OPTIONAL:
        return is_compatible(classify(src.inner), dst)
    if dst.kind is ShapeKind.OPTIONAL:
        return is_compatible(src, classify(dst.inner))
    return is_assignable(src, dst) or is_convertible(src, dst)


def is_zero(value: Any, declared: Any = None, _active: frozenset[int] = frozenset()) -> bool:
    """Check if a value is the zero value of its declared type.

    None, False, numeric zero, empty text and bytes, and records whose fields
    are all zero count as zero. Empty lists and dicts do not: only a nil
    (None) container is zero. Under an optional, sequence, map or opaque
    declaration only None is zero, so a blank record held by a
    ``T | None`` field is a value.

    Args:
        value: Value to test.
        declared: Declared type of the slot holding ``value``, if known.

    Returns:
        True if ``value`` is the zero value.
    """
    if value is None:
        return True
    if declared is not None and classify(declared).kind in _NIL_ZERO_KINDS:
        return False
    if isinstance(value, bool):
        return not value
    if isinstance(value, Enum):
        return False
    if isinstance(value, numbers.Number):
        return value == 0
    if isinstance(value, (str, bytes, bytearray)):
        return len(value) == 0
    if is_record(value):
        # A record reached again through its own fields is not blank
        if id(value) in _active:
            return False
        active = _active | {id(value)}
        return all(
            is_zero(getattr(value, name, None), field_type, active)
            for name, field_type in record_field_types(type(value))
        )
    return False


def zero_value(declared: Any, _seen: frozenset[type] = frozenset()) -> Any:
    """Zero value of a declared type, used to fill blank records.

    Optionals, sequences and maps are nil (None). Records are blank records.
    Numbers, text and bytes use their empty constructor. Anything else is
    None.
    """
    shape = classify(declared)
    if shape.kind is ShapeKind.RECORD:
        if shape.origin in _seen:
            return None
        return new_record(shape.origin, _seen)
    if (
        shape.kind is ShapeKind.PRIMITIVE
        and issubclass(shape.origin, _ZERO_CONSTRUCTIBLE)
        and not issubclass(shape.origin, Enum)
    ):
        return shape.origin()
    return None


def new_record(cls: type, _seen: frozenset[type] = frozenset()) -> Any:
    """Build a blank record without running its initializer.

    Fields take their declared default or default factory, otherwise the zero
    value of their declared type.

    Args:
        cls: Record class.

    Returns:
        A fresh instance of ``cls``.
    """
    seen = _seen | {cls}
    if dataclasses.is_dataclass(cls):
        hints = resolve_hints(cls)
        instance = object.__new__(cls)
        for f in dataclasses.fields(cls):
            if f.default is not dataclasses.MISSING:
                value = f.default
            elif f.default_factory is not dataclasses.MISSING:
                value = f.default_factory()
            else:
                value = zero_value(hints.get(f.name, f.type), seen)
            object.__setattr__(instance, f.name, value)
        return instance

    values = {
        name: zero_value(info.annotation, seen)
        for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        if info.is_required()
    }
    return cls.model_construct(**values)  # type: ignore[attr-defined]
