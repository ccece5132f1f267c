"""Shape models: the tagged classification of declared field types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ShapeKind(Enum):
    """Structural category of a declared type."""

    RECORD = auto()  # dataclass or pydantic model
    SEQUENCE = auto()  # list[T], tuple[T, ...], Sequence[T]
    MAP = auto()  # dict[K, V], Mapping[K, V]
    OPTIONAL = auto()  # T | None
    PRIMITIVE = auto()  # any other concrete class
    OPAQUE = auto()  # Any, multi-member unions, unresolved annotations


COMPOSITE_KINDS = frozenset(
    {ShapeKind.RECORD, ShapeKind.SEQUENCE, ShapeKind.MAP, ShapeKind.OPTIONAL}
)


@dataclass(frozen=True, slots=True)
class Shape:
    """Classified view of a declared type.

    ``origin`` is the concrete class behind the declaration: the record class,
    the primitive class, or the container built for sequences (``list`` or
    ``tuple``) and maps (``dict``). ``args`` holds the element type for
    sequences, the key and value types for maps and the inner type for
    optionals.
    """

    kind: ShapeKind
    declared: Any
    origin: Any = None
    args: tuple[Any, ...] = ()

    @property
    def is_composite(self) -> bool:
        return self.kind in COMPOSITE_KINDS

    @property
    def element(self) -> Any:
        return self.args[0]

    @property
    def key(self) -> Any:
        return self.args[0]

    @property
    def value(self) -> Any:
        return self.args[1]

    @property
    def inner(self) -> Any:
        return self.args[0]
