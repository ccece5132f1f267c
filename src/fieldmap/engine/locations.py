"""Destination locations: slots the engine can read and write.

A location pairs a declared type with somewhere to store a value: a record
attribute, or a one-value holder for sequence elements, map values and
optional interiors.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from fieldmap.core.metadata import FieldDescriptor


@runtime_checkable
class Location(Protocol):
    """A typed destination slot."""

    @property
    def declared_type(self) -> Any: ...

    @property
    def can_set(self) -> bool: ...

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...


@dataclass(slots=True)
class FieldLocation:
    """A field of a destination record.

    ``owned`` marks records the engine allocated during this call (blank
    records and copies of existing nested records). Their fields are written
    directly, even on frozen types. Fields of caller-supplied records honour
    the descriptor's ``settable`` flag.
    """

    record: Any
    descriptor: FieldDescriptor
    owned: bool = False

    @property
    def declared_type(self) -> Any:
        return self.descriptor.declared_type

    @property
    def can_set(self) -> bool:
        return self.owned or self.descriptor.settable

    def get(self) -> Any:
        return self.descriptor.read(self.record)

    def set(self, value: Any) -> None:
        path = self.descriptor.path
        owner = functools.reduce(getattr, path[:-1], self.record)
        if self.owned:
            object.__setattr__(owner, path[-1], value)
        else:
            setattr(owner, path[-1], value)


@dataclass(slots=True)
class HolderLocation:
    """A fresh one-value box, always settable."""

    declared_type: Any
    value: Any = None

    @property
    def can_set(self) -> bool:
        return True

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value
