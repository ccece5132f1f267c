"""Metadata models: per-field descriptors and per-record lookup tables."""

from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_TAG_NAME = "map"
"""Annotation key read for field aliases unless configured otherwise."""

CONVERSION_TAG = "mapconv"
"""Fixed annotation key for conversion directives, independent of the tag name."""


@dataclass(slots=True, frozen=True)
class FieldDescriptor:
    """One mappable field of a record type."""

    name: str
    path: tuple[str, ...]
    declared_type: Any
    alias: str | None = None
    convert_to: str | None = None
    settable: bool = True

    def read(self, record: Any) -> Any:
        """Read this field from a record instance.

        Args:
            record: Instance of the owning record type.

        Returns:
            The field value, or None if the attribute was never set.
        """
        owner = functools.reduce(getattr, self.path[:-1], record)
        return getattr(owner, self.path[-1], None)


@dataclass(slots=True, frozen=True)
class RecordMetadata:
    """Mappable fields of a record type under one alias tag name.

    ``fields_by_name`` keeps declaration order. ``fields_by_alias`` holds only
    fields that declare a value under the tag name. ``has_composite`` is set
    when any field needs more than a shallow copy: records, sequences, maps,
    optionals and mutable primitives such as ``set``.
    """

    record_type: type
    tag_name: str
    fields_by_name: Mapping[str, FieldDescriptor]
    fields_by_alias: Mapping[str, FieldDescriptor]
    has_composite: bool
    frozen: bool

    def lookup(self, name: str) -> FieldDescriptor | None:
        """Find the field supplying ``name``: by field name first, then by alias.

        Args:
            name: Destination field name.

        Returns:
            Matching field descriptor, or None.
        """
        found = self.fields_by_name.get(name)
        if found is None:
            found = self.fields_by_alias.get(name)
        return found
