"""Pure functions building record metadata from dataclasses and Pydantic models."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from fieldmap.core.metadata.models import CONVERSION_TAG, FieldDescriptor, RecordMetadata
from fieldmap.core.shape import (
    classify,
    is_frozen_record_type,
    is_mutable_primitive,
    resolve_hints,
)


def is_public(name: str) -> bool:
    return not name.startswith("_")


def _annotations_of(info: Any) -> Mapping[str, Any]:
    extra = getattr(info, "json_schema_extra", None)
    return extra if isinstance(extra, Mapping) else {}


def iter_declared_fields(cls: type) -> Iterator[tuple[str, Any, Mapping[str, Any], bool]]:
    """Yield ``(name, declared_type, annotations, settable)`` for public fields.

    Dataclass annotations come from ``field(metadata=...)``; Pydantic
    annotations come from ``Field(json_schema_extra={...})``.

    Args:
        cls: Record class.
    """
    frozen = is_frozen_record_type(cls)
    if dataclasses.is_dataclass(cls):
        hints = resolve_hints(cls)
        for f in dataclasses.fields(cls):
            if is_public(f.name):
                yield f.name, hints.get(f.name, f.type), f.metadata, not frozen
        return

    for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
        if is_public(name):
            yield name, info.annotation, _annotations_of(info), not (frozen or info.frozen)


def build_record_metadata(cls: type, tag_name: str) -> RecordMetadata:
    """Compute the mappable fields of a record class.

    Args:
        cls: Record class (dataclass or Pydantic model).
        tag_name: Annotation key read for aliases. Empty disables aliases.

    Returns:
        Fresh RecordMetadata for (cls, tag_name).
    """
    by_name: dict[str, FieldDescriptor] = {}
    by_alias: dict[str, FieldDescriptor] = {}
    has_composite = False

    for name, declared, annotations, settable in iter_declared_fields(cls):
        shape = classify(declared)
        if shape.is_composite or is_mutable_primitive(shape):
            has_composite = True

        alias = annotations.get(tag_name) if tag_name else None
        convert_to = annotations.get(CONVERSION_TAG) or None
        descriptor = FieldDescriptor(
            name=name,
            path=(name,),
            declared_type=declared,
            alias=str(alias) if alias else None,
            convert_to=str(convert_to) if convert_to is not None else None,
            settable=settable,
        )
        by_name[name] = descriptor
        if descriptor.alias is not None:
            by_alias[descriptor.alias] = descriptor

    return RecordMetadata(
        record_type=cls,
        tag_name=tag_name,
        fields_by_name=MappingProxyType(by_name),
        fields_by_alias=MappingProxyType(by_alias),
        has_composite=has_composite,
        frozen=is_frozen_record_type(cls),
    )
