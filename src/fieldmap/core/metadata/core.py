"""Metadata index and field annotation helper.

Usage:
    @dataclass
    class ApiUser:
        full_name: str = mapfield("name")
        age: str = mapfield("age", convert="int")

    meta = resolve(ApiUser, "map")
    meta.fields_by_alias["name"].name   # "full_name"
"""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from typing import Any

from fieldmap.core.errors import MappingError, MappingErrorCode
from fieldmap.core.metadata.models import CONVERSION_TAG, DEFAULT_TAG_NAME, RecordMetadata
from fieldmap.core.metadata.operations import build_record_metadata
from fieldmap.core.shape import describe_type, is_record_type


class MetadataIndex:
    """Process-wide memo of record metadata keyed by (record type, tag name).

    Metadata is computed outside the lock, so two threads may build the same
    entry concurrently. The first insert wins and every later reader gets
    that instance. Entries are never evicted.
    """

    def __init__(self) -> None:
        """Initialize empty index."""
        self._entries: dict[tuple[type, str], RecordMetadata] = {}
        self._lock = threading.Lock()

    def resolve(self, record_type: type, tag_name: str = DEFAULT_TAG_NAME) -> RecordMetadata:
        """Get the metadata for a record type, computing it on first use.

        Args:
            record_type: Dataclass or Pydantic model class.
            tag_name: Annotation key read for aliases.

        Returns:
            Shared, immutable RecordMetadata.

        Raises:
            MappingError: If ``record_type`` is not a record class.
        """
        if not is_record_type(record_type):
            raise MappingError(
                MappingErrorCode.NOT_A_RECORD,
                f"type is not a record: {describe_type(record_type)}",
            )
        key = (record_type, tag_name)
        meta = self._entries.get(key)
        if meta is not None:
            return meta

        meta = build_record_metadata(record_type, tag_name)
        with self._lock:
            return self._entries.setdefault(key, meta)

    def clear(self) -> None:
        """Drop all cached entries."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Module-level index instance
_index = MetadataIndex()


def get_index() -> MetadataIndex:
    """Access the global metadata index.

    Returns:
        The process-wide MetadataIndex instance.
    """
    return _index


def resolve(record_type: type, tag_name: str = DEFAULT_TAG_NAME) -> RecordMetadata:
    """Resolve record metadata through the global index."""
    return _index.resolve(record_type, tag_name)


def mapfield(
    alias: str | None = None,
    *,
    convert: str | None = None,
    tag: str = DEFAULT_TAG_NAME,
    metadata: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field with mapping annotations.

    Thin wrapper over ``dataclasses.field`` that writes the alias under
    ``tag`` and the conversion directive under ``"mapconv"``.

    Args:
        alias: Destination field name this source field also supplies.
        convert: Conversion directive (``"int"``, ``"float64"``, ``"bool"``, ...).
        tag: Annotation key for the alias.
        metadata: Extra metadata merged into the field's metadata.
        **kwargs: Passed through to ``dataclasses.field`` (default, default_factory, ...).

    Returns:
        A dataclass field specifier.

    Raises:
        TypeError: If ``tag`` is empty while an alias is given.
    """
    if alias is not None and not tag:
        raise TypeError("mapfield() needs a non-empty tag to store an alias")
    merged = dict(metadata or {})
    if alias is not None:
        merged[tag] = alias
    if convert is not None:
        merged[CONVERSION_TAG] = str(convert)
    return dataclasses.field(metadata=merged, **kwargs)
