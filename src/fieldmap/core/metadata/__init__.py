"""Metadata index: memoized per-record field tables for name and alias lookup."""

from fieldmap.core.metadata.core import MetadataIndex, get_index, mapfield, resolve
from fieldmap.core.metadata.models import (
    CONVERSION_TAG,
    DEFAULT_TAG_NAME,
    FieldDescriptor,
    RecordMetadata,
)
from fieldmap.core.metadata.operations import build_record_metadata, iter_declared_fields

__all__ = [
    # Models
    "FieldDescriptor",
    "RecordMetadata",
    "DEFAULT_TAG_NAME",
    "CONVERSION_TAG",
    # Core
    "MetadataIndex",
    "get_index",
    "resolve",
    "mapfield",
    # Operations
    "build_record_metadata",
    "iter_declared_fields",
]
