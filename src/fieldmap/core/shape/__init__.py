"""Shape classification: declared types reduced to record/sequence/map/optional/primitive."""

from fieldmap.core.shape.models import COMPOSITE_KINDS, Shape, ShapeKind
from fieldmap.core.shape.operations import (
    classify,
    describe_type,
    detach,
    is_assignable,
    is_compatible,
    is_convertible,
    is_frozen_record_type,
    is_mutable_primitive,
    is_record,
    is_record_type,
    is_zero,
    new_record,
    record_field_types,
    resolve_hints,
    zero_value,
)

__all__ = [
    # Models
    "ShapeKind",
    "Shape",
    "COMPOSITE_KINDS",
    # Classification
    "classify",
    "describe_type",
    "is_record_type",
    "is_record",
    "is_frozen_record_type",
    "record_field_types",
    "resolve_hints",
    # Compatibility
    "is_assignable",
    "is_convertible",
    "is_compatible",
    # Values
    "is_zero",
    "is_mutable_primitive",
    "detach",
    "zero_value",
    "new_record",
]
