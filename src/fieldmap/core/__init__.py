"""Core functionalities: stateless primitives used by the mapping engine.

Architecture Note:
    core/ contains pure, stateless building blocks: shape classification,
    primitive coercion, record metadata and the error model. The metadata
    index is the only shared state and it is a read-mostly memo.
    For the recursive engine, see engine/.
"""

from fieldmap.core.coercion import (
    CoercionError,
    ConversionKind,
    UnsupportedConversionError,
    convert,
)
from fieldmap.core.errors import MappingError, MappingErrorCode, compose_path
from fieldmap.core.metadata import (
    CONVERSION_TAG,
    DEFAULT_TAG_NAME,
    FieldDescriptor,
    MetadataIndex,
    RecordMetadata,
    get_index,
    mapfield,
    resolve,
)
from fieldmap.core.shape import (
    Shape,
    ShapeKind,
    classify,
    describe_type,
    is_record,
    is_record_type,
    is_zero,
)

__all__ = [
    # Errors
    "MappingError",
    "MappingErrorCode",
    "compose_path",
    # Coercion
    "ConversionKind",
    "CoercionError",
    "UnsupportedConversionError",
    "convert",
    # Metadata
    "FieldDescriptor",
    "RecordMetadata",
    "MetadataIndex",
    "get_index",
    "resolve",
    "mapfield",
    "DEFAULT_TAG_NAME",
    "CONVERSION_TAG",
    # Shape
    "Shape",
    "ShapeKind",
    "classify",
    "describe_type",
    "is_record",
    "is_record_type",
    "is_zero",
]
