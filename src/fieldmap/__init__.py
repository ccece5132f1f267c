"""fieldmap: record-to-record field copying for dataclasses and Pydantic models.

Usage:
    from dataclasses import dataclass
    from fieldmap import map_into, map_with_options, mapfield, with_strict_mode

    @dataclass
    class ApiUser:
        full_name: str = mapfield("name", default="")
        age: str = mapfield(convert="int", default="")

    @dataclass
    class User:
        name: str = ""
        age: int = 0

    user = map_into(User(), ApiUser(full_name="Bob", age="25"))
    # User(name='Bob', age=25)

    map_with_options(User(), ApiUser(full_name="Bob", age="25"), with_strict_mode())
"""

__version__ = "0.1.0"

# Core primitives
from fieldmap.core import (
    CoercionError,
    ConversionKind,
    FieldDescriptor,
    MappingError,
    MappingErrorCode,
    MetadataIndex,
    RecordMetadata,
    Shape,
    ShapeKind,
    UnsupportedConversionError,
    classify,
    convert,
    get_index,
    mapfield,
    resolve,
)

# Engine
from fieldmap.engine import (
    DEFAULT_MAX_DEPTH,
    MapperConfig,
    Option,
    map_into,
    map_with_options,
    with_ignore_zero_source,
    with_max_depth,
    with_strict_mode,
    with_tag_name,
)

__all__ = [
    # Version
    "__version__",
    # Mapping
    "map_into",
    "map_with_options",
    "mapfield",
    # Configuration
    "MapperConfig",
    "Option",
    "DEFAULT_MAX_DEPTH",
    "with_tag_name",
    "with_ignore_zero_source",
    "with_strict_mode",
    "with_max_depth",
    # Errors
    "MappingError",
    "MappingErrorCode",
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
    # Shapes
    "Shape",
    "ShapeKind",
    "classify",
]
