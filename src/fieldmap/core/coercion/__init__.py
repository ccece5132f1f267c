"""Primitive coercion: text into typed primitives via explicit directives."""

from fieldmap.core.coercion.models import (
    CoercionError,
    ConversionKind,
    UnsupportedConversionError,
)
from fieldmap.core.coercion.operations import (
    INVALID_SYNTAX,
    OUT_OF_RANGE,
    convert,
    parse_bool,
    parse_float,
    parse_kind,
    parse_signed,
    parse_unsigned,
)

__all__ = [
    # Models
    "ConversionKind",
    "CoercionError",
    "UnsupportedConversionError",
    # Operations
    "convert",
    "parse_kind",
    "parse_signed",
    "parse_unsigned",
    "parse_float",
    "parse_bool",
    "INVALID_SYNTAX",
    "OUT_OF_RANGE",
]
