"""Coercion models: conversion kinds and coercion failures."""

from __future__ import annotations

from enum import StrEnum


class ConversionKind(StrEnum):
    """Primitive kinds a textual field can be coerced into.

    Values are the strings accepted by the ``mapconv`` field annotation.
    Plain ``int``/``uint`` are 64 bits wide.
    """

    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"

    @property
    def is_signed_integer(self) -> bool:
        return self in _SIGNED_BITS

    @property
    def is_unsigned_integer(self) -> bool:
        return self in _UNSIGNED_BITS

    @property
    def is_float(self) -> bool:
        return self in (ConversionKind.FLOAT32, ConversionKind.FLOAT64)

    @property
    def bits(self) -> int | None:
        """Bit width for integer kinds, None otherwise."""
        return _SIGNED_BITS.get(self) or _UNSIGNED_BITS.get(self)

    @property
    def python_type(self) -> type:
        """Python type of values produced for this kind."""
        if self is ConversionKind.BOOL:
            return bool
        if self.is_float:
            return float
        return int


_SIGNED_BITS = {
    ConversionKind.INT: 64,
    ConversionKind.INT8: 8,
    ConversionKind.INT16: 16,
    ConversionKind.INT32: 32,
    ConversionKind.INT64: 64,
}

_UNSIGNED_BITS = {
    ConversionKind.UINT: 64,
    ConversionKind.UINT8: 8,
    ConversionKind.UINT16: 16,
    ConversionKind.UINT32: 32,
    ConversionKind.UINT64: 64,
}


class CoercionError(ValueError):
    """Raised when text does not parse as the requested kind.

    Attributes:
        text: The offending input text.
        kind: Target kind name.
        detail: The parser's complaint ("invalid syntax", "value out of range").
    """

    def __init__(self, text: str, kind: str, detail: str) -> None:
        self.text = text
        self.kind = kind
        self.detail = detail
        super().__init__(f'cannot convert "{text}" to {kind}: {detail}')


class UnsupportedConversionError(CoercionError):
    """Raised when a conversion directive names an unknown kind."""

    def __init__(self, text: str, kind: str) -> None:
        super().__init__(text, kind, "unsupported target kind")
        self.args = (f"unsupported mapconv target type: {kind}",)
