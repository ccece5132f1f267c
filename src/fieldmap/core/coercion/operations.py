"""Pure functions converting text into typed primitives.

Parsing is strict: radix-10 integers with range checks against the target
width, decimal, scientific or hexadecimal (``0x1.8p1``) floats, and a fixed
set of boolean spellings. The empty string never parses.

Usage:
    convert("42", "int8")       # 42
    convert("1e3", "float32")   # 1000.0
    convert("T", "bool")        # True
"""

from __future__ import annotations

import math
import re
import struct
from typing import cast

from fieldmap.core.coercion.models import (
    CoercionError,
    ConversionKind,
    UnsupportedConversionError,
)

_SIGNED_INT = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED_INT = re.compile(r"[0-9]+", re.ASCII)
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.ASCII | re.IGNORECASE,
)
_FLOAT_SPECIAL = re.compile(r"[+-]?(?:inf(?:inity)?|nan)", re.ASCII | re.IGNORECASE)
# Hex mantissas need a binary exponent
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+",
    re.ASCII,
)

_TRUE_TEXT = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TEXT = frozenset({"0", "f", "F", "FALSE", "false", "False"})

INVALID_SYNTAX = "invalid syntax"
OUT_OF_RANGE = "value out of range"


def parse_kind(kind: str | ConversionKind) -> ConversionKind:
    """Validate a conversion directive.

    Args:
        kind: Directive value, e.g. ``"int32"``.

    Returns:
        The matching ConversionKind.

    Raises:
        UnsupportedConversionError: If the directive names an unknown kind.
    """
    try:
        return ConversionKind(kind)
    except ValueError:
        raise UnsupportedConversionError("", str(kind)) from None


def parse_signed(text: str, bits: int, kind: str) -> int:
    if not _SIGNED_INT.fullmatch(text):
        raise CoercionError(text, kind, INVALID_SYNTAX)
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise CoercionError(text, kind, OUT_OF_RANGE)
    return value


def parse_unsigned(text: str, bits: int, kind: str) -> int:
    if not _UNSIGNED_INT.fullmatch(text):
        raise CoercionError(text, kind, INVALID_SYNTAX)
    value = int(text)
    if value >= 1 << bits:
        raise CoercionError(text, kind, OUT_OF_RANGE)
    return value


def parse_float(text: str, kind: ConversionKind) -> float:
    """Parse decimal, scientific or hex notation, rounding to the kind's precision."""
    if _HEX_FLOAT.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError:
            raise CoercionError(text, kind, OUT_OF_RANGE) from None
    elif _FLOAT.fullmatch(text):
        value = float(text)
    else:
        raise CoercionError(text, kind, INVALID_SYNTAX)
    special = _FLOAT_SPECIAL.fullmatch(text) is not None
    if math.isinf(value) and not special:
        raise CoercionError(text, kind, OUT_OF_RANGE)
    if kind is ConversionKind.FLOAT32:
        try:
            (value,) = struct.unpack("<f", struct.pack("<f", value))
        except OverflowError:
            raise CoercionError(text, kind, OUT_OF_RANGE) from None
    return value


def parse_bool(text: str) -> bool:
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    raise CoercionError(text, ConversionKind.BOOL, INVALID_SYNTAX)


def convert(text: str, kind: str | ConversionKind) -> int | float | bool:
    """Convert text into the primitive named by ``kind``.

    Args:
        text: Input text.
        kind: One of the ConversionKind values.

    Returns:
        ``int`` for integer kinds, ``float`` for float kinds, ``bool`` for bool.

    Raises:
        UnsupportedConversionError: If ``kind`` is not a supported kind.
        CoercionError: If the text does not parse or is out of range.
    """
    target = parse_kind(kind)
    if target is ConversionKind.BOOL:
        return parse_bool(text)
    if target.is_float:
        return parse_float(text, target)
    bits = cast(int, target.bits)
    if target.is_unsigned_integer:
        return parse_unsigned(text, bits, target)
    return parse_signed(text, bits, target)
