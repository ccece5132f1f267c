"""Recursive value assignment.

``assign`` decides how a source value is copied into a destination location
from the pair of declared shapes and dispatches in a fixed priority order:

1. depth budget exhausted -> MAX_DEPTH_EXCEEDED
2. destination not settable -> FIELD_NOT_SETTABLE
3. conversion directive on textual source -> coerce, then continue with the result
4. record x record -> assign_record
5. sequence x sequence -> assign_sequence
6. map x map -> assign_map
7. optional x optional -> nil copies as nil, otherwise recurse on the interior
8. optional x plain -> nil leaves the destination alone, otherwise unwrap
9. plain x optional -> recurse into a fresh holder, then store it
10. assignable -> copy; convertible -> convert; otherwise INCOMPATIBLE_TYPES

Every composite step builds a new container or record, so the destination
never shares storage with the source. Path segments are only added while a
failure propagates.
"""

from __future__ import annotations

import copy
from typing import Any

from fieldmap.core.coercion import CoercionError, UnsupportedConversionError
from fieldmap.core.coercion import convert as coerce_text
from fieldmap.core.errors import MappingError, MappingErrorCode
from fieldmap.core.metadata import resolve
from fieldmap.core.shape import (
    Shape,
    ShapeKind,
    classify,
    describe_type,
    detach,
    is_assignable,
    is_compatible,
    is_convertible,
    is_record_type,
    new_record,
    zero_value,
)
from fieldmap.engine.locations import HolderLocation, Location
from fieldmap.engine.models import MappingContext

_CONVERSION_ERRORS = (ValueError, TypeError, ArithmeticError)


def _pair(src: Shape, dst: Shape) -> str:
    return f"{describe_type(src.declared)} -> {describe_type(dst.declared)}"


def _check_depth(ctx: MappingContext, depth: int) -> None:
    if depth <= 0:
        raise ctx.error(MappingErrorCode.MAX_DEPTH_EXCEEDED)


def _blank_for(shape: Shape) -> Any:
    """Initial holder value: zero for primitives, None (fresh) otherwise."""
    if shape.kind is ShapeKind.PRIMITIVE:
        return zero_value(shape.declared)
    return None


def assign(
    dst: Location,
    src_value: Any,
    src_type: Any,
    ctx: MappingContext,
    depth: int,
    convert_to: str | None = None,
) -> None:
    """Copy ``src_value`` (declared as ``src_type``) into ``dst``.

    Args:
        dst: Destination location.
        src_value: Source value.
        src_type: Declared type of the source value.
        ctx: Per-call context.
        depth: Remaining nesting budget.
        convert_to: Conversion directive of the source field, if any.

    Raises:
        MappingError: On depth exhaustion, unsettable destination, failed
            coercion or incompatible shapes.
    """
    _check_depth(ctx, depth)
    if not dst.can_set:
        raise ctx.error(MappingErrorCode.FIELD_NOT_SETTABLE)

    if convert_to is not None and isinstance(src_value, str):
        coerced = _coerce(src_value, convert_to, ctx)
        _dispatch(dst, coerced, classify(type(coerced)), ctx, depth, None)
        return

    _dispatch(dst, src_value, classify(src_type), ctx, depth, convert_to)


def _coerce(text: str, kind: str, ctx: MappingContext) -> Any:
    try:
        return coerce_text(text, kind)
    except UnsupportedConversionError as exc:
        raise ctx.error(
            MappingErrorCode.UNSUPPORTED_CONVERSION,
            f"unsupported mapconv target type: {kind}",
        ) from exc
    except CoercionError as exc:
        raise ctx.error(MappingErrorCode.CONVERSION_FAILED, str(exc)) from exc


def _dispatch(
    dst: Location,
    src_value: Any,
    src: Shape,
    ctx: MappingContext,
    depth: int,
    convert_to: str | None,
) -> None:
    dst_shape = classify(dst.declared_type)

    if dst_shape.kind is ShapeKind.OPAQUE:
        dst.set(src_value)
        return

    if src.kind is ShapeKind.RECORD and dst_shape.kind is ShapeKind.RECORD:
        if src_value is not None:
            assign_record(dst, src_value, src, dst_shape, ctx, depth - 1)
        return

    if src.kind is ShapeKind.SEQUENCE and dst_shape.kind is ShapeKind.SEQUENCE:
        assign_sequence(dst, src_value, src, dst_shape, ctx, depth - 1)
        return

    if src.kind is ShapeKind.MAP and dst_shape.kind is ShapeKind.MAP:
        assign_map(dst, src_value, src, dst_shape, ctx, depth - 1)
        return

    if src.kind is ShapeKind.OPTIONAL and dst_shape.kind is ShapeKind.OPTIONAL:
        if src_value is None:
            dst.set(None)
            return
        holder = HolderLocation(dst_shape.inner, _blank_for(classify(dst_shape.inner)))
        assign(holder, src_value, src.inner, ctx, depth - 1, convert_to)
        dst.set(holder.value)
        return

    # Absent values under optional or non-optional declarations leave dst alone.
    if src_value is None:
        return

    if src.kind is ShapeKind.OPTIONAL:
        assign(dst, src_value, src.inner, ctx, depth - 1, convert_to)
        return

    if dst_shape.kind is ShapeKind.OPTIONAL:
        holder = HolderLocation(dst_shape.inner, _blank_for(classify(dst_shape.inner)))
        assign(holder, src_value, src.declared, ctx, depth - 1, convert_to)
        dst.set(holder.value)
        return

    if is_assignable(src, dst_shape):
        dst.set(detach(src_value))
        return

    if is_convertible(src, dst_shape):
        try:
            converted = dst_shape.origin(src_value)
        except _CONVERSION_ERRORS as exc:
            raise ctx.error(
                MappingErrorCode.CONVERSION_FAILED,
                f"cannot convert value {src_value!r} to {describe_type(dst_shape.declared)}: {exc}",
            ) from exc
        dst.set(converted)
        return

    raise ctx.error(
        MappingErrorCode.INCOMPATIBLE_TYPES,
        f"incompatible field types: {_pair(src, dst_shape)}",
    )


def assign_record(
    dst: Location,
    src_value: Any,
    src: Shape,
    dst_shape: Shape,
    ctx: MappingContext,
    depth: int,
) -> None:
    """Copy a record into a new record of the destination type.

    An existing destination record is shallow-copied first so unmatched
    fields keep their values. Otherwise a blank record is allocated.

    Args:
        dst: Destination location declared as a record type.
        src_value: Source record.
        src: Declared shape of the source.
        dst_shape: Declared shape of the destination.
        ctx: Per-call context.
        depth: Remaining nesting budget, already decremented.
    """
    # Late import to avoid circular dependency
    from fieldmap.engine.fields import map_fields

    _check_depth(ctx, depth)
    tag_name = ctx.config.tag_name
    src_cls = type(src_value) if is_record_type(type(src_value)) else src.origin
    dst_cls = dst_shape.origin
    src_meta = resolve(src_cls, tag_name)

    if src_cls is dst_cls and not src_meta.has_composite and not ctx.config.ignore_zero_source:
        dst.set(copy.copy(src_value))
        return

    dst_meta = resolve(dst_cls, tag_name)
    current = dst.get()
    record = copy.copy(current) if type(current) is dst_cls else new_record(dst_cls)
    map_fields(record, dst_meta, src_value, src_meta, ctx, depth, owned=True)
    dst.set(record)


def assign_sequence(
    dst: Location,
    src_value: Any,
    src: Shape,
    dst_shape: Shape,
    ctx: MappingContext,
    depth: int,
) -> None:
    """Copy a sequence into a new list (or tuple) of the destination element type.

    None stays None and an empty sequence stays an empty, non-None sequence.

    Args:
        dst: Destination location declared as a sequence.
        src_value: Source sequence or None.
        src: Declared shape of the source.
        dst_shape: Declared shape of the destination.
        ctx: Per-call context.
        depth: Remaining nesting budget, already decremented.
    """
    _check_depth(ctx, depth)
    if src_value is None:
        dst.set(None)
        return

    src_elem = classify(src.element)
    dst_elem = classify(dst_shape.element)

    if src_elem.kind is ShapeKind.PRIMITIVE and src_elem == dst_elem:
        items = [detach(element) for element in src_value]
    else:
        if not is_compatible(src_elem, dst_elem):
            raise ctx.error(
                MappingErrorCode.INCOMPATIBLE_ELEMENTS,
                f"slice element types are incompatible: {_pair(src_elem, dst_elem)}",
            )
        blank = _blank_for(dst_elem)
        items = []
        for index, element in enumerate(src_value):
            holder = HolderLocation(dst_shape.element, blank)
            try:
                assign(holder, element, src.element, ctx, depth)
            except MappingError as err:
                err.prepend_segment(f"[{index}]")
                raise
            items.append(holder.value)

    dst.set(tuple(items) if dst_shape.origin is tuple else items)


def assign_map(
    dst: Location,
    src_value: Any,
    src: Shape,
    dst_shape: Shape,
    ctx: MappingContext,
    depth: int,
) -> None:
    """Copy a mapping into a new dict of the destination key and value types.

    Key and value compatibility is checked before any entry is copied.

    Args:
        dst: Destination location declared as a map.
        src_value: Source mapping or None.
        src: Declared shape of the source.
        dst_shape: Declared shape of the destination.
        ctx: Per-call context.
        depth: Remaining nesting budget, already decremented.
    """
    _check_depth(ctx, depth)
    if src_value is None:
        dst.set(None)
        return

    src_key, dst_key = classify(src.key), classify(dst_shape.key)
    keys_assignable = is_assignable(src_key, dst_key)
    if not keys_assignable and not is_convertible(src_key, dst_key):
        raise ctx.error(
            MappingErrorCode.INCOMPATIBLE_KEYS,
            f"map key types are incompatible: {_pair(src_key, dst_key)}",
        )

    src_val, dst_val = classify(src.value), classify(dst_shape.value)
    if not is_compatible(src_val, dst_val):
        raise ctx.error(
            MappingErrorCode.INCOMPATIBLE_VALUES,
            f"map value types are incompatible: {_pair(src_val, dst_val)}",
        )

    if keys_assignable and src_val.kind is ShapeKind.PRIMITIVE and src_val == dst_val:
        dst.set({key: detach(value) for key, value in src_value.items()})
        return

    blank = _blank_for(dst_val)
    result: dict[Any, Any] = {}
    for key, value in src_value.items():
        try:
            new_key = key if keys_assignable else _convert_key(key, dst_key, ctx)
            holder = HolderLocation(dst_shape.value, blank)
            assign(holder, value, src.value, ctx, depth)
        except MappingError as err:
            err.prepend_segment(f"[{key}]")
            raise
        result[new_key] = holder.value

    dst.set(result)


def _convert_key(key: Any, dst_key: Shape, ctx: MappingContext) -> Any:
    try:
        return dst_key.origin(key)
    except _CONVERSION_ERRORS as exc:
        raise ctx.error(
            MappingErrorCode.CONVERSION_FAILED,
            f"cannot convert key {key!r} to {describe_type(dst_key.declared)}: {exc}",
        ) from exc
