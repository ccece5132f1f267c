"""Public mapping entry points and root preconditions.

Usage:
    @dataclass
    class ApiUser:
        full_name: str = mapfield("name", default="")
        years_old: int = mapfield("age", default=0)

    @dataclass
    class User:
        name: str = ""
        age: int = 0

    user = map_into(User(), ApiUser("Bob", 25))
    # User(name="Bob", age=25)

    # Patch semantics: zero-valued source fields leave the destination alone
    map_with_options(existing, patch, with_ignore_zero_source())
"""

from __future__ import annotations

import weakref
from typing import Any

from fieldmap.core.errors import MappingError, MappingErrorCode
from fieldmap.core.metadata import resolve
from fieldmap.core.shape import describe_type, is_record
from fieldmap.engine.fields import map_fields
from fieldmap.engine.models import MapperConfig, MappingContext, Option, build_config

_IMMUTABLE_VALUES = (int, float, complex, str, bytes, tuple, frozenset, range)


def _deref(value: Any) -> tuple[Any, bool]:
    """Follow a weak reference.

    Returns:
        (referent, was_reference). The referent is None for a dead reference.
    """
    if isinstance(value, weakref.ReferenceType):
        return value(), True
    return value, False


def _type_name(value: Any) -> str:
    if value is None:
        return "<nil>"
    target, is_ref = _deref(value)
    if is_ref:
        return f"weakref[{_type_name(target)}]"
    if isinstance(value, type):
        return f"type[{describe_type(value)}]"
    return describe_type(type(value))


def _root_error(code: MappingErrorCode, dst: Any, src: Any) -> MappingError:
    return MappingError(code, src_type=_type_name(src), dst_type=_type_name(dst))


def _check_destination(dst: Any, src: Any) -> Any:
    record, _ = _deref(dst)
    if record is None or isinstance(record, (type, *_IMMUTABLE_VALUES)):
        raise _root_error(MappingErrorCode.DST_NOT_SETTABLE_REFERENCE, dst, src)
    if not is_record(record):
        raise _root_error(MappingErrorCode.DST_NOT_RECORD, dst, src)
    return record


def _check_source(dst: Any, src: Any) -> Any:
    record, is_ref = _deref(src)
    if is_ref and record is None:
        raise _root_error(MappingErrorCode.SRC_NIL_REFERENCE, dst, src)
    if not is_record(record):
        raise _root_error(MappingErrorCode.SRC_NOT_RECORD, dst, src)
    return record


def run_mapping(dst: Any, src: Any, config: MapperConfig) -> Any:
    """Map ``src`` into ``dst`` under an explicit configuration.

    Args:
        dst: Destination record, or a weak reference to one.
        src: Source record, or a weak reference to one.
        config: Mapping configuration.

    Returns:
        The destination record.

    Raises:
        MappingError: If a root precondition fails or any field cannot be mapped.
    """
    if dst is None or src is None:
        raise _root_error(MappingErrorCode.NIL_ARGUMENT, dst, src)

    dst_record = _check_destination(dst, src)
    src_record = _check_source(dst, src)

    dst_meta = resolve(type(dst_record), config.tag_name)
    if dst_meta.frozen:
        raise _root_error(MappingErrorCode.DST_NOT_SETTABLE_REFERENCE, dst, src)
    src_meta = resolve(type(src_record), config.tag_name)

    ctx = MappingContext(
        config=config,
        src_type=describe_type(type(src_record)),
        dst_type=describe_type(type(dst_record)),
    )
    map_fields(dst_record, dst_meta, src_record, src_meta, ctx, config.max_depth, owned=False)
    return dst_record


def map_with_options[D](dst: D, src: Any, *options: Option) -> D:
    """Copy matching fields from ``src`` into ``dst`` with custom configuration.

    Options apply in the order given. See ``with_tag_name``,
    ``with_ignore_zero_source``, ``with_strict_mode`` and ``with_max_depth``.

    Args:
        dst: Destination record (mutated in place), or a weak reference to one.
        src: Source record, or a weak reference to one.
        *options: Configuration options.

    Returns:
        The destination record.

    Raises:
        MappingError: On any failure. Fields assigned before the failure stay
            assigned.
    """
    return run_mapping(dst, src, build_config(*options))


def map_into[D](dst: D, src: Any) -> D:
    """Copy matching fields from ``src`` into ``dst`` with default configuration.

    Fields match by name, or by the source field's ``"map"`` alias. Sequences,
    maps and nested records are deep-copied. Only public fields are mapped.

    Args:
        dst: Destination record (mutated in place), or a weak reference to one.
        src: Source record, or a weak reference to one.

    Returns:
        The destination record.

    Raises:
        MappingError: On any failure.
    """
    return map_with_options(dst, src)
