"""Destination-driven field resolution.

For every destination field, in declaration order, find the source field that
supplies it (same name first, then a source alias equal to the destination
field name), apply the strict and skip-zero policies, and assign.
"""

from __future__ import annotations

from typing import Any

from fieldmap.core.errors import MappingError, MappingErrorCode
from fieldmap.core.metadata import FieldDescriptor, RecordMetadata
from fieldmap.core.shape import is_zero
from fieldmap.engine.assign import assign
from fieldmap.engine.locations import FieldLocation
from fieldmap.engine.models import MappingContext


def _one_line(exc: Exception) -> str:
    return " ".join(str(exc).split()) or type(exc).__name__


def resolve_source_field(dst_field: FieldDescriptor, src_meta: RecordMetadata) -> FieldDescriptor | None:
    """Find the source field supplying a destination field.

    Args:
        dst_field: Destination field descriptor.
        src_meta: Source record metadata under the active tag name.

    Returns:
        The matching source field descriptor, or None.
    """
    return src_meta.lookup(dst_field.name)


def map_fields(
    record: Any,
    dst_meta: RecordMetadata,
    src_record: Any,
    src_meta: RecordMetadata,
    ctx: MappingContext,
    depth: int,
    *,
    owned: bool,
) -> None:
    """Assign every resolvable destination field of ``record`` from ``src_record``.

    Fields assigned before a failure stay assigned.

    Args:
        record: Destination record, written in place.
        dst_meta: Destination record metadata.
        src_record: Source record.
        src_meta: Source record metadata.
        ctx: Per-call context.
        depth: Budget for each field assignment.
        owned: True when ``record`` was allocated by this mapping call.

    Raises:
        MappingError: On strict-mode misses or any field assignment failure,
            with the field name prepended to the error path. A ``ValueError``
            raised by a validating destination record on write becomes
            CONVERSION_FAILED at that field.
    """
    config = ctx.config
    for name, dst_field in dst_meta.fields_by_name.items():
        src_field = resolve_source_field(dst_field, src_meta)
        if src_field is None:
            if config.strict_mode:
                raise ctx.error(MappingErrorCode.NO_MATCHING_FIELD, field_path=name)
            continue

        value = src_field.read(src_record)
        if config.ignore_zero_source and is_zero(value, src_field.declared_type):
            continue

        location = FieldLocation(record, dst_field, owned)
        try:
            assign(location, value, src_field.declared_type, ctx, depth, src_field.convert_to)
        except MappingError as err:
            err.prepend_segment(name)
            raise
        except ValueError as exc:
            # Validating records (pydantic validate_assignment) reject on write
            raise ctx.error(
                MappingErrorCode.CONVERSION_FAILED,
                f"destination rejected value: {_one_line(exc)}",
                field_path=name,
            ) from exc
