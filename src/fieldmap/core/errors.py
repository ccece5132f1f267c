"""Structured mapping failures.

Every failure raised by the mapper is a ``MappingError``. It carries the
names of the root source and destination record types, the path to the
offending field, a reason code and a human-readable reason.

Usage:
    try:
        map_into(user, dto)
    except MappingError as err:
        print(err.field_path, err.code, err.reason)

Paths read left to right from the mapping root: ``address.city`` for nested
records, ``items[0].name`` for sequence elements and ``config[database].host``
for map values.
"""

from __future__ import annotations

from enum import Enum, auto


class MappingErrorCode(Enum):
    """Reason taxonomy for mapping failures."""

    # Root shape
    NIL_ARGUMENT = auto()
    DST_NOT_SETTABLE_REFERENCE = auto()
    DST_NOT_RECORD = auto()
    SRC_NOT_RECORD = auto()
    SRC_NIL_REFERENCE = auto()
    NOT_A_RECORD = auto()
    # Field shape
    FIELD_NOT_SETTABLE = auto()
    # Type incompatibility
    INCOMPATIBLE_TYPES = auto()
    INCOMPATIBLE_ELEMENTS = auto()
    INCOMPATIBLE_KEYS = auto()
    INCOMPATIBLE_VALUES = auto()
    # Policies and limits
    NO_MATCHING_FIELD = auto()
    MAX_DEPTH_EXCEEDED = auto()
    # Coercion
    CONVERSION_FAILED = auto()
    UNSUPPORTED_CONVERSION = auto()

    @property
    def default_reason(self) -> str:
        """Reason text used when a failure site adds no detail.

        Returns:
            Fixed reason string for this code.
        """
        reasons = {
            MappingErrorCode.NIL_ARGUMENT: "nil src or dst",
            MappingErrorCode.DST_NOT_SETTABLE_REFERENCE: (
                "dst must be a non-nil, settable reference to a record"
            ),
            MappingErrorCode.DST_NOT_RECORD: "dst must point to a record",
            MappingErrorCode.SRC_NOT_RECORD: "src must be a record or a reference to one",
            MappingErrorCode.SRC_NIL_REFERENCE: "src is a nil reference",
            MappingErrorCode.NOT_A_RECORD: "type is not a record",
            MappingErrorCode.FIELD_NOT_SETTABLE: "destination field cannot be set",
            MappingErrorCode.INCOMPATIBLE_TYPES: "incompatible field types",
            MappingErrorCode.INCOMPATIBLE_ELEMENTS: "slice element types are incompatible",
            MappingErrorCode.INCOMPATIBLE_KEYS: "map key types are incompatible",
            MappingErrorCode.INCOMPATIBLE_VALUES: "map value types are incompatible",
            MappingErrorCode.NO_MATCHING_FIELD: "no matching source field found",
            MappingErrorCode.MAX_DEPTH_EXCEEDED: (
                "maximum nesting depth exceeded (possible circular reference)"
            ),
            MappingErrorCode.CONVERSION_FAILED: "conversion failed",
            MappingErrorCode.UNSUPPORTED_CONVERSION: "unsupported mapconv target type",
        }
        return reasons[self]


def compose_path(segments: tuple[str, ...]) -> str:
    """Join path segments into a dotted/bracketed field path.

    Args:
        segments: Path segments, outermost first. Index and key segments are
            already bracketed (``"[0]"``, ``"[database]"``).

    Returns:
        The composed path, e.g. ``"items[0].name"``.
    """
    path = ""
    for segment in segments:
        if not path or segment.startswith("["):
            path += segment
        else:
            path += "." + segment
    return path


class MappingError(Exception):
    """Raised when a source record cannot be mapped into a destination record.

    Attributes:
        src_type: Name of the root source record type.
        dst_type: Name of the root destination record type.
        code: Reason category.
        reason: Human-readable reason, including any detail from the failure site.
    """

    def __init__(
        self,
        code: MappingErrorCode,
        reason: str | None = None,
        *,
        src_type: str = "",
        dst_type: str = "",
        field_path: str = "",
    ) -> None:
        self.code = code
        self.reason = reason if reason is not None else code.default_reason
        self.src_type = src_type
        self.dst_type = dst_type
        self._segments: tuple[str, ...] = (field_path,) if field_path else ()
        super().__init__(self.reason)

    @property
    def field_path(self) -> str:
        """Path from the mapping root to the failing field, element or key."""
        return compose_path(self._segments)

    def prepend_segment(self, segment: str) -> None:
        """Add an outer path segment while the error propagates.

        Only called on the failure path, so successful mappings never build
        path strings.

        Args:
            segment: Field name, or a bracketed index/key segment.
        """
        self._segments = (segment, *self._segments)

    def __str__(self) -> str:
        return (
            f"fieldmap: cannot map {self.src_type} → {self.dst_type} "
            f'at field "{self.field_path}": {self.reason}'
        )

    def __repr__(self) -> str:
        return (
            f"MappingError(code={self.code.name}, field_path={self.field_path!r}, "
            f"reason={self.reason!r})"
        )
