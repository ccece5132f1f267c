"""Engine models: mapper configuration, options and per-call context.

Usage:
    config = build_config(with_strict_mode(), with_max_depth(10))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from fieldmap.core.errors import MappingError, MappingErrorCode
from fieldmap.core.metadata import DEFAULT_TAG_NAME

DEFAULT_MAX_DEPTH = 64
"""Default nesting budget for a mapping call."""


@dataclass(frozen=True, slots=True)
class MapperConfig:
    """Configuration for one mapping call.

    Built by applying options in order over the defaults. Never mutated.
    """

    tag_name: str = DEFAULT_TAG_NAME
    """Annotation key read for field aliases. Empty disables alias lookup."""

    ignore_zero_source: bool = False
    """Skip source fields holding their zero value (patch semantics)."""

    strict_mode: bool = False
    """Fail when a destination field has no source counterpart."""

    max_depth: int = DEFAULT_MAX_DEPTH
    """Nesting budget for record, sequence, map and optional recursion."""

    def __post_init__(self) -> None:
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")


type Option = Callable[[MapperConfig], MapperConfig]
"""Signature: (config) -> updated config"""


def with_tag_name(tag: str) -> Option:
    """Read field aliases from ``tag`` instead of ``"map"``.

    Args:
        tag: Annotation key, e.g. ``"json"``. Empty disables aliases.

    Returns:
        Option setting the tag name.
    """
    return lambda config: replace(config, tag_name=tag)


def with_ignore_zero_source() -> Option:
    """Skip source fields holding zero values, leaving the destination untouched.

    Zero values are None, False, numeric zero, empty text/bytes and records
    whose fields are all zero. Empty (non-None) lists and dicts are copied.

    Returns:
        Option enabling patch semantics.
    """
    return lambda config: replace(config, ignore_zero_source=True)


def with_strict_mode() -> Option:
    """Fail with NO_MATCHING_FIELD when a destination field has no source field.

    Returns:
        Option enabling strict mode.
    """
    return lambda config: replace(config, strict_mode=True)


def with_max_depth(depth: int) -> Option:
    """Set the nesting budget. Non-positive values are ignored.

    Args:
        depth: Maximum nesting depth.

    Returns:
        Option setting the depth, or keeping the current one for depth <= 0.
    """

    def apply(config: MapperConfig) -> MapperConfig:
        if depth <= 0:
            return config
        return replace(config, max_depth=depth)

    return apply


def build_config(*options: Option) -> MapperConfig:
    """Apply options in order over the default configuration.

    Args:
        *options: Option callables.

    Returns:
        The resulting immutable configuration.
    """
    config = MapperConfig()
    for option in options:
        config = option(config)
    return config


@dataclass(frozen=True, slots=True)
class MappingContext:
    """State shared by every frame of one mapping call."""

    config: MapperConfig
    src_type: str
    dst_type: str

    def error(
        self,
        code: MappingErrorCode,
        reason: str | None = None,
        *,
        field_path: str = "",
    ) -> MappingError:
        """Build a MappingError stamped with the root type names.

        Args:
            code: Failure category.
            reason: Reason text. Defaults to the code's fixed reason.
            field_path: Initial path segment, if the failure site owns one.

        Returns:
            The error, ready to raise.
        """
        return MappingError(
            code,
            reason,
            src_type=self.src_type,
            dst_type=self.dst_type,
            field_path=field_path,
        )
