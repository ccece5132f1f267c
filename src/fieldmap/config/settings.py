"""Configuration settings using Pydantic Settings.

Loads mapper defaults from FIELDMAP_* environment variables or a .env file,
for services that want the mapping policy set by deployment rather than code.

Usage:
    from fieldmap.config import MapperSettings

    # Load from environment variables (FIELDMAP_*)
    settings = MapperSettings()
    map_with_options(dst, src, *settings.to_options())

    # Or override with explicit values
    settings = MapperSettings(tag_name="json", max_depth=16)
"""

from __future__ import annotations

from pydantic import Field

from fieldmap.core.metadata import DEFAULT_TAG_NAME
from fieldmap.engine.models import (
    DEFAULT_MAX_DEPTH,
    MapperConfig,
    Option,
    build_config,
    with_ignore_zero_source,
    with_max_depth,
    with_strict_mode,
    with_tag_name,
)

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install fieldmap[config]"
    ) from e


class MapperSettings(BaseSettings):  # type: ignore[misc]
    """Mapper defaults loaded from the environment.

    Attributes:
        tag_name: Annotation key read for field aliases.
        ignore_zero_source: Skip zero-valued source fields.
        strict_mode: Fail on destination fields with no source field.
        max_depth: Nesting budget (must be positive).

    Environment Variables:
        FIELDMAP_TAG_NAME
        FIELDMAP_IGNORE_ZERO_SOURCE
        FIELDMAP_STRICT_MODE
        FIELDMAP_MAX_DEPTH
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tag_name: str = DEFAULT_TAG_NAME
    ignore_zero_source: bool = False
    strict_mode: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)

    def to_options(self) -> list[Option]:
        """Translate the settings into mapping options.

        Only settings that differ from the defaults produce an option.

        Returns:
            Options to pass to ``map_with_options``.
        """
        options: list[Option] = []
        if self.tag_name != DEFAULT_TAG_NAME:
            options.append(with_tag_name(self.tag_name))
        if self.ignore_zero_source:
            options.append(with_ignore_zero_source())
        if self.strict_mode:
            options.append(with_strict_mode())
        if self.max_depth != DEFAULT_MAX_DEPTH:
            options.append(with_max_depth(self.max_depth))
        return options

    def to_config(self) -> MapperConfig:
        """Build the equivalent immutable mapper configuration."""
        return build_config(*self.to_options())
