"""Configuration module using Pydantic Settings.

Provides environment-driven defaults for mapping calls.

Usage:
    from fieldmap.config import MapperSettings

    settings = MapperSettings(strict_mode=True)
    map_with_options(dst, src, *settings.to_options())
"""

from fieldmap.config.settings import MapperSettings

__all__ = [
    "MapperSettings",
]
