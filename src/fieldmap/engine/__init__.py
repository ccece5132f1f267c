"""Mapping engine: recursive assignment, field resolution and entry points.

Architecture Note:
    engine/ holds the per-call machinery. Each top-level call builds its own
    MappingContext and shares nothing with other calls except the read-mostly
    metadata index in core/.
"""

from fieldmap.engine.assign import assign, assign_map, assign_record, assign_sequence
from fieldmap.engine.fields import map_fields, resolve_source_field
from fieldmap.engine.locations import FieldLocation, HolderLocation, Location
from fieldmap.engine.mapper import map_into, map_with_options, run_mapping
from fieldmap.engine.models import (
    DEFAULT_MAX_DEPTH,
    MapperConfig,
    MappingContext,
    Option,
    build_config,
    with_ignore_zero_source,
    with_max_depth,
    with_strict_mode,
    with_tag_name,
)

__all__ = [
    # Entry points
    "map_into",
    "map_with_options",
    "run_mapping",
    # Configuration
    "MapperConfig",
    "Option",
    "DEFAULT_MAX_DEPTH",
    "build_config",
    "with_tag_name",
    "with_ignore_zero_source",
    "with_strict_mode",
    "with_max_depth",
    "MappingContext",
    # Recursion
    "assign",
    "assign_record",
    "assign_sequence",
    "assign_map",
    "map_fields",
    "resolve_source_field",
    # Locations
    "Location",
    "FieldLocation",
    "HolderLocation",
]
