"""
Utility Functions Module

This module provides common utilities used across the beacon registration project.
- Exact integer geometry primitives
- Logging setup
- Typed configuration loading
- Export of results to LAS/LAZ and JSON
"""

from .logging import setup_logger, set_package_log_level
from .geometry import (
    Point,
    add,
    subtract,
    squared_distance,
    manhattan_distance,
    points_to_array,
    array_to_points,
)
from .config import AppConfig, load_config
from .export import export_beacons_to_laz, export_summary_json

__all__ = [
    "setup_logger",
    "set_package_log_level",
    "Point",
    "add",
    "subtract",
    "squared_distance",
    "manhattan_distance",
    "points_to_array",
    "array_to_points",
    "AppConfig",
    "load_config",
    "export_beacons_to_laz",
    "export_summary_json",
]
