"""Configuration management for planform.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Vertex merging, intersection and classification tolerances
- StitchConfig: Loop reconstruction tolerance and iteration guards
- ShapeConfig: Entity-to-polygon conversion parameters
- LoggingConfig: Logging settings
- PlanformSettings: Main application settings
"""

from planform.config.settings import (
    GeometryConfig,
    LoggingConfig,
    PlanformSettings,
    ShapeConfig,
    StitchConfig,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "LoggingConfig",
    "PlanformSettings",
    "ShapeConfig",
    "StitchConfig",
    "get_default_settings",
]
