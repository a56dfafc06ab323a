"""Configuration settings for Planform."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Tolerances for vertex merging, intersection and classification.

    All values are in plan units. The defaults are tuned for drawings in the
    tens-to-thousands of units range.
    """

    vertex_merge_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Distance under which consecutive vertices are merged",
    )
    point_equal_tolerance: float = Field(
        default=1e-4,
        gt=0.0,
        le=0.1,
        description="Distance under which an injected point equals an edge endpoint",
    )
    intersection_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        lt=0.5,
        description="Parametric margin excluding intersections near segment endpoints",
    )
    parallel_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Determinant magnitude below which segments count as parallel",
    )
    boundary_tolerance: float = Field(
        default=1e-9,
        ge=0.0,
        le=0.1,
        description="Distance from an edge under which a point counts as on the boundary",
    )


class StitchConfig(BaseModel):
    """Configuration for rebuilding closed loops from segments."""

    join_tolerance: float = Field(
        default=5.0,
        gt=0.0,
        le=100.0,
        description="Maximum gap between a loop end and the next segment start",
    )
    max_loops: int = Field(
        default=5000,
        ge=1,
        le=1_000_000,
        description="Maximum loop extractions per stitching pass",
    )
    max_chain_steps: int = Field(
        default=2000,
        ge=1,
        le=1_000_000,
        description="Maximum chaining steps while building one loop",
    )


class ShapeConfig(BaseModel):
    """Configuration for converting entities to polygons."""

    wall_half_thickness: float = Field(
        default=2.0,
        gt=0.0,
        le=1000.0,
        description="Half thickness of the wall quadrilateral built from a line",
    )
    circle_segments: int = Field(
        default=64,
        ge=8,
        le=4096,
        description="Number of vertices approximating a circle or sphere",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )
    max_diagnostic_entries: int = Field(
        default=1000,
        ge=1,
        le=100_000,
        description="Entries kept by the in-memory diagnostics log",
    )


class PlanformSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    stitch: StitchConfig = Field(default_factory=StitchConfig)
    shapes: ShapeConfig = Field(default_factory=ShapeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PlanformSettings:
    """Get default application settings."""
    return PlanformSettings()
