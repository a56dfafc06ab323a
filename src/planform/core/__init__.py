"""Core algorithms for planform.

This module contains the polygon boolean engine:

- Geometry operations (sanitizing, signed area, point-in-polygon, intersections)
- Intersection injection between two polygon boundaries
- Segment stitching into closed islands
- Boolean operators (subtract, union, multi-cutter and multi-base subtract)

All services are designed to be:
- Stateless (no state survives between calls)
- Pure (inputs are never mutated)
- Safe (boolean operators report failures instead of raising)

Key functions:
- clean_polygon: Remove near-duplicate vertices
- signed_area: Calculate polygon area
- normalize_winding: Orient a polygon to non-negative area
- point_in_polygon: Test if point is strictly inside polygon
- segment_intersection: Find the crossing point of two segments
- inject_intersections: Insert crossing points into a boundary
- subtract, union, subtract_many, subtract_bases: Boolean operators with a fresh engine

Key classes:
- SegmentStitcher: Rebuilds closed loops from directed segments
- BooleanEngine: Configured boolean operators with an injected logger
"""

from planform.core.boolean import (
    BooleanEngine,
    subtract,
    subtract_bases,
    subtract_many,
    union,
)
from planform.core.geometry import (
    all_points_inside,
    bounding_box,
    boxes_overlap,
    clean_polygon,
    distance,
    normalize_winding,
    point_in_polygon,
    segment_intersection,
    signed_area,
)
from planform.core.injector import inject_intersections
from planform.core.stitcher import SegmentStitcher, stitch_segments

__all__ = [
    # Engine classes
    "BooleanEngine",
    "SegmentStitcher",
    # Geometry functions
    "all_points_inside",
    "bounding_box",
    "boxes_overlap",
    "clean_polygon",
    "distance",
    "inject_intersections",
    "normalize_winding",
    "point_in_polygon",
    "segment_intersection",
    "signed_area",
    "stitch_segments",
    # Boolean operators
    "subtract",
    "subtract_bases",
    "subtract_many",
    "union",
]
