"""Domain models for planform.

This module contains the value types and shape entities the boolean engine
works on. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries for documents and diagnostics
- Independent of any host application's entity classes

Key classes:
- Point: A 2D point in the plan view
- Segment: A directed edge used while stitching
- LineEntity, RectangleEntity, CircleEntity, SphereEntity, PolygonEntity: Shapes
- SubtractResult, UnionResult, Fragment: Boolean operation results
"""

from planform.domain.entity import (
    CircleEntity,
    Entity,
    LineEntity,
    PolygonEntity,
    RectangleEntity,
    ShapeKind,
    SphereEntity,
    entity_from_dict,
)
from planform.domain.polygon import Point, Polygon, Segment, polygon_edges
from planform.domain.result import Fragment, SubtractResult, UnionResult

__all__: list[str] = [
    # Enums
    "ShapeKind",
    # Core types
    "Point",
    "Polygon",
    "Segment",
    "polygon_edges",
    # Entities
    "Entity",
    "LineEntity",
    "RectangleEntity",
    "CircleEntity",
    "SphereEntity",
    "PolygonEntity",
    "entity_from_dict",
    # Results
    "SubtractResult",
    "UnionResult",
    "Fragment",
]
