"""Shape entities consumed by the boolean engine.

Entities are the caller-side descriptions of drawn shapes. Each kind knows
how to produce its own boundary polygon, so converting a shape never needs
to branch on its kind:
- LineEntity: A wall of fixed thickness drawn along a line
- RectangleEntity: An axis-aligned rectangle anchored at its top-left corner
- CircleEntity / SphereEntity: A circle tessellated into a fixed number of points
- PolygonEntity: An explicit outline with optional holes

Entities are immutable. Converting one always returns fresh lists, so the
engine can never alter the caller's data.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from planform.config import ShapeConfig
from planform.domain.polygon import (
    Point,
    Polygon,
    polygon_from_dicts,
    polygon_to_dicts,
)
from planform.exceptions import EntityFormatError


class ShapeKind(str, Enum):
    """Kinds of shape the engine can turn into polygons."""

    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    SPHERE = "sphere"
    POLYGON = "polygon"


class Entity:
    """Base class for shape entities.

    Subclasses implement ``to_points`` and the dictionary round trip for
    their own fields.
    """

    kind: ClassVar[ShapeKind]

    def to_points(self, config: ShapeConfig | None = None) -> Polygon:
        """Return the shape boundary as a closed point sequence.

        Args:
            config: Conversion parameters (defaults when None)

        Returns:
            Boundary points, or an empty list if the shape has no area
        """
        raise NotImplementedError

    def hole_outlines(self) -> list[Polygon]:
        """Return copies of the holes already cut into this shape."""
        return []

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary tagged with the shape kind."""
        raise NotImplementedError


@dataclass(frozen=True)
class LineEntity(Entity):
    """A line drawn as a wall.

    Attributes:
        start: First endpoint
        end: Second endpoint
    """

    kind: ClassVar[ShapeKind] = ShapeKind.LINE

    start: Point
    end: Point

    def to_points(self, config: ShapeConfig | None = None) -> Polygon:
        """Expand the line into a quadrilateral wall.

        The wall extends ``wall_half_thickness`` to each side, measured along
        the unit normal (-dy, dx) / length. Zero-length lines have no area.
        """
        config = config or ShapeConfig()
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        length = math.hypot(dx, dy)
        if length == 0:
            return []

        nx = -dy / length * config.wall_half_thickness
        ny = dx / length * config.wall_half_thickness

        return [
            Point(self.start.x + nx, self.start.y + ny),
            Point(self.end.x + nx, self.end.y + ny),
            Point(self.end.x - nx, self.end.y - ny),
            Point(self.start.x - nx, self.start.y - ny),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }


@dataclass(frozen=True)
class RectangleEntity(Entity):
    """An axis-aligned rectangle.

    Attributes:
        start: Top-left corner
        width: Extent along x
        height: Extent along y (downward)
    """

    kind: ClassVar[ShapeKind] = ShapeKind.RECTANGLE

    start: Point
    width: float
    height: float

    def to_points(self, config: ShapeConfig | None = None) -> Polygon:
        """Return the four corners clockwise from the top-left."""
        x, y = self.start.x, self.start.y
        return [
            Point(x, y),
            Point(x + self.width, y),
            Point(x + self.width, y + self.height),
            Point(x, y + self.height),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "start": self.start.to_dict(),
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class CircleEntity(Entity):
    """A circle in the plan view.

    Attributes:
        center: Circle center
        radius: Circle radius
    """

    kind: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    center: Point
    radius: float

    def to_points(self, config: ShapeConfig | None = None) -> Polygon:
        """Tessellate the circle into evenly spaced points.

        Point i sits at angle i / n * 2pi, with n = ``circle_segments``.
        """
        config = config or ShapeConfig()
        segments = config.circle_segments
        points = []
        for i in range(segments):
            theta = (i / segments) * math.pi * 2
            points.append(
                Point(
                    self.center.x + math.cos(theta) * self.radius,
                    self.center.y + math.sin(theta) * self.radius,
                )
            )
        return points

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "center": self.center.to_dict(),
            "radius": self.radius,
        }


@dataclass(frozen=True)
class SphereEntity(CircleEntity):
    """A sphere, seen from above as its equator circle."""

    kind: ClassVar[ShapeKind] = ShapeKind.SPHERE


@dataclass(frozen=True)
class PolygonEntity(Entity):
    """An explicit polygon outline with optional holes.

    Attributes:
        points: Outline vertices
        holes: Hole outlines inside the polygon
    """

    kind: ClassVar[ShapeKind] = ShapeKind.POLYGON

    points: Polygon
    holes: list[Polygon] = field(default_factory=list)

    def to_points(self, config: ShapeConfig | None = None) -> Polygon:
        """Return a copy of the stored outline."""
        return list(self.points)

    def hole_outlines(self) -> list[Polygon]:
        return [list(hole) for hole in self.holes]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "points": polygon_to_dicts(self.points),
            "holes": [polygon_to_dicts(hole) for hole in self.holes],
        }


def _float_field(data: dict[str, Any], key: str) -> float:
    try:
        return float(data[key])
    except (KeyError, TypeError, ValueError) as e:
        raise EntityFormatError(f"bad or missing '{key}'") from e


def _point_field(data: dict[str, Any], key: str) -> Point:
    if key not in data:
        raise EntityFormatError(f"missing '{key}'")
    return Point.from_dict(data[key])


def entity_from_dict(data: dict[str, Any]) -> Entity:
    """Deserialize an entity from its tagged dictionary form.

    Args:
        data: Dictionary with a "type" tag and the fields of that shape kind

    Returns:
        The matching entity instance

    Raises:
        EntityFormatError: If the tag is unknown or a field is malformed
    """
    if not isinstance(data, dict):
        raise EntityFormatError(f"expected an object, got {type(data).__name__}")

    try:
        kind = ShapeKind(data.get("type"))
    except ValueError:
        raise EntityFormatError(f"unsupported shape type {data.get('type')!r}") from None

    if kind is ShapeKind.LINE:
        return LineEntity(start=_point_field(data, "start"), end=_point_field(data, "end"))
    if kind is ShapeKind.RECTANGLE:
        return RectangleEntity(
            start=_point_field(data, "start"),
            width=_float_field(data, "width"),
            height=_float_field(data, "height"),
        )
    if kind in (ShapeKind.CIRCLE, ShapeKind.SPHERE):
        cls = SphereEntity if kind is ShapeKind.SPHERE else CircleEntity
        return cls(center=_point_field(data, "center"), radius=_float_field(data, "radius"))

    if "points" not in data:
        raise EntityFormatError("missing 'points'")
    holes = data.get("holes") or []
    if not isinstance(holes, list):
        raise EntityFormatError("'holes' must be a list of point lists")
    return PolygonEntity(
        points=polygon_from_dicts(data["points"]),
        holes=[polygon_from_dicts(hole) for hole in holes],
    )
