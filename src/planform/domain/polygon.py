"""Core geometric types for polygon representation.

This module defines the value types shared by every stage of the engine:
- Point: A 2D point in the plan view
- Polygon: An ordered, implicitly closed list of points
- Segment: A directed edge used while stitching loops
"""

from dataclasses import dataclass
from typing import Any

from planform.exceptions import EntityFormatError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in the 2D plan view.

    Immutable and hashable, so points can be shared freely between the
    working buffers of a boolean operation and its result.

    Attributes:
        x: X coordinate in plan units
        y: Y coordinate in plan units (grows downward on screen)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance

        Raises:
            EntityFormatError: If a coordinate is missing or not numeric
        """
        try:
            return cls(x=float(data["x"]), y=float(data["y"]))
        except (KeyError, TypeError, ValueError) as e:
            raise EntityFormatError(f"bad point {data!r}") from e


# Closed loop; the edge from the last point back to the first is implicit.
Polygon = list[Point]


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed edge between two points.

    Segments only exist as scratch state while loops are rebuilt from a
    classified edge soup.

    Attributes:
        start: Point the segment leaves from
        end: Point the segment arrives at
    """

    start: Point
    end: Point

    def reversed(self) -> "Segment":
        """Return the same edge traversed in the opposite direction."""
        return Segment(self.end, self.start)

    def midpoint(self) -> Point:
        """Return the point halfway along the segment."""
        return Point((self.start.x + self.end.x) / 2, (self.start.y + self.end.y) / 2)


def polygon_edges(points: Polygon) -> list[Segment]:
    """List the edges of a closed polygon, including the closing edge.

    Args:
        points: Polygon vertices in order

    Returns:
        One segment per vertex, from each vertex to its successor
    """
    n = len(points)
    return [Segment(points[i], points[(i + 1) % n]) for i in range(n)]


def polygon_to_dicts(points: Polygon) -> list[dict[str, Any]]:
    """Serialize a polygon to a list of point dictionaries."""
    return [p.to_dict() for p in points]


def polygon_from_dicts(data: list[dict[str, Any]]) -> Polygon:
    """Deserialize a polygon from a list of point dictionaries.

    Raises:
        EntityFormatError: If the data is not a list of points
    """
    if not isinstance(data, list):
        raise EntityFormatError(f"expected a list of points, got {type(data).__name__}")
    return [Point.from_dict(p) for p in data]
