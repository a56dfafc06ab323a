"""Geometric primitives for polygon boolean operations.

This module provides core mathematical utilities for:
- Polygon sanitizing (near-duplicate vertex removal)
- Signed area calculation and winding normalization
- Point-in-polygon testing (ray casting algorithm)
- Line segment intersection
- Bounding boxes and containment checks

All functions are pure and stateless. None of them mutate their inputs.
"""

import math

from planform.domain import Point, Polygon
from planform.exceptions import NonFiniteGeometryError

BBox = tuple[float, float, float, float]


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def points_equal(p1: Point, p2: Point, tolerance: float = 1e-4) -> bool:
    """Check whether two points are closer than ``tolerance``."""
    return distance(p1, p2) < tolerance


def clean_polygon(points: Polygon, tolerance: float = 0.01) -> Polygon:
    """Remove near-duplicate vertices from a closed point sequence.

    Each point closer than ``tolerance`` to the last kept point is dropped,
    so a run of near-duplicates collapses onto its first point. Trailing
    points that coincide with the first point (the implicit closure) are
    dropped afterwards. Sequences shorter than 3 points are returned
    unchanged.

    Because every kept point is compared with its kept predecessor, cleaning
    an already cleaned polygon returns it unchanged.

    Args:
        points: Polygon vertices in order
        tolerance: Merge distance

    Returns:
        New list of cleaned vertices

    Examples:
        >>> pts = [Point(0, 0), Point(0.001, 0), Point(10, 0), Point(10, 10), Point(0, 0)]
        >>> len(clean_polygon(pts))
        3
    """
    if len(points) < 3:
        return list(points)

    cleaned: Polygon = []
    for p in points:
        if cleaned and points_equal(p, cleaned[-1], tolerance):
            continue
        cleaned.append(p)

    while len(cleaned) > 1 and points_equal(cleaned[-1], cleaned[0], tolerance):
        cleaned.pop()

    return cleaned


def signed_area(points: Polygon) -> float:
    """Calculate signed area of a polygon.

    Sums (x[j] - x[i]) * (y[j] + y[i]) / 2 over consecutive vertex pairs,
    wrapping around. In the plan view, where y grows downward, loops that
    run counter-clockwise on screen have positive area.

    Args:
        points: Polygon vertices in order

    Returns:
        Signed area in square units. Returns 0.0 for fewer than 3 points.

    Examples:
        >>> signed_area([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])
        1.0
        >>> signed_area([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += (points[j].x - points[i].x) * (points[j].y + points[i].y)

    return area / 2.0


def normalize_winding(points: Polygon) -> Polygon:
    """Return the polygon oriented to non-negative signed area.

    Args:
        points: Polygon vertices in order

    Returns:
        A reversed copy when the signed area is negative, otherwise a copy

    Raises:
        NonFiniteGeometryError: If the coordinates produce a non-finite area
    """
    area = signed_area(points)
    if not math.isfinite(area):
        raise NonFiniteGeometryError("signed area")
    if area < 0:
        return list(reversed(points))
    return list(points)


def distance_to_segment(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to the closest point of a line segment.

    Projects the point onto the segment's line and clamps to its endpoints.
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        return distance(point, seg_start)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    return math.hypot(point.x - (seg_start.x + t * dx), point.y - (seg_start.y + t * dy))


def on_boundary(point: Point, polygon: Polygon, tolerance: float = 1e-9) -> bool:
    """Check whether a point lies on (or within ``tolerance`` of) a polygon edge."""
    n = len(polygon)
    for i in range(n):
        if distance_to_segment(point, polygon[i], polygon[(i + 1) % n]) <= tolerance:
            return True
    return False


def point_in_polygon(point: Point, polygon: Polygon, boundary_tolerance: float = 1e-9) -> bool:
    """Determine if a point is strictly inside a polygon.

    Casts a horizontal ray from the point to the right and counts crossings
    with polygon edges. Odd number of crossings = inside, even = outside.
    Points on the boundary count as outside.

    Args:
        point: The point to test
        polygon: Polygon vertices in order
        boundary_tolerance: Distance from an edge treated as on the boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        True
        >>> point_in_polygon(Point(2, 1), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    if on_boundary(point, polygon, boundary_tolerance):
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Edge (j, i) straddles the ray's y and crosses to the right of x
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def all_points_inside(inner: Polygon, outer: Polygon, boundary_tolerance: float = 1e-9) -> bool:
    """Check whether every vertex of ``inner`` lies strictly inside ``outer``."""
    if not inner:
        return False
    return all(point_in_polygon(p, outer, boundary_tolerance) for p in inner)


def segment_intersection(
    p1: Point,
    p2: Point,
    p3: Point,
    p4: Point,
    epsilon: float = 1e-4,
    parallel_epsilon: float = 1e-9,
) -> Point | None:
    """Find the crossing point of two line segments.

    Uses the parametric form p1 + ua * (p2 - p1) = p3 + ub * (p4 - p3).
    A crossing is reported only when both ua and ub fall strictly inside
    (epsilon, 1 - epsilon), so segments that merely touch at or near an
    endpoint do not intersect.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2
        epsilon: Parametric margin at both ends of each segment
        parallel_epsilon: Determinant magnitude treated as parallel

    Returns:
        Point at intersection if segments cross, None otherwise

    Examples:
        >>> segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        Point(x=1.0, y=1.0)
    """
    denom = (p4.y - p3.y) * (p2.x - p1.x) - (p4.x - p3.x) * (p2.y - p1.y)

    # Parallel or coincident
    if abs(denom) < parallel_epsilon:
        return None

    ua = ((p4.x - p3.x) * (p1.y - p3.y) - (p4.y - p3.y) * (p1.x - p3.x)) / denom
    ub = ((p2.x - p1.x) * (p1.y - p3.y) - (p2.y - p1.y) * (p1.x - p3.x)) / denom

    if epsilon < ua < 1 - epsilon and epsilon < ub < 1 - epsilon:
        return Point(p1.x + ua * (p2.x - p1.x), p1.y + ua * (p2.y - p1.y))

    return None


def bounding_box(points: Polygon) -> BBox:
    """Calculate the axis-aligned bounding box of a point sequence.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y), all zero for an empty sequence
    """
    if not points:
        return (0.0, 0.0, 0.0, 0.0)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def boxes_overlap(a: BBox, b: BBox) -> bool:
    """Check whether two bounding boxes overlap. Touching boxes overlap."""
    return not (b[0] > a[2] or b[2] < a[0] or b[1] > a[3] or b[3] < a[1])
