"""Intersection injection for two-polygon boolean operations.

Before edges can be classified as inside or outside the other operand,
every place where the two boundaries cross must be a vertex of both. This
module inserts those crossing points into a polygon's vertex list, in order
along each edge.
"""

from planform.config import GeometryConfig
from planform.core.geometry import distance, points_equal, segment_intersection
from planform.domain import Point, Polygon


def inject_intersections(
    subject: Polygon,
    clip: Polygon,
    config: GeometryConfig | None = None,
) -> Polygon:
    """Insert every crossing with ``clip`` into the edges of ``subject``.

    Each subject edge contributes its start vertex followed by its crossings
    with any clip edge, sorted by distance from the start vertex. Crossings
    that coincide with either endpoint of the subject edge are skipped.

    Only the subject gains vertices. Call it a second time with the operands
    swapped to prepare the clip polygon as well.

    Args:
        subject: Polygon whose edges receive the new vertices
        clip: Polygon whose edges are crossed
        config: Geometry tolerances (defaults when None)

    Returns:
        New vertex list for the subject. It should be passed through
        clean_polygon before use.
    """
    config = config or GeometryConfig()
    injected: Polygon = []
    n = len(subject)
    m = len(clip)

    for i in range(n):
        s1 = subject[i]
        s2 = subject[(i + 1) % n]
        injected.append(s1)

        crossings: list[tuple[float, Point]] = []
        for j in range(m):
            hit = segment_intersection(
                s1,
                s2,
                clip[j],
                clip[(j + 1) % m],
                epsilon=config.intersection_epsilon,
                parallel_epsilon=config.parallel_epsilon,
            )
            if hit is not None:
                crossings.append((distance(s1, hit), hit))

        crossings.sort(key=lambda c: c[0])
        for _, hit in crossings:
            if points_equal(hit, s1, config.point_equal_tolerance):
                continue
            if points_equal(hit, s2, config.point_equal_tolerance):
                continue
            injected.append(hit)

    return injected
