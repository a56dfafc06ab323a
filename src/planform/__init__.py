"""Planform - 2D polygon boolean engine for plan-view modeling.

Planform turns modeling entities (walls drawn as lines, rectangles, circles,
spheres and polygons with holes) into closed polygon outlines and combines
them with subtraction and union. Results are plain polygon data (an outline
plus hole outlines) that the host application wraps into new entities.

Example:
    >>> from planform.core import subtract
    >>> from planform.domain import Point, RectangleEntity
    >>> base = RectangleEntity(start=Point(0, 0), width=100, height=100)
    >>> cutter = RectangleEntity(start=Point(45, 45), width=10, height=10)
    >>> result = subtract(base, cutter)
    >>> len(result.polygons), len(result.holes)
    (1, 1)
"""

__version__ = "0.1.0"
__author__ = "Planform Contributors"

__all__ = ["__author__", "__version__"]
