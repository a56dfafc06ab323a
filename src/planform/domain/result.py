"""Result types returned by the boolean operators.

Results are plain polygon data. The host application decides how to wrap
them into new entities.
"""

from dataclasses import dataclass, field
from typing import Any

from planform.domain.polygon import Polygon, polygon_to_dicts


@dataclass
class SubtractResult:
    """Outcome of subtracting one shape from another.

    Attributes:
        polygons: Islands left after the cut (zero, one or several)
        holes: Hole outlines shared by the resulting islands
        fallback: True when the operation failed and returned the subject as-is
    """

    polygons: list[Polygon]
    holes: list[Polygon] = field(default_factory=list)
    fallback: bool = False

    def is_empty(self) -> bool:
        """Check whether the subject was consumed entirely."""
        return len(self.polygons) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "polygons": [polygon_to_dicts(p) for p in self.polygons],
            "holes": [polygon_to_dicts(h) for h in self.holes],
            "fallback": self.fallback,
        }


@dataclass
class UnionResult:
    """Outcome of merging several shapes into one outline.

    Attributes:
        points: Merged outline (empty when fewer than two shapes were given)
        holes: Hole outlines of the merged shape
        fallback: True when the operation failed and returned the first shape
    """

    points: Polygon
    holes: list[Polygon] = field(default_factory=list)
    fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": polygon_to_dicts(self.points),
            "holes": [polygon_to_dicts(h) for h in self.holes],
            "fallback": self.fallback,
        }


@dataclass
class Fragment:
    """One piece of a base shape left over after several cuts.

    Attributes:
        points: Fragment outline
        holes: Hole outlines inside the fragment
    """

    points: Polygon
    holes: list[Polygon] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": polygon_to_dicts(self.points),
            "holes": [polygon_to_dicts(h) for h in self.holes],
        }
