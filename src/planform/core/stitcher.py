"""Segment stitching: rebuilding closed loops from a segment soup.

After classification, a boolean operation is left with an unordered set of
directed edges that together trace one or more closed outlines. The
stitcher chains them back into polygons ("islands") by repeatedly taking
the segment whose start is nearest to the open end of the current loop.

Matching is done by distance rather than exact equality. Crossing points
are computed separately for each operand, so the two copies of a shared
vertex need not be bit-identical.
"""

import math

from planform.config import GeometryConfig, StitchConfig
from planform.core.geometry import clean_polygon, distance
from planform.domain import Point, Polygon, Segment
from planform.utils import BooleanLogger


class SegmentStitcher:
    """Chains directed segments into closed loops.

    Each loop starts from the earliest remaining segment and grows by
    nearest-start matching until its end returns to its start. Iteration is
    bounded by ``max_loops`` and ``max_chain_steps``, so any finite input
    terminates. Loops that trip a bound or never close are discarded.

    The stitcher keeps no state between calls and never modifies the
    segment list it is given.
    """

    def __init__(
        self,
        config: StitchConfig | None = None,
        geometry: GeometryConfig | None = None,
        logger: BooleanLogger | None = None,
    ) -> None:
        self.config = config or StitchConfig()
        self.geometry = geometry or GeometryConfig()
        self.logger = logger

    def stitch(self, segments: list[Segment]) -> list[Polygon]:
        """Rebuild closed loops from a set of directed segments.

        Args:
            segments: Directed edges in any order, possibly from several loops

        Returns:
            Cleaned islands with at least 3 points each, in the order their
            seed segments appeared
        """
        pool = _Worklist(segments)
        islands: list[Polygon] = []
        tolerance = self.config.join_tolerance
        loops = 0

        while pool.remaining and loops < self.config.max_loops:
            loops += 1
            current = pool.take(pool.first())
            ordered: list[Point] = [current.start]
            closed = False
            steps = 0

            while steps < self.config.max_chain_steps:
                index, gap = pool.nearest_start(current.end)

                if index is not None and gap <= tolerance:
                    ordered.append(current.end)
                    current = pool.take(index)
                    if distance(current.end, ordered[0]) <= tolerance:
                        ordered.append(current.end)
                        closed = True
                        break
                else:
                    # Nothing left to chain; the loop may still close on itself
                    if distance(current.end, ordered[0]) <= tolerance:
                        ordered.append(current.end)
                        closed = True
                    break
                steps += 1

            if not closed:
                reason = "chain limit" if steps >= self.config.max_chain_steps else "open loop"
                self._discard(reason, len(ordered))
                continue

            if len(ordered) <= 2:
                self._discard("too few points", len(ordered))
                continue

            island = clean_polygon(ordered, self.geometry.vertex_merge_tolerance)
            if len(island) < 3:
                self._discard("degenerate after cleaning", len(island))
                continue
            islands.append(island)

        if pool.remaining:
            self._discard("loop limit", pool.remaining)

        return islands

    def _discard(self, reason: str, count: int) -> None:
        if self.logger is not None:
            self.logger.log_loop_discarded(reason, count)


class _Worklist:
    """Segments still waiting to be chained.

    Removal only flags a slot, so the surviving segments keep their original
    relative order and nearest-start ties resolve to the earliest one.
    """

    def __init__(self, segments: list[Segment]) -> None:
        self._segments = list(segments)
        self._alive = [True] * len(self._segments)
        self.remaining = len(self._segments)

    def first(self) -> int:
        return self._alive.index(True)

    def take(self, index: int) -> Segment:
        self._alive[index] = False
        self.remaining -= 1
        return self._segments[index]

    def nearest_start(self, point: Point) -> tuple[int | None, float]:
        best_index = None
        best_distance = math.inf
        for i, segment in enumerate(self._segments):
            if not self._alive[i]:
                continue
            d = distance(point, segment.start)
            if d < best_distance:
                best_distance = d
                best_index = i
        return best_index, best_distance


def stitch_segments(segments: list[Segment], config: StitchConfig | None = None) -> list[Polygon]:
    """Rebuild closed loops from segments with a default stitcher."""
    return SegmentStitcher(config=config).stitch(segments)
