"""Boolean operators: subtraction and union of shape entities.

This module orchestrates the full pipeline for two-polygon operations:

1. Convert each entity to its boundary, sanitize it, normalize its winding
2. Resolve trivial cases (degenerate operands, disjoint bounds, containment)
3. Inject crossing points into both boundaries
4. Keep the edges that belong to the result, judged by their midpoints
5. Stitch the kept edges back into closed islands

The operators never raise. A failure anywhere in the pipeline is reported
through the injected BooleanLogger and turned into a fallback result built
from the unmodified input.
"""

import time
import traceback
from collections.abc import Sequence

from planform.config import PlanformSettings
from planform.core.geometry import (
    all_points_inside,
    bounding_box,
    boxes_overlap,
    clean_polygon,
    normalize_winding,
    point_in_polygon,
)
from planform.core.injector import inject_intersections
from planform.core.stitcher import SegmentStitcher
from planform.domain import (
    Entity,
    Fragment,
    Point,
    Polygon,
    PolygonEntity,
    Segment,
    SubtractResult,
    UnionResult,
    polygon_edges,
)
from planform.utils import BooleanLogger


class BooleanEngine:
    """Computes subtraction and union of shape entities.

    The engine holds only configuration and a reporting channel. Every call
    builds its own working buffers and returns freshly allocated polygons,
    so identical inputs always produce identical outputs.

    Example:
        engine = BooleanEngine(logger=BooleanLogger(diagnostics=DiagnosticsLog()))
        result = engine.subtract(wall, doorway)
        for island in result.polygons:
            ...
    """

    def __init__(
        self,
        settings: PlanformSettings | None = None,
        logger: BooleanLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Tolerances and conversion parameters (defaults when None)
            logger: Reporting channel for progress and absorbed failures
        """
        self.settings = settings or PlanformSettings()
        self.logger = logger or BooleanLogger()
        self.stitcher = SegmentStitcher(
            config=self.settings.stitch,
            geometry=self.settings.geometry,
            logger=self.logger,
        )

    def subtract(self, subject: Entity, clip: Entity) -> SubtractResult:
        """Cut ``clip`` out of ``subject``.

        Args:
            subject: Shape to cut from
            clip: Shape removed from the subject

        Returns:
            Islands left after the cut and the holes they carry. On failure,
            the subject's unmodified boundary as a single island with no
            holes and ``fallback`` set.
        """
        start = time.time()
        self.logger.log_operation_start("subtract", [subject.kind.value, clip.kind.value])

        try:
            result = self._subtract(subject, clip)
        except Exception as e:
            self.logger.log_failure("subtract", e, traceback.format_exc())
            boundary = self._raw_boundary(subject)
            return SubtractResult(
                polygons=[boundary] if boundary else [],
                holes=[],
                fallback=True,
            )

        self.logger.log_result(
            "subtract",
            islands=len(result.polygons),
            holes=len(result.holes),
            duration_ms=(time.time() - start) * 1000,
        )
        return result

    def _subtract(self, subject: Entity, clip: Entity) -> SubtractResult:
        subject_poly = self._prepare(subject)
        clip_poly = self._prepare(clip)

        if len(subject_poly) < 3 or len(clip_poly) < 3:
            self.logger.log_shortcut("subtract", "degenerate operand")
            return SubtractResult(polygons=[subject_poly], holes=[])

        if not boxes_overlap(bounding_box(subject_poly), bounding_box(clip_poly)):
            self.logger.log_shortcut("subtract", "disjoint bounds")
            return SubtractResult(polygons=[subject_poly], holes=subject.hole_outlines())

        if all_points_inside(clip_poly, subject_poly, self._boundary_tolerance):
            self.logger.log_shortcut("subtract", "clip inside subject")
            return SubtractResult(
                polygons=[subject_poly],
                holes=subject.hole_outlines() + [clip_poly],
            )

        if all_points_inside(subject_poly, clip_poly, self._boundary_tolerance):
            self.logger.log_shortcut("subtract", "subject inside clip")
            return SubtractResult(polygons=[], holes=[])

        subject_full, clip_full = self._inject_both(subject_poly, clip_poly)

        # Subject edges outside the clip, then clip edges inside the subject
        # reversed so they run along the cut boundary.
        segments = self._edges_by_midpoint(subject_full, clip_poly, keep_inside=False)
        segments += [
            edge.reversed()
            for edge in self._edges_by_midpoint(clip_full, subject_poly, keep_inside=True)
        ]

        islands = self.stitcher.stitch(segments)
        return SubtractResult(polygons=islands, holes=subject.hole_outlines())

    def union(self, entities: Sequence[Entity]) -> UnionResult:
        """Merge several shapes into one outline, folding from the left.

        Args:
            entities: Shapes to merge; at least two are required

        Returns:
            The merged outline and its holes. Empty when fewer than two
            shapes are given. On failure, the first shape's unmodified
            boundary with no holes and ``fallback`` set.
        """
        if len(entities) < 2:
            return UnionResult(points=[], holes=[])

        start = time.time()
        self.logger.log_operation_start("union", [e.kind.value for e in entities])

        try:
            result = self._union(entities)
        except Exception as e:
            self.logger.log_failure("union", e, traceback.format_exc())
            return UnionResult(
                points=self._raw_boundary(entities[0]),
                holes=[],
                fallback=True,
            )

        self.logger.log_result(
            "union",
            islands=1 if result.points else 0,
            holes=len(result.holes),
            duration_ms=(time.time() - start) * 1000,
        )
        return result

    def _union(self, entities: Sequence[Entity]) -> UnionResult:
        current = self._clean(entities[0])
        holes = entities[0].hole_outlines()

        for entity in entities[1:]:
            other = self._clean(entity)
            if len(other) < 3:
                self.logger.log_shortcut("union", f"skipped degenerate {entity.kind.value}")
                continue

            if len(current) < 3:
                current = normalize_winding(other)
                holes = entity.hole_outlines()
                continue

            current = normalize_winding(current)
            other = normalize_winding(other)
            current_full, other_full = self._inject_both(current, other)

            segments = self._edges_by_midpoint(current_full, other, keep_inside=False)
            segments += self._edges_by_midpoint(other_full, current, keep_inside=False)

            if not segments:
                if all_points_inside(current, other, self._boundary_tolerance):
                    self.logger.log_shortcut("union", "accumulated shape inside operand")
                    current = other
                    holes = entity.hole_outlines()
                continue

            # Holes of intermediate results are not recomputed; only the
            # first island is carried forward.
            islands = self.stitcher.stitch(segments)
            if islands:
                current = islands[0]

        return UnionResult(points=current, holes=holes)

    def subtract_many(self, base: Entity, cutters: Sequence[Entity]) -> list[Fragment]:
        """Cut every cutter out of a base shape.

        Each cutter is subtracted from every fragment produced so far; each
        island of each subtraction becomes a new fragment carrying that
        subtraction's holes.

        Args:
            base: Shape to cut from
            cutters: Shapes to remove, applied in order

        Returns:
            Fragments left after all cuts (one fragment when there are no cutters)
        """
        fragments = [Fragment(points=self._raw_boundary(base), holes=base.hole_outlines())]

        for cutter in cutters:
            next_fragments: list[Fragment] = []
            for fragment in fragments:
                piece = PolygonEntity(points=fragment.points, holes=fragment.holes)
                result = self.subtract(piece, cutter)
                for island in result.polygons:
                    next_fragments.append(
                        Fragment(points=island, holes=[list(h) for h in result.holes])
                    )
            fragments = next_fragments

        return fragments

    def subtract_bases(
        self,
        bases: Sequence[Entity],
        cutters: Sequence[Entity],
    ) -> list[list[Fragment]]:
        """Cut every cutter out of each of several base shapes.

        Args:
            bases: Shapes to cut from, processed independently
            cutters: Shapes removed from every base, applied in order

        Returns:
            One fragment list per base, in the order of ``bases``
        """
        return [self.subtract_many(base, cutters) for base in bases]

    @property
    def _boundary_tolerance(self) -> float:
        return self.settings.geometry.boundary_tolerance

    def _clean(self, entity: Entity) -> Polygon:
        points = entity.to_points(self.settings.shapes)
        return clean_polygon(points, self.settings.geometry.vertex_merge_tolerance)

    def _prepare(self, entity: Entity) -> Polygon:
        return normalize_winding(self._clean(entity))

    def _inject_both(self, a: Polygon, b: Polygon) -> tuple[Polygon, Polygon]:
        tolerance = self.settings.geometry.vertex_merge_tolerance
        a_full = clean_polygon(inject_intersections(a, b, self.settings.geometry), tolerance)
        b_full = clean_polygon(inject_intersections(b, a, self.settings.geometry), tolerance)
        return a_full, b_full

    def _edges_by_midpoint(
        self,
        polygon: Polygon,
        other: Polygon,
        keep_inside: bool,
    ) -> list[Segment]:
        kept = []
        for edge in polygon_edges(polygon):
            inside = point_in_polygon(edge.midpoint(), other, self._boundary_tolerance)
            if inside == keep_inside:
                kept.append(edge)
        return kept

    def _raw_boundary(self, entity: Entity) -> list[Point]:
        try:
            return entity.to_points(self.settings.shapes)
        except Exception as e:
            self.logger.log_failure("convert", e, traceback.format_exc())
            return []


def subtract(
    subject: Entity,
    clip: Entity,
    settings: PlanformSettings | None = None,
    logger: BooleanLogger | None = None,
) -> SubtractResult:
    """Cut ``clip`` out of ``subject`` with a fresh engine."""
    return BooleanEngine(settings, logger).subtract(subject, clip)


def union(
    entities: Sequence[Entity],
    settings: PlanformSettings | None = None,
    logger: BooleanLogger | None = None,
) -> UnionResult:
    """Merge ``entities`` into one outline with a fresh engine."""
    return BooleanEngine(settings, logger).union(entities)


def subtract_many(
    base: Entity,
    cutters: Sequence[Entity],
    settings: PlanformSettings | None = None,
    logger: BooleanLogger | None = None,
) -> list[Fragment]:
    """Cut every cutter out of ``base`` with a fresh engine."""
    return BooleanEngine(settings, logger).subtract_many(base, cutters)


def subtract_bases(
    bases: Sequence[Entity],
    cutters: Sequence[Entity],
    settings: PlanformSettings | None = None,
    logger: BooleanLogger | None = None,
) -> list[list[Fragment]]:
    """Cut every cutter out of each of ``bases`` with a fresh engine."""
    return BooleanEngine(settings, logger).subtract_bases(bases, cutters)
