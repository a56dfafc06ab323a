"""Unit tests for the boolean operators."""

import math
from unittest.mock import MagicMock, patch

import pytest

from planform.config import PlanformSettings, ShapeConfig
from planform.core import (
    BooleanEngine,
    bounding_box,
    signed_area,
    subtract,
    subtract_bases,
    subtract_many,
    union,
)
from planform.domain import (
    CircleEntity,
    LineEntity,
    Point,
    PolygonEntity,
    RectangleEntity,
)
from planform.utils import BooleanLogger, DiagnosticsLog


def rect(x: float, y: float, width: float, height: float) -> RectangleEntity:
    """Build a rectangle entity from its top-left corner and size."""
    return RectangleEntity(start=Point(x, y), width=width, height=height)


def assert_polygon_close(actual: list[Point], expected: list[tuple[float, float]]) -> None:
    """Compare a polygon with expected coordinates, vertex by vertex."""
    assert len(actual) == len(expected)
    for point, (x, y) in zip(actual, expected):
        assert point.x == pytest.approx(x, abs=1e-6)
        assert point.y == pytest.approx(y, abs=1e-6)


@pytest.fixture
def diagnostics() -> DiagnosticsLog:
    """Empty diagnostics log."""
    return DiagnosticsLog()


@pytest.fixture
def logger(diagnostics: DiagnosticsLog) -> BooleanLogger:
    """Boolean logger with a mocked structlog backend."""
    return BooleanLogger(logger=MagicMock(), diagnostics=diagnostics)


@pytest.fixture
def engine(logger: BooleanLogger) -> BooleanEngine:
    """Engine with default settings and a test logger."""
    return BooleanEngine(logger=logger)


class TestSubtractShortcuts:
    """Tests for subtractions resolved without stitching."""

    def test_clip_inside_subject_becomes_hole(self, engine: BooleanEngine) -> None:
        """Test a clip fully inside the subject is returned as a hole."""
        result = engine.subtract(rect(0, 0, 100, 100), rect(45, 45, 10, 10))

        assert result.polygons == [[Point(0, 100), Point(100, 100), Point(100, 0), Point(0, 0)]]
        assert result.holes == [[Point(45, 55), Point(55, 55), Point(55, 45), Point(45, 45)]]
        assert not result.fallback

    def test_circle_hole(self, engine: BooleanEngine) -> None:
        """Test a circle inside a rectangle becomes a tessellated hole."""
        result = engine.subtract(rect(0, 0, 100, 100), CircleEntity(Point(50, 50), 10))

        assert len(result.polygons) == 1
        assert len(result.holes) == 1
        assert len(result.holes[0]) == 64
        assert signed_area(result.holes[0]) > 0

    def test_subject_inside_clip_vanishes(self, engine: BooleanEngine) -> None:
        """Test a subject fully covered by the clip leaves nothing."""
        result = engine.subtract(rect(0, 0, 10, 10), rect(-95, -95, 200, 200))

        assert result.polygons == []
        assert result.holes == []
        assert result.is_empty()

    def test_disjoint_keeps_subject_and_holes(self, engine: BooleanEngine) -> None:
        """Test a far-away clip leaves the subject with its holes."""
        hole = [Point(10, 10), Point(20, 10), Point(20, 20), Point(10, 20)]
        subject = PolygonEntity(
            points=[Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)],
            holes=[hole],
        )

        result = engine.subtract(subject, rect(500, 500, 10, 10))

        assert result.polygons == [[Point(0, 100), Point(100, 100), Point(100, 0), Point(0, 0)]]
        assert result.holes == [hole]

    def test_degenerate_clip(self, engine: BooleanEngine) -> None:
        """Test a clip without area leaves the subject unchanged."""
        result = engine.subtract(rect(0, 0, 10, 10), LineEntity(Point(3, 3), Point(3, 3)))

        assert result.polygons == [[Point(0, 10), Point(10, 10), Point(10, 0), Point(0, 0)]]
        assert result.holes == []
        assert not result.fallback

    def test_degenerate_subject(self, engine: BooleanEngine) -> None:
        """Test a subject without area is returned unchanged."""
        subject = PolygonEntity(points=[Point(1, 1), Point(5, 5)])

        result = engine.subtract(subject, rect(0, 0, 10, 10))

        assert result.polygons == [[Point(1, 1), Point(5, 5)]]
        assert result.holes == []
        assert not result.fallback

    def test_shortcuts_are_logged(self, engine: BooleanEngine, logger: BooleanLogger) -> None:
        """Test shortcuts and results reach the logger statistics."""
        engine.subtract(rect(0, 0, 100, 100), rect(45, 45, 10, 10))

        assert logger.stats.subtract_count == 1
        assert logger.stats.shortcut_count == 1
        assert logger.stats.islands_produced == 1


class TestSubtractGeneral:
    """Tests for subtractions that go through stitching."""

    def test_cut_right_half(self, engine: BooleanEngine) -> None:
        """Test a clip covering the right half leaves the left half."""
        result = engine.subtract(rect(0, 0, 100, 100), rect(50, -10, 100, 120))

        assert len(result.polygons) == 1
        assert_polygon_close(result.polygons[0], [(0, 100), (50, 100), (50, 0), (0, 0)])
        assert result.holes == []

    def test_split_into_two_islands(self, engine: BooleanEngine) -> None:
        """Test a band across the subject splits it in two."""
        result = engine.subtract(rect(0, 0, 100, 20), rect(40, -10, 20, 40))

        assert len(result.polygons) == 2
        assert_polygon_close(result.polygons[0], [(0, 20), (40, 20), (40, 0), (0, 0)])
        assert_polygon_close(result.polygons[1], [(60, 20), (100, 20), (100, 0), (60, 0)])

    def test_area_removed(self, engine: BooleanEngine) -> None:
        """Test an overlapping corner removes the overlap area."""
        result = engine.subtract(rect(0, 0, 100, 100), rect(50, 50, 100, 100))

        assert len(result.polygons) == 1
        assert abs(signed_area(result.polygons[0])) == pytest.approx(7500.0)
        assert bounding_box(result.polygons[0]) == pytest.approx((0, 0, 100, 100))

    def test_subject_holes_carried(self, engine: BooleanEngine) -> None:
        """Test existing holes are passed through a general cut."""
        hole = [Point(10, 10), Point(20, 10), Point(20, 20), Point(10, 20)]
        subject = PolygonEntity(
            points=[Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)],
            holes=[hole],
        )

        result = engine.subtract(subject, rect(50, -10, 100, 120))

        assert result.holes == [hole]

    def test_inputs_not_mutated(self, engine: BooleanEngine) -> None:
        """Test the caller's outline and holes are left intact."""
        outline = [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]
        hole = [Point(10, 10), Point(20, 10), Point(20, 20)]
        subject = PolygonEntity(points=outline, holes=[hole])

        engine.subtract(subject, rect(50, -10, 100, 120))

        assert outline == [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]
        assert hole == [Point(10, 10), Point(20, 10), Point(20, 20)]

    def test_deterministic(self, engine: BooleanEngine) -> None:
        """Test repeated calls give identical results."""
        first = engine.subtract(rect(0, 0, 100, 20), rect(40, -10, 20, 40))
        second = engine.subtract(rect(0, 0, 100, 20), rect(40, -10, 20, 40))
        assert first == second


class TestSubtractFallback:
    """Tests for failures absorbed by subtract."""

    def test_non_finite_subject(self, engine: BooleanEngine, logger: BooleanLogger) -> None:
        """Test NaN coordinates fall back to the raw subject."""
        subject = rect(math.nan, 0, 10, 10)

        result = engine.subtract(subject, rect(0, 0, 5, 5))

        assert result.fallback
        assert len(result.polygons) == 1
        assert len(result.polygons[0]) == 4
        assert result.holes == []
        assert logger.stats.fallback_count == 1

    def test_internal_failure(
        self,
        engine: BooleanEngine,
        logger: BooleanLogger,
        diagnostics: DiagnosticsLog,
    ) -> None:
        """Test an unexpected error returns the unmodified subject."""
        subject = rect(0, 0, 100, 100)

        with patch(
            "planform.core.boolean.inject_intersections",
            side_effect=ArithmeticError("boom"),
        ):
            result = engine.subtract(subject, rect(50, 50, 100, 100))

        assert result.fallback
        assert result.polygons == [subject.to_points()]
        assert result.holes == []
        assert logger.stats.errors == [("subtract", "boom")]
        assert diagnostics.entries[-1].level == "ERROR"
        assert diagnostics.entries[-1].data["error_type"] == "ArithmeticError"


class TestUnion:
    """Tests for union."""

    def test_overlapping_squares(self, engine: BooleanEngine) -> None:
        """Test two overlapping squares merge into one outline."""
        result = engine.union([rect(0, 0, 10, 10), rect(5, 0, 10, 10)])

        assert result.points == [
            Point(0, 10),
            Point(10, 10),
            Point(15, 10),
            Point(15, 0),
            Point(5, 0),
            Point(0, 0),
        ]
        assert signed_area(result.points) == 150.0
        assert bounding_box(result.points) == (0, 0, 15, 10)
        assert not result.fallback

    def test_identical_squares(self, engine: BooleanEngine) -> None:
        """Test a shape merged with itself is unchanged."""
        result = engine.union([rect(0, 0, 10, 10), rect(0, 0, 10, 10)])
        assert result.points == [Point(0, 10), Point(10, 10), Point(10, 0), Point(0, 0)]

    def test_first_inside_second(self, engine: BooleanEngine) -> None:
        """Test a small shape inside a large one yields the large one."""
        result = engine.union([rect(40, 40, 20, 20), rect(0, 0, 100, 100)])
        assert result.points == [Point(0, 100), Point(100, 100), Point(100, 0), Point(0, 0)]

    def test_second_inside_first(self, engine: BooleanEngine) -> None:
        """Test a contained operand adds nothing."""
        result = engine.union([rect(0, 0, 100, 100), rect(40, 40, 20, 20)])
        assert result.points == [Point(0, 100), Point(100, 100), Point(100, 0), Point(0, 0)]

    def test_fewer_than_two(self, engine: BooleanEngine) -> None:
        """Test a single shape gives an empty result."""
        result = engine.union([rect(0, 0, 10, 10)])
        assert result.points == []
        assert result.holes == []
        assert not result.fallback

    def test_degenerate_operand_skipped(self, engine: BooleanEngine) -> None:
        """Test an operand without area does not disturb the merge."""
        line = LineEntity(Point(1, 1), Point(1, 1))
        with_line = engine.union([rect(0, 0, 10, 10), line, rect(5, 0, 10, 10)])
        without = engine.union([rect(0, 0, 10, 10), rect(5, 0, 10, 10)])
        assert with_line.points == without.points

    def test_degenerate_first_operand(self, engine: BooleanEngine) -> None:
        """Test a first operand without area is replaced by the next."""
        result = engine.union([LineEntity(Point(1, 1), Point(1, 1)), rect(0, 0, 10, 10)])
        assert result.points == [Point(0, 10), Point(10, 10), Point(10, 0), Point(0, 0)]

    def test_first_operand_holes_kept(self, engine: BooleanEngine) -> None:
        """Test holes of the first shape are carried through."""
        hole = [Point(2, 2), Point(4, 2), Point(4, 4)]
        first = PolygonEntity(
            points=[Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)],
            holes=[hole],
        )
        result = engine.union([first, rect(5, 0, 10, 10)])
        assert result.holes == [hole]

    def test_fallback(self, engine: BooleanEngine, logger: BooleanLogger) -> None:
        """Test a failing union returns the first shape unchanged."""
        first = rect(math.nan, 0, 10, 10)

        result = engine.union([first, rect(0, 0, 10, 10)])

        assert result.fallback
        assert len(result.points) == 4
        assert result.holes == []
        assert logger.stats.fallback_count == 1

    def test_deterministic(self, engine: BooleanEngine) -> None:
        """Test repeated folds over the same shapes give identical results."""
        entities = [
            rect(0, 0, 40, 40),
            CircleEntity(Point(40, 20), 15),
            rect(30, 30, 40, 20),
        ]

        first = engine.union(entities)
        second = engine.union(entities)

        assert first == second
        assert not first.fallback
        assert len(first.points) >= 3


class TestSubtractMany:
    """Tests for cutting several shapes out of a base."""

    def test_no_cutters(self, engine: BooleanEngine) -> None:
        """Test the base comes back as the only fragment."""
        base = rect(0, 0, 100, 20)
        fragments = engine.subtract_many(base, [])
        assert len(fragments) == 1
        assert fragments[0].points == base.to_points()

    def test_band_then_hole(self, engine: BooleanEngine) -> None:
        """Test each cutter applies to every fragment so far."""
        fragments = engine.subtract_many(
            rect(0, 0, 100, 20),
            [rect(40, -10, 20, 40), rect(10, 5, 5, 5)],
        )

        assert len(fragments) == 2
        assert len(fragments[0].holes) == 1
        assert fragments[1].holes == []
        assert bounding_box(fragments[1].points) == pytest.approx((60, 0, 100, 20))

    def test_cutter_consumes_base(self, engine: BooleanEngine) -> None:
        """Test a covering cutter leaves no fragments."""
        assert engine.subtract_many(rect(0, 0, 10, 10), [rect(-5, -5, 20, 20)]) == []

    def test_degenerate_base_passes_through(self, engine: BooleanEngine) -> None:
        """Test a base without area survives every cut unchanged."""
        base = PolygonEntity(points=[Point(1, 1), Point(5, 5)])

        fragments = engine.subtract_many(base, [rect(0, 0, 10, 10)])

        assert len(fragments) == 1
        assert fragments[0].points == [Point(1, 1), Point(5, 5)]


class TestSubtractBases:
    """Tests for cutting the same shapes out of several bases."""

    def test_each_base_cut_by_all_cutters(self, engine: BooleanEngine) -> None:
        """Test every base gets its own fragments from the same cutters."""
        results = engine.subtract_bases(
            [rect(0, 0, 100, 20), rect(0, 50, 100, 20)],
            [rect(40, -10, 20, 100)],
        )

        boxes = [
            sorted(tuple(round(v, 6) for v in bounding_box(f.points)) for f in fragments)
            for fragments in results
        ]
        assert boxes == [
            [(0, 0, 40, 20), (60, 0, 100, 20)],
            [(0, 50, 40, 70), (60, 50, 100, 70)],
        ]

    def test_matches_subtract_many(self, engine: BooleanEngine) -> None:
        """Test each base's fragments equal a single-base cut."""
        bases = [rect(0, 0, 100, 20), rect(0, 0, 100, 100)]
        cutters = [rect(40, -10, 20, 40), rect(10, 5, 5, 5)]

        results = engine.subtract_bases(bases, cutters)

        assert results == [engine.subtract_many(base, cutters) for base in bases]

    def test_no_bases(self, engine: BooleanEngine) -> None:
        """Test no bases gives no results."""
        assert engine.subtract_bases([], [rect(0, 0, 10, 10)]) == []


class TestModuleFunctions:
    """Tests for the module-level operators."""

    def test_subtract(self) -> None:
        """Test subtract with a fresh engine."""
        result = subtract(
            rect(0, 0, 100, 100),
            rect(45, 45, 10, 10),
            logger=BooleanLogger(MagicMock()),
        )
        assert len(result.holes) == 1

    def test_union_with_settings(self) -> None:
        """Test settings reach entity conversion."""
        settings = PlanformSettings(shapes=ShapeConfig(circle_segments=16))
        result = union(
            [CircleEntity(Point(0, 0), 10), CircleEntity(Point(100, 100), 1)],
            settings=settings,
            logger=BooleanLogger(MagicMock()),
        )
        assert len(result.points) == 16

    def test_subtract_many(self) -> None:
        """Test subtract_many with a fresh engine."""
        fragments = subtract_many(
            rect(0, 0, 100, 20),
            [rect(40, -10, 20, 40)],
            logger=BooleanLogger(MagicMock()),
        )
        assert len(fragments) == 2

    def test_subtract_bases(self) -> None:
        """Test subtract_bases with a fresh engine."""
        results = subtract_bases(
            [rect(0, 0, 100, 20), rect(200, 0, 10, 10)],
            [rect(40, -10, 20, 40)],
            logger=BooleanLogger(MagicMock()),
        )
        assert [len(fragments) for fragments in results] == [2, 1]
