"""Tests for plane geometry primitives."""

import math

import pytest

from roadvision.geometry import (
    angle_difference,
    angle_of,
    distance,
    point_in_rectangle,
    polygon_area,
    rectangle_corners,
    segment_intersection,
)
from roadvision.types import Point


def _p(x, y):
    return Point(x=x, y=y)


class TestDistance:
    def test_3_4_5(self):
        assert distance(_p(0, 0), _p(3, 4)) == pytest.approx(5.0)

    def test_symmetric(self):
        a, b = _p(-2, 7), _p(5, -1)
        assert distance(a, b) == distance(b, a)

    def test_same_point(self):
        assert distance(_p(1, 1), _p(1, 1)) == 0.0


class TestAngleOf:
    def test_axes(self):
        o = _p(0, 0)
        assert angle_of(o, _p(1, 0)) == pytest.approx(0.0)
        assert angle_of(o, _p(0, 1)) == pytest.approx(math.pi / 2)
        assert angle_of(o, _p(0, -1)) == pytest.approx(-math.pi / 2)
        assert angle_of(o, _p(-1, 0)) == pytest.approx(math.pi)

    def test_relative_to_origin(self):
        assert angle_of(_p(10, 10), _p(11, 11)) == pytest.approx(math.pi / 4)


class TestAngleDifference:
    def test_simple(self):
        assert angle_difference(1.0, 0.25) == pytest.approx(0.75)

    def test_wraps_positive(self):
        # 170 deg - (-170 deg) is -20 deg the short way round
        a = math.radians(170)
        b = math.radians(-170)
        assert angle_difference(a, b) == pytest.approx(math.radians(-20))

    def test_wraps_negative(self):
        a = math.radians(-170)
        b = math.radians(170)
        assert angle_difference(a, b) == pytest.approx(math.radians(20))

    def test_multiple_turns(self):
        assert angle_difference(5 * math.pi + 0.5, 0.0) == pytest.approx(
            -math.pi + 0.5
        )

    def test_range(self):
        for a in range(-20, 21):
            for b in range(-20, 21):
                d = angle_difference(a * 0.5, b * 0.5)
                assert -math.pi < d <= math.pi


class TestSegmentIntersection:
    def test_crossing(self):
        hit = segment_intersection(_p(0, 0), _p(10, 10), _p(0, 10), _p(10, 0))
        assert hit is not None
        assert hit.x == pytest.approx(5.0)
        assert hit.y == pytest.approx(5.0)

    def test_shared_endpoint(self):
        hit = segment_intersection(_p(0, 0), _p(5, 5), _p(5, 5), _p(10, 0))
        assert hit is not None
        assert hit.x == pytest.approx(5.0)
        assert hit.y == pytest.approx(5.0)

    def test_t_intersection(self):
        hit = segment_intersection(_p(0, 5), _p(10, 5), _p(5, 0), _p(5, 5))
        assert hit == Point(x=5.0, y=5.0)

    def test_parallel(self):
        assert (
            segment_intersection(_p(0, 0), _p(10, 0), _p(0, 5), _p(10, 5))
            is None
        )

    def test_collinear(self):
        assert (
            segment_intersection(_p(0, 0), _p(3, 0), _p(1, 0), _p(8, 0))
            is None
        )

    def test_lines_cross_outside_segments(self):
        # Infinite lines meet at (5, 5) but the first segment stops short
        assert (
            segment_intersection(_p(0, 0), _p(4, 4), _p(0, 10), _p(10, 0))
            is None
        )

    def test_near_parallel_below_epsilon(self):
        hit = segment_intersection(
            _p(0, 0), _p(1, 0), _p(0, 0), _p(1, 1e-12)
        )
        assert hit is None


class TestPolygonArea:
    def test_unit_square(self):
        verts = [_p(0, 0), _p(1, 0), _p(1, 1), _p(0, 1)]
        assert abs(polygon_area(verts) - 1.0) < 1e-9

    def test_triangle(self):
        verts = [_p(0, 0), _p(4, 0), _p(0, 3)]
        assert abs(polygon_area(verts) - 6.0) < 1e-9

    def test_degenerate(self):
        assert polygon_area([_p(0, 0), _p(1, 0)]) == 0.0
        assert polygon_area([]) == 0.0

    def test_collinear_points(self):
        assert polygon_area([_p(0, 0), _p(1, 1), _p(2, 2)]) == 0.0

    def test_rectangle_corners_match_area_both_windings(self):
        corners = rectangle_corners(_p(13.5, -42.0), 20.0, 40.0)
        assert polygon_area(corners) == pytest.approx(800.0)
        assert polygon_area(list(reversed(corners))) == pytest.approx(800.0)


class TestRectangleCorners:
    def test_axis_aligned(self):
        corners = rectangle_corners(_p(0, 50), 20, 40)
        assert corners == [_p(-10, 30), _p(10, 30), _p(10, 70), _p(-10, 70)]

    def test_consecutive_corners_share_an_edge(self):
        corners = rectangle_corners(_p(3, 4), 2, 6)
        for i in range(4):
            a, b = corners[i], corners[(i + 1) % 4]
            assert a.x == b.x or a.y == b.y


class TestPointInRectangle:
    def test_inside(self):
        assert point_in_rectangle(_p(1, 1), _p(0, 0), 4, 4)

    def test_on_edge(self):
        assert point_in_rectangle(_p(2, 0), _p(0, 0), 4, 4)

    def test_outside(self):
        assert not point_in_rectangle(_p(0, 3), _p(0, 0), 4, 4)
