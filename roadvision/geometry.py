"""Plane geometry primitives used by the FOV model and the classifier.

All functions are pure. Points are ``types.Point`` with ``x`` across the
road and ``y`` along it; angles are radians measured from +x.
"""

from __future__ import annotations

import math

from .types import DEFAULT_PARAMS, Point


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def angle_of(frm: Point, to: Point) -> float:
    """Direction from ``frm`` to ``to`` in (-pi, pi]."""
    return math.atan2(to.y - frm.y, to.x - frm.x)


def angle_difference(a: float, b: float) -> float:
    """Signed minimal difference ``a - b``, wrapped into (-pi, pi]."""
    diff = a - b
    while diff > math.pi:
        diff -= 2 * math.pi
    while diff <= -math.pi:
        diff += 2 * math.pi
    return diff


def segment_intersection(
    p1: Point,
    p2: Point,
    p3: Point,
    p4: Point,
    epsilon: float = DEFAULT_PARAMS.parallel_epsilon,
) -> Point | None:
    """Intersection of segments p1-p2 and p3-p4, or None.

    Uses the parametric form with closed interval [0, 1] on both segments.
    Segments whose direction determinant is below ``epsilon`` are treated
    as parallel and never intersect.
    """
    denom = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if abs(denom) < epsilon:
        return None

    t = (
        (p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)
    ) / denom
    u = -(
        (p1.x - p2.x) * (p1.y - p3.y) - (p1.y - p2.y) * (p1.x - p3.x)
    ) / denom

    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(x=p1.x + t * (p2.x - p1.x), y=p1.y + t * (p2.y - p1.y))
    return None


def polygon_area(points: list[Point]) -> float:
    """Compute polygon area using the shoelace formula.

    Returns positive area regardless of winding order.
    """
    n = len(points)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y
    return abs(area) / 2.0


def rectangle_corners(
    center: Point, width: float, length: float
) -> list[Point]:
    """The 4 corners of an axis-aligned rectangle, as a closed ring.

    ``width`` spans x, ``length`` spans y. Order is (-,-), (+,-), (+,+),
    (-,+) so consecutive corners share an edge.
    """
    half_w = width / 2
    half_l = length / 2
    return [
        Point(x=center.x + sx * half_w, y=center.y + sy * half_l)
        for sx, sy in ((-1, -1), (1, -1), (1, 1), (-1, 1))
    ]


def point_in_rectangle(
    point: Point, center: Point, width: float, length: float
) -> bool:
    """True if ``point`` lies inside or on the edge of the rectangle."""
    return (
        abs(point.x - center.x) <= width / 2
        and abs(point.y - center.y) <= length / 2
    )
