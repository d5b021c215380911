"""Field-of-view wedge for an observer on a straight road.

The observer always looks straight along the road axis: +y when facing
forward, -y when facing backward. The wedge is the set of directions
within ``half_fov`` of that heading. It depends only on the observer, so
it is computed once per snapshot and shared by every vehicle.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from .geometry import angle_difference, angle_of
from .types import (
    DEFAULT_PARAMS,
    BoundaryRay,
    Direction,
    FovWedge,
    GeometryError,
    Observer,
    Point,
    VisionParams,
)


def _ray_end(origin: Point, angle: float, length: float) -> Point:
    return Point(
        x=origin.x + math.cos(angle) * length,
        y=origin.y + math.sin(angle) * length,
    )


def compute_fov(
    observer: Observer, params: VisionParams = DEFAULT_PARAMS
) -> FovWedge:
    """Derive the observer's FOV wedge and its rendered boundary rays."""
    if not (0.0 < observer.fov <= 360.0):
        raise GeometryError(
            f"observer fov must be in (0, 360], got {observer.fov}"
        )
    if observer.direction is Direction.FORWARD:
        forward_angle = math.pi / 2
    else:
        forward_angle = -math.pi / 2
    half_fov = math.radians(observer.fov) / 2

    origin = observer.position
    return FovWedge(
        origin=origin,
        forward_angle=forward_angle,
        half_fov=half_fov,
        left_boundary=BoundaryRay(
            start=origin,
            end=_ray_end(origin, forward_angle - half_fov, params.ray_length),
        ),
        right_boundary=BoundaryRay(
            start=origin,
            end=_ray_end(origin, forward_angle + half_fov, params.ray_length),
        ),
    )


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


def boundary_ray(
    wedge: FovWedge, side: Side, length: float
) -> tuple[Point, Point]:
    """Boundary ray of the wedge as a segment of the given length."""
    match side:
        case Side.LEFT:
            angle = wedge.left_angle
        case Side.RIGHT:
            angle = wedge.right_angle
    return wedge.origin, _ray_end(wedge.origin, angle, length)


def point_in_fov(point: Point, wedge: FovWedge) -> bool:
    """True if ``point`` lies inside the wedge (boundary inclusive)."""
    diff = angle_difference(angle_of(wedge.origin, point), wedge.forward_angle)
    return abs(diff) <= wedge.half_fov


def points_in_fov(points: list[Point], wedge: FovWedge) -> np.ndarray:
    """Vectorized ``point_in_fov`` over a batch of points.

    Returns a boolean mask aligned with ``points``. The wrap into
    (-pi, pi] repeats the scalar version's add/subtract steps so both
    agree exactly on boundary cases.
    """
    if not points:
        return np.zeros(0, dtype=bool)
    xs = np.array([p.x for p in points], dtype=np.float64)
    ys = np.array([p.y for p in points], dtype=np.float64)
    angles = np.arctan2(ys - wedge.origin.y, xs - wedge.origin.x)

    diff = angles - wedge.forward_angle
    while np.any(diff > math.pi):
        diff = np.where(diff > math.pi, diff - 2 * math.pi, diff)
    while np.any(diff <= -math.pi):
        diff = np.where(diff <= -math.pi, diff + 2 * math.pi, diff)
    return np.abs(diff) <= wedge.half_fov
