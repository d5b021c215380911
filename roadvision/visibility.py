"""Per-vehicle visibility classification against an FOV wedge.

This module answers the question: how much of this vehicle can the
observer see? The answer is one of three statuses plus a ratio in [0, 1].

Classification is done in three stages, cheapest first:

  behind    A vehicle whose center is level with or behind the observer
            (along the viewing direction) is FULLY_HIDDEN with ratio 0.
            This is a pure comparison on y and skips all angle math.

  corners   Count the rectangle corners whose bearing from the observer
            lies within half_fov of the heading. 4 corners in means
            FULLY_VISIBLE (ratio 1); 0 means FULLY_HIDDEN (ratio 0).

  clipping  For 1-3 corners in, build the polygon where the rectangle
            overlaps the wedge: the inside corners plus every crossing
            of a rectangle edge with a boundary ray. Those points are the
            vertices of a convex polygon; sorting them by bearing from
            their centroid gives its ring, whose shoelace area over the
            rectangle area is the ratio.

The clipping stage is exact when the wedge is convex (fov <= 180). The
boundary rays used for clipping are ``clip_ray_length`` long, which must
reach past any vehicle in the scene.
"""

from __future__ import annotations

import math

import numpy as np

from .fov import Side, boundary_ray, points_in_fov
from .geometry import (
    distance,
    polygon_area,
    rectangle_corners,
    segment_intersection,
)
from .types import (
    DEFAULT_PARAMS,
    Direction,
    FovWedge,
    GeometryError,
    Observer,
    Point,
    Vehicle,
    VisionParams,
    VisionStatus,
)


def is_behind_observer(vehicle: Vehicle, observer: Observer) -> bool:
    """True if the vehicle center is not ahead of the observer."""
    rel_y = vehicle.position.y - observer.position.y
    if observer.direction is Direction.FORWARD:
        return rel_y <= 0
    return rel_y >= 0


def _check_dimensions(vehicle: Vehicle) -> None:
    # The ratio divides by the area.
    if not (vehicle.width > 0 and vehicle.length > 0):
        raise GeometryError(
            f"vehicle dimensions must be positive, got "
            f"{vehicle.width} x {vehicle.length}"
        )


def _dedupe_consecutive(points: list[Point], epsilon: float) -> list[Point]:
    """Drop each point that is within ``epsilon`` of the one before it."""
    result: list[Point] = []
    for i, p in enumerate(points):
        if i > 0 and distance(p, points[i - 1]) <= epsilon:
            continue
        result.append(p)
    return result


def _clip_polygon(
    corners: list[Point],
    inside_mask: np.ndarray,
    wedge: FovWedge,
    params: VisionParams,
) -> list[Point]:
    points = [c for c, inside in zip(corners, inside_mask) if inside]

    rays = [
        boundary_ray(wedge, side, params.clip_ray_length) for side in Side
    ]
    for i in range(4):
        edge_start = corners[i]
        edge_end = corners[(i + 1) % 4]
        for ray_start, ray_end in rays:
            hit = segment_intersection(
                ray_start,
                ray_end,
                edge_start,
                edge_end,
                epsilon=params.parallel_epsilon,
            )
            if hit is not None:
                points.append(hit)

    if len(points) < 3:
        return []

    # Bearing from the observer ties for points on the same boundary ray
    # and interleaves near and far faces, so sort around an interior point.
    cx = sum(p.x for p in points) / len(points)
    cy = sum(p.y for p in points) / len(points)
    points.sort(key=lambda p: math.atan2(p.y - cy, p.x - cx))
    return _dedupe_consecutive(points, params.dedupe_epsilon)


def _area_ratio(polygon: list[Point], vehicle: Vehicle) -> float:
    if not polygon:
        return 0.0
    ratio = polygon_area(polygon) / vehicle.area
    return min(1.0, max(0.0, ratio))


def visible_polygon(
    vehicle: Vehicle,
    wedge: FovWedge,
    params: VisionParams = DEFAULT_PARAMS,
) -> list[Point]:
    """Vertices of the part of the vehicle rectangle inside the wedge.

    Vertices are ordered by bearing from their centroid. Returns an empty
    list when fewer than 3 candidate vertices exist (tangential contact).
    """
    corners = rectangle_corners(
        vehicle.position, vehicle.width, vehicle.length
    )
    return _clip_polygon(
        corners, points_in_fov(corners, wedge), wedge, params
    )


def partial_visibility_ratio(
    vehicle: Vehicle,
    wedge: FovWedge,
    params: VisionParams = DEFAULT_PARAMS,
) -> float:
    """Fraction of the vehicle's area inside the wedge, clamped to [0, 1]."""
    return _area_ratio(visible_polygon(vehicle, wedge, params), vehicle)


def classify_vehicle(
    vehicle: Vehicle,
    observer: Observer,
    wedge: FovWedge,
    params: VisionParams = DEFAULT_PARAMS,
) -> tuple[VisionStatus, float]:
    """Classify one vehicle, returning ``(status, visibility_ratio)``."""
    _check_dimensions(vehicle)

    if is_behind_observer(vehicle, observer):
        return VisionStatus.FULLY_HIDDEN, 0.0

    corners = rectangle_corners(
        vehicle.position, vehicle.width, vehicle.length
    )
    inside_mask = points_in_fov(corners, wedge)
    visible_corners = int(inside_mask.sum())

    if visible_corners == 4:
        return VisionStatus.FULLY_VISIBLE, 1.0
    if visible_corners == 0:
        return VisionStatus.FULLY_HIDDEN, 0.0

    polygon = _clip_polygon(corners, inside_mask, wedge, params)
    return VisionStatus.PARTIALLY_VISIBLE, _area_ratio(polygon, vehicle)
