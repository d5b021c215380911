"""Whole-road vision analysis for one snapshot.

``analyze_road_vision`` is the single entry point a caller needs: it takes
the vehicles, observer and road length from a feed snapshot and returns a
``VisionAnalysis`` for the renderer. It holds no state between calls.

``road_length`` is carried through to the result but does not limit the
FOV; the wedge is not truncated at the road ends.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .fov import compute_fov
from .geometry import distance, point_in_rectangle
from .types import (
    DEFAULT_PARAMS,
    AnalyzedVehicle,
    Observer,
    Point,
    RoadSnapshot,
    Vehicle,
    VisionAnalysis,
    VisionParams,
    VisionStatus,
)
from .visibility import classify_vehicle

logger = logging.getLogger(__name__)


def vehicle_label(index: int) -> str:
    return f"vehicle-{index}"


def analyze_road_vision(
    vehicles: Iterable[Vehicle],
    observer: Observer,
    road_length: float,
    params: VisionParams = DEFAULT_PARAMS,
) -> VisionAnalysis:
    """Classify every vehicle against the observer's FOV.

    Output vehicles keep input order and are labelled by position
    (``vehicle-0``, ``vehicle-1``, ...). Raises ``GeometryError`` if the
    observer or any vehicle has invalid geometry; no partial result is
    returned in that case.
    """
    wedge = compute_fov(observer, params)

    analyzed = []
    for index, vehicle in enumerate(vehicles):
        status, ratio = classify_vehicle(vehicle, observer, wedge, params)
        analyzed.append(
            AnalyzedVehicle(
                id=vehicle_label(index),
                vehicle=vehicle,
                vision_status=status,
                visibility_ratio=ratio,
                distance_to_observer=distance(
                    vehicle.position, observer.position
                ),
            )
        )

    analysis = VisionAnalysis(
        observer=observer,
        vehicles=tuple(analyzed),
        left_boundary=wedge.left_boundary,
        right_boundary=wedge.right_boundary,
        road_length=road_length,
    )
    if logger.isEnabledFor(logging.DEBUG):
        counts = analysis.status_counts()
        logger.debug(
            "analyzed %d vehicles: %d visible, %d partial, %d hidden",
            len(analyzed),
            counts[VisionStatus.FULLY_VISIBLE],
            counts[VisionStatus.PARTIALLY_VISIBLE],
            counts[VisionStatus.FULLY_HIDDEN],
        )
    return analysis


def analyze_snapshot(
    snapshot: RoadSnapshot, params: VisionParams = DEFAULT_PARAMS
) -> VisionAnalysis:
    return analyze_road_vision(
        snapshot.vehicles, snapshot.observer, snapshot.length, params
    )


def vehicle_at(
    analysis: VisionAnalysis, point: Point
) -> AnalyzedVehicle | None:
    """First analyzed vehicle whose footprint contains ``point``."""
    for av in analysis.vehicles:
        v = av.vehicle
        if point_in_rectangle(point, v.position, v.width, v.length):
            return av
    return None
