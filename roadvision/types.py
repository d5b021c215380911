"""Data types matching the road feed JSON schema.

Everything here is created fresh from each inbound snapshot and replaced
wholesale on the next one, so the dataclasses are frozen. ``Observer`` and
``Vehicle`` validate their geometry on construction: a bad FOV or a
zero-area vehicle is rejected here instead of turning into a division by
zero deep inside the visibility math.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class GeometryError(ValueError):
    """Observer or vehicle geometry the engine is not defined for."""


class Direction(Enum):
    # Wire values from the feed: 1 looks toward increasing y.
    FORWARD = 1
    BACKWARD = -1


class VisionStatus(Enum):
    FULLY_VISIBLE = "fully_visible"
    PARTIALLY_VISIBLE = "partially_visible"
    FULLY_HIDDEN = "fully_hidden"


@dataclass(frozen=True)
class VisionParams:
    """Tunable constants for the FOV model and the clipping step."""

    ray_length: float = 500.0
    clip_ray_length: float = 1000.0
    parallel_epsilon: float = 1e-10
    dedupe_epsilon: float = 1e-6


DEFAULT_PARAMS = VisionParams()


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def from_dict(d: dict) -> Point:
        return Point(x=float(d["x"]), y=float(d["y"]))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Observer:
    position: Point
    fov: float
    direction: Direction = Direction.FORWARD
    width: float = 0.0
    length: float = 0.0

    def __post_init__(self) -> None:
        if not (0.0 < self.fov <= 360.0):
            raise GeometryError(
                f"observer fov must be in (0, 360], got {self.fov}"
            )

    @staticmethod
    def from_dict(d: dict) -> Observer:
        return Observer(
            position=Point.from_dict(d["position"]),
            fov=float(d["fov"]),
            direction=Direction(d.get("direction", 1)),
            width=float(d.get("width", 0.0)),
            length=float(d.get("length", 0.0)),
        )

    def to_dict(self) -> dict:
        return {
            "position": self.position.to_dict(),
            "width": self.width,
            "length": self.length,
            "fov": self.fov,
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class Vehicle:
    position: Point
    width: float
    length: float
    speed: float = 0.0

    def __post_init__(self) -> None:
        for name in ("width", "length"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise GeometryError(
                    f"vehicle {name} must be a positive number, got {value}"
                )

    @property
    def area(self) -> float:
        return self.width * self.length

    @staticmethod
    def from_dict(d: dict) -> Vehicle:
        return Vehicle(
            position=Point.from_dict(d["position"]),
            width=float(d["width"]),
            length=float(d["length"]),
            speed=float(d.get("speed", 0.0)),
        )

    def to_dict(self) -> dict:
        return {
            "position": self.position.to_dict(),
            "width": self.width,
            "length": self.length,
            "speed": self.speed,
        }


@dataclass(frozen=True)
class BoundaryRay:
    start: Point
    end: Point

    def to_dict(self) -> dict:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class FovWedge:
    """Angular region seen by the observer.

    Angles are radians, with 0 pointing along +x and +pi/2 along +y.
    ``left_angle`` and ``right_angle`` are ``forward_angle -/+ half_fov``.
    """

    origin: Point
    forward_angle: float
    half_fov: float
    left_boundary: BoundaryRay
    right_boundary: BoundaryRay

    @property
    def left_angle(self) -> float:
        return self.forward_angle - self.half_fov

    @property
    def right_angle(self) -> float:
        return self.forward_angle + self.half_fov


@dataclass(frozen=True)
class AnalyzedVehicle:
    id: str
    vehicle: Vehicle
    vision_status: VisionStatus
    visibility_ratio: float
    distance_to_observer: float

    def to_dict(self) -> dict:
        d = self.vehicle.to_dict()
        d.update(
            {
                "id": self.id,
                "vision_status": self.vision_status.value,
                "visibility_ratio": self.visibility_ratio,
                "distance_to_observer": self.distance_to_observer,
            }
        )
        return d


@dataclass(frozen=True)
class VisionAnalysis:
    observer: Observer
    vehicles: tuple[AnalyzedVehicle, ...]
    left_boundary: BoundaryRay
    right_boundary: BoundaryRay
    road_length: float = 0.0

    def status_counts(self) -> dict[VisionStatus, int]:
        counts = {status: 0 for status in VisionStatus}
        for av in self.vehicles:
            counts[av.vision_status] += 1
        return counts

    def to_dict(self) -> dict:
        return {
            "observer": self.observer.to_dict(),
            "vehicles": [av.to_dict() for av in self.vehicles],
            "fov_lines": {
                "left_boundary": self.left_boundary.to_dict(),
                "right_boundary": self.right_boundary.to_dict(),
            },
            "road_length": self.road_length,
        }


@dataclass(frozen=True)
class RoadSnapshot:
    observer: Observer
    vehicles: tuple[Vehicle, ...] = field(default_factory=tuple)
    length: float = 0.0

    @staticmethod
    def from_dict(d: dict) -> RoadSnapshot:
        return RoadSnapshot(
            observer=Observer.from_dict(d["observer"]),
            vehicles=tuple(
                Vehicle.from_dict(v) for v in d.get("vehicles", [])
            ),
            length=float(d.get("length", 0.0)),
        )

    def to_dict(self) -> dict:
        return {
            "observer": self.observer.to_dict(),
            "vehicles": [v.to_dict() for v in self.vehicles],
            "length": self.length,
        }
