"""Load road snapshots from JSON and write analyses back out.

The live feed delivers one JSON document per update with the shape::

    {"observer": {"position": {"x": .., "y": ..}, "width": .., "length": ..,
                  "fov": .., "direction": 1 | -1},
     "vehicles": [{"position": {...}, "width": .., "length": .., "speed": ..}],
     "length": ..}

Anything that does not parse into a valid ``RoadSnapshot`` raises
``SnapshotError`` here, so malformed payloads never reach the engine.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .types import RoadSnapshot, VisionAnalysis

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """A feed payload that is not a valid road snapshot."""


def snapshot_from_dict(d: dict) -> RoadSnapshot:
    """Build a typed ``RoadSnapshot``, validating geometry on the way.

    ``GeometryError`` is a ``ValueError``, so invalid FOVs and zero-size
    vehicles surface as ``SnapshotError`` like any other bad field.
    """
    if not isinstance(d, dict):
        raise SnapshotError(
            f"snapshot must be a JSON object, got {type(d).__name__}"
        )
    try:
        return RoadSnapshot.from_dict(d)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("rejected road snapshot: %r", e)
        raise SnapshotError(f"invalid road snapshot: {e!r}") from e


def parse_snapshot(text: str) -> RoadSnapshot:
    """Parse one feed message body into a ``RoadSnapshot``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("road snapshot is not valid JSON: %s", e)
        raise SnapshotError(f"road snapshot is not valid JSON: {e}") from e
    return snapshot_from_dict(data)


def load_snapshot(path: Path) -> RoadSnapshot:
    """Load a road snapshot from a JSON file."""
    with open(path) as f:
        return parse_snapshot(f.read())


def save_analysis(analysis: VisionAnalysis, path: Path) -> None:
    """Write an analysis as JSON.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(analysis.to_dict(), f, indent=2)
        f.write("\n")
