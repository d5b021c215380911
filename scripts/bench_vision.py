#!/usr/bin/env python3
"""Benchmark per-snapshot vision analysis against a frame budget.

Usage (from the repo root):
    python scripts/bench_vision.py              # 200 snapshots, 30 vehicles
    python scripts/bench_vision.py -v 100       # 100 vehicles per snapshot
    python scripts/bench_vision.py --snapshot road.json
"""

import argparse
import logging
import statistics
import time
from pathlib import Path

import numpy as np

from roadvision.analysis import analyze_road_vision, analyze_snapshot
from roadvision.snapshot_io import load_snapshot
from roadvision.types import Direction, Observer, Point, Vehicle

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

ROAD_WIDTH = 60.0
ROAD_LENGTH = 800.0
FRAME_BUDGET_MS = 1000.0 / 60.0


def random_scene(rng: np.random.Generator, num_vehicles: int):
    """A road with the observer mid-lane and vehicles scattered around it."""
    observer = Observer(
        position=Point(x=ROAD_WIDTH / 2, y=float(rng.uniform(0, ROAD_LENGTH))),
        fov=178.0,
        direction=Direction(int(rng.choice([1, -1]))),
        width=20.0,
        length=40.0,
    )
    vehicles = [
        Vehicle(
            position=Point(x=float(x), y=float(y)),
            width=20.0,
            length=float(length),
            speed=float(speed),
        )
        for x, y, length, speed in zip(
            rng.uniform(10, ROAD_WIDTH - 10, num_vehicles),
            rng.uniform(0, ROAD_LENGTH, num_vehicles),
            rng.uniform(30, 60, num_vehicles),
            rng.uniform(0, 30, num_vehicles),
        )
    ]
    return observer, vehicles


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark road vision analysis"
    )
    parser.add_argument(
        "-n",
        "--snapshots",
        type=int,
        default=200,
        help="Number of snapshots to analyze (default: 200)",
    )
    parser.add_argument(
        "-v",
        "--vehicles",
        type=int,
        default=30,
        help="Vehicles per random snapshot (default: 30)",
    )
    parser.add_argument(
        "--seed", type=int, default=0, help="Random seed (default: 0)"
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="Analyze this snapshot JSON repeatedly instead of random ones",
    )
    args = parser.parse_args()

    if args.snapshot:
        snapshot = load_snapshot(args.snapshot)
        logger.info(
            "Loaded %s (%d vehicles)", args.snapshot, len(snapshot.vehicles)
        )

        def run_once():
            return analyze_snapshot(snapshot)

    else:
        rng = np.random.default_rng(args.seed)
        scenes = [
            random_scene(rng, args.vehicles) for _ in range(args.snapshots)
        ]
        scene_iter = iter(scenes)

        def run_once():
            observer, vehicles = next(scene_iter)
            return analyze_road_vision(vehicles, observer, ROAD_LENGTH)

    times_ms = []
    last = None
    for _ in range(args.snapshots):
        start = time.perf_counter()
        last = run_once()
        times_ms.append((time.perf_counter() - start) * 1000)

    logger.info("Snapshots: %d", len(times_ms))
    logger.info("Median: %.3f ms", statistics.median(times_ms))
    logger.info("Mean:   %.3f ms", statistics.mean(times_ms))
    logger.info("Max:    %.3f ms", max(times_ms))
    over = sum(1 for t in times_ms if t > FRAME_BUDGET_MS)
    if over:
        logger.warning(
            "%d snapshots exceeded the %.1f ms budget", over, FRAME_BUDGET_MS
        )
    if last is not None:
        counts = last.status_counts()
        logger.info(
            "Last snapshot: %s",
            ", ".join(f"{s.value}={n}" for s, n in counts.items()),
        )


if __name__ == "__main__":
    main()
