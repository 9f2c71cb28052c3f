"""Paths of waypoints, unwrapping over periodic bounds, and CSV export."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from itertools import pairwise
from typing import Iterable, Sequence

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Path:
    """A sequence of waypoints in an n-dimensional space."""

    waypoints: list[np.ndarray] = field(default_factory=list)
    valid: bool = True

    def __post_init__(self) -> None:
        self.waypoints = [np.asarray(w, dtype=float) for w in self.waypoints]

    def length(self) -> float:
        """Sum of the Euclidean distances between consecutive waypoints."""
        return float(sum(np.linalg.norm(b - a) for a, b in pairwise(self.waypoints)))


def _round_half_away(values: np.ndarray) -> np.ndarray:
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def unwrap_waypoints(
    waypoints: Iterable[Sequence[float]],
    lower_bounds: Sequence[float],
    upper_bounds: Sequence[float],
) -> list[np.ndarray]:
    """Shift each waypoint by whole periods so it lies closest to the one before it."""
    lower = np.asarray(lower_bounds, dtype=float)
    upper = np.asarray(upper_bounds, dtype=float)
    scale = upper - lower
    result: list[np.ndarray] = []
    for waypoint in waypoints:
        point = np.array(waypoint, dtype=float)
        if result:
            previous = result[-1]
            for dim in np.flatnonzero((point < lower) | (point > upper)):
                logger.warning(
                    "Value: %s is outside the bounds [%s, %s] for dimension %d",
                    point[dim], lower[dim], upper[dim], dim,
                )
            periods = _round_half_away((previous - point) / scale)
            point = point + periods * scale
        result.append(point)
    return result


def unwrap_path(path: Path, lower_bounds: Sequence[float], upper_bounds: Sequence[float]) -> Path:
    """Return a copy of ``path`` with its waypoints unwrapped."""
    return Path(unwrap_waypoints(path.waypoints, lower_bounds, upper_bounds), valid=path.valid)


def write_waypoints_csv(waypoints: Iterable[Sequence[float]], filename: str | os.PathLike) -> None:
    """Write one waypoint per line, values separated by commas."""
    with open(filename, "w", encoding="utf-8") as handle:
        for waypoint in waypoints:
            handle.write(",".join(f"{float(v):g}" for v in waypoint))
            handle.write("\n")
    logger.info("Waypoints written to %s", filename)