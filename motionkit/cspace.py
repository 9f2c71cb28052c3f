"""Grid-discretised two-dimensional configuration spaces."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import numpy as np

from motionkit.geometry import is_point_inside_polygon
from motionkit.grid import DenseArray2D

logger = logging.getLogger(__name__)

PointLike = Sequence[float]

_SEGMENT_STEPS = 50


class GridCSpace(DenseArray2D):
    """A boolean occupancy grid spanning ``[x0_min, x0_max] x [x1_min, x1_max]``."""

    def __init__(
        self,
        x0_cells: int,
        x1_cells: int,
        x0_min: float,
        x0_max: float,
        x1_min: float,
        x1_max: float,
    ) -> None:
        if x0_cells <= 0 or x1_cells <= 0:
            raise ValueError("a configuration space grid needs at least one cell per axis")
        super().__init__(x0_cells, x1_cells, False)
        self._x0_bounds = (float(x0_min), float(x0_max))
        self._x1_bounds = (float(x1_min), float(x1_max))

    @property
    def x0_bounds(self) -> tuple[float, float]:
        return self._x0_bounds

    @property
    def x1_bounds(self) -> tuple[float, float]:
        return self._x1_bounds

    def point_from_cell(self, cell: tuple[int, int]) -> np.ndarray:
        """The lower corner of cell ``(i, j)`` in configuration coordinates."""
        i, j = cell
        cells0, cells1 = self.size()
        (x0_lo, x0_hi), (x1_lo, x1_hi) = self._x0_bounds, self._x1_bounds
        x = x0_lo + i * (x0_hi - x0_lo) / cells0
        y = x1_lo + j * (x1_hi - x1_lo) / cells1
        return np.array([x, y])

    def cell_from_point(self, x0: float, x1: float) -> tuple[int, int]:
        """The cell that contains the configuration ``(x0, x1)``."""
        cells0, cells1 = self.size()
        (x0_lo, x0_hi), (x1_lo, x1_hi) = self._x0_bounds, self._x1_bounds
        width0 = (x0_hi - x0_lo) / cells0
        width1 = (x1_hi - x1_lo) / cells1
        return math.floor((x0 - x0_lo) / width0), math.floor((x1 - x1_lo) / width1)

    def populate(self, obstacles: Iterable[Sequence[PointLike]]) -> None:
        """Mark every cell whose corner point lies inside an obstacle polygon."""
        logger.debug("Finding obstacles")
        polygons = [list(obstacle) for obstacle in obstacles]
        cells0, cells1 = self.size()
        for i in range(cells0):
            for j in range(cells1):
                point = self.point_from_cell((i, j))
                if any(is_point_inside_polygon(point, polygon) for polygon in polygons):
                    self[i, j] = True

    def segment_in_collision(
        self,
        start: PointLike,
        end: PointLike,
        obstacles: Iterable[Sequence[PointLike]],
    ) -> bool:
        """Sample the segment at 50 evenly spaced points from ``start`` (excluding ``end``)."""
        begin = np.asarray(start, dtype=float)
        step = (np.asarray(end, dtype=float) - begin) / _SEGMENT_STEPS
        polygons = [list(obstacle) for obstacle in obstacles]
        for k in range(_SEGMENT_STEPS):
            point = begin + k * step
            if any(is_point_inside_polygon(point, polygon) for polygon in polygons):
                return True
        return False