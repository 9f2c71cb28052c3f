"""Dense two-dimensional arrays addressed by (i, j) cell indices."""

from __future__ import annotations

from typing import Any


class DenseArray2D:
    """A fixed-size grid of ``x0_cells`` by ``x1_cells`` values, stored column-major by j."""

    def __init__(self, x0_cells: int, x1_cells: int, default: Any = False) -> None:
        if x0_cells < 0 or x1_cells < 0:
            raise ValueError("cell counts must be non-negative")
        self._x0_cells = x0_cells
        self._x1_cells = x1_cells
        self._data = [default] * (x0_cells * x1_cells)

    def size(self) -> tuple[int, int]:
        return self._x0_cells, self._x1_cells

    def _wrapped_index(self, index: tuple[int, int]) -> int:
        i, j = index
        if not (0 <= i < self._x0_cells and 0 <= j < self._x1_cells):
            raise IndexError(f"cell {index} is outside a {self.size()} grid")
        return j * self._x0_cells + i

    def __getitem__(self, index: tuple[int, int]) -> Any:
        return self._data[self._wrapped_index(index)]

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        self._data[self._wrapped_index(index)] = value

    def data(self) -> list[Any]:
        """A copy of the flat storage, ordered by j then i."""
        return list(self._data)