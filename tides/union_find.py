"""Weighted quick-union with path compression over a 2D grid."""

from __future__ import annotations

import operator
from typing import Sequence

import numpy as np

from tides.grid import GridLocation, GridLocationError, check_location


class WeightedQuickUnionUF:
    """Disjoint-set forest with one entry per cell of a ``rows x cols`` grid.

    Cells are stored by flat index ``row * cols + col``. Every cell starts as
    its own singleton component.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive")
        self.rows = int(rows)
        self.cols = int(cols)
        n = self.rows * self.cols
        self._parent = np.arange(n, dtype=np.int64)
        self._size = np.ones(n, dtype=np.int64)
        self._count = n

    @property
    def count(self) -> int:
        """Number of components currently in the forest."""

        return self._count

    def index(self, cell: Sequence[int]) -> int:
        loc = check_location(cell, self.rows, self.cols)
        return loc.row * self.cols + loc.col

    def _check_index(self, index: int) -> int:
        flat = operator.index(index)
        if not 0 <= flat < self._parent.shape[0]:
            raise GridLocationError(f"flat index {flat} is outside the {self.rows}x{self.cols} grid")
        return flat

    def location(self, index: int) -> GridLocation:
        row, col = divmod(self._check_index(index), self.cols)
        return GridLocation(row, col)

    def find(self, cell: Sequence[int]) -> GridLocation:
        """Return the root cell of the component containing ``cell``."""

        return self.location(self.find_index(self.index(cell)))

    def find_index(self, index: int) -> int:
        """Root flat index of the component containing flat ``index``."""

        start = self._check_index(index)
        parent = self._parent
        root = start
        while parent[root] != root:
            root = int(parent[root])

        # Repoint every node on the walked path directly at the root.
        current = start
        while current != root:
            next_node = int(parent[current])
            parent[current] = root
            current = next_node
        return root

    def union(self, a: Sequence[int], b: Sequence[int]) -> None:
        """Merge the components containing ``a`` and ``b``."""

        self.union_index(self.index(a), self.index(b))

    def union_index(self, a: int, b: int) -> None:
        root_a = self.find_index(a)
        root_b = self.find_index(b)
        if root_a == root_b:
            return

        size = self._size
        if size[root_a] < size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        size[root_a] += size[root_b]
        self._count -= 1

    def connected(self, a: Sequence[int], b: Sequence[int]) -> bool:
        return self.find_index(self.index(a)) == self.find_index(self.index(b))

    def component_size(self, cell: Sequence[int]) -> int:
        return int(self._size[self.find_index(self.index(cell))])

    def roots(self) -> np.ndarray:
        """Root index of every cell, as a ``rows x cols`` array."""

        flat = np.fromiter(
            (self.find_index(i) for i in range(self._parent.shape[0])),
            dtype=np.int64,
            count=self._parent.shape[0],
        )
        return flat.reshape(self.rows, self.cols)
