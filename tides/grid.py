"""Immutable terrain snapshot and grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass
import operator
from typing import Iterable, NamedTuple, Sequence

import numpy as np


class TerrainError(ValueError):
    """Raised when terrain heights or sources are malformed."""


class GridLocationError(IndexError):
    """Raised when a coordinate lies outside the terrain grid."""


class GridLocation(NamedTuple):
    """One cell of the grid, compared and hashed by value."""

    row: int
    col: int


def as_location(cell: Sequence[int]) -> GridLocation:
    """Coerce a ``(row, col)`` pair into a :class:`GridLocation`."""

    try:
        row, col = cell
    except (TypeError, ValueError) as exc:
        raise GridLocationError(f"expected a (row, col) pair, got {cell!r}") from exc
    for value in (row, col):
        # Fractional or boolean indices would silently pick a different cell.
        if isinstance(value, (bool, np.bool_)):
            raise GridLocationError(f"cell {cell!r} must use integer indices")
        try:
            operator.index(value)
        except TypeError as exc:
            raise GridLocationError(f"cell {cell!r} must use integer indices") from exc
    return GridLocation(operator.index(row), operator.index(col))


def check_location(cell: Sequence[int], rows: int, cols: int) -> GridLocation:
    """Return ``cell`` as a location, failing fast if it is outside ``rows x cols``.

    Negative indices are rejected rather than wrapped around the grid.
    """

    loc = as_location(cell)
    if not (0 <= loc.row < rows and 0 <= loc.col < cols):
        raise GridLocationError(f"cell {tuple(loc)} is outside the {rows}x{cols} grid")
    return loc


@dataclass(frozen=True)
class Terrain:
    """Rectangular height grid plus the cells where water enters it.

    ``heights`` is stored as a read-only float64 copy so queries can share it
    without defensive copies.
    """

    heights: np.ndarray
    sources: tuple[GridLocation, ...]

    def __post_init__(self) -> None:
        try:
            heights = np.array(self.heights, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise TerrainError(f"heights must be a rectangular grid of numbers: {exc}") from exc
        if heights.ndim != 2:
            raise TerrainError("heights must be 2D")
        if heights.size == 0:
            raise TerrainError("heights must contain at least one cell")
        if np.isnan(heights).any():
            raise TerrainError("heights must not contain NaN")
        heights.setflags(write=False)

        rows, cols = heights.shape
        sources: list[GridLocation] = []
        for cell in self.sources:
            try:
                sources.append(check_location(cell, rows, cols))
            except GridLocationError as exc:
                raise TerrainError(f"invalid source: {exc}") from exc
        if not sources:
            raise TerrainError("terrain needs at least one water source")

        object.__setattr__(self, "heights", heights)
        object.__setattr__(self, "sources", tuple(sources))

    @classmethod
    def from_nested(
        cls,
        heights: Iterable[Iterable[float]],
        sources: Iterable[Sequence[int]],
    ) -> "Terrain":
        """Build a terrain from nested row lists and ``(row, col)`` source pairs."""

        try:
            rows = [list(row) for row in heights]
            source_cells = tuple(sources)
        except TypeError as exc:
            raise TerrainError(f"heights must be a list of rows and sources a list of cells: {exc}") from exc
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise TerrainError(f"heights rows have unequal lengths: {sorted(widths)}")
        return cls(rows, source_cells)

    @property
    def shape(self) -> tuple[int, int]:
        return self.heights.shape

    @property
    def rows(self) -> int:
        return self.heights.shape[0]

    @property
    def cols(self) -> int:
        return self.heights.shape[1]

    def locate(self, cell: Sequence[int]) -> GridLocation:
        """Bounds-check ``cell`` against this terrain."""

        return check_location(cell, self.rows, self.cols)

    def height_at(self, cell: Sequence[int]) -> float:
        loc = self.locate(cell)
        return float(self.heights[loc.row, loc.col])
