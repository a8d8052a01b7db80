"""Island counting over the unflooded part of a submersion mask."""

from __future__ import annotations

import numpy as np

from tides.flood import neighbor_offsets
from tides.union_find import WeightedQuickUnionUF


def _join_land(flooded: np.ndarray, connectivity: int) -> WeightedQuickUnionUF:
    if flooded.ndim != 2:
        raise ValueError("flooded mask must be 2D")

    # Each unordered neighbor pair only needs one union, so only the offsets
    # pointing forward in row-major order are visited.
    forward = [(dy, dx) for dy, dx in neighbor_offsets(connectivity) if (dy, dx) > (0, 0)]

    rows, cols = flooded.shape
    uf = WeightedQuickUnionUF(rows, cols)
    land = ~flooded.astype(bool, copy=False)
    land_flat = land.ravel()

    for start in np.flatnonzero(land_flat):
        y, x = divmod(int(start), cols)
        for dy, dx in forward:
            ny = y + dy
            nx = x + dx
            if ny < 0 or ny >= rows or nx < 0 or nx >= cols:
                continue
            idx = ny * cols + nx
            if land_flat[idx]:
                uf.union_index(int(start), idx)
    return uf


def count_islands(flooded: np.ndarray, *, connectivity: int = 8) -> int:
    """Count maximal connected groups of unflooded cells.

    Diagonal neighbors are connected by default, so two land cells sharing
    only a corner belong to the same island.
    """

    uf = _join_land(flooded, connectivity)
    land_idx = np.flatnonzero(~flooded.astype(bool, copy=False).ravel())
    return len({uf.find_index(int(i)) for i in land_idx})


def label_islands(flooded: np.ndarray, *, connectivity: int = 8) -> tuple[np.ndarray, np.ndarray]:
    """Label every island and measure it.

    Returns ``(labels, sizes)``. ``labels`` holds ``-1`` for flooded cells and
    ``0..n-1`` for land, numbered in row-major order of each island's first
    cell. ``sizes[i]`` is the number of cells in island ``i``.
    """

    uf = _join_land(flooded, connectivity)
    rows, cols = flooded.shape
    land_flat = ~flooded.astype(bool, copy=False).ravel()
    labels = np.full(rows * cols, -1, dtype=np.int64)

    ids: dict[int, int] = {}
    for i in np.flatnonzero(land_flat):
        root = uf.find_index(int(i))
        labels[i] = ids.setdefault(root, len(ids))

    sizes = np.bincount(labels[land_flat], minlength=len(ids)).astype(np.int64)
    return labels.reshape(rows, cols), sizes
