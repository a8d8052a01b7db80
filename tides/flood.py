"""Multi-source flood fill over a terrain snapshot."""

from __future__ import annotations

from collections import deque
import logging

import numpy as np

from tides.grid import Terrain

logger = logging.getLogger(__name__)


_DIRECTIONS_4 = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
)
_DIRECTIONS_8 = _DIRECTIONS_4 + (
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
)


def neighbor_offsets(connectivity: int) -> tuple[tuple[int, int], ...]:
    """Return ``(dy, dx)`` offsets for a 4- or 8-connected neighborhood."""

    if connectivity == 4:
        return _DIRECTIONS_4
    if connectivity == 8:
        return _DIRECTIONS_8
    raise ValueError("connectivity must be 4 or 8")


def flooded_regions(terrain: Terrain, height: float, *, connectivity: int = 4) -> np.ndarray:
    """Compute the submersion mask for a water level of ``height``.

    Water starts at every source cell and spreads to neighbors whose terrain
    is no higher than ``height``. Sources are flooded even when they sit above
    the water level. The frontier is processed first-in first-out.
    """

    offsets = neighbor_offsets(connectivity)
    rows, cols = terrain.shape
    floodable = (terrain.heights <= height).ravel()
    flooded = np.zeros(rows * cols, dtype=bool)

    queue: deque[int] = deque()
    for row, col in terrain.sources:
        idx = row * cols + col
        if not flooded[idx]:
            flooded[idx] = True
            queue.append(idx)

    while queue:
        current = queue.popleft()
        y, x = divmod(current, cols)
        for dy, dx in offsets:
            ny = y + dy
            nx = x + dx
            if ny < 0 or ny >= rows or nx < 0 or nx >= cols:
                continue
            idx = ny * cols + nx
            if floodable[idx] and not flooded[idx]:
                flooded[idx] = True
                queue.append(idx)

    mask = flooded.reshape(rows, cols)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Flooded %d of %d cells at water height %.3f",
            int(mask.sum()),
            rows * cols,
            height,
        )
    return mask
