"""Point queries about a terrain under a rising water level."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from tides.config import FloodConfig
from tides.flood import flooded_regions
from tides.grid import Terrain
from tides.islands import count_islands
from tides.metrics import IslandMetrics, island_metrics

logger = logging.getLogger(__name__)


class RisingTides:
    """Answers flood, land and island questions for one immutable terrain.

    Every query recomputes its own submersion mask; nothing is cached between
    calls, so one instance can be shared across threads.
    """

    def __init__(self, terrain: Terrain, *, config: FloodConfig | None = None) -> None:
        self.terrain = terrain
        self.config = config or FloodConfig()

    def elevation_extrema(self) -> tuple[float, float]:
        """Return the lowest and highest terrain heights."""

        heights = self.terrain.heights
        return float(heights.min()), float(heights.max())

    def flooded_regions(self, height: float) -> np.ndarray:
        """Submersion mask for a water level of ``height``; ``True`` is flooded."""

        return flooded_regions(
            self.terrain,
            height,
            connectivity=self.config.flood_connectivity,
        )

    def is_flooded(self, height: float, cell: Sequence[int]) -> bool:
        loc = self.terrain.locate(cell)
        return bool(self.flooded_regions(height)[loc.row, loc.col])

    def height_above_water(self, height: float, cell: Sequence[int]) -> float:
        """Signed distance from the water surface to the cell's terrain.

        Negative values mean the cell lies below the water level by that much.
        """

        return self.terrain.height_at(cell) - float(height)

    def total_visible_land(self, height: float) -> int:
        """Number of cells the water does not reach."""

        return int(np.count_nonzero(~self.flooded_regions(height)))

    def land_delta(self, height: float, new_height: float) -> int:
        """Land lost going from ``height`` to ``new_height``.

        Positive when land disappears, negative when land is gained.
        """

        return self.total_visible_land(height) - self.total_visible_land(new_height)

    def count_islands(self, height: float) -> int:
        mask = self.flooded_regions(height)
        islands = count_islands(mask, connectivity=self.config.island_connectivity)
        logger.debug("Found %d islands at water height %.3f", islands, height)
        return islands

    def island_metrics(self, height: float) -> IslandMetrics:
        return island_metrics(
            self.flooded_regions(height),
            height,
            connectivity=self.config.island_connectivity,
        )
