"""Island and coverage metrics for one water height."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from tides.islands import label_islands


@dataclass(frozen=True)
class IslandMetrics:
    """Island and land coverage summary for a submersion mask."""

    water_height: float
    num_islands: int
    largest_island_area: int
    visible_land_cells: int
    flooded_cells: int
    largest_island_ratio: float
    land_fraction: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def island_metrics(flooded: np.ndarray, water_height: float, *, connectivity: int = 8) -> IslandMetrics:
    """Compute island statistics for a submersion mask."""

    if flooded.ndim != 2:
        raise ValueError("flooded mask must be 2D")

    mask = flooded.astype(bool, copy=False)
    total_cells = int(mask.size)
    flooded_cells = int(mask.sum())
    visible = total_cells - flooded_cells

    if visible == 0:
        return IslandMetrics(float(water_height), 0, 0, 0, flooded_cells, 0.0, 0.0)

    _, sizes = label_islands(mask, connectivity=connectivity)
    largest = int(sizes.max())
    return IslandMetrics(
        water_height=float(water_height),
        num_islands=int(sizes.shape[0]),
        largest_island_area=largest,
        visible_land_cells=visible,
        flooded_cells=flooded_cells,
        largest_island_ratio=float(largest / visible),
        land_fraction=float(visible / total_cells),
    )
