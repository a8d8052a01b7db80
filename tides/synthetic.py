"""Deterministic synthetic island terrains for demos and property checks."""

from __future__ import annotations

import numpy as np
from scipy.ndimage import zoom

from tides.config import SyntheticConfig
from tides.grid import GridLocation, Terrain


def _lattice_noise(rows: int, cols: int, rng: np.random.Generator, *, res_y: int, res_x: int) -> np.ndarray:
    """Upsample a coarse random lattice to ``rows x cols`` with cubic splines."""

    lattice = rng.uniform(-1.0, 1.0, size=(res_y + 1, res_x + 1))
    factors = (rows / lattice.shape[0], cols / lattice.shape[1])
    field = zoom(lattice, factors, order=3, mode="nearest")
    return field[:rows, :cols]


def fbm_field(
    rows: int,
    cols: int,
    rng: np.random.Generator,
    *,
    base_res: int = 3,
    octaves: int = 4,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> np.ndarray:
    """Sum octaves of lattice noise, normalized by total amplitude."""

    field = np.zeros((rows, cols), dtype=np.float64)
    amplitude = 1.0
    total = 0.0
    aspect = cols / max(rows, 1)

    for octave in range(octaves):
        res_y = max(1, int(round(base_res * lacunarity**octave)))
        res_x = max(1, int(round(res_y * aspect)))
        field += amplitude * _lattice_noise(rows, cols, rng, res_y=res_y, res_x=res_x)
        total += amplitude
        amplitude *= gain

    if total == 0:
        return field
    return field / total


def border_sources(heights: np.ndarray, max_height: float) -> tuple[GridLocation, ...]:
    """Border cells at or below ``max_height``, else the lowest border cell."""

    border = np.zeros(heights.shape, dtype=bool)
    border[0, :] = True
    border[-1, :] = True
    border[:, 0] = True
    border[:, -1] = True

    cells = np.argwhere(border & (heights <= max_height))
    if cells.shape[0] == 0:
        border_heights = np.where(border, heights, np.inf)
        cells = np.array([np.unravel_index(int(np.argmin(border_heights)), heights.shape)])
    return tuple(GridLocation(int(r), int(c)) for r, c in cells)


def generate_synthetic_terrain(
    rows: int,
    cols: int,
    seed: int,
    *,
    config: SyntheticConfig | None = None,
) -> Terrain:
    """Create a seeded island-like terrain whose edges drain to the sea.

    Heights span ``[min_height_m, max_height_m]``; water sources sit on the
    low border cells.
    """

    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive")
    cfg = config or SyntheticConfig()
    rng = np.random.Generator(np.random.PCG64(int(seed) & ((1 << 64) - 1)))

    noise = fbm_field(
        rows,
        cols,
        rng,
        base_res=cfg.base_res,
        octaves=cfg.octaves,
        lacunarity=cfg.lacunarity,
        gain=cfg.gain,
    )

    yy, xx = np.indices((rows, cols), dtype=np.float64)
    ny = (yy / max(rows - 1, 1)) * 2.0 - 1.0
    nx = (xx / max(cols - 1, 1)) * 2.0 - 1.0
    radius = np.sqrt(nx**2 + ny**2) / np.sqrt(2.0)

    potential = (noise * 0.5 + 0.5) - cfg.falloff_strength * radius**cfg.falloff_power
    low = float(potential.min())
    scale = max(float(potential.max()) - low, 1e-9)
    unit = (potential - low) / scale
    heights = cfg.min_height_m + unit * (cfg.max_height_m - cfg.min_height_m)

    return Terrain(heights, border_sources(heights, cfg.source_max_height_m))
