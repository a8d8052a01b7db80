"""Configuration models for flood and island analysis."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


DEFAULT_ROWS = 64
DEFAULT_COLS = 96
DEFAULT_SEED = 1


@dataclass(frozen=True)
class FloodConfig:
    """Neighborhoods used by the flood fill and the island counter.

    Water spreads through side neighbors and islands join through corners.
    ``flood_connectivity=8`` and ``island_connectivity=4`` are non-standard
    variants kept for comparison runs.
    """

    flood_connectivity: int = 4
    island_connectivity: int = 8


@dataclass(frozen=True)
class SyntheticConfig:
    """Controls deterministic synthetic terrain generation in meters."""

    base_res: int = 3
    octaves: int = 4
    lacunarity: float = 2.0
    gain: float = 0.5
    falloff_strength: float = 0.85
    falloff_power: float = 2.0
    min_height_m: float = -40.0
    max_height_m: float = 120.0
    source_max_height_m: float = 0.0


@dataclass(frozen=True)
class RenderConfig:
    """Flood preview rendering configuration."""

    water_rgb: tuple[int, int, int] = (40, 90, 190)
    land_low_rgb: tuple[int, int, int] = (70, 130, 60)
    land_high_rgb: tuple[int, int, int] = (235, 230, 215)
    water_shade_mix: float = 0.25


@dataclass(frozen=True)
class TidesConfig:
    """Primary analysis configuration."""

    flood: FloodConfig = field(default_factory=FloodConfig)
    synthetic: SyntheticConfig = field(default_factory=SyntheticConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
