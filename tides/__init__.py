"""Flood and island analysis for terrains under rising water."""

from .config import DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_SEED, FloodConfig, TidesConfig
from .grid import GridLocation, GridLocationError, Terrain, TerrainError
from .rising_tides import RisingTides

__all__ = [
    "DEFAULT_ROWS",
    "DEFAULT_COLS",
    "DEFAULT_SEED",
    "FloodConfig",
    "TidesConfig",
    "GridLocation",
    "GridLocationError",
    "Terrain",
    "TerrainError",
    "RisingTides",
]
