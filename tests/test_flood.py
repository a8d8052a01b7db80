from __future__ import annotations

import logging

import numpy as np
import pytest
from scipy import ndimage

from tides.flood import flooded_regions
from tides.grid import Terrain
from tides.synthetic import generate_synthetic_terrain


def _reachable_oracle(terrain: Terrain, height: float) -> np.ndarray:
    allowed = terrain.heights <= height
    for row, col in terrain.sources:
        allowed[row, col] = True
    labels, _ = ndimage.label(allowed)
    seeded = {int(labels[row, col]) for row, col in terrain.sources}
    return np.isin(labels, list(seeded)) & allowed


def test_single_cell_source_floods() -> None:
    terrain = Terrain.from_nested([[3.0]], [(0, 0)])
    mask = flooded_regions(terrain, 5.0)

    assert mask.dtype == bool
    assert mask.tolist() == [[True]]


def test_raised_center_stays_dry() -> None:
    heights = [[0, 0, 0], [0, 10, 0], [0, 0, 0]]
    terrain = Terrain.from_nested(heights, [(0, 0)])
    mask = flooded_regions(terrain, 0.0)

    expected = np.ones((3, 3), dtype=bool)
    expected[1, 1] = False
    assert np.array_equal(mask, expected)


def test_sources_above_water_are_flooded_and_spread() -> None:
    terrain = Terrain.from_nested([[9, 0, 0]], [(0, 0)])
    assert flooded_regions(terrain, 0.0).tolist() == [[True, True, True]]

    walled = Terrain.from_nested([[0, 9, 0]], [(0, 0)])
    assert flooded_regions(walled, 0.0).tolist() == [[True, False, False]]


def test_water_does_not_cross_diagonals_by_default() -> None:
    terrain = Terrain.from_nested([[0, 5], [5, 0]], [(0, 0)])

    assert flooded_regions(terrain, 0.0).tolist() == [[True, False], [False, False]]
    assert flooded_regions(terrain, 0.0, connectivity=8).tolist() == [[True, False], [False, True]]


def test_limiting_heights() -> None:
    terrain = generate_synthetic_terrain(24, 32, 7)
    lowest = float(terrain.heights.min())
    highest = float(terrain.heights.max())

    below = flooded_regions(terrain, lowest - 1.0)
    expected = np.zeros(terrain.shape, dtype=bool)
    for row, col in terrain.sources:
        expected[row, col] = True
    assert np.array_equal(below, expected)

    assert flooded_regions(terrain, highest + 1.0).all()


def test_duplicate_sources_are_harmless() -> None:
    heights = [[0, 1], [2, 3]]
    once = Terrain.from_nested(heights, [(0, 0)])
    twice = Terrain.from_nested(heights, [(0, 0), (0, 0)])

    assert np.array_equal(flooded_regions(once, 1.5), flooded_regions(twice, 1.5))


def test_flood_is_monotonic_in_height() -> None:
    terrain = generate_synthetic_terrain(40, 56, 3)
    previous = flooded_regions(terrain, -60.0)
    for height in np.linspace(-40.0, 130.0, 12):
        current = flooded_regions(terrain, float(height))
        assert not np.any(previous & ~current)
        previous = current


def test_flood_is_idempotent() -> None:
    terrain = generate_synthetic_terrain(32, 32, 11)
    a = flooded_regions(terrain, 20.0)
    b = flooded_regions(terrain, 20.0)

    assert np.array_equal(a, b)
    assert a is not b


@pytest.mark.parametrize("height", [-20.0, 0.0, 15.0, 40.0, 80.0])
def test_flood_matches_component_reachability(height: float) -> None:
    terrain = generate_synthetic_terrain(48, 64, 5)

    assert np.array_equal(flooded_regions(terrain, height), _reachable_oracle(terrain, height))


def test_invalid_connectivity_is_rejected() -> None:
    terrain = Terrain.from_nested([[0.0]], [(0, 0)])

    with pytest.raises(ValueError):
        flooded_regions(terrain, 0.0, connectivity=6)


def test_flood_count_is_logged_only_at_debug_level(caplog) -> None:
    terrain = Terrain.from_nested([[0, 0, 9]], [(0, 0)])

    with caplog.at_level(logging.INFO, logger="tides.flood"):
        flooded_regions(terrain, 0.0)
    assert not caplog.records

    with caplog.at_level(logging.DEBUG, logger="tides.flood"):
        flooded_regions(terrain, 0.0)
    assert "Flooded 2 of 3 cells" in caplog.text
