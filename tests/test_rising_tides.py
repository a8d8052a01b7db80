from __future__ import annotations

import numpy as np
import pytest

from tides.config import FloodConfig
from tides.grid import GridLocation, GridLocationError, Terrain
from tides.rising_tides import RisingTides
from tides.synthetic import generate_synthetic_terrain


def _ringed_peak() -> RisingTides:
    heights = [[0, 0, 0], [0, 10, 0], [0, 0, 0]]
    return RisingTides(Terrain.from_nested(heights, [(0, 0)]))


def test_elevation_extrema_ignores_order() -> None:
    a = RisingTides(Terrain.from_nested([[1, 5], [-3, 9]], [(0, 0)]))
    b = RisingTides(Terrain.from_nested([[9, -3], [5, 1]], [(0, 0)]))

    assert a.elevation_extrema() == (-3.0, 9.0)
    assert b.elevation_extrema() == (-3.0, 9.0)


def test_elevation_extrema_of_all_negative_terrain() -> None:
    tides = RisingTides(Terrain.from_nested([[-5.0, -2.0]], [(0, 0)]))

    assert tides.elevation_extrema() == (-5.0, -2.0)


def test_single_cell_has_no_visible_land() -> None:
    tides = RisingTides(Terrain.from_nested([[3.0]], [(0, 0)]))

    assert tides.flooded_regions(5.0).tolist() == [[True]]
    assert tides.total_visible_land(5.0) == 0
    assert tides.count_islands(5.0) == 0


def test_ringed_peak_queries() -> None:
    tides = _ringed_peak()

    assert tides.total_visible_land(0.0) == 1
    assert tides.count_islands(0.0) == 1
    assert tides.is_flooded(0.0, (0, 1))
    assert not tides.is_flooded(0.0, GridLocation(1, 1))
    assert tides.height_above_water(0.0, (1, 1)) == pytest.approx(10.0)
    assert tides.height_above_water(4.0, (2, 2)) == pytest.approx(-4.0)


def test_diagonal_landmasses_form_one_island() -> None:
    heights = [[5, 0, 0], [0, 3, 0], [0, 0, 0]]
    tides = RisingTides(Terrain.from_nested(heights, [(2, 2)]))

    assert tides.total_visible_land(0.0) == 2
    assert tides.count_islands(0.0) == 1
    assert tides.count_islands(4.0) == 1
    assert tides.count_islands(6.0) == 0


def test_land_delta_sign_and_symmetry() -> None:
    tides = _ringed_peak()

    assert tides.land_delta(0.0, 20.0) == 1
    assert tides.land_delta(20.0, 0.0) == -1
    assert tides.land_delta(3.0, 3.0) == 0

    terrain = generate_synthetic_terrain(32, 40, 21)
    synthetic = RisingTides(terrain)
    for a, b in [(-10.0, 35.0), (5.0, 90.0), (60.0, 0.0)]:
        assert synthetic.land_delta(a, b) == -synthetic.land_delta(b, a)


def test_visible_land_and_flooded_cells_cover_grid() -> None:
    terrain = generate_synthetic_terrain(30, 45, 4)
    tides = RisingTides(terrain)

    for height in np.linspace(-50.0, 130.0, 7):
        mask = tides.flooded_regions(float(height))
        assert tides.total_visible_land(float(height)) + int(mask.sum()) == terrain.rows * terrain.cols


def test_sources_are_always_flooded() -> None:
    terrain = generate_synthetic_terrain(20, 20, 2)
    tides = RisingTides(terrain)

    for source in terrain.sources:
        assert tides.is_flooded(-1000.0, source)


@pytest.mark.parametrize("cell", [(3, 0), (0, 3), (-1, 1), (1, -1)])
def test_out_of_bounds_queries_fail_fast(cell) -> None:
    tides = _ringed_peak()

    with pytest.raises(GridLocationError):
        tides.is_flooded(0.0, cell)
    with pytest.raises(IndexError):
        tides.height_above_water(0.0, cell)


def test_eight_connected_flooding_reaches_diagonals() -> None:
    terrain = Terrain.from_nested([[0, 5], [5, 0]], [(0, 0)])

    four = RisingTides(terrain)
    eight = RisingTides(terrain, config=FloodConfig(flood_connectivity=8))

    assert not four.is_flooded(0.0, (1, 1))
    assert eight.is_flooded(0.0, (1, 1))


def test_island_metrics_summary() -> None:
    heights = [[9, 0, 9], [0, 0, 0], [9, 9, 0]]
    metrics = RisingTides(Terrain.from_nested(heights, [(1, 1)])).island_metrics(1.0)

    assert metrics.num_islands == 3
    assert metrics.largest_island_area == 2
    assert metrics.visible_land_cells == 4
    assert metrics.flooded_cells == 5
    assert metrics.largest_island_ratio == pytest.approx(0.5)
    assert metrics.land_fraction == pytest.approx(4 / 9)
    assert metrics.to_dict()["water_height"] == 1.0


def test_island_metrics_when_everything_floods() -> None:
    metrics = _ringed_peak().island_metrics(50.0)

    assert metrics.num_islands == 0
    assert metrics.visible_land_cells == 0
    assert metrics.flooded_cells == 9
    assert metrics.land_fraction == 0.0


def test_fractional_cells_are_not_truncated() -> None:
    tides = _ringed_peak()

    with pytest.raises(GridLocationError):
        tides.height_above_water(0.0, (1.9, 1.9))
    with pytest.raises(GridLocationError):
        tides.is_flooded(0.0, (0.5, 0))
