"""CLI entry point for rising-water terrain analysis."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import logging
from pathlib import Path
import platform
import time

import numpy as np
from tides.config import DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_SEED, FloodConfig, TidesConfig
from tides.derive import flood_mask_u8, flood_overlay_rgb, island_labels_u8
from tides.grid import GridLocationError, Terrain, TerrainError
from tides.io import load_terrain, resolve_output_dir, write_json, write_png_u8, write_terrain_json
from tides.islands import label_islands
from tides.rising_tides import RisingTides
from tides.synthetic import generate_synthetic_terrain


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flood, land and island analysis under a rising water level")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--terrain", help="Terrain file (.json or .npz) with heights and water sources")
    source.add_argument(
        "--synthetic",
        type=int,
        nargs="?",
        const=DEFAULT_SEED,
        metavar="SEED",
        help="Generate a seeded synthetic terrain instead",
    )
    parser.add_argument("--rows", type=int, help=f"Synthetic terrain rows (default {DEFAULT_ROWS}); only with --synthetic")
    parser.add_argument("--cols", type=int, help=f"Synthetic terrain columns (default {DEFAULT_COLS}); only with --synthetic")
    parser.add_argument("--height", type=float, required=True, help="Water height to analyze")
    parser.add_argument("--new-height", type=float, help="Second water height for a land change estimate")
    parser.add_argument(
        "--cell",
        type=int,
        nargs=2,
        action="append",
        metavar=("ROW", "COL"),
        default=[],
        help="Report flood status for a cell (repeatable)",
    )
    parser.add_argument(
        "--connectivity",
        type=int,
        choices=(4, 8),
        default=4,
        help=(
            "Neighborhood the water spreads through. 4 is the standard flood model; "
            "8 is a non-standard extension that lets water cross diagonal corners"
        ),
    )
    parser.add_argument("--out", help="Write mask previews and summary to this directory")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite files in existing output directory")
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write summary.json alongside the previews",
    )
    parser.add_argument("--save-terrain", metavar="PATH", help="Write the analyzed terrain as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.terrain and (args.rows is not None or args.cols is not None):
        parser.error("--rows and --cols only apply to --synthetic terrains")
    if args.rows is None:
        args.rows = DEFAULT_ROWS
    if args.cols is None:
        args.cols = DEFAULT_COLS

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = TidesConfig(flood=FloodConfig(flood_connectivity=args.connectivity))
    try:
        terrain = _resolve_terrain(args, config)
    except (TerrainError, ValueError, OSError) as exc:
        parser.error(str(exc))

    tides = RisingTides(terrain, config=config.flood)

    analysis_start = time.perf_counter()
    lowest, highest = tides.elevation_extrema()
    mask = tides.flooded_regions(args.height)
    metrics = tides.island_metrics(args.height)
    cells = []
    try:
        for row, col in args.cell:
            cells.append(
                (
                    terrain.locate((row, col)),
                    tides.is_flooded(args.height, (row, col)),
                    tides.height_above_water(args.height, (row, col)),
                )
            )
    except GridLocationError as exc:
        parser.error(str(exc))
    delta = None
    if args.new_height is not None:
        delta = tides.land_delta(args.height, args.new_height)
    analysis_seconds = time.perf_counter() - analysis_start

    print(f"Terrain: {terrain.rows}x{terrain.cols}, {len(terrain.sources)} water sources")
    print(f"Elevation range: lowest {lowest:.2f}, highest {highest:.2f}")
    print(f"Water height {args.height:.2f}: {metrics.visible_land_cells} cells of visible land")
    print(
        f"Islands: {metrics.num_islands}; "
        f"largest {metrics.largest_island_area} cells "
        f"({metrics.largest_island_ratio * 100.0:.2f}% of land)"
    )
    for loc, flooded, above in cells:
        status = "flooded" if flooded else "dry"
        side = "below" if above < 0 else "above"
        print(f"Cell ({loc.row}, {loc.col}) is {status}: {abs(above):.2f} meters {side} water")
    if delta is not None:
        verb = "lose" if delta >= 0 else "gain"
        print(f"{_direction(args.height, args.new_height)} from {args.height:.2f} to {args.new_height:.2f}: will {verb} {abs(delta)} cells of land")

    if args.save_terrain:
        write_terrain_json(args.save_terrain, terrain)

    if args.out:
        try:
            out_dir = resolve_output_dir(args.out, _run_name(args), overwrite=args.overwrite)
        except FileExistsError as exc:
            parser.error(str(exc))

        labels, _ = label_islands(mask, connectivity=config.flood.island_connectivity)
        write_png_u8(out_dir / "flood_mask.png", flood_mask_u8(mask))
        write_png_u8(out_dir / "flood_overlay.png", flood_overlay_rgb(terrain.heights, mask, render=config.render))
        write_png_u8(out_dir / "islands.png", island_labels_u8(labels))
        if args.json:
            summary = {
                "rows": terrain.rows,
                "cols": terrain.cols,
                "source_count": len(terrain.sources),
                "elevation_min": lowest,
                "elevation_max": highest,
                "metrics": metrics.to_dict(),
                "cells": [
                    {"row": loc.row, "col": loc.col, "flooded": flooded, "height_above_water": above}
                    for loc, flooded, above in cells
                ],
                "land_delta": None
                if delta is None
                else {"new_height": args.new_height, "cells_lost": delta},
                "config": config.to_dict(),
                "generated_at_utc": datetime.now(timezone.utc).isoformat(),
                "analysis_seconds": analysis_seconds,
                "python_version": platform.python_version(),
                "numpy_version": np.__version__,
            }
            write_json(out_dir / "summary.json", summary)
        print(f"Wrote outputs: {out_dir}")
    return 0


def _resolve_terrain(args: argparse.Namespace, config: TidesConfig) -> Terrain:
    if args.terrain:
        return load_terrain(args.terrain)
    return generate_synthetic_terrain(args.rows, args.cols, args.synthetic, config=config.synthetic)


def _direction(height: float, new_height: float) -> str:
    if new_height > height:
        return "Rising"
    if new_height < height:
        return "Falling"
    return "Holding"


def _run_name(args: argparse.Namespace) -> str:
    if args.terrain:
        base = Path(args.terrain).stem
    else:
        base = f"synthetic-{args.synthetic}-{args.rows}x{args.cols}"
    return f"{base}-h{args.height:g}"


if __name__ == "__main__":
    raise SystemExit(main())
