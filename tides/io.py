"""Terrain loading and output serialization."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from tides.grid import Terrain, TerrainError

logger = logging.getLogger(__name__)


def load_terrain(path: str | Path) -> Terrain:
    """Load a terrain from a ``.json`` or ``.npz`` file.

    JSON files hold ``{"heights": [[...], ...], "sources": [[row, col], ...]}``.
    NPZ archives hold a ``heights`` array and an ``(n, 2)`` ``sources`` array.
    """

    source_path = Path(path)
    suffix = source_path.suffix.lower()
    if suffix == ".json":
        terrain = _load_json(source_path)
    elif suffix == ".npz":
        terrain = _load_npz(source_path)
    else:
        raise ValueError(f"Unsupported terrain file type '{suffix}': expected .json or .npz")

    logger.debug(
        "Loaded %dx%d terrain with %d sources from %s",
        terrain.rows,
        terrain.cols,
        len(terrain.sources),
        source_path,
    )
    return terrain


def _load_json(path: Path) -> Terrain:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TerrainError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(payload, dict) or "heights" not in payload or "sources" not in payload:
        raise TerrainError(f"{path}: expected an object with 'heights' and 'sources'")
    return Terrain.from_nested(payload["heights"], payload["sources"])


def _load_npz(path: Path) -> Terrain:
    with np.load(path, allow_pickle=False) as archive:
        missing = {"heights", "sources"} - set(archive.files)
        if missing:
            raise TerrainError(f"{path}: missing arrays {sorted(missing)}")
        heights = archive["heights"]
        sources = archive["sources"]
    if sources.ndim != 2 or sources.shape[1] != 2:
        raise TerrainError(f"{path}: sources must have shape (n, 2), got {sources.shape}")
    return Terrain(heights, tuple((int(r), int(c)) for r, c in sources))


def write_terrain_json(path: str | Path, terrain: Terrain) -> None:
    payload = {
        "heights": terrain.heights.tolist(),
        "sources": [[loc.row, loc.col] for loc in terrain.sources],
    }
    write_json(path, payload)


def resolve_output_dir(out_root: str | Path, name: str, *, overwrite: bool) -> Path:
    """Create and return the output directory for one analysis run."""

    target = Path(out_root) / name
    if target.exists() and any(target.iterdir()) and not overwrite:
        raise FileExistsError(
            f"Output directory already exists and is not empty: {target}. Use --overwrite to replace files."
        )
    target.mkdir(parents=True, exist_ok=True)
    return target


def write_png_u8(path: str | Path, raster_u8: np.ndarray) -> None:
    """Write an ``(h, w)`` grayscale or ``(h, w, 3)`` RGB raster as PNG."""

    image = Image.fromarray(np.ascontiguousarray(raster_u8, dtype=np.uint8))
    image.save(Path(path))


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
