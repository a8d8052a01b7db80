"""Derived raster previews of flood results."""

from __future__ import annotations

import numpy as np

from tides.config import RenderConfig


def flood_mask_u8(mask: np.ndarray) -> np.ndarray:
    """Encode a submersion mask as 8-bit grayscale: flooded 255, land 0."""

    return np.where(mask, 255, 0).astype(np.uint8)


def height_preview_u8(heights: np.ndarray, *, robust_percentiles: tuple[float, float] = (1.0, 99.0)) -> np.ndarray:
    """Map float heights to 8-bit preview grayscale."""

    lo, hi = np.percentile(heights, robust_percentiles)
    scale = max(float(hi - lo), 1e-6)
    norm = np.clip((heights - lo) / scale, 0.0, 1.0)
    return np.round(norm * 255.0).astype(np.uint8)


def island_labels_u8(labels: np.ndarray) -> np.ndarray:
    """Encode island labels to grayscale; water stays black."""

    out = np.zeros(labels.shape, dtype=np.uint8)
    ids = labels.astype(np.int64)
    land = ids >= 0
    # Deterministic hash-like remap so neighboring ids get distinct shades.
    out[land] = (((ids[land] * 73 + 29) % 211) + 40).astype(np.uint8)
    return out


def flood_overlay_rgb(
    heights: np.ndarray,
    mask: np.ndarray,
    *,
    render: RenderConfig | None = None,
) -> np.ndarray:
    """Color land by height and tint flooded cells with the water color."""

    cfg = render or RenderConfig()
    shade = height_preview_u8(heights).astype(np.float32) / 255.0

    low = np.array(cfg.land_low_rgb, dtype=np.float32)
    high = np.array(cfg.land_high_rgb, dtype=np.float32)
    water = np.array(cfg.water_rgb, dtype=np.float32)

    land_rgb = low[None, None, :] + (high - low)[None, None, :] * shade[..., None]
    water_rgb = water[None, None, :] * (1.0 - cfg.water_shade_mix + cfg.water_shade_mix * shade[..., None])
    rgb = np.where(mask[..., None], water_rgb, land_rgb)
    return np.clip(np.round(rgb), 0.0, 255.0).astype(np.uint8)
