"""Sparse pixel noise followed by a blur pass ("frost")."""

from __future__ import annotations

import numpy as np

from .surface import RasterSurface

PIXEL_STRIDE = 4
NOISE_GAIN = 3.0
BLUR_FACTOR = 0.2


def apply_noise(pixels: np.ndarray, noise_scale: float, rng: np.random.Generator | None = None) -> np.ndarray:
    """Return a copy of an (H, W, 4) uint8 raster with noise on every 4th pixel's RGB.

    Pixels are counted in flattened raster order, so the perturbed set is
    pixel 0, 4, 8, ... regardless of row width. One sample is shared by the
    three color channels of a pixel and alpha is left untouched.
    """
    out = np.array(pixels, dtype=np.uint8, copy=True)
    if noise_scale <= 0:
        return out

    rng = rng or np.random.default_rng()
    flat = out.reshape(-1, 4)
    picked = flat[::PIXEL_STRIDE]
    noise = (rng.random(picked.shape[0]) - 0.5) * noise_scale * NOISE_GAIN

    rgb = picked[:, :3].astype(np.float64) + noise[:, None]
    flat[::PIXEL_STRIDE, :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    return out


def apply_frost(surface: RasterSurface, noise_scale: float, rng: np.random.Generator | None = None) -> bool:
    if noise_scale <= 0:
        return False
    surface.put_pixels(apply_noise(surface.get_pixels(), noise_scale, rng))
    surface.redraw_blurred(noise_scale * BLUR_FACTOR)
    return True
