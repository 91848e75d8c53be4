import sys
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np
from PIL import ImageFilter

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from frostglass_renderer import surface as surface_module
from frostglass_renderer.frost import BLUR_FACTOR, PIXEL_STRIDE, apply_frost, apply_noise
from frostglass_renderer.surface import RasterSurface


def _raster(width=7, height=5, value=128, alpha=200):
    pixels = np.full((height, width, 4), value, dtype=np.uint8)
    pixels[:, :, 3] = alpha
    return pixels


class NoiseTests(unittest.TestCase):
    def test_zero_scale_is_identity(self):
        pixels = _raster()
        out = apply_noise(pixels, 0.0, np.random.default_rng(1))
        self.assertTrue(np.array_equal(out, pixels))
        self.assertIsNot(out, pixels)

    def test_only_stride_pixels_change_and_alpha_is_kept(self):
        pixels = _raster()
        out = apply_noise(pixels, 20.0, np.random.default_rng(3))

        flat_in = pixels.reshape(-1, 4)
        flat_out = out.reshape(-1, 4)
        changed = np.nonzero(np.any(flat_in != flat_out, axis=1))[0]
        self.assertGreater(len(changed), 0)
        self.assertTrue(all(i % PIXEL_STRIDE == 0 for i in changed))
        self.assertTrue(np.array_equal(flat_in[:, 3], flat_out[:, 3]))

    def test_one_sample_per_pixel(self):
        out = apply_noise(_raster(value=100), 20.0, np.random.default_rng(5))
        flat = out.reshape(-1, 4)
        self.assertTrue(np.array_equal(flat[:, 0], flat[:, 1]))
        self.assertTrue(np.array_equal(flat[:, 1], flat[:, 2]))

    def test_noise_amplitude_bound(self):
        scale = 4.0
        out = apply_noise(_raster(), scale, np.random.default_rng(9))
        delta = np.abs(out[:, :, :3].astype(int) - 128)
        self.assertLessEqual(int(delta.max()), int(np.ceil(scale * 3 / 2)))

    def test_values_are_clamped(self):
        out = apply_noise(_raster(value=255), 20.0, np.random.default_rng(11))
        self.assertLessEqual(int(out.max()), 255)
        out = apply_noise(_raster(value=0, alpha=0), 20.0, np.random.default_rng(11))
        self.assertGreaterEqual(int(out.min()), 0)

    def test_seeded_output_is_reproducible(self):
        a = apply_noise(_raster(), 7.5, np.random.default_rng(42))
        b = apply_noise(_raster(), 7.5, np.random.default_rng(42))
        self.assertTrue(np.array_equal(a, b))


class FrostPassTests(unittest.TestCase):
    def test_disabled_pass_leaves_surface(self):
        surface = RasterSurface(6, 4)
        surface.put_pixels(_raster(6, 4))
        before = surface.get_pixels()
        self.assertFalse(apply_frost(surface, 0.0))
        self.assertTrue(np.array_equal(surface.get_pixels(), before))

    def test_enabled_pass_blurs_with_scaled_radius(self):
        surface = RasterSurface(16, 16)
        surface.put_pixels(_raster(16, 16, alpha=255))
        with patch.object(surface_module.ImageFilter, "GaussianBlur", wraps=ImageFilter.GaussianBlur) as blur:
            self.assertTrue(apply_frost(surface, 10.0, np.random.default_rng(0)))
        blur.assert_called_once_with(radius=10.0 * BLUR_FACTOR)
        self.assertEqual(surface.get_pixels().shape, (16, 16, 4))

    def test_blur_softens_hard_edge(self):
        pixels = _raster(16, 8, value=0, alpha=255)
        pixels[:, 8:, :3] = 255
        surface = RasterSurface(16, 8)
        surface.put_pixels(pixels)

        surface.redraw_blurred(2.0)
        row = surface.get_pixels()[4, :, 0].astype(int)
        self.assertGreater(row[7], 0)
        self.assertLess(row[8], 255)
        self.assertTrue(np.array_equal(surface.get_pixels()[:, :, 3], pixels[:, :, 3]))


if __name__ == "__main__":
    unittest.main()
