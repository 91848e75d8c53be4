"""Pillow-backed RGBA raster with the drawing primitives the pipeline needs."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from .colors import parse_css_color
from .models import GradientStop


class RasterSurface:
    """Drawable canvas: path fill with linear gradients, text, raw pixel access and blur."""

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self.image = self._blank(width, height)

    @staticmethod
    def _blank(width: int, height: int) -> Image.Image:
        return Image.new("RGBA", (max(1, int(width)), max(1, int(height))), (0, 0, 0, 0))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def resize(self, width: int, height: int) -> None:
        # Like assigning a canvas size: the raster is always cleared.
        self.image = self._blank(width, height)

    def fill_path_gradient(
        self,
        points: Sequence[tuple[float, float]],
        stops: Sequence[GradientStop],
        y0: float,
        y1: float,
    ) -> None:
        mask = Image.new("L", self.image.size, 0)
        ImageDraw.Draw(mask).polygon(list(points), fill=255)
        bbox = mask.getbbox()
        if bbox is None:
            return
        left, top, right, bottom = bbox

        column = self._gradient_column(stops, y0, y1, top, bottom)
        layer = np.empty((bottom - top, right - left, 4), dtype=np.uint8)
        layer[:, :, :] = column[:, None, :]
        coverage = np.asarray(mask.crop(bbox), dtype=np.uint16)
        layer[:, :, 3] = (layer[:, :, 3].astype(np.uint16) * coverage // 255).astype(np.uint8)

        self.image.alpha_composite(Image.fromarray(layer, "RGBA"), dest=(left, top))

    @staticmethod
    def _gradient_column(stops: Sequence[GradientStop], y0: float, y1: float, top: int, bottom: int) -> np.ndarray:
        offsets = np.array([s.offset for s in stops], dtype=np.float64)
        rgba = np.array([parse_css_color(s.color) for s in stops], dtype=np.float64)

        rows = np.arange(top, bottom, dtype=np.float64) + 0.5
        span = y1 - y0
        t = np.zeros_like(rows) if span == 0 else np.clip((rows - y0) / span, 0.0, 1.0)

        # Interpolate premultiplied so transparent stops do not darken their neighbours.
        alpha = rgba[:, 3] / 255.0
        premult = rgba[:, :3] * alpha[:, None]
        out_alpha = np.interp(t, offsets, alpha)
        out = np.empty((rows.size, 4), dtype=np.float64)
        for channel in range(3):
            value = np.interp(t, offsets, premult[:, channel])
            out[:, channel] = np.divide(value, out_alpha, out=np.zeros_like(value), where=out_alpha > 0)
        out[:, 3] = out_alpha * 255.0
        return np.clip(np.rint(out), 0, 255).astype(np.uint8)

    def draw_text(
        self,
        text: str,
        center: tuple[float, float],
        font: ImageFont.ImageFont | ImageFont.FreeTypeFont,
        fill: tuple[int, int, int, int],
    ) -> None:
        ImageDraw.Draw(self.image).text(center, text, font=font, fill=fill, anchor="mm")

    def get_pixels(self) -> np.ndarray:
        return np.array(self.image, dtype=np.uint8)

    def put_pixels(self, pixels: np.ndarray) -> None:
        if pixels.shape != (self.height, self.width, 4):
            raise ValueError(f"Pixel buffer shape {pixels.shape} does not match {self.width}x{self.height}")
        self.image = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8), "RGBA")

    def redraw_blurred(self, radius: float) -> None:
        """Draw the surface onto itself through a one-shot Gaussian blur."""
        if radius <= 0:
            return
        blurred = self.image.filter(ImageFilter.GaussianBlur(radius=radius))
        self.image = Image.alpha_composite(self.image, blurred)

    def snapshot(self) -> Image.Image:
        return self.image.copy()
