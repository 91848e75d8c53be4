"""Centered text drawn beneath the strips."""

from __future__ import annotations

from functools import lru_cache

from PIL import ImageFont

from .colors import FALLBACK_COLOR, hex_to_rgb
from .models import RenderParams
from .surface import RasterSurface

_FONT_CANDIDATES = ("Arial.ttf", "arial.ttf", "DejaVuSans.ttf")


@lru_cache(maxsize=32)
def load_font(size: int):
    for name in _FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def draw_text_overlay(surface: RasterSurface, params: RenderParams) -> bool:
    if not params.text:
        return False
    rgb = hex_to_rgb(params.text_color) or FALLBACK_COLOR
    surface.draw_text(
        params.text,
        (surface.width / 2, surface.height / 2),
        font=load_font(int(params.font_size)),
        fill=(rgb.r, rgb.g, rgb.b, 255),
    )
    return True
