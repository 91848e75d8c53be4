"""Renderer package for frosted glass strip composition."""

from .colors import (
    format_rgb,
    format_rgba,
    hex_to_rgb,
    lerp,
    map_to_color,
    map_to_rgba,
    normalize_hex,
    random_pastel_hex,
    rgb_to_hex,
)
from .frost import apply_frost, apply_noise
from .gradient_cache import GradientCache
from .models import GradientStop, RenderParams, RenderStats, Rgb, StripShape
from .overlay import draw_text_overlay
from .renderer import FrostRenderer, RenderState
from .strips import build_strip, build_strips, strip_position
from .surface import RasterSurface

__all__ = [
    "FrostRenderer",
    "GradientCache",
    "GradientStop",
    "RasterSurface",
    "RenderParams",
    "RenderState",
    "RenderStats",
    "Rgb",
    "StripShape",
    "apply_frost",
    "apply_noise",
    "build_strip",
    "build_strips",
    "draw_text_overlay",
    "format_rgb",
    "format_rgba",
    "hex_to_rgb",
    "lerp",
    "map_to_color",
    "map_to_rgba",
    "normalize_hex",
    "random_pastel_hex",
    "rgb_to_hex",
    "strip_position",
]
