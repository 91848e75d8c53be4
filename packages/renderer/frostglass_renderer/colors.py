"""Hex/RGB conversion and three-stop gradient mapping."""

from __future__ import annotations

import logging
import random
import re

from .models import Rgb

logger = logging.getLogger("frostglass.renderer")

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

FALLBACK_COLOR = Rgb(128, 128, 128)
STOP_ALPHA = 0.5


def lerp(start: float, end: float, t: float) -> float:
    return start * (1 - t) + end * t


def hex_to_rgb(value: str) -> Rgb | None:
    """Parse ``#rrggbb`` (leading ``#`` optional, any case); ``None`` when malformed."""
    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value)
    if match is None:
        return None
    return Rgb(*(int(part, 16) for part in match.groups()))


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    return "#" + "".join(f"{max(0, min(255, int(c))):02x}" for c in rgb)


def normalize_hex(value: str) -> str | None:
    rgb = hex_to_rgb(value)
    return None if rgb is None else rgb_to_hex(rgb)


def random_pastel_hex(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return rgb_to_hex(tuple(rng.randrange(102) + 128 for _ in range(3)))


def _parse_or_fallback(value: str) -> Rgb:
    rgb = hex_to_rgb(value)
    if rgb is None:
        logger.warning("malformed color %r, using fallback", value, extra={"event": "color_fallback"})
        return FALLBACK_COLOR
    return rgb


def map_to_color(value: float, start_color: str, mid_color: str, end_color: str) -> Rgb:
    start = _parse_or_fallback(start_color)
    mid = _parse_or_fallback(mid_color)
    end = _parse_or_fallback(end_color)

    # 0.5 must land in the first half so the midpoint is exactly mid_color.
    if value <= 0.5:
        t = value * 2
        a, b = start, mid
    else:
        t = (value - 0.5) * 2
        a, b = mid, end
    return Rgb(*(int(lerp(ca, cb, t)) for ca, cb in zip(a, b)))


def format_rgb(rgb: Rgb) -> str:
    return f"rgb({rgb.r},{rgb.g},{rgb.b})"


def format_rgba(rgb: Rgb, alpha: float = STOP_ALPHA) -> str:
    return f"rgba({rgb.r},{rgb.g},{rgb.b},{alpha})"


def map_to_rgba(value: float, start_color: str, mid_color: str, end_color: str) -> str:
    return format_rgba(map_to_color(value, start_color, mid_color, end_color))


_RGBA_RE = re.compile(r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)$")


def parse_css_color(value: str) -> tuple[int, int, int, int]:
    """Parse ``rgb()``, ``rgba()`` or hex into an 8-bit RGBA tuple."""
    match = _RGBA_RE.match(value.strip())
    if match:
        r, g, b = (max(0, min(255, int(match.group(i)))) for i in (1, 2, 3))
        alpha = float(match.group(4)) if match.group(4) is not None else 1.0
        return (r, g, b, int(round(max(0.0, min(1.0, alpha)) * 255)))
    rgb = hex_to_rgb(value)
    if rgb is None:
        raise ValueError(f"Unsupported color: {value!r}")
    return (rgb.r, rgb.g, rgb.b, 255)
