"""Wavy strip geometry and per-strip vertical gradients."""

from __future__ import annotations

import math

from .gradient_cache import GradientCache
from .models import GradientStop, RenderParams, StripShape

STOP_OFFSETS = (0.0, 0.2, 0.4, 0.6, 0.8, 1.0)


def strip_position(index: int, strip_count: int) -> float:
    if strip_count <= 1:
        return 0.0
    return index / (strip_count - 1)


def wave_offset_at(x: float, phase: float, frequency: float, amplitude: float) -> float:
    return math.sin(x * frequency * 0.01 + phase) * amplitude


def build_strip(
    index: int,
    params: RenderParams,
    width: int,
    height: int,
    cache: GradientCache,
) -> StripShape:
    strip_height = height / params.strip_count
    y_offset = index * strip_height
    position = strip_position(index, params.strip_count)
    phase = index * params.wave_offset * math.pi

    waves = [
        wave_offset_at(x, phase, params.wave_frequency, params.wave_amplitude) for x in range(width + 1)
    ]

    points: list[tuple[float, float]] = [(0.0, y_offset)]
    points.extend((float(x), y_offset + waves[x]) for x in range(width + 1))
    points.append((float(width), y_offset + strip_height))
    points.extend((float(x), y_offset + strip_height + waves[x]) for x in range(width, -1, -1))

    stops = tuple(GradientStop(offset, cache.get_color(offset, position)) for offset in STOP_OFFSETS)
    return StripShape(
        index=index,
        y_offset=y_offset,
        height=strip_height,
        position=position,
        points=tuple(points),
        stops=stops,
    )


def build_strips(params: RenderParams, width: int, height: int, cache: GradientCache) -> list[StripShape]:
    return [build_strip(i, params, width, height, cache) for i in range(params.strip_count)]
