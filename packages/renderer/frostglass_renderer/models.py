"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple


class Rgb(NamedTuple):
    r: int
    g: int
    b: int


STRIP_COUNT_RANGE = (1, 50)
NOISE_SCALE_RANGE = (0.0, 20.0)
VERTICAL_BIAS_RANGE = (0.0, 1.0)


def _clamp(value, lo, hi):
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class RenderParams:
    """One immutable snapshot of everything a render pass reads."""

    strip_count: int = 10
    start_color: str = "#c0c0e0"
    mid_color: str = "#e0c0d0"
    end_color: str = "#c0e0d0"
    noise_scale: float = 0.02
    vertical_bias: float = 0.7
    text: str = ""
    font_size: int = 48
    text_color: str = "#ffffff"
    wave_amplitude: float = 30.0
    wave_frequency: float = 2.0
    wave_offset: float = 0.5

    @property
    def palette_key(self) -> tuple[str, str, str, float]:
        return (self.start_color, self.mid_color, self.end_color, self.vertical_bias)

    def clamped(self) -> RenderParams:
        return replace(
            self,
            strip_count=int(_clamp(int(self.strip_count), *STRIP_COUNT_RANGE)),
            noise_scale=float(_clamp(self.noise_scale, *NOISE_SCALE_RANGE)),
            vertical_bias=float(_clamp(self.vertical_bias, *VERTICAL_BIAS_RANGE)),
            font_size=max(1, int(self.font_size)),
        )


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


@dataclass(frozen=True)
class StripShape:
    index: int
    y_offset: float
    height: float
    position: float
    points: tuple[tuple[float, float], ...]
    stops: tuple[GradientStop, ...]

    @property
    def gradient_axis(self) -> tuple[float, float]:
        return (self.y_offset, self.y_offset + self.height)


@dataclass(frozen=True)
class RenderStats:
    width: int
    height: int
    strips: int
    cache_hits: int
    cache_misses: int
    duration_s: float
    frosted: bool
