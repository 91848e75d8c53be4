"""Render orchestrator: one synchronous pass per parameter snapshot."""

from __future__ import annotations

import logging
import time
from enum import Enum

import numpy as np
from PIL import Image

from .frost import apply_frost
from .gradient_cache import GradientCache
from .models import RenderParams, RenderStats
from .overlay import draw_text_overlay
from .strips import build_strips
from .surface import RasterSurface

logger = logging.getLogger("frostglass.renderer")


class RenderState(str, Enum):
    IDLE = "Idle"
    RENDERING = "Rendering"


class FrostRenderer:
    """Owns the raster and the gradient cache; draws text, strips, then frost."""

    def __init__(
        self,
        viewport_fraction: float = 0.8,
        rng: np.random.Generator | None = None,
        cache: GradientCache | None = None,
    ) -> None:
        self.viewport_fraction = viewport_fraction
        self.cache = cache if cache is not None else GradientCache()
        self._rng = rng or np.random.default_rng()
        self._surface = RasterSurface()
        self._state = RenderState.IDLE
        self._last_frame: Image.Image | None = None
        self._last_stats: RenderStats | None = None

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def last_frame(self) -> Image.Image | None:
        return None if self._last_frame is None else self._last_frame.copy()

    @property
    def last_stats(self) -> RenderStats | None:
        return self._last_stats

    def canvas_size(self, viewport: tuple[int, int]) -> tuple[int, int]:
        vw, vh = viewport
        return (max(1, int(vw * self.viewport_fraction)), max(1, int(vh * self.viewport_fraction)))

    def render(self, params: RenderParams, viewport: tuple[int, int]) -> Image.Image:
        if self._state is RenderState.RENDERING:
            raise RuntimeError("render() is not re-entrant")

        self._state = RenderState.RENDERING
        start = time.perf_counter()
        hits_before, misses_before = self.cache.hits, self.cache.misses
        try:
            params = params.clamped()
            width, height = self.canvas_size(viewport)
            self._surface.resize(width, height)
            self.cache.sync(params)

            draw_text_overlay(self._surface, params)
            for strip in build_strips(params, width, height, self.cache):
                y0, y1 = strip.gradient_axis
                self._surface.fill_path_gradient(strip.points, strip.stops, y0, y1)
            frosted = apply_frost(self._surface, params.noise_scale, self._rng)

            frame = self._surface.snapshot()
        except Exception:
            logger.exception("render failed", extra={"event": "render_failed"})
            raise
        finally:
            self._state = RenderState.IDLE

        self._last_frame = frame
        self._last_stats = RenderStats(
            width=width,
            height=height,
            strips=params.strip_count,
            cache_hits=self.cache.hits - hits_before,
            cache_misses=self.cache.misses - misses_before,
            duration_s=time.perf_counter() - start,
            frosted=frosted,
        )
        logger.debug(
            "render complete",
            extra={"event": "render_complete", "duration_s": self._last_stats.duration_s},
        )
        return frame.copy()
