"""Memoized gradient stop colors, invalidated on palette changes."""

from __future__ import annotations

import logging
from typing import Callable

from .colors import lerp, map_to_rgba
from .models import RenderParams

logger = logging.getLogger("frostglass.renderer")

Mapper = Callable[[float, str, str, str], str]

_KEY_DIGITS = 6


class GradientCache:
    """Maps ``(position, strip_fraction)`` to an rgba stop string for the synced palette."""

    def __init__(self, mapper: Mapper = map_to_rgba) -> None:
        self._mapper = mapper
        self._entries: dict[tuple, str] = {}
        self._palette: tuple[str, str, str, float] | None = None
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def palette(self) -> tuple[str, str, str, float] | None:
        return self._palette

    def clear(self) -> None:
        self._entries.clear()

    def sync(self, params: RenderParams) -> bool:
        """Adopt the palette of ``params``; returns True when stale entries were dropped."""
        key = params.palette_key
        if key == self._palette:
            return False
        dropped = len(self._entries)
        self._entries.clear()
        self._palette = key
        logger.debug("gradient cache reset", extra={"event": "gradient_cache_reset", "dropped": dropped})
        return True

    def get_color(self, position: float, strip_fraction: float) -> str:
        if self._palette is None:
            raise RuntimeError("GradientCache.sync() must be called before get_color()")

        start, mid, end, bias = self._palette
        key = (round(position, _KEY_DIGITS), round(strip_fraction, _KEY_DIGITS), start, mid, end, bias)
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        value = max(0.0, min(1.0, lerp(position, strip_fraction, bias)))
        color = self._mapper(value, start, mid, end)
        self._entries[key] = color
        return color
