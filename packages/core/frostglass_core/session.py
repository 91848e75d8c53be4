"""Render session binding the parameter snapshot, frame scheduler and renderer."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from PIL import Image

from frostglass_renderer import FrostRenderer, RenderParams, RenderState

from .logging_setup import set_render_context
from .params import apply_change
from .scheduler import FrameScheduler

logger = logging.getLogger("frostglass.core")


@dataclass
class SessionStatus:
    state: RenderState = RenderState.IDLE
    renders: int = 0
    changes_applied: int = 0
    changes_dropped: int = 0
    last_duration_s: float = 0.0
    last_error: str | None = None
    canvas_size: tuple[int, int] = (0, 0)


class RenderSession:
    """Feeds control changes into renders, at most one applied change per frame tick."""

    def __init__(self, params: RenderParams, renderer: FrostRenderer | None = None) -> None:
        self._params = params
        self.renderer = renderer or FrostRenderer()
        self._scheduler: FrameScheduler[RenderParams] = FrameScheduler()
        self._status = SessionStatus()
        self._events: list[dict[str, Any]] = []
        self._dirty = True
        self._last_viewport: tuple[int, int] | None = None

    @property
    def params(self) -> RenderParams:
        return self._params

    @property
    def status(self) -> SessionStatus:
        self._status.state = self.renderer.state
        self._status.changes_dropped = self._scheduler.dropped
        return self._status

    @property
    def has_pending(self) -> bool:
        return self._scheduler.has_pending

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": self.renderer.state.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]

    def submit(self, name: str, value: Any) -> None:
        """Queue a control change; any change still pending for this tick is discarded."""
        # Resolve against the snapshot current at tick time, as a full replacement.
        self._scheduler.request(lambda: apply_change(self._params, name, value))

    def replace_params(self, params: RenderParams) -> None:
        self._scheduler.request(lambda: params)

    def tick(self, viewport: tuple[int, int]) -> Image.Image | None:
        """Run one frame: apply the pending change, render if anything moved."""
        viewport = (int(viewport[0]), int(viewport[1]))
        if self._scheduler.has_pending:
            updated = self._scheduler.run_pending()
            if updated is not None and updated is not self._params:
                self._params = updated
                self._status.changes_applied += 1
                self._dirty = True
                self._log_event("params_changed")
                logger.debug("params changed", extra={"event": "params_changed"})

        if not self._dirty and viewport == self._last_viewport:
            return None
        return self.render_now(viewport)

    def render_now(self, viewport: tuple[int, int]) -> Image.Image:
        set_render_context(params=asdict(self._params), viewport=list(viewport))
        try:
            frame = self.renderer.render(self._params, viewport)
        except Exception as exc:
            self._status.last_error = str(exc)
            self._log_event("render_error", error=str(exc))
            raise

        stats = self.renderer.last_stats
        self._dirty = False
        self._last_viewport = (int(viewport[0]), int(viewport[1]))
        self._status.renders += 1
        self._status.last_error = None
        if stats is not None:
            self._status.last_duration_s = stats.duration_s
            self._status.canvas_size = (stats.width, stats.height)
            self._log_event(
                "render_ok",
                width=stats.width,
                height=stats.height,
                duration_s=stats.duration_s,
                cache_hits=stats.cache_hits,
                cache_misses=stats.cache_misses,
            )
        return frame
