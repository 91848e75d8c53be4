"""Render budgeting and adaptive frame-interval hints."""

from __future__ import annotations

from dataclasses import dataclass

import psutil

MAX_FRAME_INTERVAL_MS = 100


@dataclass(frozen=True)
class PerformanceTargets:
    render_ms_max: float = 50.0
    rss_mb_max: float = 400.0
    frame_interval_ms: int = 16


@dataclass(frozen=True)
class BudgetStatus:
    render_ms: float
    cpu_percent: float
    rss_mb: float
    overloaded: bool
    warning: str | None
    recommended_interval_ms: int


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self, render_s: float, interval_ms: int) -> BudgetStatus:
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)
        render_ms = render_s * 1000.0

        warning = None
        rec_interval = interval_ms
        overloaded = render_ms > self.targets.render_ms_max or rss_mb > self.targets.rss_mb_max

        if overloaded:
            warning = "render_over_budget" if render_ms > self.targets.render_ms_max else "memory_over_budget"
            rec_interval = min(MAX_FRAME_INTERVAL_MS, int(interval_ms * 1.25) + 4)
        elif interval_ms > self.targets.frame_interval_ms:
            rec_interval = max(self.targets.frame_interval_ms, interval_ms - 4)

        return BudgetStatus(
            render_ms=render_ms,
            cpu_percent=cpu,
            rss_mb=rss_mb,
            overloaded=overloaded,
            warning=warning,
            recommended_interval_ms=rec_interval,
        )
