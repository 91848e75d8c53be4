"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2


@dataclass
class WindowConfig:
    viewport_fraction: float = 0.8
    frame_interval_ms: int = 16
    default_width: int = 1280
    default_height: int = 800


@dataclass
class RenderDefaultsConfig:
    strip_count: int = 10
    noise_scale: float = 0.02
    vertical_bias: float = 0.7
    font_size: int = 48
    text_color: str = "#ffffff"
    wave_amplitude: float = 30.0
    wave_frequency: float = 2.0
    wave_offset: float = 0.5
    seed: int | None = None


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class PerformanceConfig:
    render_ms_max: float = 50.0
    rss_mb_max: float = 400.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    window: WindowConfig = field(default_factory=WindowConfig)
    render: RenderDefaultsConfig = field(default_factory=RenderDefaultsConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Frostglass"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Frostglass"
    return Path.home() / ".config" / "frostglass"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_window(cfg: AppConfig) -> None:
    cfg.window.viewport_fraction = float(max(0.1, min(1.0, float(cfg.window.viewport_fraction))))
    cfg.window.frame_interval_ms = max(1, min(100, int(cfg.window.frame_interval_ms)))
    cfg.window.default_width = max(16, int(cfg.window.default_width))
    cfg.window.default_height = max(16, int(cfg.window.default_height))


def _normalize_render(cfg: AppConfig) -> None:
    r = cfg.render
    r.strip_count = max(1, min(50, int(r.strip_count)))
    r.noise_scale = float(max(0.0, min(20.0, float(r.noise_scale))))
    r.vertical_bias = float(max(0.0, min(1.0, float(r.vertical_bias))))
    r.font_size = max(12, min(200, int(r.font_size)))
    r.wave_amplitude = float(max(0.0, min(100.0, float(r.wave_amplitude))))
    r.wave_frequency = float(max(0.1, min(10.0, float(r.wave_frequency))))
    r.wave_offset = float(max(0.0, min(2.0, float(r.wave_offset))))
    if r.seed is not None:
        r.seed = int(r.seed)


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.render_ms_max = float(max(1.0, cfg.performance.render_ms_max))
    cfg.performance.rss_mb_max = float(max(64.0, cfg.performance.rss_mb_max))
    cfg.diagnostics.keep_log_files = max(2, int(cfg.diagnostics.keep_log_files))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept render defaults flat at the top level under the control names.
        render = dict(data.get("render", {}) or {})
        for old, new in (("strips", "strip_count"), ("noiseScale", "noise_scale"), ("verticalBias", "vertical_bias")):
            if old in data:
                render.setdefault(new, data.pop(old))
        data["render"] = render
        data.setdefault("performance", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        window=_merge(WindowConfig, data.get("window", {})),
        render=_merge(RenderDefaultsConfig, data.get("render", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_window(cfg)
    _normalize_render(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
