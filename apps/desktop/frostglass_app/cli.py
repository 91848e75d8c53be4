"""CLI entrypoints for the Frostglass desktop app, diagnostics, and headless benchmarks."""

from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict

import numpy as np

from frostglass_core import (
    PerformanceController,
    PerformanceTargets,
    RenderSession,
    apply_change,
    build_doctor_payload,
    load_config,
    params_from_config,
    save_config,
)
from frostglass_core.config import config_path
from frostglass_core.logging_setup import configure_logging
from frostglass_renderer import FrostRenderer


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def cmd_run(_args: argparse.Namespace) -> int:
    from .app import run_gui

    return run_gui()


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def cmd_defaults(_args: argparse.Namespace) -> int:
    cfg = load_config()
    _print_json(asdict(params_from_config(cfg.render)))
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = load_config()
    seed = cfg.render.seed
    renderer = FrostRenderer(
        viewport_fraction=cfg.window.viewport_fraction,
        rng=np.random.default_rng(seed),
    )
    params = params_from_config(cfg.render)
    if args.strips is not None:
        params = apply_change(params, "strips", args.strips)
    if args.noise is not None:
        params = apply_change(params, "noiseScale", args.noise)
    session = RenderSession(params, renderer)
    perf = PerformanceController(
        PerformanceTargets(
            render_ms_max=cfg.performance.render_ms_max,
            rss_mb_max=cfg.performance.rss_mb_max,
            frame_interval_ms=cfg.window.frame_interval_ms,
        )
    )

    viewport = (args.width or cfg.window.default_width, args.height or cfg.window.default_height)

    durations: list[float] = []
    samples = []
    start = time.perf_counter()
    for i in range(args.frames):
        if i:
            # Alternate the wave phase so every frame is a real re-render.
            session.submit("waveOffset", 0.5 + 0.1 * (i % 2))
        session.tick(viewport)
        status = session.status
        durations.append(status.last_duration_s)
        samples.append(asdict(perf.sample(status.last_duration_s, cfg.window.frame_interval_ms)))
    elapsed = max(time.perf_counter() - start, 1e-9)

    render_ms_max = max(durations, default=0.0) * 1000.0
    rss_max = max((s["rss_mb"] for s in samples), default=0.0)
    status = session.status
    _print_json(
        {
            "frames": args.frames,
            "viewport": list(viewport),
            "canvas": list(status.canvas_size),
            "params": asdict(session.params),
            "fps": args.frames / elapsed,
            "render_ms": {
                "mean": (sum(durations) / len(durations) * 1000.0) if durations else 0.0,
                "max": render_ms_max,
            },
            "budget": {
                "targets": asdict(perf.targets),
                "max_observed": {"render_ms": render_ms_max, "rss_mb": rss_max},
                "pass": render_ms_max <= cfg.performance.render_ms_max and rss_max <= cfg.performance.rss_mb_max,
            },
        }
    )
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    payload = asdict(load_config())
    payload["path"] = str(config_path())
    _print_json(payload)
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = config_path()
    if path.exists() and not args.force:
        _print_json({"success": False, "path": str(path), "error": "config exists (use --force)"})
        return 2
    written = save_config(load_config(path))
    _print_json({"success": True, "path": str(written)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="frostglass", description="Frosted glass strip renderer and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Run desktop app")
    run_cmd.set_defaults(func=cmd_run)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and config diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    defaults_cmd = sub.add_parser("defaults", help="Print the startup render parameters")
    defaults_cmd.set_defaults(func=cmd_defaults)

    bench_cmd = sub.add_parser("benchmark", help="Run headless render benchmark")
    bench_cmd.add_argument("--frames", type=int, default=30)
    bench_cmd.add_argument("--width", type=int, default=None, help="Viewport width (canvas is a fraction of it)")
    bench_cmd.add_argument("--height", type=int, default=None, help="Viewport height")
    bench_cmd.add_argument("--strips", type=int, default=None)
    bench_cmd.add_argument("--noise", type=float, default=None, help="Frost noise scale")
    bench_cmd.set_defaults(func=cmd_benchmark)

    config_cmd = sub.add_parser("config", help="Inspect or create the app config file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective config")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write a config file with defaults")
    init_cmd.add_argument("--force", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
