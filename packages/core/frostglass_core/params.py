"""Control definitions and the pure parameter reducer."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, fields, replace
from typing import Any

from frostglass_renderer.colors import normalize_hex, random_pastel_hex
from frostglass_renderer.models import RenderParams

from .config import RenderDefaultsConfig

logger = logging.getLogger("frostglass.core")


class ParamError(ValueError):
    pass


@dataclass(frozen=True)
class ControlSpec:
    name: str
    field: str
    kind: str  # "range", "color" or "text"
    label: str
    minimum: float | None = None
    maximum: float | None = None
    step: float = 1.0
    suffix: str = ""

    @property
    def integral(self) -> bool:
        return self.kind == "range" and float(self.step).is_integer()


CONTROLS: tuple[ControlSpec, ...] = (
    ControlSpec("strips", "strip_count", "range", "Strips", 1, 50, 1),
    ControlSpec("noiseScale", "noise_scale", "range", "Frost Effect", 0, 20, 0.1),
    ControlSpec("verticalBias", "vertical_bias", "range", "Vertical Bias", 0, 1, 0.1),
    ControlSpec("startColor", "start_color", "color", "Start Color"),
    ControlSpec("midColor", "mid_color", "color", "Mid Color"),
    ControlSpec("endColor", "end_color", "color", "End Color"),
    ControlSpec("text", "text", "text", "Text"),
    ControlSpec("fontSize", "font_size", "range", "Font Size", 12, 200, 1, "px"),
    ControlSpec("textColor", "text_color", "color", "Text Color"),
    ControlSpec("waveAmplitude", "wave_amplitude", "range", "Wave Size", 0, 100, 1),
    ControlSpec("waveFrequency", "wave_frequency", "range", "Wave Freq", 0.1, 10, 0.1),
    ControlSpec("waveOffset", "wave_offset", "range", "Wave Offset", 0, 2, 0.1),
)

_BY_NAME: dict[str, ControlSpec] = {}
for _spec in CONTROLS:
    _BY_NAME[_spec.name] = _spec
    _BY_NAME[_spec.field] = _spec

_INT_FIELDS = {f.name for f in fields(RenderParams) if f.type in ("int", int)}


def control_for(name: str) -> ControlSpec:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ParamError(f"Unknown parameter: {name}") from None


def default_params(rng: random.Random | None = None, **overrides: Any) -> RenderParams:
    """Startup snapshot: random pastel gradient colors plus fixed defaults."""
    rng = rng or random.Random()
    params = RenderParams(
        start_color=random_pastel_hex(rng),
        mid_color=random_pastel_hex(rng),
        end_color=random_pastel_hex(rng),
    )
    for name, value in overrides.items():
        params = apply_change(params, name, value)
    return params


def params_from_config(defaults: RenderDefaultsConfig) -> RenderParams:
    rng = random.Random(defaults.seed) if defaults.seed is not None else None
    return default_params(
        rng,
        strip_count=defaults.strip_count,
        noise_scale=defaults.noise_scale,
        vertical_bias=defaults.vertical_bias,
        font_size=defaults.font_size,
        text_color=defaults.text_color,
        wave_amplitude=defaults.wave_amplitude,
        wave_frequency=defaults.wave_frequency,
        wave_offset=defaults.wave_offset,
    )


def _coerce_range(spec: ControlSpec, value: Any) -> float | int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParamError(f"{spec.name} expects a number, got {value!r}") from None
    if number != number:  # NaN
        raise ParamError(f"{spec.name} expects a number, got NaN")
    if spec.minimum is not None:
        number = max(float(spec.minimum), number)
    if spec.maximum is not None:
        number = min(float(spec.maximum), number)
    return int(round(number)) if spec.field in _INT_FIELDS else number


def apply_change(params: RenderParams, name: str, value: Any) -> RenderParams:
    """Return a new snapshot with one field replaced; ``params`` is never mutated."""
    spec = control_for(name)

    if spec.kind == "range":
        coerced: Any = _coerce_range(spec, value)
    elif spec.kind == "color":
        coerced = normalize_hex(str(value))
        if coerced is None:
            logger.warning("ignoring malformed color %r for %s", value, spec.name, extra={"event": "param_rejected"})
            return params
    else:
        coerced = "" if value is None else str(value)

    if getattr(params, spec.field) == coerced:
        return params
    return replace(params, **{spec.field: coerced})


def params_to_controls(params: RenderParams) -> dict[str, Any]:
    return {spec.name: getattr(params, spec.field) for spec in CONTROLS}
