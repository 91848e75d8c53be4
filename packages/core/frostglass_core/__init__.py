"""Core app services for parameters, frame scheduling, render sessions, settings, and diagnostics."""

from .config import AppConfig, load_config, save_config
from .diagnostics import build_doctor_payload
from .params import (
    CONTROLS,
    ControlSpec,
    ParamError,
    apply_change,
    control_for,
    default_params,
    params_from_config,
    params_to_controls,
)
from .performance import BudgetStatus, PerformanceController, PerformanceTargets
from .scheduler import FrameScheduler
from .session import RenderSession, SessionStatus

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "CONTROLS",
    "ControlSpec",
    "FrameScheduler",
    "ParamError",
    "PerformanceController",
    "PerformanceTargets",
    "RenderSession",
    "SessionStatus",
    "apply_change",
    "build_doctor_payload",
    "control_for",
    "default_params",
    "load_config",
    "params_from_config",
    "params_to_controls",
    "save_config",
]
