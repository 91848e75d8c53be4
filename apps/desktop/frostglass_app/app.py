"""Desktop app runtime: control panel, view-model, and preview widget."""

from __future__ import annotations

import sys
from typing import Any

from PIL import Image
from PySide6.QtCore import QObject, Qt, QTimer, Signal, Slot
from PySide6.QtGui import QColor, QImage, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QColorDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QSlider,
    QWidget,
)

from frostglass_core import (
    CONTROLS,
    AppConfig,
    ControlSpec,
    PerformanceController,
    PerformanceTargets,
    RenderSession,
    load_config,
    params_from_config,
    params_to_controls,
)
from frostglass_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from frostglass_renderer import FrostRenderer


def pil_to_qimage(frame: Image.Image) -> QImage:
    rgba = frame if frame.mode == "RGBA" else frame.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    image = QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format.Format_RGBA8888)
    return image.copy()


class FrostViewModel(QObject):
    frameChanged = Signal()
    paramsChanged = Signal()
    statusChanged = Signal()

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config = config or load_config()
        self.logger = get_logger()
        self.session = RenderSession(
            params_from_config(self.config.render),
            FrostRenderer(viewport_fraction=self.config.window.viewport_fraction),
        )
        self.performance = PerformanceController(
            PerformanceTargets(
                render_ms_max=self.config.performance.render_ms_max,
                rss_mb_max=self.config.performance.rss_mb_max,
                frame_interval_ms=self.config.window.frame_interval_ms,
            )
        )

        self._viewport = (self.config.window.default_width, self.config.window.default_height)
        self._frame = QImage()
        self._status_text = "Idle"
        self._interval_ms = self.config.window.frame_interval_ms

        # One frame tick; restarting is avoided so a drag still repaints every frame.
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(self._interval_ms)
        self._timer.timeout.connect(self._tick)

    @property
    def frame(self) -> QImage:
        return self._frame

    @property
    def statusText(self) -> str:
        return self._status_text

    def controlValues(self) -> dict[str, Any]:
        return params_to_controls(self.session.params)

    def _schedule_tick(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    @Slot(str, object)
    def setParam(self, name: str, value: Any) -> None:
        self.session.submit(name, value)
        self._schedule_tick()

    @Slot(int, int)
    def setViewport(self, width: int, height: int) -> None:
        self._viewport = (max(1, int(width)), max(1, int(height)))
        self._schedule_tick()

    @Slot()
    def requestRender(self) -> None:
        self._schedule_tick()

    def _tick(self) -> None:
        before = self.session.params
        try:
            frame = self.session.tick(self._viewport)
        except Exception as exc:
            # The previous frame stays on screen.
            self._set_status(f"Render error: {exc}")
            return

        if self.session.params is not before:
            self.paramsChanged.emit()
        if frame is None:
            return

        self._frame = pil_to_qimage(frame)
        self.frameChanged.emit()

        status = self.session.status
        budget = self.performance.sample(status.last_duration_s, self._interval_ms)
        if budget.recommended_interval_ms != self._interval_ms:
            self._interval_ms = budget.recommended_interval_ms
            self._timer.setInterval(self._interval_ms)
        if budget.warning:
            self.logger.info(
                f"render budget warning {budget.warning}",
                extra={"event": "budget_warning", "duration_s": status.last_duration_s},
            )
        w, h = status.canvas_size
        self._set_status(f"{w}x{h}  {budget.render_ms:0.1f} ms  dropped {status.changes_dropped}")

    def _set_status(self, text: str) -> None:
        if text != self._status_text:
            self._status_text = text
            self.statusChanged.emit()

    def shutdown(self) -> None:
        self._timer.stop()


class ControlPanel(QWidget):
    """Widgets generated from the control table; each emits ``(name, value)`` into the view-model."""

    def __init__(self, vm: FrostViewModel, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.vm = vm
        self._value_labels: dict[str, QLabel] = {}
        self._color_buttons: dict[str, QPushButton] = {}

        layout = QFormLayout(self)
        values = vm.controlValues()
        for spec in CONTROLS:
            layout.addRow(f"{spec.label}:", self._build_control(spec, values[spec.name]))

    def _build_control(self, spec: ControlSpec, value: Any) -> QWidget:
        if spec.kind == "range":
            return self._build_slider(spec, value)
        if spec.kind == "color":
            return self._build_color(spec, value)
        edit = QLineEdit(str(value))
        edit.setPlaceholderText("Enter text...")
        edit.textChanged.connect(lambda text, name=spec.name: self.vm.setParam(name, text))
        return edit

    def _build_slider(self, spec: ControlSpec, value: float) -> QWidget:
        scale = 1.0 / spec.step
        row = QWidget()
        box = QHBoxLayout(row)
        box.setContentsMargins(0, 0, 0, 0)

        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(round(spec.minimum * scale), round(spec.maximum * scale))
        slider.setValue(round(float(value) * scale))
        label = QLabel(self._fmt(spec, value))
        label.setMinimumWidth(48)
        self._value_labels[spec.name] = label

        def _changed(raw: int, spec: ControlSpec = spec) -> None:
            number: float = raw if spec.integral else round(raw / scale, 4)
            label.setText(self._fmt(spec, number))
            self.vm.setParam(spec.name, number)

        slider.valueChanged.connect(_changed)
        box.addWidget(slider)
        box.addWidget(label)
        return row

    def _build_color(self, spec: ControlSpec, value: str) -> QWidget:
        button = QPushButton(value)
        self._paint_button(button, value)
        self._color_buttons[spec.name] = button

        def _pick(_checked: bool = False, spec: ControlSpec = spec) -> None:
            current = QColor(button.text())
            chosen = QColorDialog.getColor(current, self, spec.label)
            if not chosen.isValid():
                return
            hex_value = chosen.name()
            button.setText(hex_value)
            self._paint_button(button, hex_value)
            self.vm.setParam(spec.name, hex_value)

        button.clicked.connect(_pick)
        return button

    @staticmethod
    def _paint_button(button: QPushButton, hex_value: str) -> None:
        button.setStyleSheet(f"background-color: {hex_value};")

    @staticmethod
    def _fmt(spec: ControlSpec, value: float) -> str:
        text = f"{int(value)}" if spec.integral else f"{float(value):g}"
        return text + spec.suffix


class FrostWindow(QMainWindow):
    def __init__(self, vm: FrostViewModel) -> None:
        super().__init__()
        self.vm = vm
        self.setWindowTitle("Frostglass")

        central = QWidget()
        layout = QHBoxLayout(central)

        controls = QScrollArea()
        controls.setWidgetResizable(True)
        controls.setWidget(ControlPanel(vm))
        controls.setMinimumWidth(300)
        layout.addWidget(controls)

        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.preview, stretch=1)
        self.setCentralWidget(central)

        vm.frameChanged.connect(self._show_frame)
        vm.statusChanged.connect(lambda: self.statusBar().showMessage(vm.statusText))

        cfg = vm.config.window
        self.resize(cfg.default_width, cfg.default_height)

    def _show_frame(self) -> None:
        self.preview.setPixmap(QPixmap.fromImage(self.vm.frame))

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        size = event.size()
        self.vm.setViewport(size.width(), size.height())


def run_gui() -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files)
    install_crash_hooks()
    logger = get_logger()

    app = QApplication(sys.argv)
    app.setApplicationName("Frostglass")

    vm = FrostViewModel(cfg)
    window = FrostWindow(vm)
    window.show()
    vm.requestRender()

    exit_code = app.exec()
    vm.shutdown()
    logger.info("app shutdown", extra={"event": "shutdown", "exit_code": int(exit_code)})
    return int(exit_code)
