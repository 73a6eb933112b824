"""In-memory window backend and indicator.

Used when TrayGuard runs without a GUI toolkit (``trayguard run`` and the HTTP
bridge) and by the test-suite. Windows keep their state in memory and record
the events they receive.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from trayguard.desktop.window import DisplayGeometry, FocusCallback, WindowSpec

logger = logging.getLogger(__name__)


class HeadlessWindow:
    def __init__(self, spec: WindowSpec) -> None:
        self.label = spec.label
        self.spec = spec
        self.visible = spec.visible
        self.focused = False
        self.position: tuple[float, float] | None = None
        self.received: list[tuple[str, Any]] = []
        self._focus_callbacks: list[FocusCallback] = []

    def is_visible(self) -> bool:
        return self.visible

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.focused = False

    def set_focus(self) -> None:
        self.set_focused(True)

    def set_position(self, x: float, y: float) -> None:
        self.position = (x, y)

    def on_focus_changed(self, callback: FocusCallback) -> None:
        self._focus_callbacks.append(callback)

    def emit(self, event: str, payload: Any) -> None:
        self.received.append((event, payload))

    def set_focused(self, focused: bool) -> None:
        """Simulate the toolkit reporting a focus change."""
        changed = focused != self.focused
        self.focused = focused
        if changed:
            for callback in list(self._focus_callbacks):
                callback(focused)


class HeadlessBackend:
    def __init__(self, display: DisplayGeometry | None = DisplayGeometry(1920, 1080)) -> None:
        self._windows: dict[str, HeadlessWindow] = {}
        self._lock = threading.Lock()
        self.display = display

    def get_window(self, label: str) -> HeadlessWindow | None:
        with self._lock:
            return self._windows.get(label)

    def create_window(self, spec: WindowSpec) -> HeadlessWindow:
        with self._lock:
            if spec.label in self._windows:
                raise RuntimeError(f"a window with label {spec.label!r} already exists")
            window = HeadlessWindow(spec)
            self._windows[spec.label] = window
        logger.debug("Created window %s (%sx%s)", spec.label, spec.width, spec.height)
        return window

    def windows(self) -> list[HeadlessWindow]:
        with self._lock:
            return list(self._windows.values())

    def primary_display(self) -> DisplayGeometry | None:
        return self.display


class LoggingIndicator:
    """Indicator that logs appearance changes instead of drawing them."""

    def __init__(self, name: str = "main-tray") -> None:
        self.name = name
        self.icon: str | None = None
        self.tooltip: str | None = None

    def set_icon(self, asset: str) -> None:
        if asset != self.icon:
            logger.info("Indicator %s icon -> %s", self.name, asset)
        self.icon = asset

    def set_tooltip(self, text: str) -> None:
        self.tooltip = text
