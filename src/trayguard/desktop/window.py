"""Platform contract the core needs from a windowing toolkit."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

FocusCallback = Callable[[bool], None]


@dataclass(frozen=True)
class DisplayGeometry:
    """Physical size of a display and its scale factor."""

    width: int
    height: int
    scale_factor: float = 1.0

    @property
    def logical_width(self) -> float:
        return self.width / self.scale_factor


@dataclass(frozen=True)
class WindowSpec:
    """Creation parameters for a new window."""

    label: str
    url: str
    title: str = ""
    width: float = 800.0
    height: float = 600.0
    decorations: bool = True
    always_on_top: bool = False
    skip_taskbar: bool = False
    visible: bool = True


class Window(Protocol):
    label: str

    def is_visible(self) -> bool: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def set_focus(self) -> None: ...

    def set_position(self, x: float, y: float) -> None: ...

    def on_focus_changed(self, callback: FocusCallback) -> None: ...

    def emit(self, event: str, payload: Any) -> None: ...


class WindowBackend(Protocol):
    def get_window(self, label: str) -> Window | None: ...

    def create_window(self, spec: WindowSpec) -> Window: ...

    def windows(self) -> list[Window]: ...

    def primary_display(self) -> DisplayGeometry | None: ...


class Indicator(Protocol):
    """A tray or menu-bar status icon."""

    def set_icon(self, asset: str) -> None: ...

    def set_tooltip(self, text: str) -> None: ...
