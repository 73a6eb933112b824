"""Show/hide/create lifecycle of the singleton popover window."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from enum import Enum

from trayguard.config.models import MainWindowConfig, PopoverConfig
from trayguard.desktop.result import OpResult, attempt
from trayguard.desktop.window import Window, WindowBackend, WindowSpec

logger = logging.getLogger(__name__)


class PopoverState(str, Enum):
    ABSENT = "absent"
    HIDDEN = "hidden"
    VISIBLE = "visible"


def _is_visible(window: Window) -> bool:
    try:
        return bool(window.is_visible())
    except Exception as exc:
        logger.warning("Could not query visibility of %s: %s", window.label, exc)
        return False


class PopoverController:
    """Drives the popover through absent -> visible <-> hidden.

    The window is looked up by its label on every call, and the lookup plus
    the action that follows run under one re-entrant lock so concurrent
    toggles cannot create a second window. Focus events may arrive
    synchronously from inside show/focus, hence the RLock.
    """

    def __init__(
        self,
        backend: WindowBackend,
        config: PopoverConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._backend = backend
        self._config = config or PopoverConfig()
        self._clock = clock
        self._lock = threading.RLock()
        self._attached: set[int] = set()
        self._created_at: float | None = None

    @property
    def label(self) -> str:
        return self._config.label

    def _lookup(self) -> Window | None:
        try:
            return self._backend.get_window(self._config.label)
        except Exception as exc:
            logger.warning("Popover lookup failed: %s", exc)
            return None

    def state(self) -> PopoverState:
        with self._lock:
            window = self._lookup()
            if window is None:
                return PopoverState.ABSENT
            return PopoverState.VISIBLE if _is_visible(window) else PopoverState.HIDDEN

    def attach(self) -> OpResult:
        """Register the focus-loss handler on a popover the shell already created."""
        with self._lock:
            window = self._lookup()
            if window is None:
                return OpResult.success("popover.attach")
            return self._watch_focus(window)

    def toggle(self) -> OpResult:
        """Hide if visible, reveal if hidden, create if absent.

        A toggle arriving within ``toggle_debounce`` seconds of the one that
        created the window is coalesced into the create. Toggles on a window
        that already existed are never dropped.
        """
        with self._lock:
            if (
                self._created_at is not None
                and self._clock() - self._created_at < self._config.toggle_debounce
            ):
                logger.debug("Coalescing toggle into popover creation")
                self._created_at = None
                return OpResult.success("popover.toggle")
            self._created_at = None
            window = self._lookup()
            if window is None:
                return self._create()
            if _is_visible(window):
                return attempt("popover.hide", window.hide)
            return self._reveal(window)

    def hide(self) -> OpResult:
        with self._lock:
            self._created_at = None
            window = self._lookup()
            if window is None:
                return OpResult.success("popover.hide")
            return attempt("popover.hide", window.hide)

    def handle_focus_change(self, focused: bool) -> None:
        if focused:
            return
        with self._lock:
            window = self._lookup()
            if window is not None and _is_visible(window):
                self._created_at = None
                attempt("popover.hide", window.hide)

    def anchor_position(self) -> tuple[float, float] | None:
        """Top-right anchor on the current primary display, or None if unknown."""
        try:
            display = self._backend.primary_display()
        except Exception as exc:
            logger.warning("Could not read primary display: %s", exc)
            return None
        if display is None:
            return None
        x = display.logical_width - (self._config.width + self._config.margin_right)
        return x, self._config.margin_top

    def _reveal(self, window: Window) -> OpResult:
        position = self.anchor_position()
        if position is not None:
            attempt("popover.set_position", window.set_position, *position)
        shown = attempt("popover.show", window.show)
        if not shown.ok:
            return shown
        return attempt("popover.set_focus", window.set_focus)

    def _create(self) -> OpResult:
        spec = WindowSpec(
            label=self._config.label,
            url=self._config.url,
            width=self._config.width,
            height=self._config.height,
            decorations=False,
            always_on_top=True,
            skip_taskbar=True,
            visible=True,
        )
        try:
            window = self._backend.create_window(spec)
        except Exception as exc:
            logger.warning("Popover creation failed: %s", exc)
            return OpResult.failure("popover.create", exc)
        self._created_at = self._clock()
        self._watch_focus(window)
        return OpResult.success("popover.create")

    def _watch_focus(self, window: Window) -> OpResult:
        if id(window) in self._attached:
            return OpResult.success("popover.attach")
        result = attempt("popover.attach", window.on_focus_changed, self.handle_focus_change)
        if result.ok:
            self._attached.add(id(window))
        return result


def show_main_window(backend: WindowBackend, config: MainWindowConfig | None = None) -> OpResult:
    """Show and focus the main window; a missing window is not an error."""
    label = (config or MainWindowConfig()).label
    try:
        window = backend.get_window(label)
    except Exception as exc:
        logger.warning("Main window lookup failed: %s", exc)
        return OpResult.failure("main_window.show", exc)
    if window is None:
        return OpResult.success("main_window.show")
    shown = attempt("main_window.show", window.show)
    if not shown.ok:
        return shown
    return attempt("main_window.set_focus", window.set_focus)
