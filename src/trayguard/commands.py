"""Command surface called by the UI layer."""

from __future__ import annotations

from trayguard.config.models import MainWindowConfig, ProxyConfig
from trayguard.desktop.popover import PopoverController, show_main_window
from trayguard.desktop.result import OpResult
from trayguard.desktop.window import WindowBackend
from trayguard.health.models import AggregateHealth
from trayguard.health.store import HealthStore
from trayguard.proxy import forward_request


class CommandSurface:
    """Thin dispatcher over the store, the popover and the proxy.

    None of these wait on the poll loop; health reads return the last
    written snapshot.
    """

    def __init__(
        self,
        store: HealthStore,
        popover: PopoverController,
        backend: WindowBackend,
        main_window: MainWindowConfig | None = None,
        proxy: ProxyConfig | None = None,
    ) -> None:
        self._store = store
        self._popover = popover
        self._backend = backend
        self._main_window = main_window or MainWindowConfig()
        self._proxy = proxy or ProxyConfig()

    def get_health(self) -> AggregateHealth:
        return self._store.read()

    def toggle_popover(self) -> OpResult:
        return self._popover.toggle()

    def hide_popover(self) -> OpResult:
        return self._popover.hide()

    def show_main_window(self) -> OpResult:
        return show_main_window(self._backend, self._main_window)

    async def forward_request(self, method: str, url: str, body: str | None = None) -> str:
        return await forward_request(method, url, body=body, timeout=self._proxy.timeout)
