"""Maps the overall status onto the tray indicator."""

from __future__ import annotations

from trayguard.config.models import IndicatorConfig
from trayguard.desktop.result import OpResult, attempt
from trayguard.desktop.window import Indicator
from trayguard.health.models import OverallStatus


class IndicatorPresenter:
    def __init__(self, config: IndicatorConfig, indicator: Indicator | None = None) -> None:
        self._config = config
        self._indicator = indicator

    def icon_for(self, overall: OverallStatus) -> str:
        icons = self._config.icons
        return icons.get(overall.value) or icons[OverallStatus.DOWN.value]

    def tooltip_for(self, overall: OverallStatus) -> str:
        return self._config.tooltip_template.format(
            title=self._config.title, overall=overall.value
        )

    def apply(self, overall: OverallStatus) -> list[OpResult]:
        """Update icon and tooltip. Failures are logged and returned, never raised."""
        if self._indicator is None:
            return []
        return [
            attempt("indicator.set_icon", self._indicator.set_icon, self.icon_for(overall)),
            attempt("indicator.set_tooltip", self._indicator.set_tooltip, self.tooltip_for(overall)),
        ]
