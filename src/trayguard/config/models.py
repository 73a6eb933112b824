"""Pydantic models for TrayGuard configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class EndpointEntry(BaseModel):
    """A local service whose port is probed every tick."""

    name: str
    address: str = "127.0.0.1"
    port: int = Field(ge=1, le=65535)


def default_endpoints() -> list[EndpointEntry]:
    return [
        EndpointEntry(name="PostgreSQL", port=5432),
        EndpointEntry(name="Qdrant", port=6333),
        EndpointEntry(name="Context Manager", port=3001),
        EndpointEntry(name="Web UI", port=3100),
    ]


class PollingConfig(BaseModel):
    """Timing of the background health poll, in seconds."""

    settle_delay: float = Field(default=3.0, ge=0)
    interval: float = Field(default=5.0, gt=0)
    probe_timeout: float = Field(default=1.0, gt=0)


class PopoverConfig(BaseModel):
    """Geometry and identity of the singleton popover window."""

    label: str = "chat-popover"
    url: str = "popover.html"
    width: float = 380.0
    height: float = 540.0
    margin_right: float = 10.0
    margin_top: float = 30.0  # below the menu bar
    toggle_debounce: float = Field(default=0.25, ge=0)  # a toggle this soon after creation is absorbed


class MainWindowConfig(BaseModel):
    label: str = "main"


class IndicatorConfig(BaseModel):
    """Tray indicator appearance, one icon per overall status."""

    id: str = "main-tray"
    title: str = "TrayGuard"
    tooltip_template: str = "{title}: {overall}"
    icons: dict[str, str] = Field(
        default_factory=lambda: {
            "healthy": "icons/tray-green.png",
            "degraded": "icons/tray-yellow.png",
            "down": "icons/tray-red.png",
        }
    )

    @field_validator("icons")
    @classmethod
    def _all_statuses(cls, value: dict[str, str]) -> dict[str, str]:
        missing = [s for s in ("healthy", "degraded", "down") if s not in value]
        if missing:
            raise ValueError(f"Missing indicator icons for: {', '.join(missing)}")
        return value


class ProxyConfig(BaseModel):
    timeout: float = Field(default=60.0, gt=0)


class AppIdentity(BaseModel):
    """Top-level TrayGuard identity metadata."""

    name: str = "TrayGuard"
    version: str = "0.1.0"


class AuthConfig(BaseModel):
    """Authentication configuration for the HTTP command bridge."""

    api_key: str = ""  # empty = auth disabled


class WebhookConfig(BaseModel):
    """Configuration for a single webhook endpoint."""

    url: str
    events: list[str] = Field(default_factory=lambda: ["health-changed"])
    secret: str = ""  # HMAC signing key, supports ${ENV_VAR}


class TrayGuardConfig(BaseModel):
    """Root configuration model for .trayguard.yaml."""

    app: AppIdentity = Field(default_factory=AppIdentity)
    endpoints: list[EndpointEntry] = Field(default_factory=default_endpoints)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    popover: PopoverConfig = Field(default_factory=PopoverConfig)
    main_window: MainWindowConfig = Field(default_factory=MainWindowConfig)
    indicator: IndicatorConfig = Field(default_factory=IndicatorConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    webhooks: list[WebhookConfig] = Field(default_factory=list)
    event_log_size: int = 100
    log_level: str = "INFO"

    @field_validator("endpoints")
    @classmethod
    def _unique_names(cls, value: list[EndpointEntry]) -> list[EndpointEntry]:
        names = [e.name for e in value]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"Duplicate endpoint names: {', '.join(dupes)}")
        return value
