"""TrayGuard configuration system."""

from trayguard.config.loader import find_config_file, load_config, load_config_or_default
from trayguard.config.models import EndpointEntry, PollingConfig, PopoverConfig, TrayGuardConfig

__all__ = [
    "EndpointEntry",
    "PollingConfig",
    "PopoverConfig",
    "TrayGuardConfig",
    "find_config_file",
    "load_config",
    "load_config_or_default",
]
