"""Shared fixtures for TrayGuard tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from trayguard.config.models import TrayGuardConfig
from trayguard.desktop.headless import HeadlessBackend, LoggingIndicator
from trayguard.health.models import AggregateHealth, ServiceHealth
from trayguard.runtime import Runtime, build_runtime

SAMPLE_CONFIG: Dict[str, Any] = {
    "app": {"name": "TrayGuard", "version": "0.1.0"},
    "endpoints": [
        {"name": "PostgreSQL", "address": "127.0.0.1", "port": 5432},
        {"name": "Qdrant", "address": "127.0.0.1", "port": 6333},
        {"name": "Context Manager", "address": "127.0.0.1", "port": 3001},
        {"name": "Web UI", "address": "127.0.0.1", "port": 3100},
    ],
    "polling": {"settle_delay": 0, "interval": 0.01, "probe_timeout": 0.2},
    "popover": {"label": "chat-popover", "width": 380, "height": 540},
}

NAMES = [e["name"] for e in SAMPLE_CONFIG["endpoints"]]


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def sample_config() -> TrayGuardConfig:
    """Return a parsed TrayGuardConfig from sample data."""
    return TrayGuardConfig(**SAMPLE_CONFIG)


@pytest.fixture()
def sample_config_dict() -> Dict[str, Any]:
    return dict(SAMPLE_CONFIG)


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """Write sample config to a temp .trayguard.yaml and return the path."""
    path = tmp_path / ".trayguard.yaml"
    with path.open("w") as fh:
        yaml.dump(SAMPLE_CONFIG, fh)
    return path


@pytest.fixture()
def backend() -> HeadlessBackend:
    return HeadlessBackend()


@pytest.fixture()
def indicator() -> LoggingIndicator:
    return LoggingIndicator()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def runtime(sample_config: TrayGuardConfig, backend: HeadlessBackend, indicator: LoggingIndicator) -> Runtime:
    return build_runtime(sample_config, backend=backend, indicator=indicator)


@pytest.fixture()
def make_snapshot() -> Callable[..., AggregateHealth]:
    """Build a snapshot over the sample endpoints from per-service flags."""

    def _make(*flags: bool) -> AggregateHealth:
        endpoints = SAMPLE_CONFIG["endpoints"]
        return AggregateHealth(
            services=tuple(
                ServiceHealth(name=e["name"], address=e["address"], port=e["port"], healthy=flag)
                for e, flag in zip(endpoints, flags)
            )
        )

    return _make
