"""Service probing, aggregation and the shared health store."""

from trayguard.health.aggregator import Aggregator, has_changed, probe_all
from trayguard.health.models import AggregateHealth, OverallStatus, ServiceHealth, compute_overall
from trayguard.health.probe import probe
from trayguard.health.store import HealthStore

__all__ = [
    "AggregateHealth",
    "Aggregator",
    "HealthStore",
    "OverallStatus",
    "ServiceHealth",
    "compute_overall",
    "has_changed",
    "probe",
    "probe_all",
]
