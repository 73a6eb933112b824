"""Lock-guarded cell holding the latest AggregateHealth."""

from __future__ import annotations

import threading

from trayguard.health.models import AggregateHealth


class HealthStore:
    """Owns the process-wide health snapshot.

    Readers may live on the event loop, a server threadpool or a GUI thread,
    so access goes through a ``threading.Lock``. Snapshots are immutable and
    replaced wholesale, so a reader always gets a consistent record.
    """

    def __init__(self, initial: AggregateHealth) -> None:
        self._lock = threading.Lock()
        self._snapshot = initial

    def read(self) -> AggregateHealth:
        with self._lock:
            return self._snapshot

    def write(self, snapshot: AggregateHealth) -> AggregateHealth:
        """Replace the stored snapshot and return the one it replaced."""
        with self._lock:
            previous, self._snapshot = self._snapshot, snapshot
            return previous
