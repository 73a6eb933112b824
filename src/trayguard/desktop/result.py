"""Outcome of a best-effort window or indicator operation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpResult:
    """Success or a logged, swallowed failure of a platform call."""

    operation: str
    ok: bool = True
    error: str | None = None

    @classmethod
    def success(cls, operation: str) -> OpResult:
        return cls(operation=operation)

    @classmethod
    def failure(cls, operation: str, exc: BaseException | str) -> OpResult:
        return cls(operation=operation, ok=False, error=str(exc))

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "operation": self.operation, "error": self.error}


def attempt(operation: str, fn: Callable[..., Any], *args: Any) -> OpResult:
    """Run *fn*, logging and returning any exception instead of raising it."""
    try:
        fn(*args)
    except Exception as exc:
        logger.warning("%s failed: %s", operation, exc)
        return OpResult.failure(operation, exc)
    return OpResult.success(operation)
