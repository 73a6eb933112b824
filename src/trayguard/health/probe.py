"""TCP reachability probe."""

from __future__ import annotations

import asyncio
import contextlib
import logging

logger = logging.getLogger(__name__)


async def probe(address: str, port: int, timeout: float = 1.0) -> bool:
    """Return True iff a TCP connection to address:port opens within *timeout*.

    Unreachable is an expected outcome, so this never raises. The connection
    is closed as soon as it is established.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(address, port),
            timeout=timeout,
        )
    except TimeoutError:
        logger.debug("Probe %s:%d timed out after %.1fs", address, port, timeout)
        return False
    except OSError as exc:
        logger.debug("Probe %s:%d failed: %s", address, port, exc)
        return False
    except Exception as exc:
        logger.debug("Probe %s:%d errored: %r", address, port, exc)
        return False

    writer.close()
    with contextlib.suppress(OSError, TimeoutError):
        await asyncio.wait_for(writer.wait_closed(), timeout=timeout)
    return True
