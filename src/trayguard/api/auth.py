"""Shared-secret guard for the mutating bridge endpoints."""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Request

API_KEY_HEADER = "X-API-Key"


async def require_api_key(request: Request) -> None:
    """FastAPI dependency comparing X-API-Key with the runtime's configured key.

    An empty ``auth.api_key`` leaves the bridge open, which is the default for
    a loopback-only shell.
    """
    expected = request.app.state.runtime.config.auth.api_key
    if not expected:
        return
    supplied = request.headers.get(API_KEY_HEADER, "")
    if not hmac.compare_digest(supplied.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
