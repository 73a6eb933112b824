"""Popover and main-window commands.

These always answer 200: a window that failed to move is reported in the
body, not as an HTTP error.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from trayguard.api.auth import require_api_key

router = APIRouter(tags=["windows"], dependencies=[Depends(require_api_key)])


@router.post("/popover/toggle")
async def toggle_popover(request: Request) -> dict[str, Any]:
    result = request.app.state.runtime.commands.toggle_popover()
    return {**result.to_dict(), "state": request.app.state.runtime.popover.state().value}


@router.post("/popover/hide")
async def hide_popover(request: Request) -> dict[str, Any]:
    result = request.app.state.runtime.commands.hide_popover()
    return {**result.to_dict(), "state": request.app.state.runtime.popover.state().value}


@router.post("/main-window/show")
async def show_main_window(request: Request) -> dict[str, Any]:
    return request.app.state.runtime.commands.show_main_window().to_dict()
