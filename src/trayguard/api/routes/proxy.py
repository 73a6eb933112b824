"""Request forwarding endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from trayguard.api.auth import require_api_key
from trayguard.proxy import ForwardRequestError

router = APIRouter(tags=["proxy"])


class ForwardBody(BaseModel):
    method: str
    url: str
    body: str | None = None


@router.post("/proxy", dependencies=[Depends(require_api_key)])
async def forward(request: Request, payload: ForwardBody) -> dict[str, str]:
    commands = request.app.state.runtime.commands
    try:
        text = await commands.forward_request(payload.method, payload.url, payload.body)
    except ForwardRequestError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"body": text}
