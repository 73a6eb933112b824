"""Stateless request forwarding for a UI that cannot reach localhost directly."""

from __future__ import annotations

import httpx

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})


class ForwardRequestError(Exception):
    """Forwarding failed: bad method, transport error or upstream status >= 400."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


async def forward_request(
    method: str,
    url: str,
    body: str | None = None,
    timeout: float = 60.0,
) -> str:
    """Send *body* (JSON text) to *url* and return the response text."""
    verb = method.upper()
    if verb not in SUPPORTED_METHODS:
        raise ForwardRequestError(f"Unsupported HTTP method: {verb}")

    headers: dict[str, str] = {}
    if body is not None:
        headers["content-type"] = "application/json"

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.request(verb, url, content=body, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        raise ForwardRequestError(f"Request failed: {exc}") from exc

    text = resp.text
    if resp.status_code >= 400:
        raise ForwardRequestError(
            f"HTTP {resp.status_code}: {text}",
            status_code=resp.status_code,
            body=text,
        )
    return text
