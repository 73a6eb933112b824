"""Health snapshot and recent event endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Query, Request

from trayguard.events.log import EventLog
from trayguard.health.models import OverallStatus, ServiceHealth
from trayguard.runtime import Runtime

router = APIRouter(tags=["health"])


def _runtime(request: Request) -> Runtime:
    return request.app.state.runtime


def _service_dict(s: ServiceHealth) -> Dict[str, Any]:
    return {**s.to_dict(), "status": "healthy" if s.healthy else "unreachable"}


@router.get("/health")
async def get_health(request: Request) -> Dict[str, Any]:
    return _runtime(request).commands.get_health().to_dict()


@router.get("/services")
async def list_services(request: Request) -> List[Dict[str, Any]]:
    snapshot = _runtime(request).commands.get_health()
    return [_service_dict(s) for s in snapshot.services]


@router.get("/services/{name}")
async def get_service(request: Request, name: str) -> Dict[str, Any]:
    service = _runtime(request).commands.get_health().get(name)
    if service is None:
        raise HTTPException(status_code=404, detail=f"Unknown service: {name}")
    return _service_dict(service)


@router.get("/events")
async def recent_events(
    request: Request,
    limit: int = Query(20, ge=1, le=500),
    event_type: str | None = None,
    overall: OverallStatus | None = None,
) -> List[Dict[str, Any]]:
    event_log: EventLog = _runtime(request).event_log
    events = await event_log.get_recent(limit=limit, event_type=event_type, overall=overall)
    return [
        {
            "event_type": e.event_type,
            "timestamp": e.timestamp.isoformat(),
            "data": e.data,
        }
        for e in events
    ]


@router.get("/transitions")
async def recent_transitions(
    request: Request,
    limit: int = Query(20, ge=1, le=500),
) -> List[Dict[str, Any]]:
    transitions = await _runtime(request).event_log.get_transitions(limit=limit)
    return [t.to_dict() for t in transitions]
