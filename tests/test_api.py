"""Tests for the FastAPI command bridge."""

from __future__ import annotations

import asyncio
import time
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from trayguard.api.app import create_app
from trayguard.config.models import AuthConfig, TrayGuardConfig
from trayguard.events.emitter import HEALTH_CHANGED, HEALTH_UPDATE, HealthEvent
from trayguard.proxy import ForwardRequestError
from trayguard.runtime import build_runtime


@pytest.fixture()
def client(runtime) -> TestClient:
    # No context manager: the lifespan (and so the poll loop) is not started
    return TestClient(create_app(runtime=runtime))


@pytest.fixture()
def auth_runtime(sample_config: TrayGuardConfig, backend):
    sample_config.auth = AuthConfig(api_key="test-secret-key")
    return build_runtime(sample_config, backend=backend)


@pytest.fixture()
def auth_client(auth_runtime) -> TestClient:
    return TestClient(create_app(runtime=auth_runtime))


class TestHealthEndpoints:
    def test_bridge_liveness(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_health_before_first_tick(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["overall"] == "down"
        assert [s["healthy"] for s in data["services"]] == [False] * 4
        assert data["checked_at"] is None

    def test_health_reflects_store(self, client, runtime, make_snapshot):
        runtime.store.write(make_snapshot(True, False, True, True))
        data = client.get("/api/health").json()
        assert data["overall"] == "degraded"
        assert data["services"][1]["name"] == "Qdrant"
        assert data["services"][1]["healthy"] is False

    def test_services(self, client, runtime, make_snapshot):
        runtime.store.write(make_snapshot(True, False, True, True))
        services = client.get("/api/services").json()
        assert [s["status"] for s in services] == ["healthy", "unreachable", "healthy", "healthy"]
        assert services[0]["port"] == 5432

    def test_events(self, client, runtime, make_snapshot):
        snap = make_snapshot(True, True, True, True)
        asyncio.run(runtime.event_log.on_event(HealthEvent.now(HEALTH_UPDATE, snap)))
        asyncio.run(runtime.event_log.on_event(HealthEvent.now(HEALTH_CHANGED, snap)))

        events = client.get("/api/events").json()
        assert [e["event_type"] for e in events] == ["health-changed", "health-update"]
        assert events[0]["data"]["overall"] == "healthy"

        changed = client.get("/api/events", params={"event_type": "health-changed", "limit": 5}).json()
        assert len(changed) == 1

    def test_events_filtered_by_overall(self, client, runtime, make_snapshot):
        asyncio.run(runtime.event_log.on_event(HealthEvent.now(HEALTH_UPDATE, make_snapshot(True, True, True, True))))
        asyncio.run(runtime.event_log.on_event(HealthEvent.now(HEALTH_UPDATE, make_snapshot(True, False, True, True))))

        events = client.get("/api/events", params={"overall": "degraded"}).json()
        assert [e["data"]["overall"] for e in events] == ["degraded"]
        assert client.get("/api/events", params={"overall": "sideways"}).status_code == 422

    def test_transitions(self, client, runtime, make_snapshot):
        asyncio.run(runtime.event_log.on_event(HealthEvent.now(HEALTH_UPDATE, make_snapshot(True, True, True, True))))
        asyncio.run(runtime.event_log.on_event(HealthEvent.now(HEALTH_UPDATE, make_snapshot(False, False, False, False))))

        transitions = client.get("/api/transitions").json()
        assert len(transitions) == 1
        assert (transitions[0]["previous"], transitions[0]["current"]) == ("healthy", "down")
        assert transitions[0]["unhealthy"] == ["PostgreSQL", "Qdrant", "Context Manager", "Web UI"]

    def test_single_service(self, client, runtime, make_snapshot):
        runtime.store.write(make_snapshot(True, False, True, True))
        resp = client.get("/api/services/Qdrant")
        assert resp.status_code == 200
        assert resp.json()["status"] == "unreachable"
        assert client.get("/api/services/Context Manager").json()["port"] == 3001

    def test_unknown_service(self, client):
        resp = client.get("/api/services/Redis")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Unknown service: Redis"


class TestWindowEndpoints:
    def test_toggle_creates_popover(self, client, backend):
        resp = client.post("/api/popover/toggle")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "operation": "popover.create", "error": None, "state": "visible"}
        assert backend.get_window("chat-popover") is not None

    def test_hide_absent_popover(self, client):
        resp = client.post("/api/popover/hide")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True
        assert resp.json()["state"] == "absent"

    def test_show_main_window_missing(self, client):
        resp = client.post("/api/main-window/show")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True

    def test_window_failure_is_reported_in_body(self, client):
        with patch(
            "trayguard.desktop.headless.HeadlessBackend.create_window",
            side_effect=RuntimeError("no display server"),
        ):
            resp = client.post("/api/popover/toggle")
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is False
        assert "no display server" in body["error"]
        assert body["state"] == "absent"


class TestProxyEndpoint:
    def test_forward_success(self, client):
        with patch("trayguard.commands.forward_request", new=AsyncMock(return_value="pong")) as mock_fwd:
            resp = client.post("/api/proxy", json={"method": "GET", "url": "http://127.0.0.1:3001/ping"})
        assert resp.status_code == 200
        assert resp.json() == {"body": "pong"}
        mock_fwd.assert_awaited_once_with("GET", "http://127.0.0.1:3001/ping", body=None, timeout=60.0)

    def test_forward_upstream_error(self, client):
        err = ForwardRequestError("HTTP 404: not here", status_code=404, body="not here")
        with patch("trayguard.commands.forward_request", new=AsyncMock(side_effect=err)):
            resp = client.post("/api/proxy", json={"method": "GET", "url": "http://127.0.0.1:3001/x"})
        assert resp.status_code == 502
        assert resp.json()["detail"] == "HTTP 404: not here"

    def test_forward_validation(self, client):
        resp = client.post("/api/proxy", json={"url": "http://127.0.0.1:3001/x"})
        assert resp.status_code == 422

    def test_malformed_url_is_bad_gateway(self, client):
        resp = client.post("/api/proxy", json={"method": "GET", "url": "http://[::1"})
        assert resp.status_code == 502
        assert resp.json()["detail"].startswith("Request failed")


class TestAuth:
    def test_reads_are_open(self, auth_client):
        assert auth_client.get("/api/health").status_code == 200

    def test_toggle_requires_key(self, auth_client):
        assert auth_client.post("/api/popover/toggle").status_code == 401

    def test_wrong_key(self, auth_client):
        resp = auth_client.post("/api/popover/hide", headers={"X-API-Key": "nope"})
        assert resp.status_code == 401

    def test_correct_key(self, auth_client):
        resp = auth_client.post("/api/popover/hide", headers={"X-API-Key": "test-secret-key"})
        assert resp.status_code == 200

    def test_proxy_requires_key(self, auth_client):
        resp = auth_client.post("/api/proxy", json={"method": "GET", "url": "http://x"})
        assert resp.status_code == 401

    def test_open_without_configured_key(self, client):
        assert client.post("/api/popover/hide").status_code == 200

    def test_key_is_read_from_runtime(self, auth_client, auth_runtime):
        auth_runtime.config.auth.api_key = "rotated-key"
        old = auth_client.post("/api/popover/hide", headers={"X-API-Key": "test-secret-key"})
        new = auth_client.post("/api/popover/hide", headers={"X-API-Key": "rotated-key"})
        assert old.status_code == 401
        assert new.status_code == 200


class TestLifespan:
    def test_poll_loop_runs_with_app(self, sample_config: TrayGuardConfig, backend, make_snapshot):
        runtime = build_runtime(sample_config, backend=backend)
        snap = make_snapshot(True, True, True, True)
        runtime.poll_loop._aggregator.run = AsyncMock(return_value=snap)

        with TestClient(create_app(runtime=runtime)) as client:
            for _ in range(200):
                if client.get("/api/health").json()["overall"] == "healthy":
                    break
                time.sleep(0.01)
            assert client.get("/api/health").json()["overall"] == "healthy"
