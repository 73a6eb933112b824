"""FastAPI application factory for the TrayGuard command bridge."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trayguard.api.routes import health, proxy, windows
from trayguard.config.loader import load_config_or_default
from trayguard.config.models import TrayGuardConfig
from trayguard.runtime import Runtime, build_runtime


def create_app(
    config: TrayGuardConfig | None = None,
    runtime: Runtime | None = None,
) -> FastAPI:
    if runtime is None:
        if config is None:
            try:
                config = load_config_or_default()
            except (ValueError, yaml.YAMLError):
                # Invalid file: keep the bridge up on the built-in defaults
                config = TrayGuardConfig()
        runtime = build_runtime(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        runtime.poll_loop.start()
        try:
            yield
        finally:
            await runtime.poll_loop.stop()
            await runtime.emitter.drain()

    app = FastAPI(
        title=runtime.config.app.name,
        version=runtime.config.app.version,
        description="Local service supervisor command bridge",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.runtime = runtime

    @app.get("/health", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(health.router, prefix="/api")
    app.include_router(windows.router, prefix="/api")
    app.include_router(proxy.router, prefix="/api")

    return app


app = create_app()
