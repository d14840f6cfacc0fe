"""IssueScope REST API — FastAPI application factory."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from issuescope.api.deps import close_client, get_client, init_client
from issuescope.api.errors import register_error_handlers
from issuescope.api.middleware.request_id import RequestIDMiddleware
from issuescope.api.routers import analysis, issues, search
from issuescope.core.logging import setup_logging
from issuescope.engines.record_fetcher import PleasanterClient

log = structlog.get_logger("issuescope.api")


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build the client and probe Pleasanter. Shutdown: close it."""
    client = init_client()
    if await client.health_check():
        log.info("startup.pleasanter_reachable")
    else:
        log.warning("startup.pleasanter_unreachable")
    yield
    await close_client()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title="IssueScope",
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        lifespan=_lifespan,
    )

    register_error_handlers(app)

    cors_origins = os.environ.get("ISSUESCOPE_CORS_ORIGINS", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health(client: PleasanterClient = Depends(get_client)) -> JSONResponse:
        reachable = await client.health_check()
        return JSONResponse(
            {"status": "ok" if reachable else "degraded", "pleasanter": reachable},
            status_code=200 if reachable else 503,
        )

    app.include_router(issues.router, prefix="/api/v1/sites", tags=["issues"])
    app.include_router(search.router, prefix="/api/v1/search", tags=["search"])
    app.include_router(analysis.router, prefix="/api/v1/analysis", tags=["analysis"])

    return app
