"""Unified error handling — service, fetch and request validation errors → JSON."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from issuescope.engines.record_fetcher import FetchError, RemoteApiError
from issuescope.services import NotFoundError, ServiceError, ValidationError

log = structlog.get_logger("issuescope.api")

_STATUS_MAP: dict[type[ServiceError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
}


async def _service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    status = 500
    for cls in type(exc).__mro__:
        if cls in _STATUS_MAP:
            status = _STATUS_MAP[cls]
            break
    return JSONResponse(status_code=status, content={"detail": str(exc)})


async def _fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    upstream_status = exc.status_code if isinstance(exc, RemoteApiError) else None
    log.error(
        "api.upstream_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        upstream_status=upstream_status,
        error=str(exc),
    )
    return JSONResponse(status_code=502, content={"detail": str(exc)})


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return JSONResponse(status_code=422, content={"detail": "; ".join(messages)})


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(FetchError, _fetch_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
