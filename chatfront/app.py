from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import config
from .routes.runtime_config import router as runtime_config_router
from .routes.spa import router as spa_router
from .supervision import install_loop_handler


REQUEST_ID_HEADER = "x-request-id"

log = structlog.get_logger(__name__)
access_log = structlog.get_logger("chatfront.access")


def create_app(api_base_url: Optional[str] = None, static_dir: Optional[Path] = None) -> FastAPI:
    config.init_env()

    app = FastAPI(title="chatfront", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.api_base_url = api_base_url or config.api_base_url()
    app.state.static_dir = Path(static_dir).resolve() if static_dir else config.static_dir()

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(requestId=request_id)
        t0 = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as e:
                log.error(
                    "Unhandled error",
                    error={"message": str(e)},
                    exc_info=e,
                )
                response = JSONResponse(
                    status_code=500,
                    content={"error": "Internal Server Error", "requestId": request_id},
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            access_log.info(
                "request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - t0) * 1000, 2),
                remote_addr=request.client.host if request.client else None,
                user_agent=request.headers.get("user-agent"),
                referrer=request.headers.get("referer"),
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("requestId")

    @app.on_event("startup")
    async def _startup():
        install_loop_handler()

    # /config.js must be registered before the catch-all SPA route
    app.include_router(runtime_config_router)
    app.include_router(spa_router)
    return app


app = create_app()
