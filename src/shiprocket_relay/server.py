"""FastAPI application exposing the tracking handler over HTTP."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from shiprocket_relay.config import Config, get_config
from shiprocket_relay.handler import TrackingHandler, build_handler
from shiprocket_relay.models.tracking import RESPONSE_HEADERS, TrackingResult

logger = logging.getLogger(__name__)


def _to_response(result: TrackingResult) -> Response:
    return Response(
        content=result.render(),
        status_code=result.status_code,
        headers=result.headers,
        media_type="application/json",
    )


def create_app(config: Config | None = None, handler: TrackingHandler | None = None) -> FastAPI:
    """Build the relay app.

    Args:
        config: Settings to serve with. Defaults to ``get_config()``.
        handler: Pre-built handler (tests inject one with stubbed transports).
    """
    config = config or get_config()
    handler = handler or build_handler(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        handler.close()

    app = FastAPI(title="Shiprocket Tracking Relay", lifespan=lifespan)
    app.state.handler = handler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # Sync route: runs in the threadpool, handler calls block on httpx
    @app.get(config.server.track_path)
    def track(awb: str | None = None) -> Response:
        return _to_response(handler.handle(awb))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return Response(
            content=json.dumps({"error": message}),
            status_code=exc.status_code,
            headers={**RESPONSE_HEADERS, **(exc.headers or {})},
            media_type="application/json",
        )

    return app
