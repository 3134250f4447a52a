"""HTTP surface for fetching and pushing credentials on demand."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, Response

from .config import RotatorConfig, load_config
from .dispatch import CONTENT_TYPE, RequestDispatcher

logger = logging.getLogger(__name__)

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(
    config: Optional[RotatorConfig] = None,
    dispatcher: Optional[RequestDispatcher] = None,
) -> FastAPI:
    """Build the FastAPI application.

    When ``dispatcher`` is omitted one is created on startup from ``config``
    (or the loaded configuration) and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if dispatcher is not None:
            yield
            return
        owned = RequestDispatcher(config or load_config())
        app.state.dispatcher = owned
        try:
            yield
        finally:
            await owned.aclose()

    app = FastAPI(title="tvrotate", lifespan=lifespan)
    if dispatcher is not None:
        app.state.dispatcher = dispatcher

    @app.api_route("/{path:path}", methods=METHODS)
    async def handle(request: Request) -> Response:
        body = await request.app.state.dispatcher.handle_request(request.method)
        logger.debug(f"{request.method} {request.url.path} -> {len(body)} bytes")
        return Response(content=body, status_code=200, media_type=CONTENT_TYPE)

    return app
