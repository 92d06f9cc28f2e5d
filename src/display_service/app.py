from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from display_service.api.middleware.correlation_id import CorrelationIdMiddleware
from display_service.api.middleware.metrics import RequestTimingMiddleware
from display_service.api.v1.routers import health, messages
from display_service.application.exceptions import ValidationError
from display_service.config import settings
from display_service.logging_config import configure_logging
from display_service.services.mailbox import MessageMailbox

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    configure_logging(settings.LOG_LEVEL)
    logger.info(
        "Display service ready (prefix=%s, history_max_size=%d)",
        settings.API_PREFIX,
        app.state.mailbox.history_max_size,
    )
    yield
    logger.info("Display service stopped")


def create_app(mailbox: MessageMailbox | None = None) -> FastAPI:
    app = FastAPI(
        title="Display Messaging Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.mailbox = mailbox or MessageMailbox()

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        content = {"error": exc.detail}
        content.update({to_camel(key): value for key, value in exc.context.items()})
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(Exception)
    async def _unhandled(req: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", req.method, req.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
        )
