from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from consult_providers.base.http import aclose_all_clients
from consult_providers.base.logging import get_logger, log_event
from consult_providers.config import ServiceSettings, get_settings
from consult_providers.dispatch import Dispatcher, build_dispatcher

from .app_parts.app_core import (
    INVALID_BODY_MESSAGE,
    ChatBody,
    _build_health_response,
    _build_models_response,
    _handle_chat,
    error_response,
)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    logger = get_logger("consult.service")
    log_event(logger, "service.start", models=len(app.state.dispatcher.list_models()))
    try:
        yield
    finally:
        await aclose_all_clients()
        log_event(logger, "service.stop")


def create_app(dispatcher: Optional[Dispatcher] = None, settings: Optional[ServiceSettings] = None) -> FastAPI:
    """Build the FastAPI application.

    The dispatcher (catalog plus adapters) is built eagerly, so a malformed
    catalog raises ``CatalogConfigurationError`` here and the service never
    starts serving.
    """
    settings = settings or get_settings()
    if dispatcher is None:
        dispatcher = build_dispatcher(use_mocks=settings.use_mocks)

    app = FastAPI(title="Consultation Service", version="0.1.0", lifespan=_lifespan)
    app.state.dispatcher = dispatcher

    # -----------------------------------------------------------------------
    # CORS configuration
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        return error_response(INVALID_BODY_MESSAGE)

    # -----------------------------------------------------------------------
    # Endpoints
    # -----------------------------------------------------------------------

    @app.get("/api/health")
    async def health() -> Dict[str, Any]:
        """Liveness probe with the current UTC timestamp."""
        return _build_health_response()

    @app.get("/api/models")
    async def get_models(request: Request) -> Dict[str, Any]:
        """List every addressable model in catalog order."""
        return _build_models_response(request.app.state.dispatcher)

    @app.post("/api/chat")
    async def post_chat(body: ChatBody, request: Request):
        """Send one prompt to the selected models and return every outcome."""
        return await _handle_chat(body, request.app.state.dispatcher)

    return app


_APP: Optional[FastAPI] = None


def get_app() -> FastAPI:
    """Return the process-wide application, creating it on first use."""
    global _APP
    if _APP is None:
        _APP = create_app()
    return _APP


__all__ = ["create_app", "get_app"]
