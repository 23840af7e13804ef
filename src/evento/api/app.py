"""
Evento HTTP Service
Template catalog, previews and instance rendering over FastAPI.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from injector import Injector

from evento import __version__
from evento.components.registry import ComponentRegistry
from evento.core.config import Settings, get_settings
from evento.core.container import create_container
from evento.core.id import new_request_id
from evento.core.logging_config import LogContext, configure_logging, get_logger

from .errors import register_error_handlers
from .routes import router

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup, log shutdown."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level, settings.json_logs)

    registry = app.state.container.get(ComponentRegistry)
    logger.info(
        "service_starting",
        version=__version__,
        components=len(registry),
        cache=settings.enable_cache,
    )

    yield

    logger.info("service_stopped")


def create_app(settings: Settings | None = None, container: Injector | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings override (defaults to environment)
        container: Pre-built injector, mainly for tests

    Returns:
        Configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Evento",
        description="Template composition and rendering engine",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container or create_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        with LogContext(request_id=request_id):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    register_error_handlers(app)
    app.include_router(router)
    return app


__all__ = ["REQUEST_ID_HEADER", "create_app", "lifespan"]
