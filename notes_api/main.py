"""
FastAPI application.

    uvicorn notes_api.main:app

`app` is built on first attribute access, so tests can call
create_app() without touching the module-level instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_api.api import health
from notes_api.api import router as api_router
from notes_api.core.config import get_app_config, get_log_level
from notes_api.core.database import dispose_engine, init_models
from notes_api.core.exception_handlers import register_exception_handlers
from notes_api.core.logging import get_logger, setup_logging
from notes_api.core.middleware import REQUEST_ID_HEADER, RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = get_app_config()
    setup_logging(level=get_log_level())

    if config.database.create_tables:
        await init_models()

    logger.info(
        "Notes API started",
        extra={"version": config.application.version, "env": config.application.environment},
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Notes API stopped")


def create_app() -> FastAPI:
    """Build the app: middleware, error envelope, health and note routes."""
    settings = get_app_config().application

    app = FastAPI(
        title=settings.name,
        description=settings.description,
        version=settings.version,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        lifespan=lifespan,
    )

    if settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors.origins,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER],
        )
    # Outermost, so CORS preflight responses get a request ID too
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


def get_app() -> FastAPI:
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
