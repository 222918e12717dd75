"""
FastAPI Application Entry Point.

The record store's session factory and the authenticator are constructed
once and passed into create_app(). When omitted they are built from the
YAML configuration.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_tracker.api import health
from todo_tracker.api import router as api_router
from todo_tracker.core.config import get_app_config
from todo_tracker.core.database import (
    create_engine_from_config,
    create_schema,
    create_session_factory,
)
from todo_tracker.core.exception_handlers import register_exception_handlers
from todo_tracker.core.logging import get_logger, setup_logging
from todo_tracker.core.middleware import RequestContextMiddleware
from todo_tracker.core.security import Authenticator, build_authenticator

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging(config=app_config.logging)

    engine = app.state.engine
    if engine is not None and app_config.database.create_schema:
        await create_schema(engine)

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "database_driver": app_config.database.driver,
            "jwks_url": app_config.security.jwks.url,
        },
    )
    yield
    logger.info("Application shutting down")

    if engine is not None:
        await engine.dispose()


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    authenticator: Authenticator | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        session_factory: Session factory for the record store. Built from
            database.yaml (and disposed on shutdown) when not given.
        authenticator: Bearer token verifier. Built from security.yaml
            when not given.
    """
    app_config = get_app_config()
    app_settings = app_config.application

    engine = None
    if session_factory is None:
        engine = create_engine_from_config()
        session_factory = create_session_factory(engine)
    if authenticator is None:
        authenticator = build_authenticator(app_config.security)

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.authenticator = authenticator

    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Creates the app on first call and caches it, avoiding
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn todo_tracker.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
