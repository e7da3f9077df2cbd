import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI

from src.app.api import auth, email, views
from src.app.api.middleware import SessionGateMiddleware
from src.app.api.v1 import clients
from src.app.config import get_settings
from src.app.containers import Container, WIRED_MODULES
from src.app.logging import configure_logging

# Configure logging at module load time
configure_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

# Type alias for lifespan context manager
LifespanType = Callable[[FastAPI], AsyncIterator[None]]


@asynccontextmanager
async def default_lifespan(app: FastAPI):
    """Default application lifespan manager - creates tables on startup, releases connections on shutdown."""
    container: Container = app.state.container
    config = container.config()
    logger.info("Starting %s...", config.app_name)

    db = container.database()
    await db.create_tables()
    logger.info("Database initialized successfully")

    if not config.email_configured:
        logger.warning("RESEND_API_KEY is not set; welcome emails will fail and only be logged")

    yield

    logger.info("Shutting down %s...", config.app_name)
    await container.session_provider().close()
    await db.dispose()


def create_app(container: Container, lifespan: LifespanType | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: DI container providing settings, services and collaborators.
        lifespan: Optional lifespan context manager. If not provided, uses default_lifespan.

    Returns:
        Configured FastAPI application.
    """
    container.wire(modules=WIRED_MODULES)

    config = container.config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan or default_lifespan,
    )

    # Attach container to app state for access in lifespan, middleware and routes
    app.state.container = container

    # Session resolution runs before any gated view renders
    app.add_middleware(SessionGateMiddleware)

    # Include routers
    app.include_router(clients.router, prefix="/api/v1")
    app.include_router(email.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(views.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


container = Container()
app = create_app(container=container)
