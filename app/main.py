from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI

from app.core.config import settings
from app.core.exception_handler import register_exception_handlers
from app.core.logging_config import setup_logging
from app.core.middleware import register_middlewares
from app.db.session import db  # Import the database instance
from app.utils.deps import get_health_status

from app.db import base  # noqa: F401

# Routers
from app.api.v1.endpoints import book


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    await db.connect()

    yield

    await db.disconnect()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""

    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan,
    )

    register_middlewares(app)

    register_exception_handlers(app)

    app.include_router(book.router)

    @app.get("/health")
    async def health_check(health: dict = Depends(get_health_status)):
        """Health check endpoint."""
        return health

    return app


app = create_application()
