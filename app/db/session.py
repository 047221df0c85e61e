# app/db/session.py
import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and the session factory for one database URL."""

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def _engine_kwargs(self) -> dict:
        kwargs = {"echo": settings.DB_ECHO}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_recycle=settings.DB_POOL_RECYCLE,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_pre_ping=True,
            )
        return kwargs

    async def connect(self) -> None:
        """Create the engine and make sure the tables exist."""
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, **self._engine_kwargs())
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database connected")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database disconnected")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.session_factory is None:
            await self.connect()
        async with self.session_factory() as session:
            yield session


db = Database(settings.DATABASE_URL)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async for session in db.session():
        yield session
