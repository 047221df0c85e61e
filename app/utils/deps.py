# # app/utils/deps.py
"""
FastAPI dependencies wiring a request to its store and service.

The session is opened per request and passed explicitly to the repository,
which is in turn injected into the service. Tests override
``get_book_store`` to run the service against a fake store.
"""

from datetime import datetime, timezone

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.crud.book_crud import BookRepository, BookStore
from app.db.session import get_session
from app.services.book_service import BookService


# ================== STORE & SERVICE DEPENDENCIES ==================


async def get_book_store(db: AsyncSession = Depends(get_session)) -> BookStore:
    """Repository bound to the request's database session."""
    return BookRepository(db)


async def get_book_service(
    book_store: BookStore = Depends(get_book_store),
) -> BookService:
    return BookService(book_store)


# ================== HEALTH CHECK DEPENDENCIES ==================


async def get_health_status():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
    }


__all__ = [
    "get_book_store",
    "get_book_service",
    "get_health_status",
]
