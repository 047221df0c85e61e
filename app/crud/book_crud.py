import logging
import math
from typing import Any, Dict, List, Optional, Protocol, Sequence

from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select, func
from sqlalchemy import update, delete

from app.models.book_model import Book
from app.schemas.book_schema import BookCreate, BookResponse, PaginatedResult
from app.core.exception_utils import handle_exceptions
from app.core.exceptions import StoreError


logger = logging.getLogger(__name__)

DB_ERROR_MESSAGE = "An unexpected database error occurred."


class BookStore(Protocol):
    """Persistence capability the book service depends on."""

    async def get_all(self) -> Sequence[Book]: ...

    async def get_by_id(self, book_id: int) -> Optional[Book]: ...

    async def get_by_genre(self, genero: str) -> Sequence[Book]: ...

    async def get_all_paginated(self, page: int, limit: int) -> PaginatedResult: ...

    async def create(self, book_in: BookCreate) -> Book: ...

    async def find_by_id(self, book_id: int) -> Optional[Book]: ...

    async def update(self, book_id: int, fields: Dict[str, Any]) -> int: ...

    async def destroy(self, book_id: int) -> int: ...


def build_page(
    books: Sequence[Any], *, total: int, page: int, limit: int
) -> PaginatedResult:
    """Wrap one page of books with its paging metadata."""
    return PaginatedResult(
        items=[BookResponse.model_validate(book) for book in books],
        total_items=total,
        total_pages=max(1, math.ceil(total / limit)),
        current_page=page,
        page_size=limit,
    )


class BookRepository:
    """Repository for all database operations related to the Book model."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.model = Book
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def get_all(self) -> List[Book]:
        """Retrieves every book ordered by id."""
        statement = select(self.model).order_by(self.model.id)
        result = await self.db.execute(statement)
        return list(result.scalars().all())

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def get_by_id(self, book_id: int) -> Optional[Book]:
        """Reads a book from the database, refreshing any loaded instance."""
        statement = (
            select(self.model)
            .where(self.model.id == book_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(statement)
        return result.scalar_one_or_none()

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def find_by_id(self, book_id: int) -> Optional[Book]:
        """Primary key lookup used as an existence check."""
        return await self.db.get(self.model, book_id)

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def get_by_genre(self, genero: str) -> List[Book]:
        """Retrieves books whose genre matches exactly."""
        statement = (
            select(self.model)
            .where(self.model.genero == genero)
            .order_by(self.model.id)
        )
        result = await self.db.execute(statement)
        return list(result.scalars().all())

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def get_all_paginated(self, page: int, limit: int) -> PaginatedResult:
        """Retrieves one page of books, ordered by id."""
        count_query = select(func.count()).select_from(self.model)
        total = (await self.db.execute(count_query)).scalar_one()

        statement = (
            select(self.model)
            .order_by(self.model.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(statement)
        books = result.scalars().all()

        self._logger.info(f"Page {page} retrieved: {len(books)} of {total} books")
        return build_page(books, total=total, page=page, limit=limit)

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def create(self, book_in: BookCreate) -> Book:
        """Persists a new book; the database assigns its id."""
        book = self.model(**book_in.model_dump())
        self.db.add(book)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(book)
        self._logger.info(f"Book created: {book.id}")
        return book

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def update(self, book_id: int, fields: Dict[str, Any]) -> int:
        """Applies ``fields`` to one book and returns the affected row count."""
        if not fields:
            return 0
        statement = (
            update(self.model).where(self.model.id == book_id).values(**fields)
        )
        try:
            result = await self.db.execute(statement)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        self._logger.info(f"Book fields updated for {book_id}: {list(fields.keys())}")
        return result.rowcount

    @handle_exceptions(default_exception=StoreError, message=DB_ERROR_MESSAGE)
    async def destroy(self, book_id: int) -> int:
        """Permanently deletes a book and returns the deleted row count."""
        statement = delete(self.model).where(self.model.id == book_id)
        try:
            result = await self.db.execute(statement)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        self._logger.info(f"Book hard deleted: {book_id} ({result.rowcount} rows)")
        return result.rowcount
