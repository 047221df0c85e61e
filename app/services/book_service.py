import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exception_utils import raise_for_status
from app.core.exceptions import ResourceNotFound, StoreError, ValidationError
from app.crud.book_crud import BookStore
from app.models.book_model import Book
from app.schemas.book_schema import BookCreate, BookUpdate, PaginatedResult

logger = logging.getLogger(__name__)

BOOK_NOT_FOUND = "Livro não encontrado"
NO_BOOKS_FOUND = "No books found"
INVALID_PAGINATION = "Parâmetros de página ou limite inválidos."
CREATE_FAILED = "Erro ao criar o livro"
INTERNAL_ERROR = "Internal server error"


@contextmanager
def store_errors(
    operation: str,
    *,
    body_key: str = "message",
    detail: Optional[str] = None,
    with_details: bool = False,
) -> Iterator[None]:
    """
    Re-raise a ``StoreError`` in the body shape ``operation`` answers with.

    By default the store's own message becomes the detail. A fixed ``detail``
    replaces it, and ``with_details`` moves the store message under
    ``details``.
    """
    try:
        yield
    except StoreError as exc:
        logger.error(f"Store failure during {operation}: {exc.detail}")
        if with_details:
            raise StoreError(detail, body_key=body_key, details=exc.detail) from exc
        raise StoreError(detail or exc.detail, body_key=body_key) from exc


def _summarize(exc: PydanticValidationError) -> str:
    """One message listing every rejected field."""
    messages = []
    for error in exc.errors():
        ctx_error = (error.get("ctx") or {}).get("error")
        if isinstance(ctx_error, Exception):
            messages.append(str(ctx_error))
        else:
            field = ".".join(str(part) for part in error.get("loc", ()))
            messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return "; ".join(messages)


def _parse_positive_int(raw: Optional[Any], default: int) -> Optional[int]:
    if raw is None:
        return default
    text = str(raw).strip()
    # Plain ASCII decimal digits only
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if value > 0 else None


class BookService:
    """
    Request handling for the book catalog.

    Every operation validates its input, makes the store calls it needs and
    either returns the result or raises a typed error that the registered
    exception handlers turn into the response body.
    """

    def __init__(self, book_repository: BookStore):
        self.book_repository = book_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # ======= READ OPERATIONS =======
    async def list_all(self) -> List[Book]:
        """Every book in the catalog; an empty catalog is a 404."""
        with store_errors(
            "list_all", body_key="error", detail=INTERNAL_ERROR, with_details=True
        ):
            books = await self.book_repository.get_all()

        raise_for_status(
            condition=not books,
            exception=ResourceNotFound,
            detail=NO_BOOKS_FOUND,
            body_key="error",
        )

        self._logger.info(f"Book list retrieved : {len(books)} books returned")
        return list(books)

    async def get_by_id(self, book_id: int) -> Book:
        with store_errors("get_by_id"):
            book = await self.book_repository.get_by_id(book_id)

        raise_for_status(
            condition=book is None, exception=ResourceNotFound, detail=BOOK_NOT_FOUND
        )
        return book

    async def get_by_genre(self, genero: str) -> List[Book]:
        """Books of one genre. No match is still a successful, empty answer."""
        with store_errors("get_by_genre"):
            books = await self.book_repository.get_by_genre(genero)

        self._logger.info(f"Genre '{genero}' lookup: {len(books)} books returned")
        return list(books)

    async def get_paginated(
        self, page: Optional[Any] = None, limit: Optional[Any] = None
    ) -> PaginatedResult:
        """
        One page of books.

        ``page`` and ``limit`` arrive as raw query values and default to the
        configured first page and page size when absent.
        """
        page_number = _parse_positive_int(page, settings.DEFAULT_PAGE)
        page_size = _parse_positive_int(limit, settings.DEFAULT_PAGE_SIZE)

        raise_for_status(
            condition=page_number is None or page_size is None,
            exception=ValidationError,
            detail=INVALID_PAGINATION,
        )

        with store_errors("get_paginated", body_key="error"):
            return await self.book_repository.get_all_paginated(page_number, page_size)

    # ======= WRITE OPERATIONS =======
    async def create(self, payload: Mapping[str, Any]) -> Book:
        try:
            book_in = BookCreate.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(_summarize(exc)) from exc

        with store_errors("create", body_key="error", detail=CREATE_FAILED):
            book = await self.book_repository.create(book_in)

        self._logger.info(f"New book created: {book.titulo}")
        return book

    async def update(self, book_id: int, payload: Mapping[str, Any]) -> Book:
        """Partial update: only the fields present in ``payload`` change."""
        try:
            book_in = BookUpdate.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(_summarize(exc)) from exc

        fields: Dict[str, Any] = book_in.model_dump(exclude_unset=True)

        with store_errors("update"):
            existing = await self.book_repository.find_by_id(book_id)
            raise_for_status(
                condition=existing is None,
                exception=ResourceNotFound,
                detail=BOOK_NOT_FOUND,
            )

            await self.book_repository.update(book_id, fields)
            updated = await self.book_repository.get_by_id(book_id)

        raise_for_status(
            condition=updated is None, exception=ResourceNotFound, detail=BOOK_NOT_FOUND
        )

        self._logger.info(
            f"Book {book_id} updated",
            extra={"updated_book_id": book_id, "updated_fields": list(fields.keys())},
        )
        return updated

    async def delete(self, book_id: int) -> None:
        with store_errors("delete"):
            deleted = await self.book_repository.destroy(book_id)

        raise_for_status(
            condition=deleted == 0, exception=ResourceNotFound, detail=BOOK_NOT_FOUND
        )
        self._logger.info(f"Book {book_id} deleted")
