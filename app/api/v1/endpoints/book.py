import logging

from typing import Any, Dict, Optional, Union
from fastapi import APIRouter, Body, Depends, Query, Response, status

from app.core.config import settings
from app.utils.deps import get_book_service
from app.schemas.book_schema import (
    BookEnvelope,
    BookListEnvelope,
    PaginatedResult,
)
from app.services.book_service import BookService


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Books"],
    prefix=f"{settings.API_V1_STR}/books",
)


@router.get(
    "",
    response_model=Union[PaginatedResult, BookListEnvelope],
    status_code=status.HTTP_200_OK,
    summary="List books",
    description="List every book, or one page of books when page or limit is given.",
)
async def list_books(
    *,
    service: BookService = Depends(get_book_service),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Books per page"),
):
    """
    Without query parameters every book is returned under `books`
    (404 when the catalog is empty). With `page` and/or `limit` the
    paginated listing is returned instead.
    """
    if page is not None or limit is not None:
        logger.debug(f"Paginated listing requested: page={page!r}, limit={limit!r}")
        return await service.get_paginated(page=page, limit=limit)
    return {"books": await service.list_all()}


@router.get(
    "/paginated",
    response_model=PaginatedResult,
    status_code=status.HTTP_200_OK,
    summary="Get books paginated",
)
async def get_books_paginated(
    *,
    service: BookService = Depends(get_book_service),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Books per page"),
):
    return await service.get_paginated(page=page, limit=limit)


@router.get(
    "/genre/{genero}",
    response_model=BookListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Get books by genre",
)
async def get_books_by_genre(
    *, service: BookService = Depends(get_book_service), genero: str
):
    """Books of the given genre; an unknown genre answers with an empty list."""
    return {"books": await service.get_by_genre(genero)}


@router.post(
    "",
    response_model=BookEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
)
async def create_book(
    *,
    service: BookService = Depends(get_book_service),
    book_data: Optional[Dict[str, Any]] = Body(None),
):
    """
    Create a new book.
    - **titulo**: The title of the book (required)
    - **autor**: The author of the book
    - **genero**: The genre of the book
    - **ano_publicacao**: Publication year
    """
    return {"book": await service.create(book_data or {})}


@router.get(
    "/{book_id}",
    response_model=BookEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Get book by id",
)
async def get_book_by_id(*, service: BookService = Depends(get_book_service), book_id: int):
    return {"book": await service.get_by_id(book_id)}


@router.api_route(
    "/{book_id}",
    methods=["PUT", "PATCH"],
    response_model=BookEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Update a book",
)
async def update_book(
    *,
    service: BookService = Depends(get_book_service),
    book_id: int,
    book_data: Optional[Dict[str, Any]] = Body(None),
):
    """
    Update a book. Only provided fields will be updated.
    """
    return {"book": await service.update(book_id, book_data or {})}


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a book",
)
async def delete_book(*, service: BookService = Depends(get_book_service), book_id: int):
    await service.delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
