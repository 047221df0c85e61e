# app/schemas/book_schema.py
"""
Book schemas for request/response models.

``BookCreate`` and ``BookUpdate`` are the explicit input records built from
request bodies; ``PaginatedResult`` is the value object returned for paged
queries and is serialized with camelCase keys.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

TITLE_REQUIRED = "Título é obrigatório"


class BookCreate(BaseModel):
    """Schema for creating a new book."""

    model_config = ConfigDict(extra="ignore")

    titulo: Optional[str] = Field(
        default=None,
        validate_default=True,
        max_length=255,
        description="The title of the book",
        examples=["Dom Casmurro"],
    )
    autor: Optional[str] = Field(
        default=None, max_length=255, examples=["Machado de Assis"]
    )
    genero: Optional[str] = Field(default=None, max_length=100, examples=["Romance"])
    ano_publicacao: Optional[int] = Field(default=None, examples=[1899])

    @field_validator("titulo", mode="before")
    @classmethod
    def require_title(cls, v: Any) -> Any:
        """A book always needs a non-blank title."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(TITLE_REQUIRED)
        return v.strip() if isinstance(v, str) else v

    @field_validator("autor", "genero")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class BookUpdate(BaseModel):
    """Partial update; only fields sent by the client are applied."""

    model_config = ConfigDict(extra="ignore")

    titulo: Optional[str] = Field(default=None, max_length=255)
    autor: Optional[str] = Field(default=None, max_length=255)
    genero: Optional[str] = Field(default=None, max_length=100)
    ano_publicacao: Optional[int] = None

    @field_validator("titulo", mode="before")
    @classmethod
    def forbid_blank_title(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(TITLE_REQUIRED)
        return v.strip() if isinstance(v, str) else v

    @field_validator("autor", "genero")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class BookResponse(BaseModel):
    """Basic book response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique identifier for the book")
    titulo: str
    autor: Optional[str] = None
    genero: Optional[str] = None
    ano_publicacao: Optional[int] = None


class BookEnvelope(BaseModel):
    book: BookResponse


class BookListEnvelope(BaseModel):
    books: List[BookResponse]


class PaginatedResult(BaseModel):
    """A page of books with paging metadata."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    items: List[BookResponse] = Field(default_factory=list)
    total_items: int = Field(..., ge=0, description="Total number of books")
    total_pages: int = Field(..., ge=1, description="Total number of pages")
    current_page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, description="Number of items per page")


__all__ = [
    "TITLE_REQUIRED",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookEnvelope",
    "BookListEnvelope",
    "PaginatedResult",
]
