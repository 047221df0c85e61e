# app/models/book_model.py
"""
Book model definition.

Maps the ``books`` table: id, titulo, autor, genero, ano_publicacao.
"""

from typing import Optional

from sqlalchemy import Index
from sqlmodel import SQLModel, Field


class BookBase(SQLModel):

    titulo: str = Field(
        min_length=1,
        max_length=255,
        description="The title of the book",
        schema_extra={"example": "Dom Casmurro"},
    )
    autor: Optional[str] = Field(
        default=None,
        max_length=255,
        description="The author of the book",
        schema_extra={"example": "Machado de Assis"},
    )
    genero: Optional[str] = Field(
        default=None,
        max_length=100,
        description="The genre of the book",
        schema_extra={"example": "Romance"},
    )
    ano_publicacao: Optional[int] = Field(
        default=None,
        description="The publication year of the book",
        schema_extra={"example": 1899},
    )


class Book(BookBase, table=True):
    __tablename__ = "books"
    __table_args__ = (Index("idx_book_genero", "genero"),)

    id: Optional[int] = Field(
        default=None, primary_key=True, description="A unique identifier for the Book"
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, titulo='{self.titulo}', autor='{self.autor}')>"
