from typing import AsyncGenerator, Dict, Any, List
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.session import get_session
from app.main import app
from app.models.book_model import Book
from app.utils.deps import get_book_store

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# --- Pytest Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh in-memory database with all tables created, per test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a database session bound to the per-test engine.
    """
    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an HTTP client for API testing, overriding the DB dependency.
    """

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_store() -> AsyncMock:
    """A store whose every method is an AsyncMock, configured per test."""
    return AsyncMock()


@pytest_asyncio.fixture(scope="function")
async def mock_client(mock_store: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an HTTP client whose book store is replaced by ``mock_store``.
    """
    app.dependency_overrides[get_book_store] = lambda: mock_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Test Data Fixtures ---


@pytest.fixture
def sample_book_data() -> Dict[str, Any]:
    """Provides a dictionary of sample book data for creation."""
    return {
        "titulo": "Novo livro",
        "autor": "Novo autor",
        "genero": "Novo gênero",
        "ano_publicacao": 2025,
    }


@pytest_asyncio.fixture
async def sample_book(db_session: AsyncSession) -> Book:
    """Creates and returns a sample book in the database."""
    book = Book(titulo="Livro A", autor="Autor Z", genero="Gênero D", ano_publicacao=2013)
    db_session.add(book)
    await db_session.commit()
    await db_session.refresh(book)
    return book


@pytest_asyncio.fixture
async def multiple_books(db_session: AsyncSession) -> List[Book]:
    """Creates books across two genres for pagination/filtering tests."""
    books = [
        Book(
            titulo=f"Livro {i}",
            autor=f"Autor {i}",
            genero="Investimento" if i % 2 == 0 else "Romance",
            ano_publicacao=2000 + i,
        )
        for i in range(1, 13)
    ]
    db_session.add_all(books)
    await db_session.commit()

    for book in books:
        await db_session.refresh(book)

    return books
