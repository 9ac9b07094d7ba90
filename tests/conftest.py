"""
Movie Catalog API — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── db_engine:       Fresh in-memory SQLite database with all tables
    ├── session_factory: async_sessionmaker bound to db_engine
    ├── db_session:      One session on db_engine (service tests against SQL)
    └── test_client:     HTTPX AsyncClient on a fresh app whose
                         get_db_session dependency uses db_engine
"""

import os

# Override settings for testing BEFORE any application imports:
# movie_api.config reads the environment once, at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date
from typing import AsyncGenerator, Iterable, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from movie_api.database import configure_sqlite, create_tables, get_db_session
from movie_api.models import Genre, Movie


# ══════════════════════════════════════════════════════════════════════════
# Mocked persistence
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_movie(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = movie
            result = await movie_service.get_movie(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


def scalar_result(value):
    """A mock Result whose scalar_one_or_none() returns `value`."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def mock_movie(**overrides):
    """A MagicMock shaped like a Movie row."""
    movie = MagicMock()
    movie.id = overrides.get("id", 1)
    movie.title = overrides.get("title", "Inception")
    movie.description = overrides.get("description", "Dreams within dreams.")
    movie.release_date = overrides.get("release_date", date(2010, 7, 16))
    movie.genres = overrides.get("genres", ["Action", "Sci-Fi"])
    return movie


def mock_genre(**overrides):
    """A MagicMock shaped like a Genre row."""
    genre = MagicMock()
    genre.id = overrides.get("id", 1)
    genre.name = overrides.get("name", "Horror")
    return genre


# ══════════════════════════════════════════════════════════════════════════
# Real SQLite database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps the single connection alive, so every session sees the
    same in-memory database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    configure_sqlite(engine)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


async def seed_movies(session: AsyncSession, rows: Iterable[dict]) -> List[Movie]:
    """
    Insert movies and flush. Each row needs at least `title` and `genres`.

    Ids follow insertion order starting at 1 on a fresh database.
    """
    movies = [
        Movie(
            title=row["title"],
            description=row.get("description", f"About {row['title']}"),
            release_date=row.get("release_date", date(2000, 1, 1)),
            genres=row["genres"],
        )
        for row in rows
    ]
    session.add_all(movies)
    await session.flush()
    return movies


async def seed_genres(session: AsyncSession, names: Iterable[str]) -> List[Genre]:
    genres = [Genre(name=name) for name in names]
    session.add_all(genres)
    await session.flush()
    return genres


# ══════════════════════════════════════════════════════════════════════════
# HTTP client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to a fresh app, with the
    session dependency swapped for one on the per-test SQLite database.
    The swapped dependency keeps the commit/rollback behaviour of the real one.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from movie_api.main import create_app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
