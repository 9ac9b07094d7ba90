"""
Movie Catalog API — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs get none of these options: aiosqlite has no server-side
    connection limit and its default pool does not accept sizing arguments.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from movie_api.config import settings


def engine_options() -> Dict[str, Any]:
    """Keyword arguments for create_async_engine() derived from settings."""
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────

def unicode_lower(value):
    """SQL lower() that folds every Unicode letter, not only ASCII."""
    return value.lower() if isinstance(value, str) else value


def configure_sqlite(bind: AsyncEngine) -> None:
    """
    Align SQLite string matching with PostgreSQL on every new connection.

    What:  PostgreSQL LIKE is case-sensitive, SQLite LIKE is not (for ASCII).
           The genre filter relies on LIKE for an exact element match, so
           "action" must not match "Action" on either backend.
           ILIKE compiles to lower(...) LIKE lower(...) on SQLite, and the
           built-in lower() only folds ASCII, so it is replaced by
           unicode_lower ("Élan" then matches "élan").
    """

    @event.listens_for(bind.sync_engine, "connect")
    def _configure_connection(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA case_sensitive_like = ON")
        cursor.close()
        dbapi_connection.create_function("lower", 1, unicode_lower)


engine: AsyncEngine = create_async_engine(settings.database_url, **engine_options())
if settings.is_sqlite:
    configure_sqlite(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so the
# routes can serialize ORM objects once the dependency has committed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata
    (used by Alembic and by create_tables()).
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    A genre delete and its movie cascade share this one transaction, so
    either both persist or neither does.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    Create every table registered on Base.metadata that does not exist yet.

    When:  Startup, if settings.db_create_tables is on; also used by tests.
    """
    # Importing the models registers them on Base.metadata
    from movie_api import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
