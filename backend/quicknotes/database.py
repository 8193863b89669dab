"""
QuickNotes — Database Session Management
==========================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a session dependency that rolls
       back on error and always closes the session.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

This is the storage collaborator for notes: each Note is a single row, and
the only atomicity relied on is that of a single-row insert, update or delete.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from quicknotes.config import settings


def _engine_options() -> Dict[str, Any]:
    """
    Build create_async_engine() keyword arguments for the configured URL.

    SQLite has no server-side pool, so the sizing options are dropped. An
    in-memory SQLite database must share one connection, otherwise every
    checkout would see an empty database.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if make_url(settings.database_url).database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, which the
# routes rely on when serializing the note they just wrote.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On error: rolls back the transaction
        4. Always: closes the session (returns connection to pool)

    Writes are committed by NoteService before the handler returns. Code
    after `yield` may run once the response is already on the wire, so it
    only cleans up and never decides the outcome of a request.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema() -> None:
    """
    Create all tables known to Base.metadata if they do not exist.

    Used at startup when AUTO_CREATE_SCHEMA is set; Alembic owns the schema
    everywhere else.
    """
    # Models must be imported so they register with Base.metadata
    from quicknotes.models import note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
