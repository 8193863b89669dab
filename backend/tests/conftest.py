"""
QuickNotes — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        in-memory SQLite engine with the notes table created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       one AsyncSession for service-level tests
    ├── mock_db_session:  AsyncMock session for storage-failure paths
    ├── test_app:         fresh FastAPI app whose get_db_session uses db_engine
    ├── test_client:      HTTPX AsyncClient talking to test_app over ASGI
    └── view:             RecordingView for client controller tests
"""

import os

# Settings are read at import time; set them before importing quicknotes
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

from typing import List, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from quicknotes.database import Base, get_db_session
from quicknotes.main import create_app
from quicknotes.models.note import Note  # noqa: F401


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_app(session_factory):
    """A fresh app whose session dependency is bound to the test database."""
    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app via ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Client Controller Fixtures
# ══════════════════════════════════════════════════════════════════════════

class RecordingView:
    """
    In-memory NotesView: holds the form inputs, the button label and the
    notes area, and answers confirmation prompts with `confirm_answer`.
    """

    def __init__(self, title: str = "", content: str = "", confirm_answer: bool = True):
        self.title = title
        self.content = content
        self.submit_label = "➕ Add Note"
        self.notes_html = ""
        self.confirm_answer = confirm_answer
        self.prompts: List[str] = []
        self.renders = 0

    def type(self, title: str, content: str) -> None:
        self.title = title
        self.content = content

    def read_form(self) -> Tuple[str, str]:
        return self.title, self.content

    def fill_form(self, title: str, content: str) -> None:
        self.title = title
        self.content = content

    def set_submit_label(self, label: str) -> None:
        self.submit_label = label

    def show_notes(self, notes_html: str) -> None:
        self.notes_html = notes_html
        self.renders += 1

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.confirm_answer


@pytest.fixture
def view():
    return RecordingView()
