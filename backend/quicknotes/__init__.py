"""
QuickNotes — Application Package Initializer
==============================================

What: Marks the `quicknotes` directory as a Python package.
Who:  Used by uvicorn (`uvicorn quicknotes.main:app`), Alembic, and pytest.

Architecture Note:
    The backend follows the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Note lifecycle)   │  ← fallback-on-empty update, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The `client` subpackage is the other side of the contract: an httpx-based
    API client plus the controller that drives the note editor.
"""

__version__ = "1.0.0"
