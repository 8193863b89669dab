"""
QuickNotes — Note SQLAlchemy Model
====================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key, generated in Python at insert time; never reused
    - title / content: TEXT NOT NULL, so a create without them is rejected
      by the database and surfaces as a 400
    - created_at: UTC with timezone, stamped once at insert, never updated;
      the database default matches migration 001 for rows written outside
      the ORM

    Index on created_at DESC serves the only listing query (newest first).

Generic SQLAlchemy types (Uuid, DateTime) are used so the same model runs
on PostgreSQL and on the SQLite database used by the test suite.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from quicknotes.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A short text note.

    Lifecycle:
        1. Inserted by NoteService.create_note (id and created_at assigned)
        2. title/content replaced by NoteService.update_note (fallback-on-empty)
        3. Hard-deleted by NoteService.delete_note
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque note identifier",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body text",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
