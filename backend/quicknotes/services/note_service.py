"""
QuickNotes — Note Service (Note Lifecycle)
============================================

What:  The four note operations: list, create, update, delete.
How:   Translates each operation into SQLAlchemy calls on the request's
       session and maps storage failures onto the application taxonomy.
Who:   Called by route handlers in routes/notes.py.

Error mapping:
    ┌──────────────────────────────┬──────────────────┬────────┐
    │ Storage outcome              │ Raised           │ Status │
    ├──────────────────────────────┼──────────────────┼────────┤
    │ no row for id / bad id       │ NotFoundError    │ 404    │
    │ IntegrityError / DataError   │ ValidationError  │ 400    │
    │ any other SQLAlchemyError    │ DatabaseError    │ 500    │
    └──────────────────────────────┴──────────────────┴────────┘

NoteService is stateless; it receives the session for each call. Every
write commits before the method returns, so a 2xx response always means the
row is durable and visible to the next request. A failed commit is rolled
back here and surfaces through the same taxonomy as a failed flush.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from quicknotes.models.note import Note
from quicknotes.schemas.note import NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)


def parse_note_id(note_id: str) -> uuid.UUID:
    """
    Convert a path id to a UUID.

    Ids are opaque to clients, so a malformed id is simply an id that does
    not exist.
    """
    try:
        return uuid.UUID(note_id)
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError(resource="Note", resource_id=str(note_id))


def apply_fallback(current: str, incoming: str | None) -> str:
    """Return `incoming` when it is non-empty, otherwise keep `current`."""
    return incoming or current


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): every note, newest first
        - create_note(): insert with server-side id and timestamp
        - update_note(): partial replace with fallback-on-empty
        - delete_note(): hard delete
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return all notes ordered by created_at descending.

        Query plan:
            SELECT * FROM notes ORDER BY created_at DESC, id DESC
            → idx_notes_created_at; id only breaks exact timestamp ties

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Note).order_by(desc(Note.created_at), desc(Note.id))
            )
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert a new note.

        title and content are handed to the database as received. A missing
        value violates the NOT NULL constraint and comes back as a 400.

        Raises:
            ValidationError: Database rejected the row (→ 400)
            DatabaseError: Database unreachable or failed otherwise (→ 500)
        """
        note = Note(title=payload.title, content=payload.content)
        db.add(note)
        await self._commit(db, action="create")
        logger.info("Note created: %s", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: str,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Replace title and/or content on an existing note.

        Each field is replaced only when the incoming value is non-empty;
        an update with both fields empty or absent writes nothing new.

        Raises:
            NotFoundError: No note with this id (→ 404)
            ValidationError: Database rejected the write (→ 400)
        """
        note = await self._get_or_404(db, note_id)

        note.title = apply_fallback(note.title, payload.title)
        note.content = apply_fallback(note.content, payload.content)

        await self._commit(db, action="update")
        logger.info("Note updated: %s", note.id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        """
        Hard-delete a note.

        Raises:
            NotFoundError: No note with this id (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        note = await self._get_or_404(db, note_id)
        try:
            await db.execute(delete(Note).where(Note.id == note.id))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )
        logger.info("Note deleted: %s", note_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get_or_404(self, db: AsyncSession, note_id: str) -> Note:
        """Fetch a note by its path id, raising NotFoundError when absent."""
        key = parse_note_id(note_id)
        try:
            result = await db.execute(select(Note).where(Note.id == key))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )

        if note is None:
            raise NotFoundError(resource="Note", resource_id=str(note_id))
        return note

    async def _commit(self, db: AsyncSession, action: str) -> None:
        """Commit pending writes, mapping storage rejections onto the taxonomy."""
        try:
            await db.commit()
        except (IntegrityError, DataError) as e:
            await db.rollback()
            logger.warning("Database rejected note %s: %s", action, str(e.orig))
            raise ValidationError(
                message=f"Note {action} rejected: title and content are required text fields",
                context={"error_type": type(e).__name__},
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error on note %s: %s", action, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
