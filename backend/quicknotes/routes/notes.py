"""
QuickNotes — Notes Route Handlers
===================================

What:  The four CRUD endpoints under /api/notes.
How:   Parses the request, delegates to NoteService, returns JSON.
Who:   Called by the client controller (quicknotes.client) or any HTTP client.

    GET    /api/notes        → 200 [Note, ...]  newest first
    POST   /api/notes        → 201 Note
    PUT    /api/notes/{id}   → 200 Note
    DELETE /api/notes/{id}   → 200 {"message": "Note deleted"}

The note id is taken as a plain string: malformed ids are reported as 404
by the service rather than as request validation errors.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.database import get_db_session
from quicknotes.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from quicknotes.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes, newest first",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db=db)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Note rejected by storage", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note from `{title, content}`.

    The server assigns `id` and `createdAt`; neither is accepted from the body.
    """
    return await note_service.create_note(db=db, payload=payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Update rejected by storage", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update a note's title and/or content",
    description=(
        "Replaces each of title and content only when the new value is non-empty. "
        "Empty or missing fields keep their stored value; a field cannot be cleared."
    ),
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await note_service.delete_note(db=db, note_id=note_id)
    return MessageResponse(message="Note deleted")
