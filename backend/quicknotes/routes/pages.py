"""
QuickNotes — Page Route
=========================

What:  GET / returns a read-only page listing the current notes.
How:   Reads through NoteService and renders with the client's renderer
       (without the edit/delete buttons), so escaping matches what the
       controller draws after a reload.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.client.render import render_notes, render_page
from quicknotes.database import get_db_session
from quicknotes.services.note_service import note_service

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(db: AsyncSession = Depends(get_db_session)) -> HTMLResponse:
    notes = await note_service.list_notes(db=db)
    return HTMLResponse(render_page(render_notes(notes, actions=False)))
