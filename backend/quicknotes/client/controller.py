"""
QuickNotes — Notes Controller
===============================

What:  Drives the note editor: submit, edit, delete, reload.
How:   Every handler takes the current EditorState and returns the next one.
       After each successful mutation the full list is fetched again and
       re-rendered; the notes area is always a render of the last
       GET /api/notes response, never patched locally.
Who:   Any front end that implements NotesView (the terminal shell in
       terminal.py, or the recording view in the test suite).

Failure handling:
    - reload fails      → notes area shows LOAD_ERROR_HTML, no retry
    - create/update/delete fail → logged only; form and state are left as-is
"""

import logging
from typing import List, Optional, Protocol, Tuple

from quicknotes.client.api import ApiClientError, NotesApiClient
from quicknotes.client.render import DELETE_PROMPT, LOAD_ERROR_HTML, render_notes
from quicknotes.client.state import IDLE, EditorState, Editing, submit_label
from quicknotes.schemas.note import NoteResponse

logger = logging.getLogger(__name__)


class NotesView(Protocol):
    """The surface the controller draws on and reads from."""

    def read_form(self) -> Tuple[str, str]:
        """Current (title, content) input values."""
        ...

    def fill_form(self, title: str, content: str) -> None:
        ...

    def set_submit_label(self, label: str) -> None:
        ...

    def show_notes(self, notes_html: str) -> None:
        """Replace the notes area with already-escaped HTML."""
        ...

    def confirm(self, prompt: str) -> bool:
        """Ask the user a yes/no question."""
        ...


class NotesController:
    """
    Client-side logic for the notes page.

    `notes` holds the last successful list response. It is only used to copy
    a note into the form on edit; it is never modified in place.
    """

    def __init__(self, api: NotesApiClient, view: NotesView):
        self.api = api
        self.view = view
        self.notes: List[NoteResponse] = []

    async def load(self) -> bool:
        """
        Fetch the note list and render it.

        Returns False (and shows the load error message) when the request,
        the status, or the body is bad.
        """
        try:
            notes = await self.api.list_notes()
        except ApiClientError as e:
            logger.error("Error loading notes: %s", e.message)
            self.notes = []
            self.view.show_notes(LOAD_ERROR_HTML)
            return False

        self.notes = notes
        self.view.show_notes(render_notes(notes))
        return True

    async def submit(self, state: EditorState) -> EditorState:
        """
        Create a note (Idle) or update the note in edit (Editing).

        Does nothing unless both inputs are non-empty after trimming.
        """
        title, content = (value.strip() for value in self.view.read_form())
        if not (title and content):
            return state

        try:
            if isinstance(state, Editing):
                await self.api.update_note(state.note_id, title=title, content=content)
            else:
                await self.api.create_note(title, content)
        except ApiClientError as e:
            action = "updating" if isinstance(state, Editing) else "creating"
            logger.error("Error %s note: %s", action, e.message)
            return state

        return await self._finish_edit()

    def edit(self, state: EditorState, note_id: str) -> EditorState:
        """
        Load a rendered note into the form and switch to Editing.

        An id that is not in the last rendered list leaves everything unchanged.
        """
        note = self._find(note_id)
        if note is None:
            return state

        self.view.fill_form(note.title, note.content)
        next_state = Editing(note_id=note_id)
        self.view.set_submit_label(submit_label(next_state))
        return next_state

    async def delete(self, state: EditorState, note_id: str) -> EditorState:
        """
        Delete a note after confirmation, then reload.

        Deleting the note that is currently in the form also drops out of
        Editing, so a later submit cannot target a note that no longer exists.
        """
        if not self.view.confirm(DELETE_PROMPT):
            return state

        try:
            await self.api.delete_note(note_id)
        except ApiClientError as e:
            logger.error("Error deleting note: %s", e.message)
            return state

        if isinstance(state, Editing) and state.note_id == note_id:
            return await self._finish_edit()

        await self.load()
        return state

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _finish_edit(self) -> EditorState:
        self.view.fill_form("", "")
        self.view.set_submit_label(submit_label(IDLE))
        await self.load()
        return IDLE

    def _find(self, note_id: str) -> Optional[NoteResponse]:
        return next((note for note in self.notes if str(note.id) == note_id), None)
