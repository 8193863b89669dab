# Client package init
"""
QuickNotes — Client
=====================

The client side of the notes contract:
    - api.py:        NotesApiClient (httpx) for the four /api/notes calls
    - state.py:      Idle | Editing(id) editor state
    - controller.py: NotesController, the submit/edit/delete/reload handlers
    - render.py:     escaped HTML for the notes area
    - terminal.py:   Rich terminal view and command shell (quicknotes-client)
"""

from quicknotes.client.api import ApiClientError, NotesApiClient
from quicknotes.client.controller import NotesController, NotesView
from quicknotes.client.state import IDLE, EditorState, Editing, Idle

__all__ = [
    "ApiClientError",
    "NotesApiClient",
    "NotesController",
    "NotesView",
    "EditorState",
    "Editing",
    "Idle",
    "IDLE",
]
