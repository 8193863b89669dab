"""
QuickNotes — Note List Rendering
==================================

What:  Turns a list of notes into the HTML fragment shown in the notes area.
How:   Title and content are passed through html.escape, so markup in a note
       (e.g. "<script>") is displayed as text and never interpreted.
Who:   The client controller after every reload, and the GET / page route.
"""

import html
from typing import Iterable

from quicknotes.schemas.note import NoteResponse

ADD_LABEL = "➕ Add Note"
UPDATE_LABEL = "💾 Update Note"
DELETE_PROMPT = "Are you sure you want to delete this note?"

EMPTY_STATE_HTML = (
    '<div class="no-notes">'
    "<p>No notes yet! Create your first note above. 🎉</p>"
    "</div>"
)

LOAD_ERROR_HTML = (
    '<div class="error-message">'
    "<p>Could not load notes. Please check your connection.</p>"
    "</div>"
)


def render_note(note: NoteResponse, actions: bool = True) -> str:
    """One note card; with `actions`, edit/delete buttons keyed by the note id."""
    note_id = html.escape(str(note.id), quote=True)
    buttons = ""
    if actions:
        buttons = (
            '<div class="note-actions">'
            f'<button class="edit-btn" data-id="{note_id}">✏️</button>'
            f'<button class="delete-btn" data-id="{note_id}">🗑️</button>'
            "</div>"
        )
    return (
        '<div class="note">'
        f"<h3>{html.escape(note.title)}</h3>"
        f"<p>{html.escape(note.content)}</p>"
        f"{buttons}"
        "</div>"
    )


def render_notes(notes: Iterable[NoteResponse], actions: bool = True) -> str:
    """Render the whole notes area; an empty list renders the empty-state message."""
    cards = [render_note(note, actions) for note in notes]
    if not cards:
        return EMPTY_STATE_HTML
    return "".join(cards)


def render_page(notes_html: str) -> str:
    """
    Read-only HTML page around a rendered notes area.

    Notes are changed through the API or the `quicknotes-client` terminal
    shell; the page itself only lists them. `notes_html` is inserted as-is,
    so it must already be escaped (render_notes output).
    """
    return (
        "<!DOCTYPE html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="utf-8">'
        "<title>QuickNotes</title>"
        "</head>"
        "<body>"
        "<h1>QuickNotes</h1>"
        f'<div id="notes-container">{notes_html}</div>'
        "</body>"
        "</html>"
    )
