"""
QuickNotes — Editor State
===========================

The only state the client keeps between interactions: whether a note is being
edited, and which one. Handlers in controller.py take an EditorState and
return the next one; nothing is stored globally.

    Idle ──edit(id)──▶ Editing(id) ──submit ok──▶ Idle
      ▲                    │
      └──delete(id) of the note in edit──┘
"""

from dataclasses import dataclass
from typing import Union

from quicknotes.client.render import ADD_LABEL, UPDATE_LABEL


@dataclass(frozen=True)
class Idle:
    """No note is being edited; submit creates a new note."""


@dataclass(frozen=True)
class Editing:
    """The note `note_id` is loaded into the form; submit updates it."""
    note_id: str


EditorState = Union[Idle, Editing]

IDLE = Idle()


def submit_label(state: EditorState) -> str:
    """Label of the submit button for a given state."""
    if isinstance(state, Editing):
        return UPDATE_LABEL
    return ADD_LABEL
