"""
QuickNotes — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the note lifecycle error taxonomy.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"message": ...}` JSON bodies with the matching HTTP status.
Who:   Raised by the service layer; caught by global handlers.

Exception Hierarchy:
    QuickNotesError (base)
    ├── ValidationError   → 400 Bad Request (client-input-failure)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error (internal-failure)

The client package has its own ApiClientError; it is not part of this tree
because it describes a failed HTTP exchange, not a server-side condition.
"""

from typing import Any, Dict, Optional


class QuickNotesError(Exception):
    """
    Base exception for all QuickNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(QuickNotesError):
    """
    Raised when the storage layer rejects a create or update payload.

    HTTP: 400 Bad Request. FastAPI's own request validation (normally 422)
    is folded into this status by the handler in main.py.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(QuickNotesError):
    """
    Raised when an update or delete references an id with no stored note.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(QuickNotesError):
    """
    Raised when the database is unreachable or fails unexpectedly.

    HTTP: 500 Internal Server Error. The response message is always
    generic; the underlying error type is kept in `context` for the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
