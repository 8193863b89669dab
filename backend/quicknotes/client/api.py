"""
QuickNotes — HTTP API Client
==============================

What:  Thin async wrapper over the /api/notes endpoints.
How:   httpx.AsyncClient bound to a base origin. Each method issues exactly one
       request and either returns parsed data or raises ApiClientError.
Who:   Used by NotesController; usable on its own from scripts.

No retries and no timeouts beyond httpx's defaults: a failed call is
reported to the caller once.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from quicknotes.config import settings
from quicknotes.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

_note_list_adapter = TypeAdapter(List[NoteResponse])


class ApiClientError(Exception):
    """
    A request to the notes API failed.

    Attributes:
        message:     Server-provided message, or a description of the failure
        status_code: HTTP status, or None when no response was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotesApiClient:
    """
    Client for the notes API.

    Example:
        async with httpx.AsyncClient(base_url="http://localhost:3000") as http:
            api = NotesApiClient(http)
            note = await api.create_note("Shopping", "Milk, eggs")
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def for_origin(cls, base_url: Optional[str] = None, **kwargs: Any) -> "NotesApiClient":
        """Build a client that owns its own httpx.AsyncClient (default origin: API_BASE_URL)."""
        return cls(httpx.AsyncClient(base_url=base_url or settings.api_base_url, **kwargs))

    async def aclose(self) -> None:
        await self.http.aclose()

    async def list_notes(self) -> List[NoteResponse]:
        response = await self._request("GET", "/api/notes")
        try:
            return _note_list_adapter.validate_python(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise ApiClientError(f"Malformed note list: {e}", response.status_code)

    async def create_note(self, title: str, content: str) -> NoteResponse:
        response = await self._request(
            "POST", "/api/notes", json={"title": title, "content": content}
        )
        return self._parse_note(response)

    async def update_note(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> NoteResponse:
        """Send only the fields that were given; the server keeps the rest."""
        body: Dict[str, str] = {}
        if title is not None:
            body["title"] = title
        if content is not None:
            body["content"] = content
        response = await self._request("PUT", f"/api/notes/{note_id}", json=body)
        return self._parse_note(response)

    async def delete_note(self, note_id: str) -> str:
        """Delete a note and return the server's confirmation message."""
        response = await self._request("DELETE", f"/api/notes/{note_id}")
        try:
            return str(response.json().get("message", ""))
        except (ValueError, AttributeError):
            return ""

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ApiClientError(f"{method} {path} failed: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        if response.is_error:
            raise ApiClientError(_error_message(response), response.status_code)
        return response

    @staticmethod
    def _parse_note(response: httpx.Response) -> NoteResponse:
        try:
            return NoteResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise ApiClientError(f"Malformed note: {e}", response.status_code)


def _error_message(response: httpx.Response) -> str:
    """Pull `message` out of an error body, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code} {response.reason_phrase}"
