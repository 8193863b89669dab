"""
QuickNotes — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract between client and backend.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI document. The client package validates the
       server's JSON with the same NoteResponse model.

Wire form of a note:
    {"id": "<uuid>", "title": "...", "content": "...", "createdAt": "<ISO 8601>"}
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes.

    Both fields are optional at this layer: a missing value is passed through
    to the database, whose NOT NULL constraint turns it into a 400.
    """
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Empty or absent fields keep the stored value (fallback-on-empty). There is
    deliberately no way to clear a field through this model.
    """
    title: Optional[str] = Field(default=None, description="New title; empty keeps the current one")
    content: Optional[str] = Field(default=None, description="New content; empty keeps the current one")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, as listed, created, or updated."""
    id: uuid.UUID = Field(description="Opaque note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body text")
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
        description="When the note was created (UTC ISO 8601)",
    )

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; all stored timestamps are UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class MessageResponse(BaseModel):
    """Confirmation body, e.g. `{"message": "Note deleted"}`."""
    message: str = Field(description="Human-readable confirmation")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body for every failed request. The HTTP status carries the error
    class; there are no machine-readable codes or correlation ids.
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
