"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the JSON contract of the HTTP API.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.
Who:   Used by route handlers and NoteService; the store never sees them.

Blank-title rules are not expressed here: NoteService enforces them so that
the error messages and status codes stay under its control.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from notes_api.models.note import Note, NoteDraft, NoteUpdate


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """
    Body of POST /api/notes.

    A missing title is accepted here and rejected by NoteService with the
    same message as a blank one.
    """
    title: str = Field(default="", description="Note title (must not be blank)")
    content: Optional[str] = Field(default="", description="Note body (may be empty; null means empty)")

    def to_draft(self) -> NoteDraft:
        return NoteDraft(title=self.title, content=self.content or "")


class NoteUpdateRequest(BaseModel):
    """
    Body of PATCH /api/notes/{id}.

    Absent and null fields are both "not provided". An empty string for
    content is a real value and clears the note body.
    """
    title: Optional[str] = Field(default=None, description="New title, if changing")
    content: Optional[str] = Field(default=None, description="New content, if changing")

    def to_update(self) -> NoteUpdate:
        return NoteUpdate(title=self.title, content=self.content)


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note."""
    id: int = Field(description="Unique note identifier, assigned by the server")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last changed (UTC ISO 8601)")

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class MessageResponse(BaseModel):
    """Acknowledgement for operations that return no resource."""
    message: str = Field(description="Human-readable confirmation")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '7' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    note_count: int = Field(description="Notes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
