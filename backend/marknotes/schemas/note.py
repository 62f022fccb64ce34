"""
MarkNotes Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the JSON API contract.
Why:   Input validation, automatic serialization, and OpenAPI doc generation.
Who:   Used by NoteService to shape responses and by the /api routes.

Schemas are separate from the SQLAlchemy model: the API exposes a
derived field (content_html) that is never stored.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    What:  Body of POST /api/notes.
    Title and content are taken as-is; neither is trimmed or length-capped.
    """
    title: str = Field(default="", description="Note title (may be empty)")
    content: str = Field(default="", description="Markdown source of the note body")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """A stored note exactly as persisted."""
    id: int = Field(description="Store-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Raw Markdown source")

    model_config = {"from_attributes": True}


class NoteDetailResponse(NoteResponse):
    """
    What:  Full note plus its rendered HTML.
    Who:   Returned by GET /api/notes/{id}.
    content_html is computed on every read and never stored.
    """
    content_html: str = Field(description="Content rendered from Markdown to HTML")


class NoteListItem(BaseModel):
    """Compact entry for the notes index: id and title only."""
    id: int = Field(description="Note identifier")
    title: str = Field(description="Note title")

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """All notes in creation order."""
    notes: List[NoteListItem] = Field(description="Every stored note, oldest first")
    total_count: int = Field(description="Number of stored notes")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '42' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
