"""
MarkNotes Backend — Notes JSON API
====================================

What:  Handles GET /api/notes (list), POST /api/notes (create) and
       GET /api/notes/{id} (detail with rendered HTML).
How:   Extracts request data, delegates to NoteService, returns JSON.

Caching Strategy:
    - POST /api/notes: No caching (mutation)
    - GET /api/notes: no-cache (a create may add entries at any time)
    - GET /api/notes/{id}: private, 1 hour (notes cannot be edited)
"""

import logging

from fastapi import APIRouter, Depends, Response

from marknotes.dependencies import get_note_store
from marknotes.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteDetailResponse,
    NoteListResponse,
    NoteResponse,
)
from marknotes.services.note_service import note_service
from marknotes.stores import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={
        200: {"description": "Every note, oldest first", "model": NoteListResponse},
        503: {"description": "Note store unavailable", "model": ErrorResponse},
    },
    summary="List all notes",
)
async def list_notes(
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> NoteListResponse:
    """Return every note's id and title in creation order."""
    result = await note_service.list_notes(store)
    response.headers["X-Total-Count"] = str(result.total_count)
    response.headers["Cache-Control"] = "no-cache"
    return result


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        503: {"description": "Note store unavailable", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    """
    Create a note from a title and Markdown content.

    The response carries the assigned id and a Location header
    pointing at the new note.
    """
    note = await note_service.create_note(store, payload)
    response.headers["Location"] = f"/api/notes/{note.id}"
    return note


@router.get(
    "/notes/{note_id}",
    response_model=NoteDetailResponse,
    responses={
        200: {"description": "Note with rendered HTML", "model": NoteDetailResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        503: {"description": "Note store unavailable", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> NoteDetailResponse:
    """
    Return a note with its raw Markdown and the rendered HTML.

    Args:
        note_id: Integer path parameter; non-integers get FastAPI's 422.
    """
    result = await note_service.get_note(store, note_id)
    response.headers["Cache-Control"] = "private, max-age=3600"
    return result
