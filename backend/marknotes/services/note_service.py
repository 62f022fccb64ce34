"""
MarkNotes Backend — Note Service
==================================

What:  Business logic layer combining the note store and the Markdown renderer.
Why:   Keeps route handlers thin; the same calls serve the HTML pages and
       the JSON API.
How:   Each call receives the request's NoteStore; the renderer is a
       module-level singleton.
Who:   Called by route handlers.

Flow:
    create_note  → store.create()                 → NoteResponse
    get_note     → store.find_by_id() → render()  → NoteDetailResponse
    list_notes   → store.find_all()               → NoteListResponse

NoteService holds no per-request state, so one instance serves every request.
"""

import logging

from marknotes.schemas.note import (
    NoteCreate,
    NoteDetailResponse,
    NoteListItem,
    NoteListResponse,
    NoteResponse,
)
from marknotes.services.markdown_service import markdown_renderer
from marknotes.stores.base import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """
    Note operations exposed to the HTTP layer.

    Error Handling Strategy:
        NotFoundError and StorageError raised by the store propagate
        unchanged; the global handlers in main.py turn them into responses.
    """

    async def create_note(self, store: NoteStore, payload: NoteCreate) -> NoteResponse:
        """
        Persist a new note.

        Returns:
            NoteResponse including the id assigned by the store.
        """
        note = await store.create(title=payload.title, content=payload.content)
        return NoteResponse.model_validate(note)

    async def get_note(self, store: NoteStore, note_id: int) -> NoteDetailResponse:
        """
        Fetch one note and render its content.

        Raises:
            NotFoundError: Unknown id (→ 404)
            StorageError:  Store failure (→ 503)
        """
        note = await store.find_by_id(note_id)
        return NoteDetailResponse(
            id=note.id,
            title=note.title,
            content=note.content,
            content_html=markdown_renderer.render(note.content),
        )

    async def list_notes(self, store: NoteStore) -> NoteListResponse:
        """Every note, in creation order."""
        notes = await store.find_all()
        logger.debug("Listing %d notes", len(notes))
        return NoteListResponse(
            notes=[NoteListItem.model_validate(note) for note in notes],
            total_count=len(notes),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
