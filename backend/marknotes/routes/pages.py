"""
MarkNotes Backend — HTML Page Routes
======================================

What:  Server-rendered pages for browsing and writing notes.

Route Inventory:
    GET  /                 → redirect to /notes
    GET  /notes            → index: each note's id + title as a link
    GET  /notes/new        → static form
    POST /notes            → create from the form, 303 to /notes/{id}
    GET  /notes/{note_id}  → title + rendered content (404 page when unknown)

/notes/new is registered before /notes/{note_id} so "new" is never
parsed as an id.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from marknotes.dependencies import get_note_store
from marknotes.schemas.note import NoteCreate
from marknotes.services.note_service import note_service
from marknotes.stores import NoteStore
from marknotes.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"], include_in_schema=False)


@router.get("/")
async def home() -> RedirectResponse:
    return RedirectResponse(url="/notes", status_code=302)


@router.get("/notes", response_class=HTMLResponse)
async def notes_index(
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> HTMLResponse:
    listing = await note_service.list_notes(store)
    return templates.TemplateResponse(
        request, "notes/index.html", {"notes": listing.notes}
    )


@router.get("/notes/new", response_class=HTMLResponse)
async def notes_new(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "notes/new.html", {})


@router.post("/notes")
async def notes_create(
    title: str = Form(default=""),
    content: str = Form(default=""),
    store: NoteStore = Depends(get_note_store),
) -> RedirectResponse:
    """Create a note from the submitted form and redirect to it."""
    note = await note_service.create_note(store, NoteCreate(title=title, content=content))
    # 303: the browser follows up with a GET, so a refresh never re-posts
    return RedirectResponse(url=f"/notes/{note.id}", status_code=303)


@router.get("/notes/{note_id}", response_class=HTMLResponse)
async def notes_show(
    request: Request,
    note_id: int,
    store: NoteStore = Depends(get_note_store),
) -> HTMLResponse:
    note = await note_service.get_note(store, note_id)
    return templates.TemplateResponse(request, "notes/show.html", {"note": note})
