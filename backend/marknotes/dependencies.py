"""
MarkNotes Backend — Request Dependencies
==========================================

What:  FastAPI dependencies shared by the page and API routers.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marknotes.database import get_db_session
from marknotes.stores import NoteStore, SQLNoteStore


async def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """A NoteStore bound to this request's database session."""
    return SQLNoteStore(db)
