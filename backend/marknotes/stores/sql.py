"""
MarkNotes Backend — SQLAlchemy Note Store
===========================================

What:  NoteStore implementation backed by async SQLAlchemy.
How:   One store instance wraps one AsyncSession (one per request).
Who:   Created by the get_note_store() dependency; used by NoteService.

Identity allocation:
    Ids come from the database's auto-increment column, so concurrent
    inserts from different requests can never be handed the same id.

Durability:
    create() commits before returning, so the new note is visible to any
    later find_by_id()/find_all() in this process, including the page the
    client is redirected to.

Error translation:
    SQLAlchemyError → StorageError (session rolled back, details logged)
    missing row     → NotFoundError
    id out of range → NotFoundError (checked before querying)
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marknotes.exceptions import NotFoundError, StorageError
from marknotes.models.note import MAX_NOTE_ID, Note
from marknotes.stores.base import NoteStore

logger = logging.getLogger(__name__)


class SQLNoteStore(NoteStore):
    """Note store bound to a single AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, title: str, content: str) -> Note:
        note = Note(title=title, content=content)
        try:
            self.session.add(note)
            await self.session.flush()  # Assigns the id
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise StorageError(
                operation="create",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %d created (%d chars of content)", note.id, len(content))
        return note

    async def find_by_id(self, note_id: int) -> Note:
        if not 1 <= note_id <= MAX_NOTE_ID:
            # Never issued by create(); out-of-range values would fault in the driver
            raise NotFoundError(resource="note", resource_id=str(note_id))

        try:
            result = await self.session.execute(
                select(Note).where(Note.id == note_id)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise StorageError(
                operation="find_by_id",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def find_all(self) -> List[Note]:
        try:
            result = await self.session.execute(
                select(Note).order_by(Note.id.asc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StorageError(
                operation="find_all",
                context={"error_type": type(e).__name__},
            ) from e

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed after database error", exc_info=True)
