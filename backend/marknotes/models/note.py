"""
MarkNotes Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SQLNoteStore for create/read operations and by Alembic for schema management.

Table Design:
    - Integer primary key assigned by the database (SERIAL / AUTOINCREMENT).
      sqlite_autoincrement keeps SQLite from handing out an id twice.
    - title: Free text, not validated (empty string allowed)
    - content: Raw Markdown, TEXT with no length cap, stored verbatim.
      The HTML form is never stored; it is rendered on every read.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from marknotes.database import Base

# Ids fit a 32-bit signed INTEGER column on every supported backend
MAX_NOTE_ID = 2**31 - 1


class Note(Base):
    """
    A note: a title and a Markdown body.

    Lifecycle:
        Created once through NoteStore.create(); read through find_by_id()
        and find_all(). There is no update or delete path.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier, never reused",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Note title",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Raw Markdown source, stored verbatim",
    )

    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
