"""
MarkNotes Backend — Abstract Note Store Interface
===================================================

What:  Abstract base class defining the contract for note persistence.
Why:   Callers (NoteService, routes) depend on three operations only,
       not on a particular database or ORM.
How:   Concrete implementations inherit from NoteStore and implement
       create(), find_by_id() and find_all().
Who:   Called by NoteService for every note request.
"""

from abc import ABC, abstractmethod
from typing import List

from marknotes.models.note import Note


class NoteStore(ABC):
    """
    Durable, identity-assigning storage for Note records.

    Contract:
        - create() assigns a fresh id that no other note has ever had,
          and the note is visible to find_by_id()/find_all() once it returns
        - find_by_id() raises NotFoundError for unknown ids
        - Infrastructure failures raise StorageError, never NotFoundError
    """

    @abstractmethod
    async def create(self, title: str, content: str) -> Note:
        """
        Persist a new note and return it with its assigned id.

        Args:
            title:   Note title (may be empty)
            content: Raw Markdown, stored byte-for-byte

        Raises:
            StorageError: The note could not be persisted.
        """
        ...

    @abstractmethod
    async def find_by_id(self, note_id: int) -> Note:
        """
        Return the note with the given id.

        Raises:
            NotFoundError: No note has this id.
            StorageError:  The lookup could not be executed.
        """
        ...

    @abstractmethod
    async def find_all(self) -> List[Note]:
        """
        Return every stored note in creation order.

        Raises:
            StorageError: The query could not be executed.
        """
        ...
