# Stores package init
"""
MarkNotes Backend — Note Stores
=================================

Store Inventory:
    - NoteStore (abstract): create / find_by_id / find_all contract
    - SQLNoteStore: async SQLAlchemy implementation (one per request session)
"""

from marknotes.stores.base import NoteStore
from marknotes.stores.sql import SQLNoteStore

__all__ = ["NoteStore", "SQLNoteStore"]
