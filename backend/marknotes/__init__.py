"""
MarkNotes Backend — Application Package Initializer
===================================================

What: Marks the `marknotes` directory as a Python package.
Why:  Enables module imports like `from marknotes.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │     Routes (HTML pages + JSON API)  │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (NoteService, Markdown)  │  ← Orchestration, rendering
    ├─────────────────────────────────────┤
    │        Stores (NoteStore)           │  ← Identity + durable storage
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
