# Routes package init
"""
MarkNotes Backend — Routes Package
=====================================

Route Inventory:
    - pages.py:   HTML pages under /notes (list, new form, create, show)
    - notes.py:   JSON API under /api/notes (list, create, detail)
    - health.py:  GET /health (service health check)

Routes stay thin: extract request data, call NoteService, shape the
response. Business logic lives in services and stores.
"""
