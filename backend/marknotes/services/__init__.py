# Services package init
"""
MarkNotes Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and stores (persistence).

Service Inventory:
    - MarkdownRenderer: Pure Markdown → HTML conversion with escaped-text fallback
    - NoteService: Create / fetch / list notes, rendering content on read
"""
