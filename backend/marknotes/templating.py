"""
MarkNotes Backend — Server-Side Templates
===========================================

What:  The shared Jinja2Templates instance for HTML pages.
How:   Templates live in marknotes/templates/. Autoescaping is on for
       .html files, so titles and raw content are always escaped; only
       renderer output is emitted with the |safe filter.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
