"""
MarkNotes Backend — Markdown Renderer
=======================================

What:  Converts a note's Markdown source into an HTML fragment.
Why:   Notes are stored as raw Markdown; pages and the JSON API show HTML.
How:   Python-Markdown with fenced code, tables and sane lists. Raw HTML in
       the source is escaped instead of passed through, so a note
       containing <script> renders as visible text, never as markup. Links
       and images pointing at javascript:, vbscript: or data: URLs lose
       their target.
Who:   Called by NoteService when a single note is read.

Contract:
    - Pure: no I/O, no shared state, input never mutated
    - Deterministic: same source → same HTML
    - Total: empty or degenerate input never fails the request. If the
      library raises, the escaped source text is returned instead
      (strict mode raises RenderError instead)
"""

import logging

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup, escape

from marknotes.config import settings
from marknotes.exceptions import RenderError

logger = logging.getLogger(__name__)


UNSAFE_URL_SCHEMES = ("javascript:", "vbscript:", "data:")


def is_unsafe_url(url: str) -> bool:
    """True for URLs a browser would execute rather than navigate to."""
    # Entities survive serialization and browsers decode them; they also
    # ignore control characters and spaces inside the scheme
    decoded = Markup(url).unescape()
    compact = "".join(ch for ch in decoded if ch > " ").lower()
    return compact.startswith(UNSAFE_URL_SCHEMES)


class UnsafeLinkTreeprocessor(Treeprocessor):
    """Strips href/src attributes that carry a script URL; link text is kept."""

    def run(self, root):
        for element in root.iter():
            for attr in ("href", "src"):
                value = element.get(attr)
                if value is not None and is_unsafe_url(value):
                    del element.attrib[attr]


class EscapeHtmlExtension(Extension):
    """
    Drops Python-Markdown's raw HTML passthrough (such text is escaped on
    output) and removes script URLs from links and images.
    """

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # Runs last: after "inline" builds <a>/<img> and "unescape" (0)
        # restores backslash-escaped characters in attributes
        md.treeprocessors.register(UnsafeLinkTreeprocessor(md), "unsafe_links", -1)


class MarkdownRenderer:
    """
    Stateless Markdown → HTML converter.

    A fresh markdown.Markdown instance is built per call; the library's
    converter keeps per-document state and is not safe to share.
    """

    EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

    def __init__(self, strict: bool = False):
        self.strict = strict

    def render(self, source: str) -> str:
        """
        Render Markdown source to HTML.

        Args:
            source: Raw Markdown text (may be empty)

        Returns:
            HTML fragment. Empty input yields an empty string.

        Raises:
            RenderError: Only in strict mode, when conversion fails.
        """
        if not source:
            return ""
        try:
            return self._convert(source)
        except Exception as e:
            if self.strict:
                raise RenderError(context={"error_type": type(e).__name__}) from e
            logger.warning(
                "Markdown rendering failed (%s); serving escaped source",
                type(e).__name__,
                exc_info=True,
            )
            return str(escape(source))

    def _convert(self, source: str) -> str:
        converter = markdown.Markdown(
            extensions=[*self.EXTENSIONS, EscapeHtmlExtension()],
            output_format="html",
        )
        return converter.convert(source)


# ── Singleton Instance ────────────────────────────────────────────────────
markdown_renderer = MarkdownRenderer(strict=settings.markdown_strict)
