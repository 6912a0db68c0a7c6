from __future__ import annotations

import bleach
import markdown as md

from perchnotes.core.markdown_converter import document_to_markdown
from perchnotes.core.model import StyledDocument

MD_EXTENSIONS = ["sane_lists"]

ALLOWED_TAGS = [
    "a", "p", "br", "hr",
    "strong", "em", "u", "code",
    "ul", "ol", "li",
    "h1", "h2", "h3",
]
ALLOWED_ATTRS = {
    "a": ["href", "title"],
}
ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

def copy_as_markdown(doc: StyledDocument) -> str:
    return document_to_markdown(doc)


def copy_as_plain_text(doc: StyledDocument) -> str:
    """What the user sees, glyphs included."""
    return doc.text


class MarkdownRenderer:
    """Rich-text (HTML) clipboard flavour of a note."""

    def render_fragment(self, doc: StyledDocument) -> str:
        rendered = md.markdown(document_to_markdown(doc), extensions=MD_EXTENSIONS)
        return bleach.clean(
            rendered,
            tags=ALLOWED_TAGS,
            attributes=ALLOWED_ATTRS,
            protocols=ALLOWED_PROTOCOLS,
            strip=True,
        )

