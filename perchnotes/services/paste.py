from __future__ import annotations

import logging

from perchnotes.settings import APP_NAME
from perchnotes.core.detect import looks_like_markdown
from perchnotes.core.markdown_converter import markdown_to_document
from perchnotes.core.model import (
    NOT_HANDLED,
    EditResult,
    RunStyle,
    StyledDocument,
    StyledRun,
    TextRange,
)

log = logging.getLogger(f"{APP_NAME}.paste")


def normalize_to_base_font(doc: StyledDocument) -> StyledDocument:
    """
    Reduce every run to the traits the editor keeps on paste: bold, italic,
    underline, heading tag and the rule marker. Sizes, fonts and links go.
    """
    runs = [
        StyledRun(
            run.text,
            RunStyle(
                bold=run.style.bold,
                italic=run.style.italic,
                underline=run.style.underline,
                heading_level=run.style.heading_level,
                is_horizontal_rule_marker=run.style.is_horizontal_rule_marker,
            ),
        )
        for run in doc.runs
    ]
    return StyledDocument(runs, base_font_size=doc.base_font_size)


def document_for_paste(
    text: str,
    base_font_size: float,
    *,
    markdown_enabled: bool = True,
) -> StyledDocument:
    if markdown_enabled and looks_like_markdown(text):
        return normalize_to_base_font(markdown_to_document(text, base_font_size))
    return StyledDocument.from_text(text, base_font_size=base_font_size)


def paste_text(
    doc: StyledDocument,
    selection: TextRange,
    clipboard_text: str | None,
    *,
    markdown_enabled: bool = True,
) -> EditResult:
    """Replace the selection with clipboard text; caret ends after the pasted content."""
    if not clipboard_text:
        return NOT_HANDLED

    selection = selection.clamped(len(doc))
    pasted = document_for_paste(
        clipboard_text, doc.base_font_size, markdown_enabled=markdown_enabled
    )
    log.debug(
        "paste: chars=%d runs=%d markdown=%s",
        len(clipboard_text),
        len(pasted.runs),
        any(not run.style.is_plain for run in pasted.runs),
    )
    new_doc = doc.replace(selection.start, selection.end, pasted)
    return EditResult(True, new_doc, TextRange.caret(selection.start + len(pasted)))
