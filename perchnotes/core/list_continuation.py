from __future__ import annotations

import logging

from perchnotes.settings import APP_NAME

from .lines import continuation_prefix, line_at, match_empty_list_marker, match_list_marker
from .model import NOT_HANDLED, EditResult, StyledDocument, TextRange

log = logging.getLogger(f"{APP_NAME}.lists")


class ListContinuationEngine:
    """
    Smart list editing for Enter and Backspace.

    Holds no state: every call looks at the line under the cursor of the
    document it is given and returns a new document, or NOT_HANDLED.
    """

    def on_enter(self, doc: StyledDocument, cursor: TextRange) -> EditResult:
        """
        Continue or leave the list item under the cursor.

        An empty item is replaced, newline included, by a single "\\n". On a
        non-empty item the selection becomes "\\n" + indentation + the
        continuation prefix. A caret inside the indentation or marker of a
        non-empty item is NOT_HANDLED, so the host inserts a plain newline
        and the marker is never split.
        """
        cursor = cursor.clamped(len(doc))
        line = line_at(doc.text, cursor.start)
        marker = match_list_marker(line.text)
        if marker is None:
            return NOT_HANDLED

        if not marker.content.strip(" \t"):
            # Enter on an empty item leaves the list
            new_doc = doc.replace(line.start, line.end_with_newline, "\n")
            log.debug("list exit: kind=%s line_start=%d", marker.kind.value, line.start)
            return EditResult(True, new_doc, TextRange.caret(line.start + 1))

        if cursor.start - line.start < marker.prefix_length:
            # caret inside the indentation or the marker itself
            return NOT_HANDLED

        insertion = "\n" + marker.indent + continuation_prefix(marker)
        new_doc = doc.replace(cursor.start, cursor.end, insertion)
        log.debug("list continue: kind=%s at=%d", marker.kind.value, cursor.start)
        return EditResult(True, new_doc, TextRange.caret(cursor.start + len(insertion)))

    def on_backspace(self, doc: StyledDocument, cursor: TextRange) -> EditResult:
        if not cursor.is_empty:
            return NOT_HANDLED

        cursor = cursor.clamped(len(doc))
        line = line_at(doc.text, cursor.start)
        marker = match_empty_list_marker(line.text)
        if marker is None or cursor.start != line.end:
            return NOT_HANDLED

        new_doc = doc.replace(line.start, line.end_with_newline, "\n")
        log.debug("list marker removed: kind=%s line_start=%d", marker.kind.value, line.start)
        return EditResult(True, new_doc, TextRange.caret(line.start))
