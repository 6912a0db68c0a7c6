from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent, QTextCursor
from PySide6.QtWidgets import QTextEdit, QWidget

from perchnotes.settings import DEFAULT_BASE_FONT_SIZE
from perchnotes.logging_setup import log
from perchnotes.core.formatting import FormattingAction, apply_action
from perchnotes.core.list_continuation import ListContinuationEngine
from perchnotes.core.markdown_converter import document_to_markdown, markdown_to_document
from perchnotes.core.model import EditResult, RunStyle, StyledDocument, TextRange
from perchnotes.services.paste import paste_text
from perchnotes.ui.qt_utils import blocked_signals
from perchnotes.ui.qt_document import (
    char_format_for,
    read_styled_document,
    style_from_char_format,
    write_styled_document,
)


class NoteEditor(QTextEdit):
    """
    Rich text note editor: smart list Enter/Backspace, markdown-aware paste,
    formatting commands. All editing decisions are delegated to the core; this
    widget only moves documents and cursors in and out of Qt.
    """

    def __init__(
        self,
        *,
        base_font_size: float = DEFAULT_BASE_FONT_SIZE,
        markdown_paste: bool = True,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._base_font_size = base_font_size
        self.markdown_paste = markdown_paste
        self._lists = ListContinuationEngine()

        font = self.font()
        font.setPointSizeF(base_font_size)
        self.setFont(font)
        self.document().setDefaultFont(font)
        self.setPlaceholderText("Start typing...")

    # ---- document access ----

    @property
    def base_font_size(self) -> float:
        return self._base_font_size

    def styled_document(self) -> StyledDocument:
        return read_styled_document(self.document(), self._base_font_size)

    def selection_range(self) -> TextRange:
        c = self.textCursor()
        return TextRange(c.selectionStart(), c.selectionEnd())

    def copy_source(self) -> StyledDocument:
        """The selected part of the note, or the whole note when nothing is selected."""
        doc = self.styled_document()
        rng = self.selection_range()
        if rng.is_empty:
            return doc
        return doc.slice(rng.start, rng.end)

    def set_styled_document(self, doc: StyledDocument, *, notify: bool = True) -> None:
        if notify:
            write_styled_document(self.document(), doc)
            return
        with blocked_signals(self):
            write_styled_document(self.document(), doc)

    def load_markdown(self, markdown: str) -> None:
        doc = markdown_to_document(markdown, self._base_font_size)
        self.set_styled_document(doc, notify=False)
        self.document().clearUndoRedoStacks()
        self.set_selection(TextRange.caret(0))
        log.debug("Note loaded: chars=%d runs=%d", len(doc), len(doc.runs))

    def to_markdown(self) -> str:
        return document_to_markdown(self.styled_document())

    def set_selection(self, rng: TextRange) -> None:
        rng = rng.clamped(self.document().characterCount() - 1)
        c = self.textCursor()
        c.setPosition(rng.start)
        if not rng.is_empty:
            c.setPosition(rng.end, QTextCursor.KeepAnchor)
        self.setTextCursor(c)

    def apply_edit(self, result: EditResult) -> bool:
        if not result.handled:
            return False
        if result.document is not None:
            self.set_styled_document(result.document)
        if result.cursor is not None:
            self.set_selection(result.cursor)
        if result.typing_style is not None:
            self.setCurrentCharFormat(char_format_for(result.typing_style, self._base_font_size))
        return True

    # ---- commands ----

    def apply_formatting(self, action: FormattingAction) -> bool:
        typing_style = style_from_char_format(self.currentCharFormat(), self._base_font_size)
        return self._run_core(
            f"format:{action.value}",
            lambda doc, rng: apply_action(action, doc, rng, typing_style),
        )

    # ---- Qt overrides ----

    def keyPressEvent(self, event: QKeyEvent):  # type: ignore[override]
        key = event.key()
        plain = not (event.modifiers() & (Qt.ShiftModifier | Qt.ControlModifier | Qt.AltModifier))

        if plain and key in (Qt.Key_Return, Qt.Key_Enter):
            if self._run_core("enter", self._lists.on_enter):
                return
        elif plain and key == Qt.Key_Backspace:
            if self._run_core("backspace", self._lists.on_backspace):
                return

        super().keyPressEvent(event)

    def insertFromMimeData(self, source):  # type: ignore[override]
        if source is not None and source.hasText():
            text = source.text()
            handled = self._run_core(
                "paste",
                lambda doc, rng: paste_text(doc, rng, text, markdown_enabled=self.markdown_paste),
            )
            if handled:
                self.setCurrentCharFormat(char_format_for(RunStyle.plain(), self._base_font_size))
                return
        super().insertFromMimeData(source)

    def _run_core(
        self,
        what: str,
        handler: Callable[[StyledDocument, TextRange], EditResult],
    ) -> bool:
        try:
            return self.apply_edit(handler(self.styled_document(), self.selection_range()))
        except Exception:
            log.exception("Editor command failed (%s); default behaviour applies", what)
            return False
