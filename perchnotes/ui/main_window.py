from __future__ import annotations

from PySide6.QtCore import QMimeData, QSettings
from PySide6.QtGui import QAction, QGuiApplication
from PySide6.QtWidgets import QMainWindow

from perchnotes.settings import APP_NAME, DEFAULT_BASE_FONT_SIZE
from perchnotes.logging_setup import log
from perchnotes.app_settings import (
    SettingsKeys,
    get_bool,
    get_float,
    normalize_font_size,
    safe_set_setting,
)
from perchnotes.core.formatting import SHORTCUTS, FormattingAction
from perchnotes.services.markdown_renderer import (
    MarkdownRenderer,
    copy_as_markdown,
    copy_as_plain_text,
)
from perchnotes.ui.note_editor import NoteEditor

FORMAT_MENU_LAYOUT: tuple[tuple[tuple[FormattingAction, str], ...], ...] = (
    (
        (FormattingAction.BOLD, "Bold"),
        (FormattingAction.ITALIC, "Italic"),
        (FormattingAction.UNDERLINE, "Underline"),
    ),
    (
        (FormattingAction.HEADING_1, "Heading 1"),
        (FormattingAction.HEADING_2, "Heading 2"),
        (FormattingAction.HEADING_3, "Heading 3"),
    ),
    (
        (FormattingAction.BULLET_LIST, "Bullet List"),
        (FormattingAction.NUMBERED_LIST, "Numbered List"),
        (FormattingAction.CHECKBOX, "Checkbox"),
        (FormattingAction.INDENT, "Indent"),
        (FormattingAction.OUTDENT, "Outdent"),
    ),
    (
        (FormattingAction.LINK, "Link"),
        (FormattingAction.HORIZONTAL_RULE, "Horizontal Rule"),
    ),
)


class EditorWindow(QMainWindow):
    def __init__(self, settings: QSettings | None = None):
        super().__init__()
        self.setWindowTitle("PerchNotes")

        self._settings = settings or QSettings(APP_NAME, APP_NAME)
        base_font_size = normalize_font_size(
            get_float(self._settings, SettingsKeys.BASE_FONT_SIZE, DEFAULT_BASE_FONT_SIZE)
        )
        markdown_paste = get_bool(self._settings, SettingsKeys.MARKDOWN_PASTE, True)

        self.editor = NoteEditor(base_font_size=base_font_size, markdown_paste=markdown_paste)
        self.renderer = MarkdownRenderer()
        self.setCentralWidget(self.editor)

        self._build_menu()

        geometry = self._settings.value(SettingsKeys.UI_GEOMETRY)
        if geometry is not None:
            self.restoreGeometry(geometry)

        log.info("Editor window ready: base_font_size=%.1f markdown_paste=%s", base_font_size, markdown_paste)

    def closeEvent(self, event):  # type: ignore[override]
        safe_set_setting(self._settings, SettingsKeys.UI_GEOMETRY, self.saveGeometry())
        super().closeEvent(event)

    def _build_menu(self):
        menubar = self.menuBar()

        editm = menubar.addMenu("Edit")
        act_md = QAction("Copy as Markdown", self)
        act_md.setShortcut("Ctrl+Shift+M")
        act_md.triggered.connect(self.copy_as_markdown)

        act_plain = QAction("Copy as Plain Text", self)
        act_plain.triggered.connect(self.copy_as_plain_text)

        act_rich = QAction("Copy as Rich Text", self)
        act_rich.triggered.connect(self.copy_as_rich_text)

        editm.addAction(act_md)
        editm.addAction(act_plain)
        editm.addAction(act_rich)

        formatm = menubar.addMenu("Format")
        for i, group in enumerate(FORMAT_MENU_LAYOUT):
            if i:
                formatm.addSeparator()
            for action, label in group:
                act = QAction(label, self)
                shortcut = SHORTCUTS.get(action)
                if shortcut:
                    act.setShortcut(shortcut)
                act.triggered.connect(lambda _checked=False, a=action: self.editor.apply_formatting(a))
                formatm.addAction(act)

    # ---- clipboard ----

    def copy_as_markdown(self):
        QGuiApplication.clipboard().setText(copy_as_markdown(self.editor.copy_source()))

    def copy_as_plain_text(self):
        QGuiApplication.clipboard().setText(copy_as_plain_text(self.editor.copy_source()))

    def copy_as_rich_text(self):
        doc = self.editor.copy_source()
        mime = QMimeData()
        mime.setText(copy_as_plain_text(doc))
        try:
            mime.setHtml(self.renderer.render_fragment(doc))
        except Exception:
            log.exception("Rich text rendering failed; copying plain text only")
        QGuiApplication.clipboard().setMimeData(mime)
