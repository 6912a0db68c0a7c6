"""
Formatting commands behind the editor toolbar and its shortcuts.

Every command is a pure function of (document, selection) and returns an
EditResult. With a collapsed selection the style commands only change the
typing style the host should use for the next characters.
"""

from __future__ import annotations

import enum

from perchnotes.settings import INDENT_WIDTH

from .lines import ListMarkerKind, line_at
from .markdown_converter import heading_style
from .model import NOT_HANDLED, EditResult, RunStyle, StyledDocument, TextRange
from .patterns import BULLET_GLYPH, UNCHECKED_GLYPH


class FormattingAction(enum.Enum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    HEADING_1 = "heading1"
    HEADING_2 = "heading2"
    HEADING_3 = "heading3"
    BULLET_LIST = "bullet_list"
    NUMBERED_LIST = "numbered_list"
    CHECKBOX = "checkbox"
    INDENT = "indent"
    OUTDENT = "outdent"
    LINK = "link"
    HORIZONTAL_RULE = "horizontal_rule"


# Qt key sequences; Qt maps Ctrl to Cmd on macOS
SHORTCUTS: dict[FormattingAction, str] = {
    FormattingAction.BOLD: "Ctrl+B",
    FormattingAction.ITALIC: "Ctrl+I",
    FormattingAction.UNDERLINE: "Ctrl+U",
    FormattingAction.HEADING_1: "Ctrl+Alt+1",
    FormattingAction.HEADING_2: "Ctrl+Alt+2",
    FormattingAction.HEADING_3: "Ctrl+Alt+3",
    FormattingAction.BULLET_LIST: "Ctrl+Shift+L",
    FormattingAction.NUMBERED_LIST: "Ctrl+Shift+N",
    FormattingAction.CHECKBOX: "Ctrl+Shift+C",
    FormattingAction.INDENT: "Ctrl+]",
    FormattingAction.OUTDENT: "Ctrl+[",
    FormattingAction.LINK: "Ctrl+K",
}

LIST_ITEM_PREFIXES = {
    ListMarkerKind.UNORDERED: f"{BULLET_GLYPH} ",
    ListMarkerKind.ORDERED: "1. ",
    ListMarkerKind.CHECKBOX: f"{UNCHECKED_GLYPH} ",
}

LINK_PLACEHOLDER_TEXT = "link text"
LINK_PLACEHOLDER_URL = "url"
HORIZONTAL_RULE_SNIPPET = "\n---\n"


# ───────────────────────── emphasis ─────────────────────────


def toggle_bold(
    doc: StyledDocument,
    selection: TextRange,
    typing_style: RunStyle | None = None,
) -> EditResult:
    return _toggle_trait(doc, selection, typing_style, "bold")


def toggle_italic(
    doc: StyledDocument,
    selection: TextRange,
    typing_style: RunStyle | None = None,
) -> EditResult:
    return _toggle_trait(doc, selection, typing_style, "italic")


def _toggle_trait(
    doc: StyledDocument,
    selection: TextRange,
    typing_style: RunStyle | None,
    trait: str,
) -> EditResult:
    """
    Toggle bold or italic. Each fragment of the selection flips on its own and
    falls back to base size, so a heading loses its heading tag.
    """
    selection = selection.clamped(len(doc))

    def flip(style: RunStyle) -> RunStyle:
        return style.with_changes(
            **{trait: not getattr(style, trait)},
            heading_level=0,
            font_size=None,
        )

    if selection.is_empty:
        current = typing_style or doc.style_at(selection.start)
        return EditResult(True, None, selection, typing_style=flip(current))

    return EditResult(True, doc.restyle(selection.start, selection.end, flip), selection)


def toggle_underline(
    doc: StyledDocument,
    selection: TextRange,
    typing_style: RunStyle | None = None,
) -> EditResult:
    selection = selection.clamped(len(doc))
    if selection.is_empty:
        current = typing_style or doc.style_at(selection.start)
        return EditResult(
            True, None, selection, typing_style=current.with_changes(underline=not current.underline)
        )

    # the first selected character decides the direction for the whole range
    underline = not doc.style_at(selection.start + 1).underline
    new_doc = doc.restyle(selection.start, selection.end, lambda s: s.with_changes(underline=underline))
    return EditResult(True, new_doc, selection)


def apply_heading(
    doc: StyledDocument,
    selection: TextRange,
    level: int,
    typing_style: RunStyle | None = None,
) -> EditResult:
    if level not in (1, 2, 3):
        return NOT_HANDLED

    selection = selection.clamped(len(doc))
    target = heading_style(level, doc.base_font_size)

    def to_heading(style: RunStyle) -> RunStyle:
        return style.with_changes(
            bold=True,
            italic=False,
            heading_level=level,
            font_size=target.font_size,
        )

    if selection.is_empty:
        current = typing_style or doc.style_at(selection.start)
        return EditResult(True, None, selection, typing_style=to_heading(current))

    return EditResult(True, doc.restyle(selection.start, selection.end, to_heading), selection)


# ───────────────────────── structure ─────────────────────────


def insert_list_item(doc: StyledDocument, selection: TextRange, kind: ListMarkerKind) -> EditResult:
    """Start a list item at the caret, on a new line unless already at a line start."""
    selection = selection.clamped(len(doc))
    prefix = LIST_ITEM_PREFIXES[kind]
    line = line_at(doc.text, selection.start)
    if selection.start != line.start:
        prefix = "\n" + prefix
    return _insert(doc, selection.start, prefix)


def indent(doc: StyledDocument, selection: TextRange) -> EditResult:
    selection = selection.clamped(len(doc))
    return _insert(doc, selection.start, " " * INDENT_WIDTH)


def outdent(doc: StyledDocument, selection: TextRange) -> EditResult:
    """Remove up to INDENT_WIDTH leading spaces from the current line."""
    selection = selection.clamped(len(doc))
    line = line_at(doc.text, selection.start)

    count = 0
    while count < INDENT_WIDTH and count < len(line.text) and line.text[count] == " ":
        count += 1
    if not count:
        return NOT_HANDLED

    new_doc = doc.replace(line.start, line.start + count, "")
    return EditResult(True, new_doc, TextRange.caret(max(line.start, selection.start - count)))


def insert_link(doc: StyledDocument, selection: TextRange) -> EditResult:
    """
    Replace the selection with "[text](url)" and select the "url" placeholder
    so it can be typed over.
    """
    selection = selection.clamped(len(doc))
    label = doc.text[selection.start:selection.end] or LINK_PLACEHOLDER_TEXT
    snippet = f"[{label}]({LINK_PLACEHOLDER_URL})"
    new_doc = doc.replace(selection.start, selection.end, snippet)
    url_start = selection.start + len(label) + 3
    return EditResult(True, new_doc, TextRange(url_start, url_start + len(LINK_PLACEHOLDER_URL)))


def insert_horizontal_rule(doc: StyledDocument, selection: TextRange) -> EditResult:
    selection = selection.clamped(len(doc))
    return _insert(doc, selection.start, HORIZONTAL_RULE_SNIPPET)


def apply_action(
    action: FormattingAction,
    doc: StyledDocument,
    selection: TextRange,
    typing_style: RunStyle | None = None,
) -> EditResult:
    """Dispatch a toolbar/menu action."""
    if action is FormattingAction.BOLD:
        return toggle_bold(doc, selection, typing_style)
    if action is FormattingAction.ITALIC:
        return toggle_italic(doc, selection, typing_style)
    if action is FormattingAction.UNDERLINE:
        return toggle_underline(doc, selection, typing_style)
    if action is FormattingAction.HEADING_1:
        return apply_heading(doc, selection, 1, typing_style)
    if action is FormattingAction.HEADING_2:
        return apply_heading(doc, selection, 2, typing_style)
    if action is FormattingAction.HEADING_3:
        return apply_heading(doc, selection, 3, typing_style)
    if action is FormattingAction.BULLET_LIST:
        return insert_list_item(doc, selection, ListMarkerKind.UNORDERED)
    if action is FormattingAction.NUMBERED_LIST:
        return insert_list_item(doc, selection, ListMarkerKind.ORDERED)
    if action is FormattingAction.CHECKBOX:
        return insert_list_item(doc, selection, ListMarkerKind.CHECKBOX)
    if action is FormattingAction.INDENT:
        return indent(doc, selection)
    if action is FormattingAction.OUTDENT:
        return outdent(doc, selection)
    if action is FormattingAction.LINK:
        return insert_link(doc, selection)
    if action is FormattingAction.HORIZONTAL_RULE:
        return insert_horizontal_rule(doc, selection)
    return NOT_HANDLED


def _insert(doc: StyledDocument, position: int, text: str) -> EditResult:
    new_doc = doc.replace(position, position, text)
    return EditResult(True, new_doc, TextRange.caret(position + len(text)))
