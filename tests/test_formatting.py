import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perchnotes.core.formatting import (
    SHORTCUTS,
    FormattingAction,
    apply_action,
    apply_heading,
    indent,
    insert_horizontal_rule,
    insert_link,
    insert_list_item,
    outdent,
    toggle_bold,
    toggle_italic,
    toggle_underline,
)
from perchnotes.core.lines import ListMarkerKind
from perchnotes.core.markdown_converter import document_to_markdown, markdown_to_document
from perchnotes.core.model import NOT_HANDLED, RunStyle, StyledDocument, StyledRun, TextRange
from perchnotes.core.patterns import RULE_GLYPH


def _doc(text):
    return StyledDocument.from_text(text)


def test_toggle_bold_on_selection():
    result = toggle_bold(_doc("hello world"), TextRange(0, 5))
    assert result.handled
    assert document_to_markdown(result.document) == "**hello** world"
    assert result.cursor == TextRange(0, 5)

    again = toggle_bold(result.document, TextRange(0, 5))
    assert again.document.runs == (StyledRun("hello world"),)


def test_toggle_bold_on_caret_changes_typing_style_only():
    result = toggle_bold(_doc("abc"), TextRange.caret(0))
    assert result.handled
    assert result.document is None
    assert result.typing_style == RunStyle(bold=True)


def test_toggle_bold_on_heading_drops_heading():
    doc = markdown_to_document("# T")
    result = toggle_bold(doc, TextRange(0, 3))
    assert result.document.runs == (StyledRun("# T"),)


def test_toggle_italic_keeps_bold():
    doc = StyledDocument([StyledRun("ab", RunStyle(bold=True))])
    result = toggle_italic(doc, TextRange(0, 2))
    assert result.document.runs[0].style == RunStyle(bold=True, italic=True)


def test_toggle_underline_follows_first_character():
    doc = StyledDocument([StyledRun("a", RunStyle(underline=True)), StyledRun("bc")])
    result = toggle_underline(doc, TextRange(0, 3))
    assert result.document.runs == (StyledRun("abc"),)

    result = toggle_underline(_doc("abc"), TextRange(0, 3))
    assert result.document.runs == (StyledRun("abc", RunStyle(underline=True)),)


def test_apply_heading_to_selection():
    result = apply_heading(_doc("Title"), TextRange(0, 5), 2)
    style = result.document.runs[0].style
    assert style.heading_level == 2
    assert style.bold
    assert style.font_size == 21.0
    assert document_to_markdown(result.document) == "## Title"


def test_apply_heading_on_caret_and_invalid_level():
    result = apply_heading(_doc(""), TextRange.caret(0), 1)
    assert result.typing_style.heading_level == 1
    assert result.typing_style.font_size == 28.0
    assert apply_heading(_doc("x"), TextRange(0, 1), 4) is NOT_HANDLED


def test_insert_list_item():
    result = insert_list_item(_doc(""), TextRange.caret(0), ListMarkerKind.UNORDERED)
    assert result.document.text == "• "
    assert result.cursor == TextRange.caret(2)

    result = insert_list_item(_doc("abc"), TextRange.caret(3), ListMarkerKind.ORDERED)
    assert result.document.text == "abc\n1. "
    assert result.cursor == TextRange.caret(7)

    result = insert_list_item(_doc(""), TextRange.caret(0), ListMarkerKind.CHECKBOX)
    assert result.document.text == "☐ "


def test_indent_and_outdent():
    result = indent(_doc("abc"), TextRange.caret(1))
    assert result.document.text == "a    bc"
    assert result.cursor == TextRange.caret(5)

    result = outdent(_doc("      x"), TextRange.caret(7))
    assert result.document.text == "  x"
    assert result.cursor == TextRange.caret(3)

    result = outdent(_doc("  x"), TextRange.caret(0))
    assert result.document.text == "x"
    assert result.cursor == TextRange.caret(0)

    assert outdent(_doc("x"), TextRange.caret(0)) is NOT_HANDLED


def test_insert_link_selects_url_placeholder():
    result = insert_link(_doc("see docs"), TextRange(4, 8))
    assert result.document.text == "see [docs](url)"
    assert result.cursor == TextRange(11, 14)

    result = insert_link(_doc(""), TextRange.caret(0))
    assert result.document.text == "[link text](url)"
    assert result.cursor == TextRange(12, 15)


def test_insert_horizontal_rule():
    result = insert_horizontal_rule(_doc("ab"), TextRange.caret(1))
    assert result.document.text == "a\n---\nb"
    assert result.cursor == TextRange.caret(6)
    reloaded = markdown_to_document(document_to_markdown(result.document))
    assert reloaded.text == f"a\n{RULE_GLYPH}\nb"


def test_apply_action_dispatch():
    result = apply_action(FormattingAction.BOLD, _doc("x"), TextRange(0, 1))
    assert result.document.runs[0].style.bold
    result = apply_action(FormattingAction.HEADING_3, _doc("x"), TextRange(0, 1))
    assert result.document.runs[0].style.heading_level == 3
    result = apply_action(FormattingAction.CHECKBOX, _doc(""), TextRange.caret(0))
    assert result.document.text == "☐ "


def test_shortcuts():
    assert SHORTCUTS[FormattingAction.BOLD] == "Ctrl+B"
    assert SHORTCUTS[FormattingAction.HEADING_1] == "Ctrl+Alt+1"
    assert FormattingAction.HORIZONTAL_RULE not in SHORTCUTS
