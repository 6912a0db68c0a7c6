import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from perchnotes.core.markdown_converter import (
    document_to_markdown,
    heading_style,
    infer_heading_level,
    markdown_to_document,
)
from perchnotes.core.model import RunStyle, StyledDocument, StyledRun
from perchnotes.core.patterns import RULE_GLYPH

BOLD = RunStyle(bold=True)
ITALIC = RunStyle(italic=True)


@pytest.mark.parametrize("text", [
    "",
    "plain",
    "# Title\n\nBody with **bold**, *italic* and `code`",
    "- a\n* b\n[ ] c\n[x] d\n1. e\n---\n",
    "**unterminated *mixed `stuff",
    "\n\n\n",
])
def test_runs_partition_text(text):
    doc = markdown_to_document(text, 14)
    assert "".join(run.text for run in doc.runs) == doc.text
    assert all(run.text for run in doc.runs)


@pytest.mark.parametrize("md", ["# A", "## B", "### C"])
def test_heading_round_trip(md):
    assert document_to_markdown(markdown_to_document(md, 14)) == md


def test_bold_italic_round_trip():
    md = "**bold** and *italic*"
    doc = markdown_to_document(md, 14)
    assert doc.runs == (
        StyledRun("bold", BOLD),
        StyledRun(" and "),
        StyledRun("italic", ITALIC),
    )
    assert document_to_markdown(doc) == md


def test_bullet_glyph_round_trip():
    doc = markdown_to_document("- item", 14)
    assert doc.text == "• item"
    assert document_to_markdown(doc) == "- item"
    assert markdown_to_document("* item", 14).text == "• item"


def test_checkbox_round_trip():
    doc = markdown_to_document("[x] done", 14)
    assert doc.text == "☑ done"
    assert document_to_markdown(doc) == "[x] done"
    assert markdown_to_document("[X] done").text == "☑ done"
    assert markdown_to_document("[ ] todo").text == "☐ todo"


def test_unterminated_bold_is_literal():
    doc = markdown_to_document("**unterminated bold")
    assert doc.text == "**unterminated bold"
    assert doc.runs == (StyledRun("**unterminated bold"),)


def test_heading_run_keeps_markers_and_size():
    doc = markdown_to_document("## Title", 14)
    assert doc.runs == (StyledRun("## Title", RunStyle(bold=True, heading_level=2, font_size=21.0)),)
    assert markdown_to_document("### C", 14).runs[0].style == heading_style(3, 14)


def test_heading_ignores_inline_markup():
    doc = markdown_to_document("# **bold**")
    assert doc.runs == (StyledRun("# **bold**", heading_style(1)),)


def test_level_four_heading_is_plain_text():
    doc = markdown_to_document("#### Four **b**")
    assert doc.runs == (StyledRun("#### Four "), StyledRun("b", BOLD))


def test_horizontal_rule():
    doc = markdown_to_document("  ***  ")
    assert doc.text == RULE_GLYPH
    assert doc.runs[0].style.is_horizontal_rule_marker
    assert document_to_markdown(markdown_to_document("a\n---\nb")) == "a\n---\nb"


def test_ordered_marker_is_literal():
    doc = markdown_to_document("1. first")
    assert doc.runs == (StyledRun("1. first"),)


def test_italic_takes_precedence_over_earlier_code_span():
    md = "use `a*b*c` here"
    doc = markdown_to_document(md)
    assert doc.runs == (
        StyledRun("use `a"),
        StyledRun("b", ITALIC),
        StyledRun("c` here"),
    )
    assert document_to_markdown(doc) == md


def test_link_kept_verbatim():
    md = "see [site](http://x.io) now"
    doc = markdown_to_document(md)
    assert doc.text == md
    assert document_to_markdown(doc) == md


def test_empty_lines_preserved():
    assert markdown_to_document("a\n\nb").text == "a\n\nb"
    assert markdown_to_document("a\n").text == "a\n"
    assert markdown_to_document("").runs == ()


def test_list_item_with_emphasis_round_trip():
    doc = markdown_to_document("- **buy** milk")
    assert doc.text == "• buy milk"
    assert document_to_markdown(doc) == "- **buy** milk"


def test_bold_takes_precedence_over_earlier_italic():
    md = "*italic* then **bold**"
    doc = markdown_to_document(md)
    assert doc.runs == (StyledRun("*italic* then "), StyledRun("bold", BOLD))
    assert document_to_markdown(doc) == md


def test_bad_base_size_falls_back():
    assert markdown_to_document("x", 0).base_font_size == 14.0


def test_custom_base_size_still_round_trips():
    doc = markdown_to_document("# A", 20)
    assert doc.runs[0].style.font_size == 40.0
    assert document_to_markdown(doc) == "# A"


def _doc(*runs):
    return StyledDocument(runs, base_font_size=14)


def test_serialize_bold_italic():
    assert document_to_markdown(_doc(StyledRun("x", RunStyle(bold=True, italic=True)))) == "***x***"


def test_serialize_underline_link_code():
    assert document_to_markdown(_doc(StyledRun("u", RunStyle(underline=True)))) == "<u>u</u>"
    assert document_to_markdown(_doc(StyledRun("u", RunStyle(bold=True, underline=True)))) == "<u>**u**</u>"
    assert document_to_markdown(_doc(StyledRun("a", RunStyle(link="https://a.b")))) == "[a](https://a.b)"
    assert document_to_markdown(_doc(StyledRun("code", RunStyle(monospace=True)))) == "`code`"


@pytest.mark.parametrize("size, expected", [
    (28.0, "# T"),
    (21.0, "## T"),
    (14 * 1.3, "### T"),
    (17.0, "T"),
])
def test_heading_inferred_from_font_size(size, expected):
    assert document_to_markdown(_doc(StyledRun("T", RunStyle(font_size=size)))) == expected


def test_size_inference_is_relative_to_base():
    assert infer_heading_level(20.0, 10.0) == 1
    assert infer_heading_level(None, 14.0) == 0
    assert document_to_markdown(_doc(StyledRun("T", RunStyle(bold=True, font_size=17.0)))) == "**T**"


def test_explicit_heading_tag_wins_and_is_not_doubled():
    assert document_to_markdown(_doc(StyledRun("## T", RunStyle(heading_level=1)))) == "# T"
    assert document_to_markdown(_doc(StyledRun("Title", RunStyle(heading_level=2)))) == "## Title"


def test_equal_styles_serialize_as_one_span():
    doc = _doc(StyledRun("a", BOLD), StyledRun("b", BOLD))
    assert document_to_markdown(doc) == "**ab**"


def test_emphasis_does_not_cross_lines():
    assert document_to_markdown(_doc(StyledRun("a\nb", BOLD))) == "**a**\n**b**"
    assert document_to_markdown(_doc(StyledRun(" ", BOLD))) == " "
