import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from perchnotes.core.model import (
    DocumentBuilder,
    RunStyle,
    StyledDocument,
    StyledRun,
    TextRange,
)

BOLD = RunStyle(bold=True)
ITALIC = RunStyle(italic=True)


def test_zero_length_run_rejected():
    with pytest.raises(ValueError):
        StyledRun("")


def test_invalid_heading_level_rejected():
    with pytest.raises(ValueError):
        RunStyle(heading_level=4)


def test_style_equality_is_structural():
    assert RunStyle(bold=True) == BOLD
    assert RunStyle().is_plain
    assert not BOLD.is_plain


def test_adjacent_equal_styles_merge():
    doc = StyledDocument([StyledRun("a", BOLD), StyledRun("b", BOLD), StyledRun("c")])
    assert doc.runs == (StyledRun("ab", BOLD), StyledRun("c"))
    assert doc.text == "abc"


def test_builder_skips_empty_pieces():
    doc = DocumentBuilder().append("").append("x", ITALIC).append("").build()
    assert doc.runs == (StyledRun("x", ITALIC),)


def test_style_at_uses_previous_character():
    doc = StyledDocument([StyledRun("ab", BOLD), StyledRun("cd")])
    assert doc.style_at(0) == BOLD
    assert doc.style_at(2) == BOLD
    assert doc.style_at(3) == RunStyle()
    assert StyledDocument().style_at(0) == RunStyle()


def test_replace_splits_runs():
    doc = StyledDocument([StyledRun("hello", BOLD), StyledRun(" world")])
    new = doc.replace(2, 7, "XY")
    assert new.text == "heXYorld"
    assert new.runs == (StyledRun("he", BOLD), StyledRun("XYorld"))
    # original untouched
    assert doc.text == "hello world"


def test_replace_with_document_keeps_its_runs():
    doc = StyledDocument.from_text("ac")
    inserted = StyledDocument([StyledRun("b", ITALIC)])
    new = doc.replace(1, 1, inserted)
    assert new.runs == (StyledRun("a"), StyledRun("b", ITALIC), StyledRun("c"))


def test_replace_clamps_positions():
    doc = StyledDocument.from_text("abc")
    assert doc.replace(-5, 99, "z").text == "z"


def test_restyle_only_touches_range():
    doc = StyledDocument.from_text("abcdef")
    new = doc.restyle(2, 4, lambda s: s.with_changes(bold=True))
    assert new.runs == (StyledRun("ab"), StyledRun("cd", BOLD), StyledRun("ef"))


def test_slice():
    doc = StyledDocument([StyledRun("ab", BOLD), StyledRun("cd")])
    assert doc.slice(1, 3).runs == (StyledRun("b", BOLD), StyledRun("c"))


def test_text_range_normalizes_and_clamps():
    rng = TextRange(5, 2)
    assert (rng.start, rng.end) == (2, 5)
    assert rng.length == 3
    assert TextRange.caret(4).is_empty
    assert TextRange(-1, 10).clamped(3) == TextRange(0, 3)
