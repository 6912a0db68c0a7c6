"""
Markdown <-> StyledDocument conversion.

The editor shows markdown "as you type": heading markers, ordered list
numbers, inline code backticks and link brackets stay visible in the text.
Only three things are replaced by display glyphs:

  - "- " / "* " at line start        -> "• "
  - "[ ] " / "[x] " at line start    -> "☐ " / "☑ "
  - a "---" / "***" line              -> a horizontal rule glyph

Bold and italic delimiters are removed from the text and carried as style
flags instead; serialization puts them back.
"""

from __future__ import annotations

import re

from perchnotes.settings import DEFAULT_BASE_FONT_SIZE

from .model import DocumentBuilder, PLAIN, RunStyle, StyledDocument, StyledRun
from .patterns import (
    BULLET_GLYPH,
    CHECKED_GLYPH,
    CHECKED_PREFIX_RE,
    HEADING_RE,
    HEADING_SIZE_MULTIPLIERS,
    HORIZONTAL_RULE_RE,
    INLINE_SPAN_PATTERNS,
    RULE_GLYPH,
    UNCHECKED_GLYPH,
    UNCHECKED_PREFIX_RE,
    UNORDERED_PREFIX_RE,
)

BOLD_STYLE = RunStyle(bold=True)
ITALIC_STYLE = RunStyle(italic=True)
RULE_STYLE = RunStyle(is_horizontal_rule_marker=True)

# Minimum size ratio (run size / base size) per heading level, checked top to
# bottom. Equivalent to 24pt / 20pt / 18pt on a 14pt base.
HEADING_RATIO_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (24 / 14, 1),
    (20 / 14, 2),
    (18 / 14, 3),
)

# applied in order over the whole serialized text
GLYPH_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    (f"{BULLET_GLYPH} ", "- "),
    (f"{UNCHECKED_GLYPH} ", "[ ] "),
    (f"{CHECKED_GLYPH} ", "[x] "),
    (RULE_GLYPH, "---"),
)


def heading_style(level: int, base_font_size: float = DEFAULT_BASE_FONT_SIZE) -> RunStyle:
    """Style of a heading run: bold, tagged, and sized as a multiple of the base size."""
    return RunStyle(
        bold=True,
        heading_level=level,
        font_size=base_font_size * HEADING_SIZE_MULTIPLIERS[level],
    )


# ───────────────────────── markdown -> document ─────────────────────────


def markdown_to_document(
    markdown: str,
    base_font_size: float = DEFAULT_BASE_FONT_SIZE,
) -> StyledDocument:
    """
    Parse the supported markdown dialect into a StyledDocument.

    Never raises: unmatched or malformed markers stay in the text literally.
    """
    if not base_font_size or base_font_size <= 0:
        base_font_size = DEFAULT_BASE_FONT_SIZE

    builder = DocumentBuilder()
    for index, line in enumerate((markdown or "").split("\n")):
        if index:
            builder.append("\n")
        _append_line(builder, line, base_font_size)
    return builder.build(base_font_size)


def _append_line(builder: DocumentBuilder, line: str, base_font_size: float) -> None:
    m = HEADING_RE.match(line)
    if m:
        # markers stay visible; inline markup inside a heading is not parsed
        builder.append(line, heading_style(len(m.group(1)), base_font_size))
        return

    if HORIZONTAL_RULE_RE.match(line.strip(" \t")):
        builder.append(RULE_GLYPH, RULE_STYLE)
        return

    _append_inline(builder, substitute_list_glyphs(line))


def substitute_list_glyphs(line: str) -> str:
    """Replace a leading bullet or checkbox marker by its display glyph."""
    if UNORDERED_PREFIX_RE.match(line):
        return f"{BULLET_GLYPH} " + line[2:]
    if UNCHECKED_PREFIX_RE.match(line):
        return f"{UNCHECKED_GLYPH} " + line[4:]
    if CHECKED_PREFIX_RE.match(line):
        return f"{CHECKED_GLYPH} " + line[4:]
    return line


def _append_inline(builder: DocumentBuilder, text: str) -> None:
    remaining = text
    while remaining:
        found = _next_span(remaining)
        if found is None:
            builder.append(remaining)
            return

        kind, m = found
        builder.append(remaining[:m.start()])
        if kind == "bold":
            builder.append(m.group(1), BOLD_STYLE)
        elif kind == "italic":
            builder.append(m.group(1), ITALIC_STYLE)
        else:
            # code spans and links are kept verbatim
            builder.append(m.group(0))
        remaining = remaining[m.end():]


def _next_span(text: str) -> tuple[str, re.Match] | None:
    """First pattern in precedence order with a match anywhere in `text`."""
    for kind, pattern in INLINE_SPAN_PATTERNS:
        m = pattern.search(text)
        if m:
            return kind, m
    return None


# ───────────────────────── document -> markdown ─────────────────────────


def document_to_markdown(doc: StyledDocument) -> str:
    """
    Serialize a StyledDocument to markdown.

    Heading level comes from the explicit tag, or failing that from the run's
    font size relative to the document base size. Runs are already merged by
    style, so every emphasis span gets exactly one pair of markers.
    """
    markdown = "".join(_run_to_markdown(run, doc.base_font_size) for run in doc.runs)
    for glyph, replacement in GLYPH_SUBSTITUTIONS:
        markdown = markdown.replace(glyph, replacement)
    return markdown


def infer_heading_level(font_size: float | None, base_font_size: float) -> int:
    if font_size is None or base_font_size <= 0:
        return 0
    ratio = font_size / base_font_size
    for threshold, level in HEADING_RATIO_THRESHOLDS:
        if ratio >= threshold:
            return level
    return 0


def _run_to_markdown(run: StyledRun, base_font_size: float) -> str:
    style = run.style
    if style == PLAIN:
        return run.text

    level = style.heading_level or infer_heading_level(style.font_size, base_font_size)
    # markers never straddle a line break
    return "\n".join(_format_piece(piece, style, level) for piece in run.text.split("\n"))


def _format_piece(text: str, style: RunStyle, level: int) -> str:
    if not text.strip():
        return text

    if level:
        marker = "#" * level + " "
        existing = HEADING_RE.match(text)
        formatted = marker + (text[existing.end():] if existing else text)
    else:
        formatted = text
        if style.italic:
            formatted = f"*{formatted}*"
        if style.bold:
            formatted = f"**{formatted}**"

    if style.underline:
        formatted = f"<u>{formatted}</u>"
    if style.link:
        formatted = f"[{formatted}]({style.link})"
    if style.monospace:
        formatted = f"`{formatted}`"
    return formatted
