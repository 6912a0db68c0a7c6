from __future__ import annotations

from PySide6.QtGui import QTextCharFormat, QTextCursor, QTextDocument

from perchnotes.core.model import DocumentBuilder, RunStyle, StyledDocument

# QTextFormat.UserProperty
_USER_PROPERTY = 0x100000
HEADING_LEVEL_PROPERTY = _USER_PROPERTY + 1
RULE_MARKER_PROPERTY = _USER_PROPERTY + 2

# Qt 6 uses OpenType weights
NORMAL_WEIGHT = 400
BOLD_WEIGHT = 700

_SIZE_EPSILON = 0.01


def char_format_for(style: RunStyle, base_font_size: float) -> QTextCharFormat:
    fmt = QTextCharFormat()
    fmt.setFontPointSize(style.font_size or base_font_size)
    fmt.setFontWeight(BOLD_WEIGHT if style.bold else NORMAL_WEIGHT)
    fmt.setFontItalic(style.italic)
    fmt.setFontUnderline(style.underline)
    if style.heading_level:
        fmt.setProperty(HEADING_LEVEL_PROPERTY, style.heading_level)
    if style.is_horizontal_rule_marker:
        fmt.setProperty(RULE_MARKER_PROPERTY, True)
    if style.monospace:
        fmt.setFontFixedPitch(True)
    if style.link:
        fmt.setAnchor(True)
        fmt.setAnchorHref(style.link)
    return fmt


def style_from_char_format(fmt: QTextCharFormat, base_font_size: float) -> RunStyle:
    heading_level = 0
    if fmt.hasProperty(HEADING_LEVEL_PROPERTY):
        level = fmt.intProperty(HEADING_LEVEL_PROPERTY)
        heading_level = level if level in (1, 2, 3) else 0

    size = fmt.fontPointSize()
    font_size = size if size > 0 and abs(size - base_font_size) > _SIZE_EPSILON else None

    families = fmt.fontFamilies() or []
    monospace = fmt.fontFixedPitch() or any("mono" in str(f).lower() for f in families)

    return RunStyle(
        bold=fmt.fontWeight() >= BOLD_WEIGHT,
        italic=fmt.fontItalic(),
        underline=fmt.fontUnderline(),
        heading_level=heading_level,
        is_horizontal_rule_marker=fmt.hasProperty(RULE_MARKER_PROPERTY),
        font_size=font_size,
        monospace=bool(monospace),
        link=(fmt.anchorHref() or None) if fmt.isAnchor() else None,
    )


def read_styled_document(qdoc: QTextDocument, base_font_size: float) -> StyledDocument:
    """Snapshot a QTextDocument; blocks are joined with plain "\\n" runs."""
    builder = DocumentBuilder()
    block = qdoc.begin()
    first = True
    while block.isValid():
        if not first:
            builder.append("\n")
        first = False

        it = block.begin()
        while not it.atEnd():
            fragment = it.fragment()
            if fragment.isValid():
                builder.append(
                    fragment.text(),
                    style_from_char_format(fragment.charFormat(), base_font_size),
                )
            it += 1
        block = block.next()
    return builder.build(base_font_size)


def write_styled_document(qdoc: QTextDocument, doc: StyledDocument) -> None:
    """Replace the whole content of `qdoc` in a single undo step."""
    cursor = QTextCursor(qdoc)
    cursor.beginEditBlock()
    try:
        cursor.select(QTextCursor.Document)
        cursor.removeSelectedText()
        cursor.setCharFormat(char_format_for(RunStyle(), doc.base_font_size))
        for run in doc.runs:
            cursor.insertText(run.text, char_format_for(run.style, doc.base_font_size))
    finally:
        cursor.endEditBlock()
