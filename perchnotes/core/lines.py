from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .patterns import (
    BULLET_GLYPH,
    CHECKBOX_ITEM_RE,
    CHECKED_GLYPH,
    EMPTY_CHECKBOX_ITEM_RE,
    EMPTY_ORDERED_ITEM_RE,
    EMPTY_UNORDERED_ITEM_RE,
    ORDERED_ITEM_RE,
    UNCHECKED_GLYPH,
    UNORDERED_ITEM_RE,
)


@dataclass(frozen=True)
class Line:
    """One line of a plain-text projection. `end` excludes the newline."""

    start: int
    end: int
    text: str
    has_newline: bool = False

    @property
    def end_with_newline(self) -> int:
        return self.end + 1 if self.has_newline else self.end


def line_at(text: str, position: int) -> Line:
    position = min(max(position, 0), len(text))
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    if end == -1:
        return Line(start, len(text), text[start:], has_newline=False)
    return Line(start, end, text[start:end], has_newline=True)


class ListMarkerKind(enum.Enum):
    UNORDERED = "unordered"
    ORDERED = "ordered"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class ListMarker:
    kind: ListMarkerKind
    indent: str
    marker: str
    # everything after "<indent><marker> "
    content: str = ""

    @property
    def prefix_length(self) -> int:
        return len(self.indent) + len(self.marker) + 1

    @property
    def uses_glyph(self) -> bool:
        return self.marker in (BULLET_GLYPH, UNCHECKED_GLYPH, CHECKED_GLYPH)


# order matters: first match wins
_ITEM_PATTERNS: tuple[tuple[ListMarkerKind, re.Pattern], ...] = (
    (ListMarkerKind.UNORDERED, UNORDERED_ITEM_RE),
    (ListMarkerKind.ORDERED, ORDERED_ITEM_RE),
    (ListMarkerKind.CHECKBOX, CHECKBOX_ITEM_RE),
)

_EMPTY_ITEM_PATTERNS: tuple[tuple[ListMarkerKind, re.Pattern], ...] = (
    (ListMarkerKind.UNORDERED, EMPTY_UNORDERED_ITEM_RE),
    (ListMarkerKind.ORDERED, EMPTY_ORDERED_ITEM_RE),
    (ListMarkerKind.CHECKBOX, EMPTY_CHECKBOX_ITEM_RE),
)

_CANONICAL_PREFIXES = {
    ListMarkerKind.UNORDERED: "- ",
    ListMarkerKind.ORDERED: "1. ",
    ListMarkerKind.CHECKBOX: "[ ] ",
}

_GLYPH_PREFIXES = {
    ListMarkerKind.UNORDERED: f"{BULLET_GLYPH} ",
    ListMarkerKind.CHECKBOX: f"{UNCHECKED_GLYPH} ",
}


def match_list_marker(line_text: str) -> ListMarker | None:
    for kind, pattern in _ITEM_PATTERNS:
        m = pattern.match(line_text)
        if m:
            return ListMarker(kind, m.group(1), m.group(2), line_text[m.end():])
    return None


def match_empty_list_marker(line_text: str) -> ListMarker | None:
    """Like match_list_marker(), but only for a marker with nothing after it."""
    for kind, pattern in _EMPTY_ITEM_PATTERNS:
        m = pattern.match(line_text)
        if m:
            return ListMarker(kind, m.group(1), m.group(2))
    return None


def continuation_prefix(marker: ListMarker) -> str:
    """
    Prefix for the item that follows `marker`, without indentation.

    Unordered items continue with "- ", ordered with "1. " (no numbering),
    checkboxes with an unchecked box. Glyph lines keep using glyphs.
    """
    if marker.uses_glyph:
        return _GLYPH_PREFIXES[marker.kind]
    return _CANONICAL_PREFIXES[marker.kind]
