from __future__ import annotations

from .patterns import (
    BOLD_RE,
    CHECKED_PREFIX_RE,
    CODE_RE,
    HEADING_RE,
    HORIZONTAL_RULE_RE,
    ITALIC_RE,
    LINK_RE,
    ORDERED_PREFIX_RE,
    UNCHECKED_PREFIX_RE,
    UNORDERED_PREFIX_RE,
)

_INLINE_PATTERNS = (BOLD_RE, ITALIC_RE, CODE_RE, LINK_RE)
_LINE_PATTERNS = (
    HEADING_RE,
    UNORDERED_PREFIX_RE,
    ORDERED_PREFIX_RE,
    UNCHECKED_PREFIX_RE,
    CHECKED_PREFIX_RE,
)


def looks_like_markdown(text: str) -> bool:
    """
    Heuristic used on paste: does `text` contain any construct the converter
    understands? Line-anchored constructs are checked on every line.
    """
    if not text:
        return False

    if any(p.search(text) for p in _INLINE_PATTERNS):
        return True

    for line in text.splitlines():
        if any(p.match(line) for p in _LINE_PATTERNS):
            return True
        if HORIZONTAL_RULE_RE.match(line.strip(" \t")):
            return True
    return False
