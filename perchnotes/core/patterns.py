from __future__ import annotations

import re

# ───────────────────────── display glyphs ─────────────────────────

BULLET_GLYPH = "•"
UNCHECKED_GLYPH = "☐"
CHECKED_GLYPH = "☑"
RULE_GLYPH = "─" * 19

# heading level -> font size multiplier of the base size
HEADING_SIZE_MULTIPLIERS = {1: 2.0, 2: 1.5, 3: 1.3}

# ───────────────────────── block constructs ─────────────────────────

# "# ", "## ", "### " only; "####" is ordinary text
HEADING_RE = re.compile(r"^(#{1,3}) ")
HORIZONTAL_RULE_RE = re.compile(r"^(?:---|\*\*\*)$")

UNORDERED_PREFIX_RE = re.compile(r"^[-*] ")
ORDERED_PREFIX_RE = re.compile(r"^\d+\. ")
UNCHECKED_PREFIX_RE = re.compile(r"^\[ \] ")
CHECKED_PREFIX_RE = re.compile(r"^\[[xX]\] ")

# ───────────────────────── inline spans ─────────────────────────
# Precedence when two spans start at the same offset: bold > italic > code > link.

BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
ITALIC_RE = re.compile(r"(?<!\*)\*([^*]+?)\*(?!\*)")
CODE_RE = re.compile(r"`([^`]+)`")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

INLINE_SPAN_PATTERNS = (
    ("bold", BOLD_RE),
    ("italic", ITALIC_RE),
    ("code", CODE_RE),
    ("link", LINK_RE),
)

# ───────────────────────── list continuation ─────────────────────────
# group 1: indentation, group 2: marker

UNORDERED_ITEM_RE = re.compile(r"^([ \t]*)([-*+•]) ")
ORDERED_ITEM_RE = re.compile(r"^([ \t]*)(\d+\.) ")
CHECKBOX_ITEM_RE = re.compile(r"^([ \t]*)(\[[ xX]\]|[☐☑]) ")

EMPTY_UNORDERED_ITEM_RE = re.compile(r"^([ \t]*)([-*+•]) $")
EMPTY_ORDERED_ITEM_RE = re.compile(r"^([ \t]*)(\d+\.) $")
EMPTY_CHECKBOX_ITEM_RE = re.compile(r"^([ \t]*)(\[[ xX]\]|[☐☑]) $")
