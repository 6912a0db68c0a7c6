from .paste import document_for_paste, normalize_to_base_font, paste_text
from .markdown_renderer import MarkdownRenderer, copy_as_markdown, copy_as_plain_text

__all__ = [
    "document_for_paste",
    "normalize_to_base_font",
    "paste_text",
    "MarkdownRenderer",
    "copy_as_markdown",
    "copy_as_plain_text",
]
