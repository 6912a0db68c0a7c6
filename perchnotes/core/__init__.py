from .model import EditResult, NOT_HANDLED, RunStyle, StyledDocument, StyledRun, TextRange
from .markdown_converter import document_to_markdown, markdown_to_document
from .detect import looks_like_markdown
from .lines import Line, ListMarker, ListMarkerKind, line_at, match_list_marker
from .list_continuation import ListContinuationEngine
from .formatting import FormattingAction, apply_action

__all__ = ["EditResult",
           "NOT_HANDLED",
           "RunStyle",
           "StyledDocument",
           "StyledRun",
           "TextRange",
           "document_to_markdown",
           "markdown_to_document",
           "looks_like_markdown",
           "Line",
           "ListMarker",
           "ListMarkerKind",
           "line_at",
           "match_list_marker",
           "ListContinuationEngine",
           "FormattingAction",
           "apply_action",
           ]
