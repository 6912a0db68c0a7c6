from .core.model import EditResult, NOT_HANDLED, RunStyle, StyledDocument, StyledRun, TextRange
from .core.markdown_converter import document_to_markdown, markdown_to_document
from .core.detect import looks_like_markdown
from .core.list_continuation import ListContinuationEngine

__all__ = ['EditResult',
           'NOT_HANDLED',
           'RunStyle',
           'StyledDocument',
           'StyledRun',
           'TextRange',
           'document_to_markdown',
           'markdown_to_document',
           'looks_like_markdown',
           'ListContinuationEngine',
           ]
