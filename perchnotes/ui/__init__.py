from .note_editor import NoteEditor
from .main_window import EditorWindow

__all__ = [
    "NoteEditor",
    "EditorWindow",
]
