"""TypoTamer - a small terminal text editor."""

from .model import Document, Position, Row
from .editor import Editor, StatusMessage
from .config import EditorConfig

__all__ = [
    'Document',
    'Position',
    'Row',
    'Editor',
    'StatusMessage',
    'EditorConfig',
]
