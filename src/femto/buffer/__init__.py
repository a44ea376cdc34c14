"""Immutable buffer, cursor, viewport and undo history."""

from .cursor import CursorPosition
from .document import TextBuffer
from .undo import EditHistory, HistoryError, Snapshot
from .validation import BufferValidationError, ensure_column, ensure_row
from .viewport import ViewportBuffer

__all__ = [
    "TextBuffer",
    "ViewportBuffer",
    "CursorPosition",
    "EditHistory",
    "HistoryError",
    "Snapshot",
    "BufferValidationError",
    "ensure_row",
    "ensure_column",
]
