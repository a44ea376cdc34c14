"""Decoded editor commands exchanged between the terminal port and the session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Command(str, Enum):
    """Every transition the editing session understands."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    LINE_HOME = "line_home"
    LINE_END = "line_end"
    INSERT_CHAR = "insert_char"
    BACKSPACE = "backspace"
    DELETE = "delete"
    DELETE_BEFORE = "delete_before"
    DELETE_AFTER = "delete_after"
    NEWLINE = "newline"
    UNDO = "undo"
    REDO = "redo"
    SAVE = "save"
    QUIT = "quit"


@dataclass(frozen=True, slots=True)
class EditorCommand:
    kind: Command
    char: Optional[str] = None

    @classmethod
    def insert(cls, char: str) -> "EditorCommand":
        return cls(Command.INSERT_CHAR, char)


__all__ = ["Command", "EditorCommand"]
