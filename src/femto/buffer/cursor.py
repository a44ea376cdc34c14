"""Buffer-aware cursor navigation."""

from __future__ import annotations

from dataclasses import dataclass

from .document import TextBuffer


@dataclass(frozen=True, slots=True, order=True)
class CursorPosition:
    """Immutable (row, col) pair; ``col`` may equal the line length."""

    row: int = 0
    col: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)

    def clamp(self, buffer: TextBuffer) -> "CursorPosition":
        row = max(0, min(self.row, buffer.line_count - 1))
        col = max(0, min(self.col, buffer.line_length(row)))
        if (row, col) == (self.row, self.col):
            return self
        return CursorPosition(row, col)

    def up(self, buffer: TextBuffer) -> "CursorPosition":
        return CursorPosition(self.row - 1, self.col).clamp(buffer)

    def down(self, buffer: TextBuffer) -> "CursorPosition":
        return CursorPosition(self.row + 1, self.col).clamp(buffer)

    def right(self, buffer: TextBuffer) -> "CursorPosition":
        if not self.end_of_line(buffer):
            return CursorPosition(self.row, self.col + 1)
        if self.final_line(buffer):
            return self
        return CursorPosition(self.row + 1, 0)

    def left(self, buffer: TextBuffer) -> "CursorPosition":
        if self.col > 0:
            return CursorPosition(self.row, self.col - 1)
        if self.row == 0:
            return self
        return CursorPosition(self.row - 1, buffer.line_length(self.row - 1))

    def line_home(self) -> "CursorPosition":
        return CursorPosition(self.row, 0)

    def line_end(self, buffer: TextBuffer) -> "CursorPosition":
        return CursorPosition(self.row, buffer.line_length(self.row))

    def enter(self, buffer: TextBuffer) -> "CursorPosition":
        return self.down(buffer).line_home()

    def end_of_line(self, buffer: TextBuffer) -> bool:
        return self.col == buffer.line_length(self.row)

    def final_line(self, buffer: TextBuffer) -> bool:
        return self.row == buffer.line_count - 1

    def end_of_file(self, buffer: TextBuffer) -> bool:
        return self.final_line(buffer) and self.end_of_line(buffer)

    def beginning_of_file(self) -> bool:
        return self.row == 0 and self.col == 0


__all__ = ["CursorPosition"]
