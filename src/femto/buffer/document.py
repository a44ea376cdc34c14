"""Immutable line buffer at the heart of the editor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence, Tuple

from .validation import ensure_column, ensure_row


@dataclass(frozen=True, slots=True)
class TextBuffer:
    """Ordered lines with pure, copy-producing edit operations.

    Every edit returns a new buffer. Lines are ``str`` and the container is a
    tuple, so untouched lines are shared between versions and a buffer held
    by the undo history can never change underneath it.
    """

    lines: Tuple[str, ...] = ("",)

    def __post_init__(self) -> None:
        lines = tuple(self.lines)
        if not lines:
            lines = ("",)
        object.__setattr__(self, "lines", lines)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TextBuffer":
        return cls(lines=tuple(lines))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_length(self, row: int) -> int:
        return len(self.lines[ensure_row(self.lines, row)])

    def get_line(self, row: int) -> str:
        return self.lines[ensure_row(self.lines, row)]

    def text(self, separator: str = "\n") -> str:
        return separator.join(self.lines)

    def delete_char(self, row: int, col: int) -> "TextBuffer":
        ensure_column(self.lines, row, col, inclusive=False)
        line = self.lines[row]
        return self._splice(row, row + 1, (line[:col] + line[col + 1 :],))

    def insert_char(self, char: str, row: int, col: int) -> "TextBuffer":
        base = self
        if row == self.line_count:
            base = self._splice(row, row, ("",))
        ensure_column(base.lines, row, col)
        line = base.lines[row]
        return base._splice(row, row + 1, (line[:col] + char + line[col:],))

    def break_line(self, row: int, col: int) -> "TextBuffer":
        ensure_column(self.lines, row, col)
        line = self.lines[row]
        return self._splice(row, row + 1, (line[:col], line[col:]))

    def join_lines(self, row: int) -> "TextBuffer":
        ensure_row(self.lines, row)
        ensure_row(self.lines, row + 1)
        return self._splice(row, row + 2, (self.lines[row] + self.lines[row + 1],))

    def delete_before(self, row: int, col: int) -> "TextBuffer":
        ensure_column(self.lines, row, col)
        return self._splice(row, row + 1, (self.lines[row][col:],))

    def delete_after(self, row: int, col: int) -> "TextBuffer":
        ensure_column(self.lines, row, col)
        return self._splice(row, row + 1, (self.lines[row][:col],))

    def _splice(self, start: int, end: int, new_lines: Sequence[str]) -> "TextBuffer":
        lines = self.lines[:start] + tuple(new_lines) + self.lines[end:]
        return replace(self, lines=lines)


__all__ = ["TextBuffer"]
