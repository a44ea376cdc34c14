"""Scrolling window over a text buffer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from .cursor import CursorPosition
from .document import TextBuffer


@dataclass(frozen=True, slots=True)
class ViewportBuffer(TextBuffer):
    """TextBuffer carrying a ``rows`` x ``cols`` window at (offset_y, offset_x).

    Edits inherited from ``TextBuffer`` act on the full line sequence and keep
    the window; scrolling returns a copy with new offsets. ``offset_y`` is
    always kept within ``[0, line_count - 1]``.
    """

    rows: int = 20
    cols: int = 40
    offset_y: int = 0
    offset_x: int = 0

    def __post_init__(self) -> None:
        TextBuffer.__post_init__(self)
        if self.rows < 1 or self.cols < 1:
            raise ValueError("viewport dimensions must be positive")
        max_y = len(self.lines) - 1
        object.__setattr__(self, "offset_y", max(0, min(self.offset_y, max_y)))
        object.__setattr__(self, "offset_x", max(0, self.offset_x))

    @classmethod
    def wrap(
        cls, buffer: TextBuffer, *, rows: int = 20, cols: int = 40
    ) -> "ViewportBuffer":
        if isinstance(buffer, ViewportBuffer):
            return buffer.resized(rows, cols)
        return cls(lines=buffer.lines, rows=rows, cols=cols)

    def scroll_up(self) -> "ViewportBuffer":
        return self._with_offsets(self.offset_y - 1, self.offset_x)

    def scroll_down(self) -> "ViewportBuffer":
        return self._with_offsets(self.offset_y + 1, self.offset_x)

    def scroll_left(self) -> "ViewportBuffer":
        return self._with_offsets(self.offset_y, self.offset_x - 1)

    def scroll_right(self) -> "ViewportBuffer":
        return self._with_offsets(self.offset_y, self.offset_x + 1)

    def resized(self, rows: int, cols: int) -> "ViewportBuffer":
        if (rows, cols) == (self.rows, self.cols):
            return self
        return replace(self, rows=rows, cols=cols)

    def follow(self, cursor: CursorPosition) -> "ViewportBuffer":
        """Return a copy scrolled just enough for ``cursor`` to be visible."""

        offset_y, offset_x = self.offset_y, self.offset_x
        if cursor.row < offset_y:
            offset_y = cursor.row
        elif cursor.row >= offset_y + self.rows:
            offset_y = cursor.row - self.rows + 1
        if cursor.col < offset_x:
            offset_x = cursor.col
        elif cursor.col >= offset_x + self.cols:
            offset_x = cursor.col - self.cols + 1
        return self._with_offsets(offset_y, offset_x)

    def visible_lines(self) -> Tuple[str, ...]:
        window = self.lines[self.offset_y : self.offset_y + self.rows]
        return tuple(line[self.offset_x : self.offset_x + self.cols] for line in window)

    def screen_position(self, cursor: CursorPosition) -> Tuple[int, int]:
        return (cursor.row - self.offset_y, cursor.col - self.offset_x)

    def _with_offsets(self, offset_y: int, offset_x: int) -> "ViewportBuffer":
        offset_y = max(0, min(offset_y, self.line_count - 1))
        offset_x = max(0, offset_x)
        if (offset_y, offset_x) == (self.offset_y, self.offset_x):
            return self
        return replace(self, offset_y=offset_y, offset_x=offset_x)


__all__ = ["ViewportBuffer"]
