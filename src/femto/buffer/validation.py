"""Bound checks shared by buffer operations.

Callers are expected to validate positions through ``CursorPosition``
predicates first; anything reaching these helpers out of range is a bug.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class BufferValidationError(RuntimeError):
    """Raised when a buffer operation receives an out-of-bounds position."""

    def __init__(
        self, message: str, *, cursor: Optional[Tuple[int, int]] = None
    ) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_row(lines: Sequence[str], row: int) -> int:
    if row < 0 or row >= len(lines):
        raise BufferValidationError(
            f"Row {row} out of range (line count {len(lines)})", cursor=(row, 0)
        )
    return row


def ensure_column(
    lines: Sequence[str], row: int, col: int, *, inclusive: bool = True
) -> int:
    """Check ``col`` against ``row``; ``inclusive`` admits the end-of-line slot."""

    ensure_row(lines, row)
    limit = len(lines[row]) if inclusive else len(lines[row]) - 1
    if col < 0 or col > limit:
        raise BufferValidationError(
            f"Column {col} out of range for row {row}", cursor=(row, col)
        )
    return col


__all__ = ["BufferValidationError", "ensure_row", "ensure_column"]
