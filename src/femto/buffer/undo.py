"""Linear undo/redo history built on whole-state snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .cursor import CursorPosition
from .document import TextBuffer


@dataclass(frozen=True, slots=True)
class Snapshot:
    buffer: TextBuffer
    cursor: CursorPosition


class HistoryError(RuntimeError):
    """Raised when undo/redo is requested without an available snapshot."""


class EditHistory:
    """Branch-pruning snapshot log.

    ``current`` points at the snapshot the next undo returns (``-1`` when
    nothing has been captured). The entry consumed by an undo stays in the
    log as the state to revert to, so the next redo target lives at
    ``current + 2``.
    """

    def __init__(self, *, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 2:
            raise ValueError("limit must be at least 2")
        self._snapshots: List[Snapshot] = []
        self._current: int = -1
        self.limit = limit

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def current(self) -> int:
        return self._current

    def save(self, snapshot: Snapshot, advance: bool = True) -> None:
        del self._snapshots[self._current + 1 :]
        self._snapshots.append(snapshot)
        if advance:
            self._current += 1
        self._evict()

    def can_undo(self) -> bool:
        return self._current >= 0

    def undo(self) -> Snapshot:
        if not self.can_undo():
            raise HistoryError("Nothing to undo")
        snapshot = self._snapshots[self._current]
        self._current -= 1
        return snapshot

    def can_redo(self) -> bool:
        return self._current + 2 < len(self._snapshots)

    def redo(self) -> Snapshot:
        if not self.can_redo():
            raise HistoryError("Nothing to redo")
        snapshot = self._snapshots[self._current + 2]
        self._current += 1
        return snapshot

    def clear(self) -> None:
        self._snapshots.clear()
        self._current = -1

    def _evict(self) -> None:
        if self.limit is None:
            return
        overflow = len(self._snapshots) - self.limit
        if overflow <= 0:
            return
        del self._snapshots[:overflow]
        self._current = max(-1, self._current - overflow)


__all__ = ["Snapshot", "EditHistory", "HistoryError"]
