"""Value types and the event bus shared by the session and its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by a terminal host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class CommandResult:
    """Outcome of ``EditorSession.execute`` or ``KeyDispatcher.feed``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """What a terminal host paints: visible lines plus screen-relative cursor."""

    lines: Tuple[str, ...]
    cursor_row: int
    cursor_col: int
    status: str = ""


class SessionBus:
    """Minimal event bus letting hosts observe session transitions."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["KeyInput", "CommandResult", "RenderFrame", "SessionBus"]
