"""Textual-agnostic controller wiring key events, the session and UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from femto.commands import Command, EditorCommand
from femto.session import (
    CommandResult,
    DecodeResult,
    EditorSession,
    KeyDispatcher,
    KeyInput,
    RenderFrame,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[RenderFrame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges key events to the dispatcher/session pair and repaints via hooks."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        dispatcher: Optional[KeyDispatcher] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.dispatcher = dispatcher or KeyDispatcher.with_defaults(session.config)
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Decode one key event and apply the resulting command, if any."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        decoded = self.dispatcher.feed(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        result = self._apply(decoded)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def process_timeouts(self) -> Optional[CommandResult]:
        """Flush an expired multi-stroke prefix and apply what it resolved to."""

        decoded = self.dispatcher.process_timeout()
        if decoded is None:
            return None
        self._log_state("timeout ->", status=decoded.status)
        return self._apply(decoded)

    def quit(self) -> CommandResult:
        """Route a host-level quit request through the session."""

        return self._apply(
            DecodeResult(status="command", command=EditorCommand(Command.QUIT))
        )

    def resize(self, rows: int, cols: int) -> None:
        self.session.resize(max(1, rows), max(1, cols))
        self._refresh()

    def _apply(self, decoded: DecodeResult) -> CommandResult:
        if decoded.command is not None:
            result = self.session.execute(decoded.command)
        else:
            result = CommandResult(
                consumed=decoded.status == "pending",
                status=decoded.status,
                timeout_ms=decoded.timeout_ms,
            )
        self._refresh()
        if not self.session.running:
            self.hooks.request_exit()
        return result

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "session.edit",
            "session.save",
            "session.save_failed",
            "session.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_view(self.session.frame())
        self.hooks.update_status(self.status_text())

    def status_text(self) -> str:
        session = self.session
        name = Path(session.path).name if session.path is not None else "[No Name]"
        flag = " [+]" if session.modified else ""
        position = f"{session.cursor.row + 1}:{session.cursor.col + 1}"
        parts = [f"{name}{flag}", position]
        if self.dispatcher.pending:
            parts.append(" ".join(self.dispatcher.pending))
        if session.status:
            parts.append(session.status)
        return "  ".join(parts)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "cursor": session.cursor.as_tuple(),
            "lines": session.buffer.line_count,
            "modified": session.modified,
            "pending": " ".join(self.dispatcher.pending),
            "undo_depth": len(session.history),
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
