"""Editing session: applies decoded commands to buffer, cursor and history."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Union

from femto.buffer import (
    CursorPosition,
    EditHistory,
    Snapshot,
    TextBuffer,
    ViewportBuffer,
)
from femto.commands import Command, EditorCommand
from femto.runtime import telemetry
from femto.runtime.config import EditorConfig
from femto.storage import (
    LF,
    FileStorage,
    LocalFileStorage,
    PathLike,
    decode_document,
    encode_document,
)

from .base import CommandResult, RenderFrame, SessionBus

Handler = Callable[[EditorCommand], CommandResult]


class EditorSession:
    """Owns the live (buffer, cursor) pair and the undo history.

    Buffers and cursors are immutable; every command replaces the held
    references. Destructive commands snapshot the pre-edit state first.
    """

    def __init__(
        self,
        buffer: Optional[TextBuffer] = None,
        *,
        cursor: Optional[CursorPosition] = None,
        history: Optional[EditHistory] = None,
        path: Optional[PathLike] = None,
        storage: Optional[FileStorage] = None,
        separator: str = LF,
        config: Optional[EditorConfig] = None,
        bus: Optional[SessionBus] = None,
        logger_name: str | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer: TextBuffer = buffer if buffer is not None else TextBuffer()
        self.cursor = (cursor or CursorPosition()).clamp(self.buffer)
        self.history = history or EditHistory(limit=self.config.history_limit)
        self.path = path
        self.storage: FileStorage = storage or LocalFileStorage()
        self.separator = separator
        self.bus = bus or SessionBus()
        self.running = True
        self.modified = False
        self.status = ""
        self._logger_name = logger_name or "femto.session"
        self._handlers: Dict[Command, Handler] = {
            Command.MOVE_UP: self._move_up,
            Command.MOVE_DOWN: self._move_down,
            Command.MOVE_LEFT: self._move_left,
            Command.MOVE_RIGHT: self._move_right,
            Command.LINE_HOME: self._line_home,
            Command.LINE_END: self._line_end,
            Command.INSERT_CHAR: self._insert_char,
            Command.BACKSPACE: self._backspace,
            Command.DELETE: self._delete,
            Command.DELETE_BEFORE: self._delete_before,
            Command.DELETE_AFTER: self._delete_after,
            Command.NEWLINE: self._newline,
            Command.UNDO: self._undo,
            Command.REDO: self._redo,
            Command.SAVE: self._save,
            Command.QUIT: self._quit,
        }
        self._follow()

    @classmethod
    def open(
        cls,
        path: PathLike,
        *,
        storage: Optional[FileStorage] = None,
        config: Optional[EditorConfig] = None,
        bus: Optional[SessionBus] = None,
    ) -> "EditorSession":
        """Load ``path`` into a scrolling session; a missing file starts empty."""

        config = config or EditorConfig()
        storage = storage or LocalFileStorage()
        try:
            data = storage.read(path)
        except FileNotFoundError:
            telemetry.record_event("session.new_file", data={"path": str(path)})
            data = b""
        decoded = decode_document(data, encoding=config.encoding)
        buffer = ViewportBuffer.wrap(
            decoded.buffer, rows=config.viewport_rows, cols=config.viewport_cols
        )
        return cls(
            buffer,
            path=path,
            storage=storage,
            separator=decoded.separator,
            config=config,
            bus=bus,
        )

    @property
    def lines(self) -> tuple[str, ...]:
        return self.buffer.lines

    def snapshot(self) -> Snapshot:
        return Snapshot(buffer=self.buffer, cursor=self.cursor)

    def execute(self, command: Union[EditorCommand, Command]) -> CommandResult:
        if isinstance(command, Command):
            command = EditorCommand(command)
        handler = self._handlers.get(command.kind)
        if handler is None or not self.running:
            return CommandResult(consumed=False, status="noop")
        with telemetry.span(
            f"session::{command.kind.value}",
            logger_name=self._logger_name,
            component="session",
            metadata={"row": self.cursor.row, "col": self.cursor.col},
        ) as handle:
            result = handler(command)
            handle.add_metadata("status", result.status)
        self._follow()
        return result

    def resize(self, rows: int, cols: int) -> None:
        self.buffer = ViewportBuffer.wrap(self.buffer, rows=rows, cols=cols)
        self._follow()

    def frame(self) -> RenderFrame:
        if isinstance(self.buffer, ViewportBuffer):
            row, col = self.buffer.screen_position(self.cursor)
            return RenderFrame(
                lines=self.buffer.visible_lines(),
                cursor_row=row,
                cursor_col=col,
                status=self.status,
            )
        return RenderFrame(
            lines=self.buffer.lines,
            cursor_row=self.cursor.row,
            cursor_col=self.cursor.col,
            status=self.status,
        )

    # navigation

    def _move_up(self, command: EditorCommand) -> CommandResult:
        return self._move(self.cursor.up(self.buffer), command)

    def _move_down(self, command: EditorCommand) -> CommandResult:
        return self._move(self.cursor.down(self.buffer), command)

    def _move_left(self, command: EditorCommand) -> CommandResult:
        return self._move(self.cursor.left(self.buffer), command)

    def _move_right(self, command: EditorCommand) -> CommandResult:
        return self._move(self.cursor.right(self.buffer), command)

    def _line_home(self, command: EditorCommand) -> CommandResult:
        return self._move(self.cursor.line_home(), command)

    def _line_end(self, command: EditorCommand) -> CommandResult:
        return self._move(self.cursor.line_end(self.buffer), command)

    def _move(self, cursor: CursorPosition, command: EditorCommand) -> CommandResult:
        self.cursor = cursor
        return CommandResult(consumed=True, message=command.kind.value)

    # editing

    def _insert_char(self, command: EditorCommand) -> CommandResult:
        char = command.char
        if char is None or len(char) != 1 or not char.isprintable():
            return self._noop("not_printable")
        self._record()
        row, col = self.cursor.row, self.cursor.col
        buffer = self.buffer.insert_char(char, row, col)
        return self._apply(buffer, self.cursor.right(buffer), command)

    def _backspace(self, command: EditorCommand) -> CommandResult:
        if self.cursor.beginning_of_file():
            return self._noop("beginning_of_file")
        self._record()
        row, col = self.cursor.row, self.cursor.col
        if col == 0:
            join_col = self.buffer.line_length(row - 1)
            buffer = self.buffer.join_lines(row - 1)
            return self._apply(buffer, CursorPosition(row - 1, join_col), command)
        buffer = self.buffer.delete_char(row, col - 1)
        return self._apply(buffer, self.cursor.left(buffer), command)

    def _delete(self, command: EditorCommand) -> CommandResult:
        if self.cursor.end_of_file(self.buffer):
            return self._noop("end_of_file")
        self._record()
        row, col = self.cursor.row, self.cursor.col
        if self.cursor.end_of_line(self.buffer):
            buffer = self.buffer.join_lines(row)
        else:
            buffer = self.buffer.delete_char(row, col)
        return self._apply(buffer, self.cursor, command)

    def _delete_before(self, command: EditorCommand) -> CommandResult:
        self._record()
        buffer = self.buffer.delete_before(self.cursor.row, self.cursor.col)
        return self._apply(buffer, self.cursor.line_home(), command)

    def _delete_after(self, command: EditorCommand) -> CommandResult:
        self._record()
        buffer = self.buffer.delete_after(self.cursor.row, self.cursor.col)
        return self._apply(buffer, self.cursor, command)

    def _newline(self, command: EditorCommand) -> CommandResult:
        self._record()
        buffer = self.buffer.break_line(self.cursor.row, self.cursor.col)
        return self._apply(buffer, self.cursor.enter(buffer), command)

    # history

    def _undo(self, command: EditorCommand) -> CommandResult:
        if not self.history.can_undo():
            return self._noop("nothing_to_undo")
        if not self.history.can_redo():
            # Keep the live state as the redo target without moving the pointer.
            self.history.save(self.snapshot(), advance=False)
        return self._restore(self.history.undo(), command)

    def _redo(self, command: EditorCommand) -> CommandResult:
        if not self.history.can_redo():
            return self._noop("nothing_to_redo")
        return self._restore(self.history.redo(), command)

    # file / lifecycle

    def _save(self, command: EditorCommand) -> CommandResult:
        if self.path is None:
            self.status = "No file name"
            return CommandResult(consumed=True, status="save_failed", message=self.status)
        data = encode_document(self.buffer, self.separator, encoding=self.config.encoding)
        try:
            self.storage.write(self.path, data)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            telemetry.record_event(
                "session.save_failed",
                level="error",
                data={"path": str(self.path), "reason": reason},
                logger_name=self._logger_name,
            )
            self.status = f"Save failed: {reason}"
            self.bus.emit("session.save_failed", {"path": self.path, "error": exc})
            return CommandResult(consumed=True, status="save_failed", message=reason)
        self.modified = False
        self.status = f"Wrote {len(data)} bytes to {self.path}"
        telemetry.record_event(
            "session.save",
            data={"path": str(self.path), "bytes": len(data)},
            logger_name=self._logger_name,
        )
        self.bus.emit("session.save", {"path": self.path, "bytes": len(data)})
        return CommandResult(consumed=True, status="saved", message=self.status)

    def _quit(self, command: EditorCommand) -> CommandResult:
        del command
        self.running = False
        telemetry.record_event(
            "session.quit",
            data={"modified": self.modified},
            logger_name=self._logger_name,
        )
        self.bus.emit("session.quit", {"modified": self.modified})
        return CommandResult(consumed=True, status="quit")

    # helpers

    def _record(self) -> None:
        self.history.save(self.snapshot())

    def _apply(
        self, buffer: TextBuffer, cursor: CursorPosition, command: EditorCommand
    ) -> CommandResult:
        self.buffer = buffer
        self.cursor = cursor
        self.modified = True
        self.status = ""
        self.bus.emit(
            "session.edit", {"command": command.kind.value, "cursor": cursor.as_tuple()}
        )
        return CommandResult(consumed=True, message=command.kind.value)

    def _restore(self, snapshot: Snapshot, command: EditorCommand) -> CommandResult:
        buffer = snapshot.buffer
        if isinstance(self.buffer, ViewportBuffer):
            buffer = ViewportBuffer.wrap(
                buffer, rows=self.buffer.rows, cols=self.buffer.cols
            )
        return self._apply(buffer, snapshot.cursor, command)

    def _noop(self, reason: str) -> CommandResult:
        return CommandResult(consumed=False, status="noop", message=reason)

    def _follow(self) -> None:
        if isinstance(self.buffer, ViewportBuffer):
            self.buffer = self.buffer.follow(self.cursor)


__all__ = ["EditorSession"]
