"""Executable Textual app that hosts the editing session."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use femto.adapters.textual.app"
    ) from exc

from femto.runtime import telemetry
from femto.runtime.config import EditorConfig
from femto.session import EditorSession, RenderFrame

from .controller import TextualEditorAdapter, TextualUIHooks

STATUS_ROWS = 1


def render_frame(frame: RenderFrame) -> Text:
    """Paint visible lines with the cursor cell in reverse video."""

    text = Text(no_wrap=True, overflow="crop", end="")
    for index, line in enumerate(frame.lines):
        if index:
            text.append("\n")
        if index != frame.cursor_row:
            text.append(line)
            continue
        col = frame.cursor_col
        text.append(line[:col])
        text.append(line[col : col + 1] or " ", style="reverse")
        text.append(line[col + 1 :])
    return text


class FemtoApp(App[None]):
    """Full-screen Textual UI around one ``EditorSession``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("femto.app")

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        yield self._buffer_widget
        yield self._status_widget

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self._fit_to(self.size.height, self.size.width)
        self.set_interval(0.1, self._process_timeouts)

    def on_resize(self, event: events.Resize) -> None:
        self._fit_to(event.size.height, event.size.width)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key, text, modifiers = self._normalize_key(event)
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        event.prevent_default()

    async def action_quit(self) -> None:
        if self.adapter and self.session.running:
            self.adapter.quit()
        else:
            self.exit()

    def _fit_to(self, height: int, width: int) -> None:
        if self.adapter:
            self.adapter.resize(height - STATUS_ROWS, width)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _update_view(self, frame: RenderFrame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_frame(frame))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(Text(status, no_wrap=True, overflow="crop"))

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Tuple[str, Optional[str], Tuple[str, ...]]:
        *modifiers, key = event.key.split("+") if event.key != "+" else ["+"]
        text = event.character if event.is_printable else None
        return (key, text, tuple(modifiers))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="femto", description="Minimal terminal text editor."
    )
    parser.add_argument("path", help="File to edit (created on first save)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = EditorConfig.from_env()
    except ValueError as exc:
        parser.error(str(exc))
    session = EditorSession.open(args.path, config=config)
    FemtoApp(session).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
