"""Synchronous read-apply-render loop over an abstract terminal."""

from __future__ import annotations

from typing import Protocol

from femto.commands import EditorCommand
from femto.runtime import telemetry

from .base import RenderFrame
from .editor import EditorSession


class TerminalPort(Protocol):
    """Blocking command source and screen sink used by ``run_session``."""

    def read_command(self) -> EditorCommand:
        """Block until the next decoded command is available."""
        ...

    def render(self, frame: RenderFrame) -> None:
        """Repaint the screen and place the visual cursor."""
        ...


def run_session(session: EditorSession, terminal: TerminalPort) -> int:
    """Drive ``session`` until it quits; return the number of commands applied."""

    applied = 0
    with telemetry.span("session::loop", component="session"):
        while session.running:
            terminal.render(session.frame())
            command = terminal.read_command()
            session.execute(command)
            applied += 1
    return applied


__all__ = ["TerminalPort", "run_session"]
