"""Editing session, key decoding and the render/input loop."""

from .base import CommandResult, KeyInput, RenderFrame, SessionBus
from .dispatcher import DecodeResult, KeyDispatcher, key_to_token
from .editor import EditorSession
from .loop import TerminalPort, run_session

__all__ = [
    "CommandResult",
    "KeyInput",
    "RenderFrame",
    "SessionBus",
    "DecodeResult",
    "KeyDispatcher",
    "key_to_token",
    "EditorSession",
    "TerminalPort",
    "run_session",
]
