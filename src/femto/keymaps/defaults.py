"""Built-in control-key bindings for the editor."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Sequence

from femto.commands import Command, EditorCommand

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry


def command_handler(command: Command) -> Callable[..., EditorCommand]:
    """Build an action handler that decodes a key into ``command``."""

    def handler(*_args: object, **_kwargs: object) -> EditorCommand:
        return EditorCommand(command)

    handler.__name__ = f"emit_{command.value}"
    return handler


_DESCRIPTIONS: dict[Command, str] = {
    Command.QUIT: "Quit the editor",
    Command.SAVE: "Write the buffer to disk",
    Command.MOVE_UP: "Move cursor up",
    Command.MOVE_DOWN: "Move cursor down",
    Command.MOVE_RIGHT: "Move cursor right",
    Command.MOVE_LEFT: "Move cursor left",
    Command.LINE_HOME: "Jump to start of line",
    Command.LINE_END: "Jump to end of line",
    Command.BACKSPACE: "Delete the character before the cursor",
    Command.DELETE: "Delete the character under the cursor",
    Command.DELETE_BEFORE: "Delete to start of line",
    Command.DELETE_AFTER: "Delete to end of line",
    Command.UNDO: "Undo the last edit",
    Command.REDO: "Redo the last undone edit",
    Command.NEWLINE: "Break the line at the cursor",
}

DEFAULT_ACTIONS: tuple[ActionRef, ...] = tuple(
    ActionRef(
        id=f"editor.{command.value}",
        handler=command_handler(command),
        description=description,
        metadata={"command": command.value},
    )
    for command, description in _DESCRIPTIONS.items()
)

_DEFAULT_KEYS: tuple[tuple[Command, tuple[str, ...]], ...] = (
    (Command.QUIT, ("ctrl+q",)),
    (Command.SAVE, ("ctrl+s",)),
    (Command.MOVE_UP, ("ctrl+p", "up")),
    (Command.MOVE_DOWN, ("ctrl+n", "down")),
    (Command.MOVE_RIGHT, ("ctrl+f", "right")),
    (Command.MOVE_LEFT, ("ctrl+b", "left")),
    (Command.LINE_HOME, ("ctrl+a", "home")),
    (Command.LINE_END, ("ctrl+e", "end")),
    (Command.BACKSPACE, ("ctrl+h", "backspace")),
    (Command.DELETE, ("ctrl+d", "delete")),
    (Command.DELETE_BEFORE, ("ctrl+u",)),
    (Command.DELETE_AFTER, ("ctrl+k",)),
    (Command.UNDO, ("ctrl+underscore", "ctrl+z")),
    (Command.REDO, ("ctrl+r", "ctrl+y")),
    (Command.NEWLINE, ("enter",)),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=f"editor.{command.value}.{key.replace('+', '_')}",
        sequence=KeySequence.from_strings(key),
        action_id=f"editor.{command.value}",
        description=_DESCRIPTIONS[command],
        source="defaults",
    )
    for command, keys in _DEFAULT_KEYS
    for key in keys
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings.

    Bindings whose action was filtered out are skipped as well, so
    ``exclude_actions=("editor.quit",)`` drops every quit key.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not _selected(binding.action_id, allowed_actions):
            continue
        registry.register_binding(
            _binding_with_timeout(binding, default_sequence_timeout_ms),
            replace=replace,
        )

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    return replace(binding, sequence=binding.sequence.with_timeout(timeout_ms))


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "load_default_keymaps",
    "command_handler",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
]
