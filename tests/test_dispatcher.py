from __future__ import annotations

import time

from femto.commands import Command, EditorCommand
from femto.keymaps import Binding, KeySequence, KeymapRegistry, load_default_keymaps
from femto.session import KeyDispatcher, KeyInput, key_to_token


def ctrl(key: str) -> KeyInput:
    return KeyInput(key=key, modifiers=("ctrl",))


def char(text: str) -> KeyInput:
    return KeyInput(key=text, text=text)


def make_dispatcher(timeout_ms: int = 500) -> KeyDispatcher:
    registry = KeymapRegistry()
    chord = Binding(
        id="editor.save.ctrl_x_ctrl_s",
        sequence=KeySequence.from_strings("ctrl+x", "ctrl+s", timeout_ms=timeout_ms),
        action_id="editor.save",
    )
    load_default_keymaps(registry, extra_bindings=(chord,))
    return KeyDispatcher.with_defaults(registry=registry)


def test_key_to_token_joins_modifiers() -> None:
    assert key_to_token(ctrl("s")) == "ctrl+s"
    assert key_to_token(KeyInput(key="up")) == "up"


def test_control_key_decodes_to_command() -> None:
    dispatcher = KeyDispatcher.with_defaults()

    result = dispatcher.feed(ctrl("q"))

    assert result.status == "command"
    assert result.command == EditorCommand(Command.QUIT)


def test_named_keys_share_commands_with_control_keys() -> None:
    dispatcher = KeyDispatcher.with_defaults()

    assert dispatcher.feed(KeyInput("up")).command == EditorCommand(Command.MOVE_UP)
    assert dispatcher.feed(ctrl("p")).command == EditorCommand(Command.MOVE_UP)
    assert dispatcher.feed(KeyInput("enter")).command == EditorCommand(Command.NEWLINE)


def test_printable_text_decodes_to_insert() -> None:
    dispatcher = KeyDispatcher.with_defaults()

    result = dispatcher.feed(char("x"))

    assert result.command == EditorCommand.insert("x")


def test_unbound_non_printable_key_is_miss() -> None:
    dispatcher = KeyDispatcher.with_defaults()

    assert dispatcher.feed(KeyInput("f5")).status == "miss"
    assert dispatcher.feed(KeyInput("tab", text="\t")).status == "miss"


def test_multi_stroke_binding_waits_for_completion() -> None:
    dispatcher = make_dispatcher()

    first = dispatcher.feed(ctrl("x"))
    assert first.status == "pending"
    assert first.timeout_ms == 500
    assert dispatcher.pending == ("ctrl+x",)

    second = dispatcher.feed(ctrl("s"))
    assert second.command == EditorCommand(Command.SAVE)
    assert dispatcher.pending == ()


def test_abandoned_prefix_retries_key_alone() -> None:
    dispatcher = make_dispatcher()
    dispatcher.feed(ctrl("x"))

    result = dispatcher.feed(char("a"))

    assert result.command == EditorCommand.insert("a")
    assert dispatcher.pending == ()


def test_abandoned_prefix_retries_bound_key() -> None:
    dispatcher = make_dispatcher()
    dispatcher.feed(ctrl("x"))

    result = dispatcher.feed(ctrl("q"))

    assert result.command == EditorCommand(Command.QUIT)


def test_process_timeout_waits_for_deadline() -> None:
    dispatcher = make_dispatcher()
    dispatcher.feed(ctrl("x"))

    assert dispatcher.process_timeout(now=0.0) is None
    assert dispatcher.pending == ("ctrl+x",)

    expired = dispatcher.process_timeout(now=time.monotonic() + 10)

    assert expired is not None
    assert expired.status == "miss"
    assert dispatcher.pending == ()


def test_process_timeout_without_pending_is_none() -> None:
    dispatcher = make_dispatcher()

    assert dispatcher.process_timeout() is None
    assert dispatcher.force_timeout() is None



def test_modifier_order_from_host_does_not_matter() -> None:
    registry = KeymapRegistry()
    chord = Binding(
        id="editor.save.shift_ctrl_s",
        sequence=KeySequence.from_strings("shift+ctrl+s"),
        action_id="editor.save",
    )
    load_default_keymaps(registry, extra_bindings=(chord,))
    dispatcher = KeyDispatcher.with_defaults(registry=registry)

    result = dispatcher.feed(KeyInput(key="s", modifiers=("Shift", "ctrl")))

    assert result.command == EditorCommand(Command.SAVE)
    assert key_to_token(KeyInput(key="s", modifiers=("shift", "ctrl"))) == "ctrl+shift+s"
