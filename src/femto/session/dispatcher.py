"""Decodes normalized key events into editor commands via the keymap resolver."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Literal, Optional

from femto.commands import EditorCommand
from femto.keymaps import (
    KeyStroke,
    KeymapRegistry,
    KeymapResolver,
    ResolutionMatch,
    load_default_keymaps,
)
from femto.runtime import telemetry
from femto.runtime.config import EditorConfig

from .base import KeyInput


def key_to_token(key: KeyInput) -> str:
    """Spell ``key`` the way registered bindings spell their strokes."""

    return KeyStroke(key.key, key.modifiers).token


@dataclass(frozen=True, slots=True)
class DecodeResult:
    status: Literal["command", "pending", "miss"]
    command: Optional[EditorCommand] = None
    timeout_ms: Optional[int] = None


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int


class KeyDispatcher:
    """Turns keystrokes into ``EditorCommand`` values.

    Multi-stroke bindings leave the dispatcher "pending" until the next key
    or until ``process_timeout`` finds the deadline expired. Keys with
    printable text and no binding decode to an insert command.
    """

    def __init__(
        self,
        resolver: KeymapResolver,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        self.logger = telemetry.get_logger("femto.dispatcher")
        self._resolver = resolver
        self._pending: List[str] = []
        self._timeout: Optional[PendingTimeout] = None
        self._default_timeout_ms = default_pending_timeout_ms

    @classmethod
    def with_defaults(
        cls,
        config: Optional[EditorConfig] = None,
        *,
        registry: Optional[KeymapRegistry] = None,
    ) -> "KeyDispatcher":
        config = config or EditorConfig()
        if registry is None:
            registry = KeymapRegistry(logger_name="femto.keymaps")
            load_default_keymaps(
                registry, default_sequence_timeout_ms=config.sequence_timeout_ms
            )
        resolver = KeymapResolver(registry, logger_name="femto.keymaps")
        return cls(resolver, default_pending_timeout_ms=config.sequence_timeout_ms)

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def feed(self, key: KeyInput) -> DecodeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(tuple(self._pending))

        if result.status == "match" and result.match:
            self._reset()
            return self._decode_match(result.match, key)

        if result.status == "pending":
            timeout_ms = result.timeout_ms or self._default_timeout_ms
            self._timeout = PendingTimeout(
                deadline=time.monotonic() + timeout_ms / 1000.0,
                timeout_ms=timeout_ms,
            )
            return DecodeResult(status="pending", timeout_ms=timeout_ms)

        had_prefix = len(self._pending) > 1
        self._reset()
        if had_prefix:
            # The prefix was abandoned; give this key a chance on its own.
            return self.feed(key)

        if key.text and len(key.text) == 1 and key.text.isprintable():
            return DecodeResult(status="command", command=EditorCommand.insert(key.text))
        self.logger.debug(f"unbound key {key_to_token(key)}")
        return DecodeResult(status="miss")

    def process_timeout(self, *, now: Optional[float] = None) -> Optional[DecodeResult]:
        """Resolve an expired pending sequence; ``None`` when nothing expired."""

        if self._timeout is None:
            return None
        current = time.monotonic() if now is None else now
        if current < self._timeout.deadline:
            return None
        return self.force_timeout()

    def force_timeout(self) -> Optional[DecodeResult]:
        if not self._pending:
            self._timeout = None
            return None
        tokens = tuple(self._pending)
        self._reset()
        with telemetry.span(
            "dispatcher::timeout",
            component="keymaps",
            metadata={"keys": " ".join(tokens)},
        ):
            result = self._resolver.resolve(tokens)
        if result.status == "match" and result.match:
            return self._decode_match(result.match, None)
        return DecodeResult(status="miss")

    def _decode_match(
        self, match: ResolutionMatch, key: Optional[KeyInput]
    ) -> DecodeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(key, match)

        if isinstance(outcome, EditorCommand):
            return DecodeResult(status="command", command=outcome)
        return DecodeResult(status="miss")

    def _reset(self) -> None:
        self._pending.clear()
        self._timeout = None


__all__ = ["KeyDispatcher", "DecodeResult", "key_to_token"]
