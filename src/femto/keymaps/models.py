"""Key strokes, sequences, actions and the bindings tying them together."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key press; modifiers are lower-cased, de-duplicated and sorted."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        cleaned = {m.strip().lower() for m in self.modifiers if m.strip()}
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """``"ctrl+s"`` -> ``KeyStroke("s", ("ctrl",))``; ``"ctrl++"`` binds ``+``."""

        if token == "+" or token.endswith("++"):
            return cls(key="+", modifiers=tuple(token[:-2].split("+")))
        *modifiers, key = token.split("+")
        return cls(key=key, modifiers=tuple(modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Strokes that must arrive within ``timeout_ms`` of each other."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str, timeout_ms: int = 1000) -> "KeySequence":
        return cls(
            strokes=tuple(KeyStroke.parse(key) for key in keys if key),
            timeout_ms=timeout_ms,
        )

    def with_timeout(self, timeout_ms: int) -> "KeySequence":
        return KeySequence(self.strokes, timeout_ms=timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler invoked when a binding fires."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "KeyStroke",
    "KeySequence",
    "ActionRef",
    "Binding",
]
