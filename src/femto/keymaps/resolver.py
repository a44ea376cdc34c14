"""Prefix-trie lookup from typed key tokens to bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Literal, Optional, Sequence

from femto.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def descendants(self) -> Iterator["TrieNode"]:
        stack = list(self.children.values())
        while stack:
            node = stack.pop()
            yield node
            stack.extend(node.children.values())


def build_trie(bindings: Iterable[Binding]) -> TrieNode:
    root = TrieNode()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, TrieNode())
        node.binding = binding
    return root


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` carries the binding; ``pending`` lists the keys that may follow."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Resolves token sequences, rebuilding its trie when the registry changes."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._trie: Optional[TrieNode] = None
        self._revision = -1

    def resolve(self, tokens: Sequence[str]) -> ResolutionResult:
        keys = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"keys": " ".join(keys)},
        ) as handle:
            result = self._walk(keys)
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def reset(self) -> None:
        self._trie = None
        self._revision = -1

    def _walk(self, keys: tuple[str, ...]) -> ResolutionResult:
        node = self._current_trie()
        for consumed, token in enumerate(keys):
            child = node.children.get(token)
            if child is None:
                return ResolutionResult(status="miss", consumed=consumed)
            node = child

        if node.binding is not None:
            action = self._registry.get_action(node.binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=node.binding, action=action),
                consumed=len(keys),
            )
        if node.children:
            timeouts = [
                child.binding.sequence.timeout_ms
                for child in node.descendants()
                if child.binding is not None
            ]
            return ResolutionResult(
                status="pending",
                consumed=len(keys),
                next_expected=tuple(sorted(node.children)),
                timeout_ms=min(timeouts) if timeouts else None,
            )
        return ResolutionResult(status="miss", consumed=len(keys))

    def _current_trie(self) -> TrieNode:
        revision = self._registry.revision()
        if self._trie is None or revision != self._revision:
            self._trie = build_trie(self._registry.iter_bindings())
            self._revision = revision
        return self._trie


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "TrieNode",
    "build_trie",
]
