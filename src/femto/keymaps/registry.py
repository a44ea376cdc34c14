"""Action and binding store with per-key-sequence conflict detection."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from typing import DefaultDict, Dict, Iterable, Iterator, Optional

from femto.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(frozen=True, slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    signatures: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding claims a key sequence already owned by other bindings."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        owners = ", ".join(conflict.id for conflict in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' uses '{binding.key_signature}' already bound by {owners}"
        )


class KeymapRegistry:
    """Owns actions and bindings; ``revision()`` changes whenever bindings do.

    A key sequence belongs to at most one binding.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_signature: DefaultDict[str, set[str]] = defaultdict(set)
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts same-id and same-keys bindings."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.key_signature},
        ) as handle:
            self._require_action(binding)
            conflicts = self.detect_conflicts(binding)
            if not replace:
                if conflicts:
                    handle.add_metadata("conflicts", [c.id for c in conflicts])
                    raise KeymapConflictError(binding, conflicts)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            for stale in conflicts:
                self._drop(stale.id)
            self._drop(binding.id)
            self._store(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        removed = self._drop(binding_id)
        if removed is not None:
            self._revision += 1
        return removed

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            updated = replace(self.get_binding(binding_id), **changes)
            self._require_action(updated)
            conflicts = self.detect_conflicts(updated)
            if conflicts:
                raise KeymapConflictError(updated, conflicts)
            self._drop(binding_id)
            self._store(updated)
            self._revision += 1
            return updated

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def bindings_for(self, action_id: str) -> tuple[Binding, ...]:
        return tuple(b for b in self._bindings.values() if b.action_id == action_id)

    def override_sequence_timeouts(
        self,
        *,
        timeout_ms: int,
        binding_ids: Optional[Iterable[str]] = None,
    ) -> None:
        """Set the multi-stroke timeout on every binding, or on ``binding_ids``."""

        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        ids = list(self._bindings) if binding_ids is None else list(binding_ids)
        if not ids:
            return
        for binding_id in ids:
            binding = self.get_binding(binding_id)
            self._bindings[binding_id] = replace(
                binding, sequence=binding.sequence.with_timeout(timeout_ms)
            )
        self._revision += 1

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            signatures=tuple(sorted(self._by_signature)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        """Other bindings already using ``binding``'s key sequence."""

        owners = self._by_signature.get(binding.key_signature, ())
        return [self._bindings[owner] for owner in sorted(owners) if owner != binding.id]

    def _require_action(self, binding: Binding) -> None:
        if binding.action_id not in self._actions:
            raise KeyError(
                f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
            )

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_signature[binding.key_signature].add(binding.id)

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        owners = self._by_signature[binding.key_signature]
        owners.discard(binding_id)
        if not owners:
            del self._by_signature[binding.key_signature]
        return binding


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
