"""Registry owning actions and the key bindings that reference them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from cursor_undo.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    signatures: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding would shadow an existing one in the same context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Stores actions by id and bindings indexed by key signature.

    ``revision`` increases on every binding change so resolvers can cache.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_signature: Dict[str, set[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def iter_actions(self) -> Iterator[ActionRef]:
        yield from self._actions.values()

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def bindings_for(self, action_id: str) -> list[Binding]:
        return [b for b in self._bindings.values() if b.action_id == action_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.key_signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)
            if not replace and binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in conflicts:
                self._drop(stale)
            existing = self._bindings.get(binding.id)
            if existing is not None:
                self._drop(existing)

            self._bindings[binding.id] = binding
            self._by_signature.setdefault(binding.key_signature, set()).add(binding.id)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        conflicts: list[Binding] = []
        for other_id in sorted(self._by_signature.get(binding.key_signature, ())):
            other = self._bindings[other_id]
            if other.id != binding.id and _contexts_overlap(binding, other):
                conflicts.append(other)
        return conflicts

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            signatures=tuple(sorted(self._by_signature)),
        )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        ids = self._by_signature.get(binding.key_signature)
        if ids is None:
            return
        ids.discard(binding.id)
        if not ids:
            del self._by_signature[binding.key_signature]


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Whether both bindings could be active for the same context.

    An unconditional binding only collides with another unconditional one; a
    contradicting flag separates two bindings; otherwise identical
    conditions collide.
    """

    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False
    left_map, right_map = left.when_map, right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return dict(left_map) == dict(right_map)


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
