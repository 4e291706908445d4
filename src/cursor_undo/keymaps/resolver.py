"""Resolve pressed key tokens against a ``KeymapRegistry``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from cursor_undo.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class _Index:
    """Bindings grouped by full token tuple, plus every proper prefix."""

    revision: int
    exact: Dict[tuple[str, ...], list[str]] = field(default_factory=dict)
    prefixes: set[tuple[str, ...]] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0


class KeymapResolver:
    """Turns token sequences into matches, pending prefixes, or misses."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._index: Optional[_Index] = None

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        key = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"keys": " ".join(key)},
        ) as handle:
            index = self._ensure_index()
            match = self._select_match(index.exact.get(key, ()), ctx)
            if match is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(status="match", match=match, consumed=len(key))
            if key in index.prefixes:
                handle.add_metadata("status", "pending")
                return ResolutionResult(status="pending", consumed=len(key))
            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=len(key))

    def reset(self) -> None:
        self._index = None

    def _ensure_index(self) -> _Index:
        revision = self._registry.revision()
        if self._index is not None and self._index.revision == revision:
            return self._index
        index = _Index(revision=revision)
        for binding in self._registry.iter_bindings():
            tokens = binding.sequence.tokens
            index.exact.setdefault(tokens, []).append(binding.id)
            for size in range(1, len(tokens)):
                index.prefixes.add(tokens[:size])
        self._index = index
        return index

    def _select_match(
        self, binding_ids: Sequence[str], context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [
            self._registry.get_binding(binding_id) for binding_id in binding_ids
        ]
        allowed = [binding for binding in candidates if binding.allows(context)]
        if not allowed:
            return None
        # more specific bindings win ties on priority
        allowed.sort(key=lambda b: (-b.priority, -len(b.when), b.id))
        chosen = allowed[0]
        return ResolutionMatch(
            binding=chosen, action=self._registry.get_action(chosen.action_id)
        )


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
