"""Process-wide registry of per-surface contributions.

A host registers contribution factories once, then calls
``instantiate_contributions`` for every surface it creates and
``dispose_contributions`` when the surface goes away.
"""

from __future__ import annotations

from typing import Callable, Dict, Protocol

from cursor_undo.runtime import telemetry
from cursor_undo.surface.sync import CursorSurface


class Contribution(Protocol):
    def get_id(self) -> str: ...

    def dispose(self) -> None: ...


ContributionFactory = Callable[[CursorSurface], Contribution]


class ContributionError(RuntimeError):
    """Raised on duplicate registrations or lookups of missing contributions."""


class ContributionRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, ContributionFactory] = {}
        self._instances: Dict[int, Dict[str, Contribution]] = {}

    def register(self, contribution_id: str, factory: ContributionFactory) -> None:
        if contribution_id in self._factories:
            raise ContributionError(
                f"Contribution '{contribution_id}' already registered"
            )
        self._factories[contribution_id] = factory

    def is_registered(self, contribution_id: str) -> bool:
        return contribution_id in self._factories

    def instantiate(self, surface: CursorSurface) -> Dict[str, Contribution]:
        instances = self._instances.setdefault(id(surface), {})
        for contribution_id, factory in self._factories.items():
            if contribution_id not in instances:
                instances[contribution_id] = factory(surface)
                telemetry.record_event(
                    "contribution.instantiate",
                    level="debug",
                    data={"id": contribution_id},
                )
        return dict(instances)

    def attach(self, surface: CursorSurface, contribution: Contribution) -> None:
        """Install a pre-built contribution so ``instantiate`` skips its factory."""

        instances = self._instances.setdefault(id(surface), {})
        contribution_id = contribution.get_id()
        if contribution_id in instances:
            raise ContributionError(
                f"Surface already has contribution '{contribution_id}'"
            )
        instances[contribution_id] = contribution

    def get(self, surface: CursorSurface, contribution_id: str) -> Contribution:
        try:
            return self._instances[id(surface)][contribution_id]
        except KeyError as exc:
            raise ContributionError(
                f"Surface has no contribution '{contribution_id}'"
            ) from exc

    def dispose(self, surface: CursorSurface) -> None:
        instances = self._instances.pop(id(surface), {})
        for contribution in instances.values():
            contribution.dispose()

    def __len__(self) -> int:
        return len(self._instances)


REGISTRY = ContributionRegistry()


def register_editor_contribution(
    contribution_id: str, factory: ContributionFactory
) -> None:
    REGISTRY.register(contribution_id, factory)


def attach_contribution(surface: CursorSurface, contribution: Contribution) -> None:
    REGISTRY.attach(surface, contribution)


def instantiate_contributions(surface: CursorSurface) -> Dict[str, Contribution]:
    return REGISTRY.instantiate(surface)


def get_contribution(surface: CursorSurface, contribution_id: str) -> Contribution:
    return REGISTRY.get(surface, contribution_id)


def dispose_contributions(surface: CursorSurface) -> None:
    REGISTRY.dispose(surface)


__all__ = [
    "Contribution",
    "ContributionError",
    "ContributionFactory",
    "ContributionRegistry",
    "REGISTRY",
    "attach_contribution",
    "dispose_contributions",
    "get_contribution",
    "instantiate_contributions",
    "register_editor_contribution",
]
