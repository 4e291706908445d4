"""Host-side command layer: registration, key dispatch, and command execution."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from cursor_undo.actions import CommandContext, CommandResult
from cursor_undo.contributions import REGISTRY, ContributionRegistry
from cursor_undo.controller import CursorUndoController
from cursor_undo.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    load_default_keymaps,
)
from cursor_undo.runtime import CursorUndoSettings, telemetry
from cursor_undo.surface.sync import CursorSurface


def register_cursor_undo(
    keymaps: Optional[KeymapRegistry] = None,
    *,
    contributions: ContributionRegistry = REGISTRY,
) -> KeymapRegistry:
    """One-time host registration of the controller and its two commands.

    The registered factory reads ``CursorUndoSettings.from_env()`` for each
    surface. Hosts that need other settings for a surface attach their own
    controller with ``attach_contribution`` before instantiating.
    """

    if not contributions.is_registered(CursorUndoController.ID):
        contributions.register(CursorUndoController.ID, _create_controller)
    registry = keymaps or KeymapRegistry(logger_name="cursor_undo.keymaps")
    if not registry.has_action("cursor.undo"):
        load_default_keymaps(registry)
    return registry


def _create_controller(surface: CursorSurface) -> CursorUndoController:
    return CursorUndoController(surface, settings=CursorUndoSettings.from_env())


def _flags_for(surface: CursorSurface) -> Dict[str, bool]:
    context_flags = getattr(surface, "context_flags", None)
    if callable(context_flags):
        return dict(context_flags())
    return {"text_input_focus": True, "has_document": surface.has_document()}


class CommandDispatcher:
    """Feeds key chords through the resolver and runs matched actions.

    Multi-chord bindings are supported: a pending prefix is buffered until
    it either matches or misses.
    """

    def __init__(
        self,
        registry: KeymapRegistry,
        resolver: Optional[KeymapResolver] = None,
    ) -> None:
        self.registry = registry
        self.resolver = resolver or KeymapResolver(
            registry, logger_name="cursor_undo.keymaps"
        )
        self._pending: List[str] = []

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def dispatch_key(
        self,
        surface: CursorSurface,
        stroke: KeyStroke | str,
        *,
        flags: Optional[Mapping[str, bool]] = None,
    ) -> CommandResult:
        if isinstance(stroke, str):
            stroke = KeyStroke.parse(stroke)
        context_flags = dict(flags) if flags is not None else _flags_for(surface)
        tokens = self._pending + [stroke.token]
        result = self.resolver.resolve(tokens, context=context_flags)
        if result.status == "pending":
            self._pending = tokens
            return CommandResult(consumed=True, status="pending")
        self._pending = []
        if result.status == "miss" or result.match is None:
            return CommandResult(consumed=False, status="miss")
        context = CommandContext(surface=surface, flags=context_flags)
        return self._run(result.match.action.id, context)

    def execute_command(
        self, action_id: str, surface: CursorSurface, *, args: Optional[object] = None
    ) -> CommandResult:
        context = CommandContext(surface=surface, flags=_flags_for(surface), args=args)
        return self._run(action_id, context)

    def _run(self, action_id: str, context: CommandContext) -> CommandResult:
        action = self.registry.get_action(action_id)
        with telemetry.span(
            f"command::{action.id}",
            logger_name="cursor_undo.commands",
            component="commands",
        ) as handle:
            outcome = action(context)
            if not isinstance(outcome, CommandResult):
                outcome = CommandResult(consumed=True, message=action.id)
            handle.add_metadata("status", outcome.status)
        return outcome


__all__ = ["CommandDispatcher", "register_cursor_undo"]
