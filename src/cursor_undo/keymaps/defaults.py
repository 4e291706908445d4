"""Built-in soft undo/redo actions and their default key bindings."""

from __future__ import annotations

from typing import Iterable, Sequence

from cursor_undo.actions import cursor as cursor_actions

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

TEXT_INPUT_FOCUS = WhenClause("text_input_focus")

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="cursor.undo",
        handler=cursor_actions.cursor_undo,
        label="Soft Undo",
        description="Move the cursors back to their previous positions",
    ),
    ActionRef(
        id="cursor.redo",
        handler=cursor_actions.cursor_redo,
        label="Soft Redo",
        description="Move the cursors forward again after a soft undo",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="cursor.undo.default",
        sequence=KeySequence.parse("ctrl+u"),
        action_id="cursor.undo",
        description="Soft Undo",
        when=(TEXT_INPUT_FOCUS,),
        source="default",
    ),
    Binding(
        id="cursor.redo.default",
        sequence=KeySequence.parse("ctrl+shift+j"),
        action_id="cursor.redo",
        description="Soft Redo",
        when=(TEXT_INPUT_FOCUS,),
        source="default",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the soft undo/redo actions and their bindings."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "TEXT_INPUT_FOCUS",
    "load_default_keymaps",
]
