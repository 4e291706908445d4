"""Soft undo / soft redo command handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from cursor_undo.controller import CursorUndoController

from .base import CommandContext, CommandResult

if TYPE_CHECKING:
    from cursor_undo.keymaps import ResolutionMatch


def cursor_undo(
    context: CommandContext, match: Optional["ResolutionMatch"] = None
) -> CommandResult:
    del match
    controller = CursorUndoController.get(context.surface)
    status = "ok" if controller.can_undo() else "noop"
    controller.perform_undo()
    return CommandResult(consumed=True, status=status, message="cursor_undo")


def cursor_redo(
    context: CommandContext, match: Optional["ResolutionMatch"] = None
) -> CommandResult:
    del match
    controller = CursorUndoController.get(context.surface)
    status = "ok" if controller.can_redo() else "noop"
    controller.perform_redo()
    return CommandResult(consumed=True, status=status, message="cursor_redo")


__all__ = ["cursor_undo", "cursor_redo"]
