"""Textual host integration."""

from .controller import TextualCursorSurface, TextualCursorUndoAdapter, TextualUIHooks

__all__ = ["TextualCursorSurface", "TextualCursorUndoAdapter", "TextualUIHooks"]
