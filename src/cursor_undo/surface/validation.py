"""Validation helpers for selections written into a document."""

from __future__ import annotations

from cursor_undo.history.state import Position, SelectionRange

from .document import TextDocument
from .sync import SelectionValidationError


def ensure_position(document: TextDocument, position: Position) -> Position:
    if position.line < 0 or position.line >= document.line_count:
        raise SelectionValidationError("Line out of range", position=position)
    line = document.get_line(position.line)
    if position.column < 0 or position.column > len(line):
        raise SelectionValidationError("Column out of range", position=position)
    return position


def ensure_selection(document: TextDocument, selection: SelectionRange) -> SelectionRange:
    ensure_position(document, selection.anchor)
    ensure_position(document, selection.head)
    return selection


__all__ = ["ensure_position", "ensure_selection"]
