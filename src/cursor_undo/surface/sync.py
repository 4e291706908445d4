"""Boundary types between cursor history and host editing surfaces."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, Sequence

from cursor_undo.history.state import Position, SelectionRange

from .events import EventEmitter


class ScrollType(str, Enum):
    SMOOTH = "smooth"
    IMMEDIATE = "immediate"


class CursorSurface(Protocol):
    """What a host must provide for a cursor undo controller to drive it."""

    on_did_change_document: EventEmitter[object]
    on_did_change_content: EventEmitter[object]
    on_did_change_selection: EventEmitter[object]

    def has_document(self) -> bool:
        """Return whether a document is currently attached."""
        ...

    def get_selections(self) -> Sequence[SelectionRange]:
        """Return the selections in host order, or ``()`` without a document."""
        ...

    def set_selections(self, selections: Sequence[SelectionRange]) -> None:
        """Replace every selection at once."""
        ...

    def reveal_range_in_center_if_outside_viewport(
        self, selection: SelectionRange, scroll_type: ScrollType
    ) -> None:
        """Scroll ``selection`` into view; best effort."""
        ...


class SelectionValidationError(RuntimeError):
    """Raised when a host writes a selection outside the document."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position: Optional[Position] = position


__all__ = ["CursorSurface", "ScrollType", "SelectionValidationError"]
