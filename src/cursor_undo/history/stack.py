"""Bounded cursor history with a movable position pointer."""

from __future__ import annotations

from typing import List, Optional

from .state import CursorState

STACK_SIZE_LIMIT = 50


class CursorStateStack:
    """Linear history of cursor states.

    ``_entries[_index]`` is the state the surface is in as far as the history
    knows. Everything after ``_index`` is the redo branch, dropped as soon as a
    new state is recorded from somewhere other than the tail.
    """

    def __init__(
        self,
        initial: CursorState,
        *,
        limit: int = STACK_SIZE_LIMIT,
        skip_duplicates: bool = True,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.skip_duplicates = skip_duplicates
        self._entries: List[CursorState] = [initial]
        self._index: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def position(self) -> int:
        return self._index

    @property
    def current(self) -> CursorState:
        return self._entries[self._index]

    def reset(self, state: CursorState) -> None:
        self._entries = [state]
        self._index = 0

    def record(self, state: CursorState) -> bool:
        """Push ``state`` as the new current entry.

        Returns ``False`` when the state equals the current entry and
        duplicates are skipped.
        """

        if self.skip_duplicates and state == self.current:
            return False
        if self._index < len(self._entries) - 1:
            del self._entries[self._index + 1 :]
        self._entries.append(state)
        self._index = len(self._entries) - 1
        if len(self._entries) > self.limit:
            # keep the history bounded
            del self._entries[0]
            self._index -= 1
        return True

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[CursorState]:
        if not self.can_undo():
            return None
        self._index -= 1
        return self._entries[self._index]

    def redo(self) -> Optional[CursorState]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]


__all__ = ["CursorStateStack", "STACK_SIZE_LIMIT"]
