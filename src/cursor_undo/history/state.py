"""Positions, selection ranges, and immutable cursor state snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based ``(line, column)`` location inside a document."""

    line: int
    column: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.column)


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """One cursor: an anchor and the active (head) end of the selection.

    When ``anchor == head`` the range is a plain caret.
    """

    anchor: Position
    head: Position

    @classmethod
    def caret(cls, line: int, column: int) -> "SelectionRange":
        position = Position(line, column)
        return cls(position, position)

    @classmethod
    def from_tuples(
        cls, anchor: tuple[int, int], head: tuple[int, int]
    ) -> "SelectionRange":
        return cls(Position(*anchor), Position(*head))

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.head

    @property
    def start(self) -> Position:
        return min(self.anchor, self.head)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.head)

    def equals_selection(self, other: "SelectionRange") -> bool:
        return self.anchor == other.anchor and self.head == other.head


@dataclass(frozen=True, slots=True, eq=False)
class CursorState:
    """All selection ranges of a surface at one instant, in host order."""

    selections: tuple[SelectionRange, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "selections", tuple(self.selections))

    @classmethod
    def of(cls, selections: Iterable[SelectionRange]) -> "CursorState":
        return cls(tuple(selections))

    @property
    def primary(self) -> Optional[SelectionRange]:
        return self.selections[0] if self.selections else None

    def equals(self, other: "CursorState") -> bool:
        if len(self.selections) != len(other.selections):
            return False
        return all(
            mine.equals_selection(theirs)
            for mine, theirs in zip(self.selections, other.selections)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CursorState):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.selections)

    def __len__(self) -> int:
        return len(self.selections)

    def __iter__(self) -> Iterator[SelectionRange]:
        return iter(self.selections)


__all__ = ["Position", "SelectionRange", "CursorState"]
