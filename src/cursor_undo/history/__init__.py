"""Cursor state snapshots and the bounded history that stores them."""

from .stack import STACK_SIZE_LIMIT, CursorStateStack
from .state import CursorState, Position, SelectionRange

__all__ = [
    "CursorState",
    "CursorStateStack",
    "Position",
    "SelectionRange",
    "STACK_SIZE_LIMIT",
]
