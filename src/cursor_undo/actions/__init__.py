"""Command handlers exposed to the host command layer."""

from .base import CommandContext, CommandResult
from .cursor import cursor_redo, cursor_undo

__all__ = [
    "CommandContext",
    "CommandResult",
    "cursor_undo",
    "cursor_redo",
]
