"""Context and result types shared by command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from cursor_undo.surface.sync import CursorSurface


@dataclass(slots=True)
class CommandContext:
    """What a handler sees when a command runs against a surface."""

    surface: CursorSurface
    flags: Dict[str, bool] = field(default_factory=dict)
    args: Optional[object] = None


@dataclass(slots=True)
class CommandResult:
    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


__all__ = ["CommandContext", "CommandResult"]
