"""Runtime services: telemetry and settings."""

from . import telemetry
from .config import CursorUndoSettings, DEFAULT_HISTORY_LIMIT

__all__ = ["telemetry", "CursorUndoSettings", "DEFAULT_HISTORY_LIMIT"]
