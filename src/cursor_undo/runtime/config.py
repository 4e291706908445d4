"""Environment-driven settings for cursor history controllers."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import env, env_flag

DEFAULT_HISTORY_LIMIT = 50


def _env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class CursorUndoSettings:
    """Knobs shared by every controller created from the same settings."""

    history_limit: int = DEFAULT_HISTORY_LIMIT
    skip_duplicates: bool = True
    reveal_on_restore: bool = True

    def __post_init__(self) -> None:
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")

    @classmethod
    def from_env(cls) -> "CursorUndoSettings":
        limit = _env_int("HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)
        if limit < 1:
            limit = DEFAULT_HISTORY_LIMIT
        return cls(
            history_limit=limit,
            skip_duplicates=env_flag("SKIP_DUPLICATES", True),
            reveal_on_restore=env_flag("REVEAL_ON_RESTORE", True),
        )


__all__ = ["CursorUndoSettings", "DEFAULT_HISTORY_LIMIT"]
