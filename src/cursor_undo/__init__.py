"""UI-agnostic soft undo/redo of cursor and selection movements."""

__all__ = [
    "actions",
    "adapters",
    "commands",
    "contributions",
    "controller",
    "history",
    "keymaps",
    "runtime",
    "surface",
]

__version__ = "0.1.0"
