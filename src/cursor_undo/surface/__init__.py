"""Host-facing surface abstractions consumed by cursor history."""

from .document import TextDocument
from .editor import (
    ContentChangedEvent,
    DocumentChangedEvent,
    EditorSurface,
    RevealRequest,
    SelectionChangedEvent,
)
from .events import EventEmitter, Subscription
from .sync import CursorSurface, ScrollType, SelectionValidationError
from .validation import ensure_position, ensure_selection

__all__ = [
    "ContentChangedEvent",
    "CursorSurface",
    "DocumentChangedEvent",
    "EditorSurface",
    "EventEmitter",
    "RevealRequest",
    "ScrollType",
    "SelectionChangedEvent",
    "SelectionValidationError",
    "Subscription",
    "TextDocument",
    "ensure_position",
    "ensure_selection",
]
