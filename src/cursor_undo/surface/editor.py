"""In-memory editing surface implementing ``CursorSurface``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from cursor_undo.history.state import Position, SelectionRange

from .document import TextDocument
from .events import EventEmitter
from .sync import ScrollType
from .validation import ensure_selection


@dataclass(frozen=True, slots=True)
class DocumentChangedEvent:
    old_uri: Optional[str]
    new_uri: Optional[str]


@dataclass(frozen=True, slots=True)
class ContentChangedEvent:
    uri: str
    version: int


@dataclass(frozen=True, slots=True)
class SelectionChangedEvent:
    selections: Tuple[SelectionRange, ...]
    source: str = "api"


@dataclass(frozen=True, slots=True)
class RevealRequest:
    selection: SelectionRange
    scroll_type: ScrollType
    scrolled: bool


class EditorSurface:
    """Headless editor: a document, multi-cursor selections, and a viewport.

    Every mutation fires its notification synchronously before returning.
    """

    def __init__(
        self,
        document: Optional[TextDocument] = None,
        *,
        name: str = "surface",
        viewport_height: int = 20,
    ) -> None:
        self.name = name
        self.viewport_height = viewport_height
        self.viewport_top = 0
        self.text_input_focus = True
        self.reveal_requests: List[RevealRequest] = []
        self.on_did_change_document: EventEmitter[DocumentChangedEvent] = (
            EventEmitter("document")
        )
        self.on_did_change_content: EventEmitter[ContentChangedEvent] = EventEmitter(
            "content"
        )
        self.on_did_change_selection: EventEmitter[SelectionChangedEvent] = (
            EventEmitter("selection")
        )
        self._document = document
        self._selections: Tuple[SelectionRange, ...] = (
            (SelectionRange.caret(0, 0),) if document is not None else ()
        )

    @classmethod
    def from_text(cls, text: str, *, uri: str = "untitled:1", **kwargs) -> "EditorSurface":
        return cls(TextDocument.from_text(text, uri=uri), **kwargs)

    @property
    def document(self) -> Optional[TextDocument]:
        return self._document

    def has_document(self) -> bool:
        return self._document is not None

    def context_flags(self) -> dict[str, bool]:
        return {
            "text_input_focus": self.text_input_focus,
            "has_document": self.has_document(),
        }

    def set_document(self, document: Optional[TextDocument]) -> None:
        old_uri = self._document.uri if self._document is not None else None
        self._document = document
        self._selections = (
            (SelectionRange.caret(0, 0),) if document is not None else ()
        )
        self.viewport_top = 0
        self.on_did_change_document.fire(
            DocumentChangedEvent(
                old_uri=old_uri,
                new_uri=document.uri if document is not None else None,
            )
        )

    def get_selections(self) -> Sequence[SelectionRange]:
        return self._selections

    def set_selections(
        self, selections: Sequence[SelectionRange], *, source: str = "api"
    ) -> None:
        document = self._require_document()
        validated = tuple(ensure_selection(document, sel) for sel in selections)
        if not validated:
            raise ValueError("set_selections requires at least one selection")
        self._selections = validated
        self.on_did_change_selection.fire(
            SelectionChangedEvent(selections=validated, source=source)
        )

    def move_cursor(self, line: int, column: int, *, source: str = "keyboard") -> None:
        self.set_selections([SelectionRange.caret(line, column)], source=source)

    def select(
        self,
        anchor: Tuple[int, int],
        head: Tuple[int, int],
        *,
        source: str = "mouse",
    ) -> None:
        self.set_selections([SelectionRange.from_tuples(anchor, head)], source=source)

    def add_cursors(
        self, carets: Iterable[Tuple[int, int]], *, source: str = "keyboard"
    ) -> None:
        added = [SelectionRange.caret(line, col) for line, col in carets]
        self.set_selections(list(self._selections) + added, source=source)

    def replace_lines(self, start: int, end: int, new_lines: Sequence[str]) -> None:
        """Edit the document; selections are clamped without a selection event."""

        document = self._require_document()
        document.replace_lines(start, end, new_lines)
        self._selections = tuple(self._clamp(sel) for sel in self._selections)
        self.on_did_change_content.fire(
            ContentChangedEvent(uri=document.uri, version=document.version)
        )

    def reveal_range_in_center_if_outside_viewport(
        self, selection: SelectionRange, scroll_type: ScrollType = ScrollType.SMOOTH
    ) -> None:
        line = selection.head.line
        bottom = self.viewport_top + self.viewport_height
        scrolled = not (self.viewport_top <= line < bottom)
        if scrolled:
            self.viewport_top = max(0, line - self.viewport_height // 2)
        self.reveal_requests.append(
            RevealRequest(selection=selection, scroll_type=scroll_type, scrolled=scrolled)
        )

    def _require_document(self) -> TextDocument:
        if self._document is None:
            raise RuntimeError(f"Surface '{self.name}' has no document attached")
        return self._document

    def _clamp(self, selection: SelectionRange) -> SelectionRange:
        return SelectionRange(
            self._clamp_position(selection.anchor),
            self._clamp_position(selection.head),
        )

    def _clamp_position(self, position: Position) -> Position:
        document = self._require_document()
        line = max(0, min(position.line, document.line_count - 1))
        column = max(0, min(position.column, len(document.get_line(line))))
        return Position(line, column)


__all__ = [
    "ContentChangedEvent",
    "DocumentChangedEvent",
    "EditorSurface",
    "RevealRequest",
    "SelectionChangedEvent",
]
