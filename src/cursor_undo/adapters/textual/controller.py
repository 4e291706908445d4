"""Hooks-based bridge between a Textual ``TextArea`` and cursor history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from cursor_undo.actions import CommandResult
from cursor_undo.commands import CommandDispatcher, register_cursor_undo
from cursor_undo.contributions import (
    attach_contribution,
    dispose_contributions,
    instantiate_contributions,
)
from cursor_undo.controller import CursorUndoController
from cursor_undo.history import SelectionRange
from cursor_undo.keymaps import KeymapRegistry
from cursor_undo.runtime import CursorUndoSettings
from cursor_undo.surface.events import EventEmitter
from cursor_undo.surface.sync import ScrollType

Location = Tuple[int, int]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the bridge uses to read and drive the host widget.

    ``read_selection`` returns ``(anchor, head)`` locations, or ``None`` when
    the widget has no document loaded.
    """

    read_selection: Callable[[], Optional[Tuple[Location, Location]]]
    write_selection: Callable[[Location, Location], None]
    scroll_to_line: Callable[[int, bool], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualCursorSurface:
    """``CursorSurface`` over a single-selection widget."""

    def __init__(self, hooks: TextualUIHooks) -> None:
        self.hooks = hooks
        self.text_input_focus = True
        self.on_did_change_document: EventEmitter[object] = EventEmitter("document")
        self.on_did_change_content: EventEmitter[object] = EventEmitter("content")
        self.on_did_change_selection: EventEmitter[object] = EventEmitter("selection")

    def context_flags(self) -> dict[str, bool]:
        return {
            "text_input_focus": self.text_input_focus,
            "has_document": self.has_document(),
        }

    def has_document(self) -> bool:
        return self.hooks.read_selection() is not None

    def get_selections(self) -> Sequence[SelectionRange]:
        current = self.hooks.read_selection()
        if current is None:
            return ()
        anchor, head = current
        return (SelectionRange.from_tuples(anchor, head),)

    def set_selections(self, selections: Sequence[SelectionRange]) -> None:
        if not selections:
            return
        # the widget holds a single selection; keep the primary one
        primary = selections[0]
        self.hooks.write_selection(primary.anchor.as_tuple(), primary.head.as_tuple())
        self.on_did_change_selection.fire(primary)

    def reveal_range_in_center_if_outside_viewport(
        self, selection: SelectionRange, scroll_type: ScrollType
    ) -> None:
        self.hooks.scroll_to_line(selection.head.line, scroll_type is ScrollType.SMOOTH)


class TextualCursorUndoAdapter:
    """Owns the surface, its controller, and key dispatch for one widget."""

    def __init__(
        self,
        hooks: TextualUIHooks,
        *,
        keymaps: Optional[KeymapRegistry] = None,
        settings: Optional[CursorUndoSettings] = None,
    ) -> None:
        self.hooks = hooks
        self.surface = TextualCursorSurface(hooks)
        self.registry = register_cursor_undo(keymaps)
        if settings is not None:
            attach_contribution(
                self.surface, CursorUndoController(self.surface, settings=settings)
            )
        instantiate_contributions(self.surface)
        self.controller = CursorUndoController.get(self.surface)
        self.dispatcher = CommandDispatcher(self.registry)

    def handle_textual_key(self, key: str) -> CommandResult:
        self._log("key ->", key=key)
        result = self.dispatcher.dispatch_key(self.surface, key)
        if result.consumed and result.message:
            self.hooks.update_status(f"{result.message}:{result.status}")
        self._log("result <-", status=result.status, consumed=result.consumed)
        return result

    def notify_document_replaced(self) -> None:
        self.surface.on_did_change_document.fire(None)

    def notify_text_changed(self) -> None:
        self.surface.on_did_change_content.fire(None)

    def notify_selection_changed(self) -> None:
        self.surface.on_did_change_selection.fire(None)

    def set_focus(self, focused: bool) -> None:
        self.surface.text_input_focus = focused

    def close(self) -> None:
        dispose_contributions(self.surface)

    def _log(self, prefix: str, **fields: object) -> None:
        history = self.controller.history
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        parts.append(f"position={history.position}")
        parts.append(f"size={len(history)}")
        self.hooks.log(" ".join(parts))


__all__ = ["TextualCursorSurface", "TextualCursorUndoAdapter", "TextualUIHooks"]
