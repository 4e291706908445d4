"""Per-surface controller that records cursor moves and replays them."""

from __future__ import annotations

from contextlib import ExitStack
from typing import Optional

from cursor_undo.contributions import get_contribution
from cursor_undo.history import CursorState, CursorStateStack
from cursor_undo.runtime import CursorUndoSettings, telemetry
from cursor_undo.surface.sync import CursorSurface, ScrollType

LOGGER_NAME = "cursor_undo.controller"


class CursorUndoController:
    """Wires surface notifications into a ``CursorStateStack``.

    Document or content changes reset the history to the current state.
    Selection changes are recorded, except the ones caused by the controller
    writing a restored state back into the surface.
    """

    ID = "editor.contrib.cursorUndoController"

    def __init__(
        self,
        surface: CursorSurface,
        *,
        settings: Optional[CursorUndoSettings] = None,
    ) -> None:
        self.surface = surface
        self.settings = settings or CursorUndoSettings()
        self._is_changing_state = False
        self._disposed = False
        self._stack = CursorStateStack(
            self._read_state(),
            limit=self.settings.history_limit,
            skip_duplicates=self.settings.skip_duplicates,
        )
        self._subscriptions = ExitStack()
        self._subscriptions.enter_context(
            surface.on_did_change_document.subscribe(self._on_document_changed)
        )
        self._subscriptions.enter_context(
            surface.on_did_change_content.subscribe(self._on_content_changed)
        )
        self._subscriptions.enter_context(
            surface.on_did_change_selection.subscribe(self._on_selection_changed)
        )

    @classmethod
    def get(cls, surface: CursorSurface) -> "CursorUndoController":
        controller = get_contribution(surface, cls.ID)
        if not isinstance(controller, cls):
            raise TypeError(f"Contribution '{cls.ID}' is not a {cls.__name__}")
        return controller

    def get_id(self) -> str:
        return self.ID

    @property
    def history(self) -> CursorStateStack:
        return self._stack

    @property
    def is_changing_state(self) -> bool:
        return self._is_changing_state

    @property
    def disposed(self) -> bool:
        return self._disposed

    def can_undo(self) -> bool:
        return not self._disposed and self._stack.can_undo()

    def can_redo(self) -> bool:
        return not self._disposed and self._stack.can_redo()

    def perform_undo(self) -> None:
        self._step("undo")

    def perform_redo(self) -> None:
        self._step("redo")

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._subscriptions.close()

    def __enter__(self) -> "CursorUndoController":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.dispose()
        return False

    def _read_state(self) -> CursorState:
        if not self.surface.has_document():
            # detached surface
            return CursorState()
        return CursorState.of(self.surface.get_selections())

    def _reset(self, reason: str) -> None:
        self._stack.reset(self._read_state())
        telemetry.record_event(
            "cursor_undo.reset",
            level="debug",
            data={"reason": reason},
            logger_name=LOGGER_NAME,
        )

    def _on_document_changed(self, _event: object) -> None:
        self._reset("document")

    def _on_content_changed(self, _event: object) -> None:
        self._reset("content")

    def _on_selection_changed(self, _event: object) -> None:
        # restoring a state re-fires this notification
        if self._is_changing_state:
            return
        recorded = self._stack.record(self._read_state())
        telemetry.record_event(
            "cursor_undo.record",
            level="debug",
            data={
                "recorded": recorded,
                "position": self._stack.position,
                "size": len(self._stack),
            },
            logger_name=LOGGER_NAME,
        )

    def _step(self, direction: str) -> None:
        if self._disposed or not self.surface.has_document():
            return
        with telemetry.span(
            f"cursor_undo::{direction}",
            logger_name=LOGGER_NAME,
            component="cursor_undo",
            metadata={"position": self._stack.position},
        ) as handle:
            state = self._stack.undo() if direction == "undo" else self._stack.redo()
            if state is None:
                handle.add_metadata("status", "exhausted")
                return
            if state.primary is None:
                self._step_back(direction)
                handle.add_metadata("status", "empty")
                return
            try:
                self._write_state(state)
            except Exception:
                self._step_back(direction)
                raise
            handle.add_metadata("status", "restored")
            self._after_restore(state)

    def _step_back(self, direction: str) -> None:
        # the surface still shows the previous entry
        if direction == "undo":
            self._stack.redo()
        else:
            self._stack.undo()

    def _write_state(self, state: CursorState) -> None:
        self._is_changing_state = True
        try:
            self.surface.set_selections(state.selections)
        finally:
            self._is_changing_state = False

    def _after_restore(self, state: CursorState) -> None:
        telemetry.record_event(
            "cursor_undo.restore",
            level="debug",
            data={"position": self._stack.position, "cursors": len(state)},
            logger_name=LOGGER_NAME,
        )
        if self.settings.reveal_on_restore and state.primary is not None:
            self.surface.reveal_range_in_center_if_outside_viewport(
                state.primary, ScrollType.SMOOTH
            )


__all__ = ["CursorUndoController", "LOGGER_NAME"]
