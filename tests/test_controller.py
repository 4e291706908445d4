from __future__ import annotations

from typing import List, Sequence

import pytest

from cursor_undo.controller import CursorUndoController
from cursor_undo.history import CursorState, SelectionRange
from cursor_undo.runtime import CursorUndoSettings
from cursor_undo.surface import EditorSurface, ScrollType, TextDocument

TEXT = "\n".join(f"line {n}" for n in range(100))


def make_surface() -> EditorSurface:
    surface = EditorSurface.from_text(TEXT, uri="file:///a.txt", viewport_height=10)
    surface.move_cursor(1, 1)
    return surface


def carets(surface: EditorSurface) -> List[tuple[int, int]]:
    return [sel.head.as_tuple() for sel in surface.get_selections()]


def test_undo_and_redo_restore_cursor_positions() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)

    surface.move_cursor(2, 1)
    controller.perform_undo()
    assert carets(surface) == [(1, 1)]

    controller.perform_redo()
    assert carets(surface) == [(2, 1)]


def test_new_move_after_undo_discards_redo() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    surface.move_cursor(2, 1)
    controller.perform_undo()

    surface.move_cursor(3, 1)
    controller.perform_redo()

    assert carets(surface) == [(3, 1)]
    assert not controller.can_redo()


def test_restoring_does_not_record_its_own_write() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    for line in (2, 3, 4):
        surface.move_cursor(line, 0)

    controller.perform_undo()
    controller.perform_undo()
    controller.perform_undo()

    assert carets(surface) == [(1, 1)]
    assert len(controller.history) == 4
    assert controller.history.position == 0
    assert not controller.is_changing_state


def test_content_change_resets_history() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    surface.move_cursor(2, 1)
    surface.move_cursor(3, 1)

    surface.replace_lines(0, 1, ["edited"])

    assert not controller.can_undo()
    assert not controller.can_redo()
    controller.perform_undo()
    assert carets(surface) == [(3, 1)]


def test_document_change_resets_history_to_new_state() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    surface.move_cursor(5, 0)

    surface.set_document(TextDocument.from_text("other", uri="file:///b.txt"))

    assert not controller.can_undo()
    assert controller.history.current == CursorState.of([SelectionRange.caret(0, 0)])


def test_detached_document_makes_undo_a_noop() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    surface.move_cursor(2, 0)

    surface.set_document(None)
    controller.perform_undo()
    controller.perform_redo()

    assert controller.history.current == CursorState()
    assert surface.get_selections() == ()


def test_multi_cursor_state_is_restored_in_order() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    surface.add_cursors([(4, 2), (6, 3)])
    surface.move_cursor(9, 0)

    controller.perform_undo()

    assert carets(surface) == [(1, 1), (4, 2), (6, 3)]


def test_restore_reveals_primary_range_smoothly() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    surface.move_cursor(80, 0)
    surface.viewport_top = 75
    surface.move_cursor(90, 0)

    controller.perform_undo()
    controller.perform_undo()

    first, second = surface.reveal_requests
    assert first.selection == SelectionRange.caret(80, 0)
    assert first.scroll_type is ScrollType.SMOOTH
    assert first.scrolled is False
    assert second.selection == SelectionRange.caret(1, 1)
    assert second.scrolled is True
    assert surface.viewport_top == 0


def test_reveal_can_be_disabled() -> None:
    surface = make_surface()
    controller = CursorUndoController(
        surface, settings=CursorUndoSettings(reveal_on_restore=False)
    )
    surface.move_cursor(2, 0)

    controller.perform_undo()

    assert surface.reveal_requests == []


def test_boundary_undo_redo_are_silent() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)

    controller.perform_undo()
    controller.perform_redo()

    assert carets(surface) == [(1, 1)]
    assert surface.reveal_requests == []


def test_dispose_releases_subscriptions() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    assert surface.on_did_change_selection.listener_count == 1

    controller.dispose()
    surface.move_cursor(2, 0)
    controller.perform_undo()

    assert surface.on_did_change_selection.listener_count == 0
    assert surface.on_did_change_content.listener_count == 0
    assert surface.on_did_change_document.listener_count == 0
    assert carets(surface) == [(2, 0)]
    assert controller.disposed


def test_controller_as_context_manager() -> None:
    surface = make_surface()
    with CursorUndoController(surface) as controller:
        surface.move_cursor(2, 0)
        assert controller.can_undo()

    assert surface.on_did_change_selection.listener_count == 0


class FailingSurface(EditorSurface):
    def set_selections(
        self, selections: Sequence[SelectionRange], *, source: str = "api"
    ) -> None:
        if source == "api":
            raise RuntimeError("host rejected selections")
        super().set_selections(selections, source=source)


def test_applying_flag_is_cleared_when_write_fails() -> None:
    surface = FailingSurface.from_text(TEXT)
    controller = CursorUndoController(surface)
    surface.move_cursor(3, 0)
    position = controller.history.position

    with pytest.raises(RuntimeError):
        controller.perform_undo()

    assert not controller.is_changing_state
    assert controller.history.position == position
    assert controller.can_undo() and not controller.can_redo()
    surface.move_cursor(4, 0)
    assert controller.history.current == CursorState.of([SelectionRange.caret(4, 0)])


def test_history_limit_comes_from_settings() -> None:
    surface = make_surface()
    controller = CursorUndoController(
        surface, settings=CursorUndoSettings(history_limit=3)
    )
    for line in range(2, 10):
        surface.move_cursor(line, 0)

    assert len(controller.history) == 3


def test_failed_redo_keeps_history_in_step_with_surface() -> None:
    surface = FailingSurface.from_text(TEXT)
    controller = CursorUndoController(surface)
    surface.move_cursor(3, 0)
    controller.history.undo()

    with pytest.raises(RuntimeError):
        controller.perform_redo()

    assert controller.history.position == 0
    assert controller.can_redo()


def test_empty_entry_is_not_restored() -> None:
    surface = make_surface()
    controller = CursorUndoController(surface)
    controller.history.reset(CursorState())
    controller.history.record(CursorState.of(surface.get_selections()))

    controller.perform_undo()

    assert carets(surface) == [(1, 1)]
    assert controller.history.position == 1
    assert surface.reveal_requests == []
