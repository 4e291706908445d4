import pytest

from cursor_undo.history import (
    STACK_SIZE_LIMIT,
    CursorState,
    CursorStateStack,
    SelectionRange,
)


def caret(line: int, column: int) -> CursorState:
    return CursorState.of([SelectionRange.caret(line, column)])


def test_fresh_history_has_nothing_to_undo_or_redo() -> None:
    stack = CursorStateStack(caret(0, 0))

    assert stack.undo() is None
    assert stack.redo() is None
    assert len(stack) == 1
    assert stack.position == 0


def test_record_then_undo_returns_initial_state() -> None:
    s0, s1 = caret(1, 1), caret(2, 1)
    stack = CursorStateStack(caret(9, 9))
    stack.reset(s0)
    stack.record(s1)

    assert stack.undo() == s0
    assert stack.undo() is None


def test_undo_then_redo_returns_recorded_state() -> None:
    s0, s1 = caret(1, 1), caret(2, 1)
    stack = CursorStateStack(s0)
    stack.record(s1)

    stack.undo()

    assert stack.redo() == s1
    assert stack.redo() is None
    assert stack.current == s1


def test_recording_after_undo_discards_redo_branch() -> None:
    s0, s1, s2 = caret(1, 1), caret(2, 1), caret(3, 1)
    stack = CursorStateStack(s0)
    stack.record(s1)
    assert stack.undo() == s0

    stack.record(s2)

    assert stack.redo() is None
    assert len(stack) == 2
    assert stack.undo() == s0


def test_reset_erases_history() -> None:
    stack = CursorStateStack(caret(0, 0))
    for line in range(1, 5):
        stack.record(caret(line, 0))
    stack.undo()

    stack.reset(caret(7, 3))

    assert stack.undo() is None
    assert stack.redo() is None
    assert stack.current == caret(7, 3)


def test_history_is_capped_and_evicts_oldest() -> None:
    stack = CursorStateStack(caret(0, 0))
    for line in range(1, 61):
        stack.record(caret(line, 0))
        assert len(stack) <= STACK_SIZE_LIMIT
        assert 0 <= stack.position < len(stack)

    undone = []
    while True:
        state = stack.undo()
        if state is None:
            break
        undone.append(state)

    assert len(undone) == STACK_SIZE_LIMIT - 1
    assert undone[-1] == caret(11, 0)
    assert stack.position == 0


def test_eviction_keeps_pointer_on_new_entry() -> None:
    stack = CursorStateStack(caret(0, 0), limit=3)
    for line in range(1, 4):
        stack.record(caret(line, 0))

    assert len(stack) == 3
    assert stack.position == 2
    assert stack.current == caret(3, 0)


def test_consecutive_duplicates_are_skipped_by_default() -> None:
    stack = CursorStateStack(caret(0, 0))

    assert stack.record(caret(0, 0)) is False
    assert stack.record(caret(1, 0)) is True
    assert stack.record(caret(1, 0)) is False

    assert len(stack) == 2


def test_duplicates_can_be_kept() -> None:
    stack = CursorStateStack(caret(0, 0), skip_duplicates=False)

    stack.record(caret(0, 0))

    assert len(stack) == 2
    assert stack.undo() == caret(0, 0)


def test_duplicate_of_current_after_undo_keeps_redo_branch() -> None:
    s0, s1 = caret(0, 0), caret(1, 0)
    stack = CursorStateStack(s0)
    stack.record(s1)
    stack.undo()

    stack.record(s0)

    assert stack.redo() == s1


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        CursorStateStack(caret(0, 0), limit=0)


def test_can_undo_and_can_redo_track_position() -> None:
    stack = CursorStateStack(caret(0, 0))
    assert not stack.can_undo()
    stack.record(caret(1, 0))
    assert stack.can_undo() and not stack.can_redo()
    stack.undo()
    assert stack.can_redo() and not stack.can_undo()
