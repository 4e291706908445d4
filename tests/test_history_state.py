import dataclasses

import pytest

from cursor_undo.history import CursorState, Position, SelectionRange


def test_states_with_same_ranges_are_equal() -> None:
    left = CursorState.of(
        [SelectionRange.caret(1, 1), SelectionRange.from_tuples((2, 0), (2, 4))]
    )
    right = CursorState.of(
        [SelectionRange.caret(1, 1), SelectionRange.from_tuples((2, 0), (2, 4))]
    )

    assert left.equals(right)
    assert left == right
    assert hash(left) == hash(right)


def test_equality_is_order_sensitive() -> None:
    a, b = SelectionRange.caret(1, 1), SelectionRange.caret(3, 0)

    assert CursorState.of([a, b]) != CursorState.of([b, a])


def test_equality_requires_same_length() -> None:
    a = SelectionRange.caret(1, 1)

    assert not CursorState.of([a]).equals(CursorState.of([a, a]))
    assert not CursorState().equals(CursorState.of([a]))


def test_anchor_and_head_are_distinguished() -> None:
    forward = SelectionRange.from_tuples((0, 0), (0, 5))
    backward = SelectionRange.from_tuples((0, 5), (0, 0))

    assert CursorState.of([forward]) != CursorState.of([backward])
    assert forward.start == backward.start == Position(0, 0)
    assert forward.end == backward.end == Position(0, 5)


def test_state_is_immutable() -> None:
    state = CursorState.of([SelectionRange.caret(0, 0)])

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.selections = ()  # type: ignore[misc]
    assert isinstance(state.selections, tuple)


def test_primary_is_first_range_or_none() -> None:
    first = SelectionRange.caret(4, 2)
    assert CursorState.of([first, SelectionRange.caret(0, 0)]).primary == first
    assert CursorState().primary is None


def test_caret_is_empty_selection() -> None:
    assert SelectionRange.caret(2, 3).is_empty
    assert not SelectionRange.from_tuples((2, 3), (2, 4)).is_empty
