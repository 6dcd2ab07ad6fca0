"""Unit tests for /src/treblecross/record.py"""

import pytest

from src.core.exceptions import HistoryExhaustedError
from src.treblecross.record import Record
from src.treblecross.token import PlayToken


def tokens(*columns: int) -> list[PlayToken]:
    """Alternating players, in the order the columns are given"""
    return [
        PlayToken(1, column, f"player_{idx % 2 + 1}")
        for idx, column in enumerate(columns)
    ]


def filled_record(*columns: int) -> Record:
    record = Record()
    for token in tokens(*columns):
        record.record_move(token)
    return record


# -- RECORDING --
def test_record_move_appends_and_moves_cursor() -> None:
    record = Record()
    for count, token in enumerate(tokens(1, 5, 9), start=1):
        record.record_move(token)
        assert record.cursor == len(record) == count
        assert record.actions[-1] == token


def test_record_move_discards_redo_tail() -> None:
    record = filled_record(1, 2, 3, 4)
    record.step_back(current_turn=0)
    assert record.cursor == 2

    new_move = PlayToken(1, 9, "player_1")
    record.record_move(new_move)
    assert record.actions == tokens(1, 2) + [new_move]
    assert record.cursor == 3

    # ...and the tail cannot be brought back anymore
    with pytest.raises(HistoryExhaustedError):
        record.step_forward()


def test_visible_actions() -> None:
    record = filled_record(1, 2, 3, 4, 5)
    record.step_back(current_turn=1)
    assert record.visible_actions == tokens(1, 2, 3)


# -- UNDO --
def test_step_back_by_a_full_round() -> None:
    record = filled_record(1, 2, 3, 4)
    assert record.step_back(current_turn=0) == 2
    assert record.step_back(current_turn=0) == 0


def test_step_back_with_uneven_history() -> None:
    """seat 1 to move after 3 plies: going back two plies leaves the very first move on the board"""
    record = filled_record(1, 2, 3)
    assert record.step_back(current_turn=1) == 1


def test_step_back_clamps_at_zero() -> None:
    record = filled_record(1)
    assert record.step_back(current_turn=0) == 0


def test_step_back_fails_without_full_round() -> None:
    """After a single ply, seat 1 is on the move and has nothing of its own to take back"""
    record = filled_record(1)
    with pytest.raises(HistoryExhaustedError):
        record.step_back(current_turn=1)
    assert record.cursor == 1


def test_step_back_fails_on_empty_record() -> None:
    with pytest.raises(HistoryExhaustedError):
        Record().step_back(current_turn=0)


# -- REDO --
def test_step_forward_by_a_full_round() -> None:
    record = filled_record(1, 2, 3, 4)
    record.step_back(current_turn=0)
    record.step_back(current_turn=0)
    assert record.step_forward() == 2
    assert record.step_forward() == 4


def test_step_forward_clamps_at_length() -> None:
    record = filled_record(1, 2, 3)
    record.step_back(current_turn=1)
    record.cursor = 2
    assert record.step_forward() == 3


def test_step_forward_fails_at_latest_state() -> None:
    record = filled_record(1, 2)
    with pytest.raises(HistoryExhaustedError):
        record.step_forward()
    assert record.cursor == 2


def test_step_size_is_adjustable() -> None:
    """A game with more seats steps back one round of that size"""
    record = Record(step=3)
    for token in tokens(1, 2, 3, 4, 5, 6):
        record.record_move(token)
    assert record.step_back(current_turn=0) == 3
    assert record.step_forward() == 6
