"""Win conditions. The Game is handed one of these when it is created."""

from typing import Callable

from src.core.shared_types import Variant
from src.treblecross.board import OCCUPIED, Board

WinRule = Callable[[Board], bool]

# Marks in a row needed to win TrebleCross
TREBLE = 3


def no_win(board: Board) -> bool:
    """Default for a game without a win condition."""
    return False


def treble_cross_win(board: Board) -> bool:
    """
    Three occupied cells next to each other, no matter who placed them.

    NOTE: only the first row is inspected, the variant is played on a 1 x N board.
    """
    count_sequence = 0
    for cell in board.cells[0]:
        if cell == OCCUPIED:
            count_sequence += 1
            if count_sequence == TREBLE:
                return True
        else:
            count_sequence = 0
    return False


WIN_RULES: dict[Variant, WinRule] = {
    Variant.TREBLE_CROSS: treble_cross_win,
}
