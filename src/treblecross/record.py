"""
The Record keeps every ply of the game, plus a cursor telling how many of them are currently on the board.

Undo / redo always move by a full round (one ply per seat), so the same player is on the move before and after.
"""

import logging
from dataclasses import dataclass, field

from src.core.exceptions import HistoryExhaustedError
from src.treblecross.token import PlayToken

logger = logging.getLogger(__name__)

NUMBER_OF_SEATS = 2


@dataclass
class Record:
    actions: list[PlayToken] = field(default_factory=list)
    cursor: int = 0
    step: int = NUMBER_OF_SEATS

    def __len__(self) -> int:
        return len(self.actions)

    @property
    def visible_actions(self) -> list[PlayToken]:
        """The plies currently reflected on the board."""
        return self.actions[: self.cursor]

    def record_move(self, token: PlayToken) -> None:
        """
        Append a new ply.

        NOTE: a new move after an undo discards the redo tail for good.
        """
        if self.cursor < len(self.actions):
            logger.debug(
                "Discarding %d undone plies", len(self.actions) - self.cursor
            )
            self.actions = self.actions[: self.cursor]
        self.actions.append(token)
        self.cursor = len(self.actions)

    def step_back(self, current_turn: int) -> int:
        """
        Move the cursor back to right before the current player's previous move.
        ----

        ex. players make moves A, B, C, D. The player to move (seat 0) undoes: the board shows A, B again.

        The caller removes the tokens in [new cursor, old cursor) from the board, last one first.
        """
        if self.cursor == current_turn:
            raise HistoryExhaustedError("Cannot undo further.")
        self.cursor = max(self.cursor - self.step, 0)
        return self.cursor

    def step_forward(self) -> int:
        """
        Move the cursor forward by one round again.

        The caller places the tokens in [old cursor, new cursor) on the board, first one first.
        """
        if self.cursor == len(self.actions):
            raise HistoryExhaustedError("Cannot redo - this is the latest game state.")
        self.cursor = min(self.cursor + self.step, len(self.actions))
        return self.cursor
