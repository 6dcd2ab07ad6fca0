"""
The two kinds of players.

Both can turn a column/row into a PlayToken carrying their id. Only a bot can come up with a move on its own:
that candidate move is NOT guaranteed to be legal. Checking it is up to the Game.
"""

import random
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from src.core.config import BOT_ID
from src.core.shared_types import PlayerKind
from src.treblecross.token import PlayToken


class Player(Protocol):
    id: str

    @property
    def kind(self) -> PlayerKind: ...

    def play(self, column: int, row: int = 1) -> PlayToken:
        """Token for a move chosen outside the engine (ex. typed in by the user)"""
        ...


@runtime_checkable
class MoveProposer(Protocol):
    """Anything that can sit in a bot seat."""

    id: str

    def propose_move(self, rows: int, cols: int) -> PlayToken:
        """Candidate move on a board with the given dimensions"""
        ...


@dataclass
class HumanPlayer:
    id: str

    @property
    def kind(self) -> PlayerKind:
        return PlayerKind.HUMAN

    def play(self, column: int, row: int = 1) -> PlayToken:
        return PlayToken(row=row, column=column, player_id=self.id)


@dataclass
class RandomBot:
    """Picks any cell of the board, occupied or not."""

    id: str = BOT_ID
    seed: Optional[int] = None
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    @property
    def kind(self) -> PlayerKind:
        return PlayerKind.BOT

    def play(self, column: int, row: int = 1) -> PlayToken:
        return PlayToken(row=row, column=column, player_id=self.id)

    def propose_move(self, rows: int, cols: int) -> PlayToken:
        row = self._rng.randint(1, rows)
        column = self._rng.randint(1, cols)
        return self.play(column, row)
