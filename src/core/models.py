"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the domain layer (Game) and the persistence layer (repositories) send/receive a GameSnapshot,
so neither needs to know how the other one represents a game.
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameSnapshot easier to read
PlayerId = str
Grid = list[list[int]]


@dataclass
class ActionModel:
    """Transport-safe representation of a single ply."""

    row: int
    column: int
    player_id: PlayerId


@dataclass
class GameSnapshot:
    """Full materialization of a game: player identities, whose turn it is, the board and the move history."""

    player_ids: list[Optional[PlayerId]]
    player_turn: int
    game_mode: int
    board: Grid
    actions: list[ActionModel] = field(default_factory=list)
