"""
A single ply on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.models import ActionModel


@dataclass(frozen=True)
class PlayToken:
    """One player's mark. Row and column are 1-based, as the players see them."""

    row: int
    column: int
    player_id: str

    @classmethod
    def from_model(cls, action: ActionModel) -> PlayToken:
        return cls(row=action.row, column=action.column, player_id=action.player_id)

    def to_model(self) -> ActionModel:
        return ActionModel(row=self.row, column=self.column, player_id=self.player_id)

    @property
    def index(self) -> tuple[int, int]:
        """0-based (row, column) position in the grid"""
        return self.row - 1, self.column - 1
