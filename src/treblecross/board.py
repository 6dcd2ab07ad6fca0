"""The Game board only knows which cells are occupied. Whose mark it is, is recorded in the History."""

from copy import deepcopy
from dataclasses import dataclass
from typing import Self

from src.core.models import Grid
from src.treblecross.token import PlayToken

EMPTY = 0
OCCUPIED = 1


@dataclass
class Board:
    cells: Grid

    @classmethod
    def empty(cls, cols: int, rows: int = 1) -> Self:
        return cls([[EMPTY for _ in range(cols)] for _ in range(rows)])

    @classmethod
    def from_grid(cls, grid: Grid) -> Self:
        """Restore a board from a stored grid (the caller is responsible for validating it)."""
        return cls(deepcopy(grid))

    def to_grid(self) -> Grid:
        return deepcopy(self.cells)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def is_out_of_bound(self, row: int, col: int) -> bool:
        """Row and column are 1-based."""
        return not (1 <= row <= self.rows and 1 <= col <= self.cols)

    def is_occupied(self, row: int, col: int) -> bool:
        return self.cells[row - 1][col - 1] != EMPTY

    def is_full(self) -> bool:
        return all(cell != EMPTY for line in self.cells for cell in line)

    def place(self, token: PlayToken) -> None:
        """No checks here: used for new moves AND for replaying the history."""
        row, col = token.index
        self.cells[row][col] = OCCUPIED

    def remove(self, token: PlayToken) -> None:
        row, col = token.index
        self.cells[row][col] = EMPTY

    def render(self) -> str:
        """Text grid, one line of dashes around every row of cells."""
        separator = "-" * (self.cols * 4 + 1)
        lines: list[str] = []
        for line in self.cells:
            lines.append(separator)
            lines.append(
                "".join("| x " if cell == OCCUPIED else "|   " for cell in line) + "|"
            )
        lines.append(separator)
        return "\n".join(lines)
