"""Requests and Response models"""

import re
from typing import Optional, Self

from pydantic import BaseModel, ValidationInfo, field_validator

from src.core.config import DEFAULT_BOARD_SIZE, DEFAULT_PLAYER_IDS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameMode, Status

PLAY_COMMAND = re.compile(r"^play ([0-9]+)$")


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    game_mode: GameMode = GameMode.VS_BOT
    board_size: int = DEFAULT_BOARD_SIZE
    first_player: str = DEFAULT_PLAYER_IDS[0]
    second_player: str = DEFAULT_PLAYER_IDS[1]

    @field_validator("board_size")
    @classmethod
    def validate_board_size(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(f"Board size must be at least 1, got {value}.")
        return value

    @field_validator("first_player", "second_player", mode="before")
    @classmethod
    def default_blank_name(cls, value: Optional[str], info: ValidationInfo) -> str:
        """An empty name (user just pressed enter) falls back to the default name for that seat"""
        if value is None or not value.strip():
            seat = 0 if info.field_name == "first_player" else 1
            return DEFAULT_PLAYER_IDS[seat]
        return value.strip()


class PlayRequest(BaseModel):
    column: int
    row: int = 1

    @classmethod
    def from_command(cls, command: str) -> Self:
        """Parse `play [position]`"""
        match = PLAY_COMMAND.match(command.strip())
        if match is None:
            raise InvalidRequestError(
                f"`{command}` is not a valid move. To place a token on the board, type \"play [position]\"."
            )
        return cls(column=int(match.group(1)))


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    players: list[str]
    current_player: str
    current_turn: int
    status: Status
    winner: Optional[str]
    board: list[list[int]]
    rendered_board: str
    plies_on_board: int
    plies_recorded: int
