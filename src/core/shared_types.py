"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Status(StrEnum):
    """Outcome of an engine operation, handed back to the command loop."""

    PLAYING = "playing"
    END_GAME = "end game"
    DRAW = "draw"


class ProgramState(StrEnum):
    """Screens of the command loop. Only PLAYING / END_GAME are ever produced by the engine itself."""

    MAIN_MENU = "MAIN MENU"
    SETUP_GAME = "NEW GAME"
    PLAYING = "GAME"
    END_GAME = "END GAME"
    EXIT = "EXIT"


class GameMode(IntEnum):
    # NOTE values are the ones stored in save files
    VS_BOT = 1
    VS_HUMAN = 2


class PlayerKind(StrEnum):
    HUMAN = "human"
    BOT = "bot"


class Variant(StrEnum):
    TREBLE_CROSS = "treble cross"
