"""
Errors shared across layers.

The domain layer raises them, the service layer decides which ones are recoverable
and the command loop turns them into a message for the user.
"""


class GameError(Exception):
    """Base class of every error the game can raise on purpose."""


class InvalidMoveError(GameError):
    """Target cell is outside the board or already occupied."""


class HistoryExhaustedError(GameError):
    """Nothing left to undo / redo."""


class InvalidStateError(GameError):
    """Operation requested while there is no active game (or the game already ended)."""


class NoLegalMovesError(GameError):
    """The board is full: no candidate move can ever be valid."""


class RepositoryError(GameError):
    """Persistence layer could not read or write a snapshot."""


class SnapshotError(RepositoryError):
    """The stored snapshot exists, but does not describe a valid game."""


class InvalidRequestError(GameError):
    """Input from the outer surface failed validation."""
