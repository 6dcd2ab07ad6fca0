"""Protocol repository (implemented for a JSON save file and for SQLAlchemy)"""

from typing import Protocol

from src.core.models import GameSnapshot


class SnapshotRepository(Protocol):
    """Persistence layer orchestration: a single saved game that gets overwritten on every save."""

    def save_snapshot(self, snapshot: GameSnapshot) -> None:
        """Store the snapshot, replacing whatever was stored before."""
        ...

    def load_snapshot(self) -> GameSnapshot | None:
        """The stored snapshot, if there is one. Raises RepositoryError if it cannot be read."""
        ...
