"""Implementation of (Snapshot)Repository using SQLAlchemy"""

import logging
from dataclasses import asdict

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.config import DEFAULT_SLOT
from src.core.exceptions import RepositoryError, SnapshotError
from src.core.models import ActionModel, GameSnapshot
from src.db.schema import DBSnapshot

logger = logging.getLogger(__name__)


class SQLSnapshotRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session, slot: str = DEFAULT_SLOT) -> None:
        self.db = db_session
        self.slot = slot

    def save_snapshot(self, snapshot: GameSnapshot) -> None:
        """Create the slot's record, or overwrite it."""
        try:
            snapshot_db = self._fetch_snapshot()
            if snapshot_db is None:
                snapshot_db = DBSnapshot(slot=self.slot)
                self.db.add(snapshot_db)
            snapshot_db.player_ids = list(snapshot.player_ids)
            snapshot_db.player_turn = snapshot.player_turn
            snapshot_db.game_mode = snapshot.game_mode
            snapshot_db.board = [list(line) for line in snapshot.board]
            snapshot_db.actions = [asdict(action) for action in snapshot.actions]
            self.db.commit()
        except SQLAlchemyError as error:
            self.db.rollback()
            raise RepositoryError(f"Cannot save slot {self.slot!r}: {error}") from error
        logger.info("Saved game snapshot in slot %s", self.slot)

    def load_snapshot(self) -> GameSnapshot | None:
        try:
            snapshot_db = self._fetch_snapshot()
        except SQLAlchemyError as error:
            raise RepositoryError(f"Cannot load slot {self.slot!r}: {error}") from error
        if snapshot_db is None:
            logger.warning("No snapshot stored in slot %s", self.slot)
            return None
        return self._to_model(snapshot_db)

    def _fetch_snapshot(self) -> DBSnapshot | None:
        query = select(DBSnapshot).where(DBSnapshot.slot == self.slot)
        return self.db.scalar(query)

    def _to_model(self, snapshot_db: DBSnapshot) -> GameSnapshot:
        """Convert SQLAlchemy model to data transfer model."""
        try:
            actions = [ActionModel(**action) for action in snapshot_db.actions]
        except TypeError as error:
            raise SnapshotError(f"Malformed actions in slot {self.slot!r}: {error}") from error
        return GameSnapshot(
            player_ids=list(snapshot_db.player_ids),
            player_turn=snapshot_db.player_turn,
            game_mode=snapshot_db.game_mode,
            board=[list(line) for line in snapshot_db.board],
            actions=actions,
        )
