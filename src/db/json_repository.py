"""Implementation of (Snapshot)Repository as a JSON file. Field names follow the existing save files."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.config import SAVE_FILE
from src.core.exceptions import RepositoryError, SnapshotError
from src.core.models import ActionModel, GameSnapshot

logger = logging.getLogger(__name__)


class ActionDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    row: int = Field(alias="Row")
    column: int = Field(alias="Column")
    player_id: str = Field(alias="PlayerID")


class SnapshotDocument(BaseModel):
    """Layout of the save file"""

    model_config = ConfigDict(populate_by_name=True)

    player_ids: list[Optional[str]] = Field(alias="PlayerIDs")
    player_turn: int = Field(alias="PlayerTurn")
    game_mode: int = Field(alias="GameMode")
    board: list[list[int]] = Field(alias="Board")
    actions: list[ActionDocument] = Field(default_factory=list, alias="Actions")


class JSONSnapshotRepository:
    """Snapshot stored in a single JSON file"""

    def __init__(self, path: Path | str = SAVE_FILE) -> None:
        self.path = Path(path)

    def save_snapshot(self, snapshot: GameSnapshot) -> None:
        document = self._to_document(snapshot)
        try:
            self.path.write_text(document.model_dump_json(by_alias=True, indent=2))
        except OSError as error:
            raise RepositoryError(f"Cannot write {self.path}: {error}") from error
        logger.info("Saved game snapshot as %s", self.path)

    def load_snapshot(self) -> GameSnapshot | None:
        if not self.path.exists():
            logger.warning("File not found: %s", self.path)
            return None
        try:
            raw = self.path.read_bytes()
        except OSError as error:
            raise RepositoryError(f"Cannot read {self.path}: {error}") from error

        try:
            document = SnapshotDocument.model_validate_json(raw)
        except ValidationError as error:
            raise SnapshotError(f"Malformed snapshot in {self.path}: {error}") from error
        logger.info("Loaded game snapshot from %s", self.path)
        return self._to_snapshot(document)

    def _to_document(self, snapshot: GameSnapshot) -> SnapshotDocument:
        return SnapshotDocument(
            player_ids=snapshot.player_ids,
            player_turn=snapshot.player_turn,
            game_mode=snapshot.game_mode,
            board=snapshot.board,
            actions=[
                ActionDocument(
                    row=action.row, column=action.column, player_id=action.player_id
                )
                for action in snapshot.actions
            ],
        )

    def _to_snapshot(self, document: SnapshotDocument) -> GameSnapshot:
        """Convert the file model to data transfer model."""
        return GameSnapshot(
            player_ids=document.player_ids,
            player_turn=document.player_turn,
            game_mode=document.game_mode,
            board=document.board,
            actions=[
                ActionModel(
                    row=action.row, column=action.column, player_id=action.player_id
                )
                for action in document.actions
            ],
        )
