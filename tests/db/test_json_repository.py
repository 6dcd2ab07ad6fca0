"""Unit tests for src/db/json_repository.py"""

import json
from pathlib import Path

import pytest

from src.core.exceptions import SnapshotError
from src.core.models import ActionModel, GameSnapshot
from src.db.json_repository import JSONSnapshotRepository

SNAPSHOT = GameSnapshot(
    player_ids=["player_1", "player_2"],
    player_turn=1,
    game_mode=2,
    board=[[1, 0, 1, 0, 0, 0, 0, 0, 0, 0]],
    actions=[
        ActionModel(1, 1, "player_1"),
        ActionModel(1, 3, "player_2"),
        ActionModel(1, 9, "player_1"),
    ],
)


@pytest.fixture
def save_file(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


def test_save_then_load(save_file: Path) -> None:
    repo = JSONSnapshotRepository(save_file)
    repo.save_snapshot(SNAPSHOT)
    assert repo.load_snapshot() == SNAPSHOT


def test_file_layout(save_file: Path) -> None:
    """Field names are the ones of the existing save files"""
    JSONSnapshotRepository(save_file).save_snapshot(SNAPSHOT)
    document = json.loads(save_file.read_text())
    assert document == {
        "PlayerIDs": ["player_1", "player_2"],
        "PlayerTurn": 1,
        "GameMode": 2,
        "Board": [[1, 0, 1, 0, 0, 0, 0, 0, 0, 0]],
        "Actions": [
            {"Row": 1, "Column": 1, "PlayerID": "player_1"},
            {"Row": 1, "Column": 3, "PlayerID": "player_2"},
            {"Row": 1, "Column": 9, "PlayerID": "player_1"},
        ],
    }


def test_reads_existing_save_file(save_file: Path) -> None:
    save_file.write_text(
        json.dumps(
            {
                "PlayerIDs": ["anna", "bot_0"],
                "PlayerTurn": 0,
                "GameMode": 1,
                "Board": [[0, 1, 0, 1]],
                "Actions": [
                    {"Row": 1, "Column": 2, "PlayerID": "anna"},
                    {"Row": 1, "Column": 4, "PlayerID": "bot_0"},
                ],
            }
        )
    )
    snapshot = JSONSnapshotRepository(save_file).load_snapshot()
    assert snapshot == GameSnapshot(
        player_ids=["anna", "bot_0"],
        player_turn=0,
        game_mode=1,
        board=[[0, 1, 0, 1]],
        actions=[ActionModel(1, 2, "anna"), ActionModel(1, 4, "bot_0")],
    )


def test_save_overwrites(save_file: Path) -> None:
    repo = JSONSnapshotRepository(save_file)
    repo.save_snapshot(SNAPSHOT)
    newer = GameSnapshot(
        player_ids=["player_1", "bot_0"], player_turn=0, game_mode=1, board=[[0, 0, 0]]
    )
    repo.save_snapshot(newer)
    assert repo.load_snapshot() == newer


def test_missing_file(save_file: Path) -> None:
    assert JSONSnapshotRepository(save_file).load_snapshot() is None


@pytest.mark.parametrize(
    "content",
    [
        "",
        "not json at all",
        '{"PlayerIDs": ["a", "b"]}',
        '{"PlayerIDs": ["a", "b"], "PlayerTurn": "first", "GameMode": 2, "Board": [[0]]}',
    ],
)
def test_malformed_file(save_file: Path, content: str) -> None:
    save_file.write_text(content)
    with pytest.raises(SnapshotError):
        JSONSnapshotRepository(save_file).load_snapshot()


def test_file_not_utf8(save_file: Path) -> None:
    """Garbage bytes in the save file are a malformed snapshot, not a crash"""
    save_file.write_bytes(b'{"PlayerIDs": ["\xff\xfe", "bot_0"]}')
    with pytest.raises(SnapshotError):
        JSONSnapshotRepository(save_file).load_snapshot()
