"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator, Iterable

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import PlayerKind
from src.db.schema import Base
from src.treblecross.token import PlayToken

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


class ScriptedBot:
    """Bot seat that proposes the given columns (row 1), in order. Lets tests decide exactly what the bot tries."""

    def __init__(self, columns: Iterable[int], id: str = "bot_0") -> None:
        self.id = id
        self._columns = iter(columns)
        self.proposals = 0

    @property
    def kind(self) -> PlayerKind:
        return PlayerKind.BOT

    def play(self, column: int, row: int = 1) -> PlayToken:
        return PlayToken(row=row, column=column, player_id=self.id)

    def propose_move(self, rows: int, cols: int) -> PlayToken:
        self.proposals += 1
        return self.play(next(self._columns))


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def scripted_bot() -> type[ScriptedBot]:
    """Tests build their own bot: `scripted_bot([11, 3, 5])`"""
    return ScriptedBot
