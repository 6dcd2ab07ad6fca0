"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBSnapshot(Base):
    """One row per save slot. Saving again overwrites the row."""

    __tablename__ = "snapshots"
    slot: Mapped[str] = mapped_column(primary_key=True)
    player_ids: Mapped[list[Optional[str]]] = mapped_column(JSON)
    player_turn: Mapped[int]
    game_mode: Mapped[int]
    board: Mapped[list[list[int]]] = mapped_column(JSON)
    # list of {"row": .., "column": .., "player_id": ..}
    actions: Mapped[list[dict]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
