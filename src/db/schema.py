"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    layout: Mapped[str]
    side_to_move: Mapped[str]
    capture_chain: Mapped[Optional[str]]
    history: Mapped[list[str]] = mapped_column(JSON, default=list)
    moves: Mapped[list[str]] = mapped_column(JSON, default=list)
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    # one column per seat, so the games of a player can be looked up
    white_player: Mapped[Optional[str]] = mapped_column(index=True)
    black_player: Mapped[Optional[str]] = mapped_column(index=True)
    status: Mapped[str]
    # money is stored as decimal strings: no float rounding on the way in or out
    stake: Mapped[str]
    commission_rate: Mapped[str]
    winner: Mapped[Optional[str]]
    loser: Mapped[Optional[str]]
    settlement: Mapped[Optional[dict[str, str]]] = mapped_column(JSON)
    end_reason: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
