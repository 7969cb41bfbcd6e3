"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a checkers game used between API, Service, DB, and Game layers."""

    layout: str
    side_to_move: PieceColor
    history: list[str]
    moves: list[str]
    registered_players: dict[PieceColor, PlayerName]
    status: str
    stake: str
    commission_rate: str
    capture_chain: Optional[str] = None
    winner: Optional[PlayerName] = None
    loser: Optional[PlayerName] = None
    settlement: Optional[dict[str, str]] = field(default=None)
    end_reason: Optional[str] = None
