"""Requests and Response models"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.checkers.notation import is_valid_layout
from src.checkers.square import is_valid_algebraic
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, ForfeitReason, Status

PieceColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    player_name: str
    stake: Decimal
    starting_layout: Optional[str] = None

    @field_validator("stake")
    @classmethod
    def validate_stake(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or value <= 0:
            raise InvalidRequestError(f"Stake must be a positive amount, got {value}.")
        return value

    @field_validator("starting_layout")
    @classmethod
    def validate_starting_layout(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        if not is_valid_layout(value.strip()):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a board layout.")
        return value.strip()


class JoinSessionRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    """Squares in algebraic notation: files a-h left to right, ranks 1-8 from white's side of the board."""

    game_id: UUID
    player_name: str
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not is_valid_algebraic(value.strip()):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
        return value.strip().lower()


class ForfeitRequest(BaseModel):
    game_id: UUID
    player_name: str
    reason: ForfeitReason = ForfeitReason.RESIGNATION


class CancelRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class GameResultRequest(BaseModel):
    game_id: UUID
    player_name: str


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class SettlementResponse(BaseModel):
    winner: PlayerName
    loser: PlayerName
    stake: Decimal
    winner_delta: Decimal
    loser_delta: Decimal
    commission: Decimal


class GameResponse(BaseModel):
    """Everything a (reconnecting) client needs to draw the game"""

    game_id: UUID
    players: dict[PieceColor, PlayerName]
    layout: str
    starting_layout: str
    side_to_move: Color
    capture_chain: Optional[str]
    status: Status
    stake: Decimal
    move_history: list[str]
    winner: Optional[PlayerName] = None
    loser: Optional[PlayerName] = None
    settlement: Optional[SettlementResponse] = None
    end_reason: Optional[str] = None


class MoveResponse(GameResponse):
    move: str
    turn_continues: bool
    captured: list[str]
    promoted: bool


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Color
    legal_moves: list[str]
