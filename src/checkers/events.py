"""
Domain events emitted by a Game.

The Game never talks to sockets or queues. Whoever wants to know what happened (the transport layer pushing updates
to the players, a ledger crediting the winner) implements GameObserver and gets handed to the Game / Service.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, TypeVar
from uuid import UUID

from src.checkers.settlement import Settlement
from src.core.shared_types import ForfeitReason, Status


@dataclass(frozen=True)
class GameEvent:
    game_id: Optional[UUID]


@dataclass(frozen=True)
class PlayerJoined(GameEvent):
    player: str


@dataclass(frozen=True)
class MoveApplied(GameEvent):
    player: str
    move: str  # notation, ex. "c3xe5"
    captured: tuple[str, ...]
    promoted: bool
    layout: str
    turn_continues: bool


@dataclass(frozen=True)
class GameEnded(GameEvent):
    status: Status
    winner: str
    loser: str
    reason: str
    settlement: Settlement


@dataclass(frozen=True)
class Forfeited(GameEnded):
    forfeit_reason: ForfeitReason = ForfeitReason.RESIGNATION


@dataclass(frozen=True)
class GameCancelled(GameEvent):
    player: str


E = TypeVar("E", bound=GameEvent)


class GameObserver(Protocol):
    def notify(self, event: GameEvent) -> None: ...


class NullObserver:
    """Default when nobody is listening"""

    def notify(self, event: GameEvent) -> None:
        return None


class RecordingObserver:
    """Keeps every event in memory. Useful for tests and for replaying a game's events to a reconnecting client."""

    def __init__(self) -> None:
        self.events: list[GameEvent] = []

    def notify(self, event: GameEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[E]) -> list[E]:
        return [event for event in self.events if isinstance(event, event_type)]
