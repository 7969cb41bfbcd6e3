"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is the authoritative state machine of a single match: seating, turn order, the move loop (including capture
sequences spread over several requests), end-of-game detection, forfeits, and settling the stake exactly once.

    WAITING_FOR_PLAYERS --join--> IN_PROGRESS --no pieces / no moves--> COMPLETED
            |                          |
            +--cancel--> CANCELLED     +--resign / disconnect / timeout--> FORFEITED

The terminal statuses have no way out.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Self
from uuid import UUID

from src.checkers.board import Board
from src.checkers.events import (
    Forfeited,
    GameCancelled,
    GameEnded,
    GameEvent,
    MoveApplied,
    PlayerJoined,
)
from src.checkers.moves import Move, has_any_legal_move, legal_moves
from src.checkers.mutator import apply_move
from src.checkers.notation import (
    color_from_code,
    color_to_code,
    is_valid_color_code,
)
from src.checkers.pieces import Color
from src.checkers.rules import DEFAULT_RULES, Rules
from src.checkers.settlement import Money, Settlement, settle, to_money
from src.checkers.square import Square
from src.checkers.validator import validate
from src.core.exceptions import (
    GameStateError,
    InvalidRequestError,
    NotAPlayerError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import TERMINAL_STATUSES, ForfeitReason, Status

NO_PIECES_LEFT = "no pieces left"
NO_LEGAL_MOVES = "no legal moves left"


@dataclass(frozen=True)
class TerminalOutcome:
    status: Status
    winner: str
    loser: str
    reason: str
    settlement: Settlement


@dataclass(frozen=True)
class MoveOutcome:
    """What the service needs to report back after an accepted move"""

    move: Move
    layout: str
    color_to_move: Color
    turn_continues: bool
    captured: list[Square]
    promoted: bool
    status: Status
    terminal: Optional[TerminalOutcome] = None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    color_to_move: Color
    players: dict[Color, str]
    status: Status
    stake: Money
    commission_rate: Money
    moves: list[Move] = field(default_factory=list)
    history: list[str] = field(default_factory=list)  # layouts before every move
    capture_chain: Optional[Square] = None  # set while a capture sequence is unfinished: the capturing piece
    winner: Optional[str] = None
    loser: Optional[str] = None
    settlement: Optional[Settlement] = None
    end_reason: Optional[str] = None
    rules: Rules = DEFAULT_RULES
    game_id: Optional[UUID] = None
    # events produced by the last request(s), published by the service once the new state is stored
    events: list[GameEvent] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def from_model(
        cls,
        model: GameModel,
        rules: Rules = DEFAULT_RULES,
        game_id: Optional[UUID] = None,
    ) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        if not is_valid_color_code(model.side_to_move):
            raise GameStateError(f"Invalid side to move: {model.side_to_move!r}")

        players = {
            color: model.registered_players[color.name.lower()]
            for color in Color
            if color.name.lower() in model.registered_players
        }
        return cls(
            board=Board.from_layout(model.layout),
            color_to_move=color_from_code(model.side_to_move),
            players=players,
            status=Status(model.status),
            stake=to_money(model.stake),
            commission_rate=to_money(model.commission_rate),
            moves=[Move.from_notation(notation) for notation in model.moves],
            history=list(model.history),
            capture_chain=(
                Square.from_algebraic(model.capture_chain) if model.capture_chain else None
            ),
            winner=model.winner,
            loser=model.loser,
            settlement=Settlement.from_dict(model.settlement) if model.settlement else None,
            end_reason=model.end_reason,
            rules=rules,
            game_id=game_id,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            layout=self.board.to_layout(),
            side_to_move=color_to_code(self.color_to_move),
            history=list(self.history),
            moves=[move.to_notation() for move in self.moves],
            registered_players={
                color.name.lower(): player for color, player in self.players.items()
            },
            status=self.status.value,
            stake=str(self.stake),
            commission_rate=str(self.commission_rate),
            capture_chain=self.capture_chain.to_algebraic() if self.capture_chain else None,
            winner=self.winner,
            loser=self.loser,
            settlement=self.settlement.to_dict() if self.settlement else None,
            end_reason=self.end_reason,
        )

    @classmethod
    def new_game(
        cls,
        player: str,
        stake: Decimal | int | str,
        commission_rate: Decimal | int | str = Decimal("0"),
        rules: Rules = DEFAULT_RULES,
        starting_layout: Optional[str] = None,
    ) -> Self:
        """
        The player who opens the game takes the white pieces and moves first.
        Their stake is already escrowed by the lobby by the time this gets called.
        """
        stake = to_money(stake)
        commission_rate = to_money(commission_rate)
        if stake <= 0:
            raise InvalidRequestError(f"Cannot create new game. Stake must be positive, got {stake}")
        if not (0 <= commission_rate <= 1):
            raise InvalidRequestError(
                f"Cannot create new game. Commission rate must lie between 0 and 1, got {commission_rate}"
            )

        board = Board.from_layout(starting_layout) if starting_layout else Board.initial()
        return cls(
            board=board,
            color_to_move=Color.WHITE,
            players={Color.WHITE: player},
            status=Status.WAITING_FOR_PLAYERS,
            stake=stake,
            commission_rate=commission_rate,
            rules=rules,
        )

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open game. Their stake is escrowed as well, so the game starts."""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Player {player} is already seated in this game.")

        seated_color = next(iter(self.players))
        self.players[seated_color.opponent] = player
        self._change_status(Status.IN_PROGRESS)
        self.events.append(PlayerJoined(self.game_id, player))

        # a custom starting layout might not leave the first player any move at all
        self._update_game_status()

    def legal_moves(self, player: str) -> list[str]:
        """
        Service will request the set of legal moves (so a frontend can highlight them).
        ----

        1. Check the game is running and it is your turn
        2. Return the legal legs in notation. Mid capture sequence, only the next hops of the capturing piece.
        """
        self._assert_in_progress()
        color = self._get_player_color(player)
        self._assert_your_turn(color)
        return [
            move.to_notation()
            for move in legal_moves(self.board, color, self.rules, pinned=self.capture_chain)
        ]

    def make_move(self, player: str, from_square: Square, to_square: Square) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. game in progress, player seated, player's turn (rejections here never reach the validator)
        2. validate (the capture-sequence pin included) --> raises IllegalMoveError, nothing changed yet
        3. update board, move list and history
        4. capture sequence not finished? same player moves again with the same piece. Otherwise flip the turn.
        5. update game status / settle if the game ended
        """
        self._assert_in_progress()
        color = self._get_player_color(player)
        self._assert_your_turn(color)

        decision = validate(
            self.board, from_square, to_square, color, self.rules, pinned=self.capture_chain
        )
        applied = apply_move(self.board, decision)

        self._update_history(self.board.to_layout())
        self.board = applied.board
        self._update_moves(decision.move)

        turn_continues = decision.continues
        if turn_continues:
            self.capture_chain = decision.move.to_square
        else:
            self.capture_chain = None
            self.color_to_move = color.opponent

        self.events.append(
            MoveApplied(
                self.game_id,
                player=player,
                move=decision.move.to_notation(),
                captured=tuple(square.to_algebraic() for square in applied.captured),
                promoted=applied.promoted,
                layout=self.board.to_layout(),
                turn_continues=turn_continues,
            )
        )

        terminal = self._update_game_status()
        return MoveOutcome(
            move=decision.move,
            layout=self.board.to_layout(),
            color_to_move=self.color_to_move,
            turn_continues=turn_continues,
            captured=applied.captured,
            promoted=applied.promoted,
            status=self.status,
            terminal=terminal,
        )

    def forfeit(self, player: str, reason: ForfeitReason = ForfeitReason.RESIGNATION) -> TerminalOutcome:
        """
        Resignation, a dropped connection, or a timer that ran out (the timer lives in the surrounding service).
        The opponent wins, no matter whose turn it was.
        """
        self._assert_in_progress()
        color = self._get_player_color(player)
        outcome = self._finish(Status.FORFEITED, color.opponent, reason.value)
        self.events.append(
            Forfeited(
                self.game_id,
                status=outcome.status,
                winner=outcome.winner,
                loser=outcome.loser,
                reason=outcome.reason,
                settlement=outcome.settlement,
                forfeit_reason=reason,
            )
        )
        return outcome

    def cancel(self, player: str) -> None:
        """The player who opened the game withdraws before anyone joined. Nobody wins, no settlement."""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(f"Only games waiting for players can be cancelled. status: {self.status}")
        self._get_player_color(player)
        self._change_status(Status.CANCELLED)
        self.end_reason = f"cancelled by {player}"
        self.events.append(GameCancelled(self.game_id, player))

    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # -- PRIVATE HELPERS ---
    def _get_player_color(self, player: str) -> Color:
        for color, name in self.players.items():
            if name == player:
                return color
        raise NotAPlayerError(f"Player {player} is not seated in this game.")

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, color: Color) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        if color != self.color_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self.players[self.color_to_move]} to make a move first."
            )

    def _update_moves(self, move: Move) -> None:
        self.moves.append(move)

    def _update_history(self, layout: str) -> None:
        """Before making a new move, commit the layout prior to the move to the history."""
        self.history.append(layout)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status

    def _update_game_status(self) -> Optional[TerminalOutcome]:
        """
        Checks if the game has ended and finishes it if so.

        NOTE: evaluated for the side that moves next, always on the current board (never cached).
        That side loses when it has no pieces left, or none of its pieces can move.
        """
        next_color = self.color_to_move
        if self.board.count_pieces(next_color) == 0:
            reason = NO_PIECES_LEFT
        elif not has_any_legal_move(self.board, next_color, self.rules):
            reason = NO_LEGAL_MOVES
        else:
            return None

        outcome = self._finish(Status.COMPLETED, next_color.opponent, reason)
        self.events.append(
            GameEnded(
                self.game_id,
                status=outcome.status,
                winner=outcome.winner,
                loser=outcome.loser,
                reason=outcome.reason,
                settlement=outcome.settlement,
            )
        )
        return outcome

    def _finish(self, status: Status, winner_color: Color, reason: str) -> TerminalOutcome:
        """The only place that settles. Reached once: afterwards the game is terminal and every request is refused."""
        assert not self.is_over, "a finished game cannot finish again"
        winner = self.players[winner_color]
        loser = self.players[winner_color.opponent]
        self.settlement = settle(self.stake, self.commission_rate, winner, loser)

        self._change_status(status)
        self.winner = winner
        self.loser = loser
        self.end_reason = reason
        self.capture_chain = None
        return TerminalOutcome(status, winner, loser, reason, self.settlement)
