"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import threading
import weakref
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    CancelRequest,
    CreateSessionRequest,
    DeleteGameRequest,
    ForfeitRequest,
    GameResponse,
    GameResultRequest,
    GetGameRequest,
    JoinSessionRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    SettlementResponse,
)
from src.checkers.events import GameObserver, NullObserver
from src.checkers.game import Game
from src.checkers.rules import Rules
from src.checkers.square import Square
from src.core.config import Settings
from src.core.exceptions import (
    GameStateError,
    InvalidRequestError,
    NotAPlayerError,
    RepositoryError,
    RuleViolationError,
)
from src.core.models import GameModel
from src.core.shared_types import TERMINAL_STATUSES, Color
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


def rules_from_settings(settings: Settings) -> Rules:
    return Rules(
        men_capture_backward=settings.men_capture_backward,
        flying_kings=settings.flying_kings,
        promotion_ends_chain=settings.promotion_ends_chain,
    )


class CheckersService:
    """
    Orchestration of layers for wagered checkers games.

    Every request touching a game runs load -> domain logic -> store -> notify while holding that game's lock,
    so requests for the same game are handled one at a time. Different games do not wait for each other.
    """

    def __init__(
        self,
        repository: GameRepository,
        settings: Optional[Settings] = None,
        observer: Optional[GameObserver] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or Settings()
        self.rules = rules_from_settings(self.settings)
        self.observer = observer or NullObserver()
        # entries live only while some request holds the lock
        self._locks: weakref.WeakValueDictionary[UUID, threading.RLock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    # -- API routes logic ---
    def create_session(self, request: CreateSessionRequest) -> GameResponse:
        """First player opened a game with a stake. It waits for an opponent."""
        self._check_stake_limits(request)

        new_game = Game.new_game(
            player=request.player_name,
            stake=request.stake,
            commission_rate=self.settings.commission_rate,
            rules=self.rules,
            starting_layout=request.starting_layout,
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            "Game %s created by %s with stake %s", game_id, request.player_name, request.stake
        )
        return self._create_game_response(game_id, stored_game)

    def join_session(self, request: JoinSessionRequest) -> GameResponse:
        """Second player joined: the game starts."""
        with self._session_lock(request.game_id):
            game = self._load_game(request.game_id)
            game.register_player(request.player_name)
            model = self._store(request.game_id, game)

        logger.info("Player %s joined game %s", request.player_name, request.game_id)
        return self._create_game_response(request.game_id, model)

    def get_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used to resynchronize a client after reconnecting, or in a polling loop.
        """
        with self._session_lock(request.game_id):
            game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        with self._session_lock(request.game_id):
            game = self._load_game(request.game_id)
            legal_moves = game.legal_moves(request.player_name)

        color = next(color for color, name in game.players.items() if name == request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=Color[color.name],
            legal_moves=legal_moves,
        )

    def submit_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt. Rejected moves leave the stored game untouched."""
        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)

        with self._session_lock(request.game_id):
            game = self._load_game(request.game_id)
            try:
                outcome = game.make_move(request.player_name, from_square, to_square)
            except (RuleViolationError, GameStateError, NotAPlayerError) as e:
                logger.info(
                    "Rejected move %s-%s by %s in game %s: %s",
                    request.from_square,
                    request.to_square,
                    request.player_name,
                    request.game_id,
                    e,
                )
                raise
            model = self._store(request.game_id, game)

        logger.debug(
            "Game %s: %s played %s", request.game_id, request.player_name, outcome.move.to_notation()
        )
        if outcome.terminal:
            self._log_terminal(request.game_id, game)

        response = self._create_game_response(request.game_id, model)
        return MoveResponse(
            **response.model_dump(),
            move=outcome.move.to_notation(),
            turn_continues=outcome.turn_continues,
            captured=[square.to_algebraic() for square in outcome.captured],
            promoted=outcome.promoted,
        )

    def submit_forfeit(self, request: ForfeitRequest) -> GameResponse:
        """Resignation, or the transport layer reporting a disconnect / an expired move timer."""
        with self._session_lock(request.game_id):
            game = self._load_game(request.game_id)
            game.forfeit(request.player_name, request.reason)
            model = self._store(request.game_id, game)

        self._log_terminal(request.game_id, game)
        return self._create_game_response(request.game_id, model)

    def cancel_session(self, request: CancelRequest) -> GameResponse:
        """Creator withdraws an open game before an opponent joined. The lobby refunds the escrowed stake."""
        with self._session_lock(request.game_id):
            game = self._load_game(request.game_id)
            game.cancel(request.player_name)
            model = self._store(request.game_id, game)

        logger.info("Game %s cancelled by %s", request.game_id, request.player_name)
        return self._create_game_response(request.game_id, model)

    def game_result(self, request: GameResultRequest) -> GameResponse:
        """Result of a finished game. Only the players of that game get to see it."""
        game_model = self._fetch_game(request.game_id)
        if request.player_name not in game_model.registered_players.values():
            raise NotAPlayerError(
                f"Player {request.player_name} did not play in game {request.game_id}."
            )
        if game_model.status not in TERMINAL_STATUSES:
            raise GameStateError(f"Game {request.game_id} has not finished yet.")
        return self._create_game_response(request.game_id, game_model)

    def game_history(self, player_name: str, limit: int = 20) -> list[GameResponse]:
        """The player's most recent games, newest first."""
        if limit <= 0:
            raise InvalidRequestError(f"limit must be positive, got {limit}")
        return [
            self._create_game_response(game_id, model)
            for game_id, model in self.repo.list_games_for_player(player_name, limit)
        ]

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._session_lock(request.game_id):
            self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    @contextmanager
    def _session_lock(self, game_id: UUID) -> Iterator[None]:
        """
        One lock per game. The registry itself is guarded, so two requests can never create two locks.

        The registry only holds weak references: `lock` below keeps the entry alive for as long as a request uses it,
        and a game nobody is asking about (unknown, finished, deleted) drops out of the registry by itself.
        """
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[game_id] = lock
        with lock:
            yield

    def _check_stake_limits(self, request: CreateSessionRequest) -> None:
        if request.stake <= self.settings.min_stake:
            raise InvalidRequestError(
                f"Stake must be larger than {self.settings.min_stake}, got {request.stake}."
            )
        if self.settings.max_stake is not None and request.stake > self.settings.max_stake:
            raise InvalidRequestError(
                f"Stake cannot exceed {self.settings.max_stake}, got {request.stake}."
            )

    def _load_game(self, game_id: UUID) -> Game:
        """Retrieve the persisted GameModel and create a Game instance from it."""
        return Game.from_model(self._fetch_game(game_id), rules=self.rules, game_id=game_id)

    def _store(self, game_id: UUID, game: Game) -> GameModel:
        """
        Persist the new state, then tell the observer what happened.
        NOTE: events are only published once the state they describe has been stored. From then on the request has
        succeeded: a failing observer gets logged, it does not turn an accepted move into an error.
        """
        model = game.to_model()
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} could not be updated.")

        events = list(game.events)
        game.events.clear()
        for event in events:
            try:
                self.observer.notify(event)
            except Exception:
                logger.exception("Observer failed on %s for game %s", type(event).__name__, game_id)
        return model

    def _log_terminal(self, game_id: UUID, game: Game) -> None:
        settlement = game.settlement
        assert settlement is not None
        logger.info(
            "Game %s %s (%s): winner %s %s, loser %s %s, commission %s",
            game_id,
            game.status,
            game.end_reason,
            settlement.winner,
            settlement.winner_delta,
            settlement.loser,
            settlement.loser_delta,
            settlement.commission,
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""

        # Before the first move gets played, the starting layout equals the current layout. Otherwise get it as first recorded layout in history.
        starting_layout = model.history[0] if model.history else model.layout
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            layout=model.layout,
            starting_layout=starting_layout,
            side_to_move=Color.WHITE if model.side_to_move == "w" else Color.BLACK,
            capture_chain=model.capture_chain,
            status=model.status,
            stake=model.stake,
            move_history=model.moves,
            winner=model.winner,
            loser=model.loser,
            settlement=(
                SettlementResponse.model_validate(model.settlement) if model.settlement else None
            ),
            end_reason=model.end_reason,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
