"""Implementation of (Game)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_into(game_db, game)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def list_games_for_player(self, player: str, limit: int = 20) -> list[tuple[UUID, GameModel]]:
        """Most recent games the player was seated in, newest first."""
        query = (
            select(DBGame)
            .where(or_(DBGame.white_player == player, DBGame.black_player == player))
            .order_by(DBGame.created_at.desc())
            .limit(limit)
        )
        return [(game_db.id, self._to_model(game_db)) for game_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        """Write every field of the transfer model onto the SQLAlchemy model."""
        game_db.layout = game.layout
        game_db.side_to_move = game.side_to_move
        game_db.capture_chain = game.capture_chain
        game_db.history = list(game.history)
        game_db.moves = list(game.moves)
        game_db.registered_players = dict(game.registered_players)
        game_db.white_player = game.registered_players.get("white")
        game_db.black_player = game.registered_players.get("black")
        game_db.status = game.status
        game_db.stake = game.stake
        game_db.commission_rate = game.commission_rate
        game_db.winner = game.winner
        game_db.loser = game.loser
        game_db.settlement = dict(game.settlement) if game.settlement else None
        game_db.end_reason = game.end_reason

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            layout=game_db.layout,
            side_to_move=game_db.side_to_move,
            history=list(game_db.history),
            moves=list(game_db.moves),
            registered_players=dict(game_db.registered_players),
            status=game_db.status,
            stake=game_db.stake,
            commission_rate=game_db.commission_rate,
            capture_chain=game_db.capture_chain,
            winner=game_db.winner,
            loser=game_db.loser,
            settlement=dict(game_db.settlement) if game_db.settlement else None,
            end_reason=game_db.end_reason,
        )
