"""Wire the layers together from the settings: logging, database session, repository, service."""

from typing import Optional

from src.checkers.events import GameObserver
from src.core.config import Settings, configure_logging
from src.db.database import build_session_factory
from src.db.sql_repository import SQLGameRepository
from src.services.checkers_service import CheckersService


def build_service(
    settings: Optional[Settings] = None,
    observer: Optional[GameObserver] = None,
) -> CheckersService:
    """
    Entry point for a worker process. Reads the settings from the environment if none are given.

    NOTE: a SQLAlchemy session must not be shared between threads. Build one service per worker thread.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)
    session_factory = build_session_factory(settings)
    return CheckersService(SQLGameRepository(session_factory()), settings, observer)
