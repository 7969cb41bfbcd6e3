"""
Custom exceptions shared by all layers.

Everything derives from GameError, so the API layer can catch a single type and
map the subclasses onto responses.
"""

from enum import StrEnum


class RejectionReason(StrEnum):
    """Why the Move Validator refused a move. Values are safe to show to a player."""

    INVALID_SQUARE = "square is not on the board"
    PIECE_MISSING = "no piece of yours on the starting square"
    DESTINATION_INVALID = "destination is occupied or not a playable square"
    CAPTURE_MANDATORY = "a capture is available and must be played"
    CHAIN_PIECE_REQUIRED = "the capturing piece must continue its capture sequence"
    NON_DIAGONAL = "pieces only move diagonally"
    BACKWARD_MAN_MOVE = "a man cannot move backwards"
    TOO_FAR = "this piece can only move a single square"
    PATH_BLOCKED = "path is blocked by another piece"


class GameError(Exception):
    """Top level exception. Catch this one in the API layer."""


class InvalidRequestError(GameError):
    """Input contract violation: malformed coordinates, invalid stake, etc."""


class SettlementError(InvalidRequestError):
    """Settlement called with values that break its preconditions."""


class InvalidLayoutError(GameError):
    """A board layout string that cannot be interpreted."""


class RuleViolationError(GameError):
    """The request was well formed but breaks the rules of checkers. The player may try again."""


class IllegalMoveError(RuleViolationError):
    def __init__(self, reason: RejectionReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or reason.value)


class NotYourTurnError(RuleViolationError):
    pass


class GameStateError(GameError):
    """The game is not in a state that allows the request (not started yet, finished, ...)."""


class NotAPlayerError(GameError):
    """The player is not seated in this game."""


class RepositoryError(GameError):
    """Unknown game ID, or the record could not be stored."""
