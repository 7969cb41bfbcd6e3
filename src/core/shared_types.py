"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    FORFEITED = "forfeited"
    CANCELLED = "cancelled"


# --- NOTE the domain layer has its own Color enum (src/checkers/pieces.py). These string versions are what crosses the boundary.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class ForfeitReason(StrEnum):
    RESIGNATION = "resignation"
    DISCONNECT = "disconnect"
    TIMEOUT = "timeout"


TERMINAL_STATUSES: frozenset[Status] = frozenset(
    {Status.COMPLETED, Status.FORFEITED, Status.CANCELLED}
)
