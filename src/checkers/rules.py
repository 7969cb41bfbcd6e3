"""
Rule variants.

Checkers is played with many slightly different rule sets. The defaults below are the house rules of the platform;
each flag switches on a variant that players of other traditions will know.
"""

from dataclasses import dataclass

from src.checkers.pieces import Color
from src.checkers.square import BOARD_DIMENSIONS

Vector = tuple[int, int]

DIAGONALS: tuple[Vector, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


@dataclass(frozen=True)
class Rules:
    # men may also jump backwards (Brazilian/international style)
    men_capture_backward: bool = False
    # kings may slide any distance for a simple move, not only for a capture
    flying_kings: bool = False
    # a man promoted in the middle of a capture sequence stops there instead of continuing as a king
    promotion_ends_chain: bool = False


DEFAULT_RULES = Rules()


def forward(color: Color) -> int:
    """Row direction a man of this color moves in: white moves UP the board, black moves DOWN"""
    return -1 if color == Color.WHITE else 1


def forward_diagonals(color: Color) -> tuple[Vector, ...]:
    d_row = forward(color)
    return ((d_row, -1), (d_row, 1))


def promotion_row(color: Color) -> int:
    """The opponent's back rank."""
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1
