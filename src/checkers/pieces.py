"""Defines the checkers pieces: men and kings of two colors"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class PieceType(Enum):
    MAN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()  # the "first" side: moves first, starts on rows 5-7 and moves up the board
    BLACK = auto()  # the "second" side: starts on rows 0-2 and moves down the board

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self == Color.WHITE else Color.WHITE


AVAILABLE_COLOR_NAMES = [color.name for color in Color]

# lower case: men, upper case: kings
CHAR_TO_PIECE: dict[str, tuple[Color, PieceType]] = {
    "w": (Color.WHITE, PieceType.MAN),
    "W": (Color.WHITE, PieceType.KING),
    "b": (Color.BLACK, PieceType.MAN),
    "B": (Color.BLACK, PieceType.KING),
}

PIECE_TO_CHAR: dict[tuple[Color, PieceType], str] = {
    value: key for key, value in CHAR_TO_PIECE.items()
}


@dataclass(frozen=True)
class Piece:
    color: Color
    type: PieceType = PieceType.MAN

    @classmethod
    def from_char(cls, character: str) -> Piece:
        color, piece_type = CHAR_TO_PIECE[character]
        return cls(color, piece_type)

    def to_char(self) -> str:
        return PIECE_TO_CHAR[(self.color, self.type)]

    @property
    def is_king(self) -> bool:
        return self.type == PieceType.KING

    def promoted(self) -> Piece:
        """Pieces are values: promotion hands back a new king of the same color."""
        return Piece(self.color, PieceType.KING)
