"""The board holds the position: which piece stands on which dark square"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.checkers.notation import INITIAL_LAYOUT, is_valid_layout
from src.checkers.pieces import Color, Piece
from src.checkers.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidLayoutError


@dataclass
class Board:
    """
    Only occupied squares are stored. A square missing from `position` is empty.

    Boards are treated as values by the rules engine: the move generator and mutator copy a board before changing it.
    The in-place helpers (place/remove/move) exist for building positions and for working on such copies.
    """

    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def initial(cls) -> Self:
        """3 rows of men each, facing each other across 2 empty rows"""
        return cls.from_layout(INITIAL_LAYOUT)

    @classmethod
    def empty(cls) -> Self:
        return cls({})

    @classmethod
    def from_layout(cls, layout: str) -> Self:
        """Construct a board from a layout string (see src/checkers/notation.py)"""
        if not is_valid_layout(layout):
            raise InvalidLayoutError(f"Cannot interpret supplied string as board layout: {layout}")

        position: dict[Square, Piece] = {}
        for row, row_layout in enumerate(layout.split("/")):
            col = 0
            for character in row_layout:
                if character.isdecimal():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                else:
                    position[Square(row, col)] = Piece.from_char(character)
                    col += 1
        return cls(position)

    def to_layout(self) -> str:
        """Rows are separated by slashes."""
        return "/".join(self._row_to_layout(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_layout(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))
            if piece is None:
                empty_count += 1
                continue

            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_char())

        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def piece(self, square: Square) -> Optional[Piece]:
        # Asking for a square off the board is a programming error, not something to recover from.
        assert square.is_within_bounds(), f"{square} is not on the board"
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def locate_color(self, color: Color) -> list[Square]:
        """Squares of all pieces of a given color, in reading order (top row first)."""
        return sorted(
            (square for square, piece in self.position.items() if piece.color == color),
            key=lambda square: (square.row, square.col),
        )

    def count_pieces(self, color: Color) -> int:
        return sum(1 for piece in self.position.values() if piece.color == color)

    def copy(self) -> Self:
        """Pieces are immutable, so a shallow copy of the mapping is a full copy of the board."""
        return type(self)(dict(self.position))

    def place_piece(self, piece: Piece, square: Square) -> None:
        assert square.is_within_bounds() and square.is_dark(), f"cannot place a piece on {square}"
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position.pop(square, None)

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        piece = self.position.pop(from_square)
        self.place_piece(piece, to_square)

    def __str__(self) -> str:
        """Human readable diagram, white at the bottom. Handy in test failures and logs."""
        lines = []
        for row in range(BOARD_DIMENSIONS[0]):
            cells = []
            for col in range(BOARD_DIMENSIONS[1]):
                square = Square(row, col)
                piece = self.piece(square)
                cells.append(piece.to_char() if piece else ("." if square.is_dark() else " "))
            lines.append(f"{BOARD_DIMENSIONS[0] - row} {' '.join(cells)}")
        lines.append("  " + " ".join("abcdefgh"[: BOARD_DIMENSIONS[1]]))
        return "\n".join(lines)
