"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Checkers board is always 8x8 (rows, cols). Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"


@dataclass(frozen=True)
class Square:
    """
    Zero-based (row, col) coordinate.

    Row 0 is the top of the board: the back rank of the black pieces. Row 7 is the back rank of the white pieces.
    In algebraic notation the files a-h are the columns 0-7 and the ranks count up from the bottom: rank = 8 - row.
    So 'a1' is (7, 0) and 'h8' is (0, 7).
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (7, 0) - (0, 7)"""
        col = ord(sq[0].lower()) - ord("a")
        rank = int(sq[1:])
        return cls(BOARD_DIMENSIONS[0] - rank, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def is_dark(self) -> bool:
        """Only the dark squares are used in checkers."""
        return (self.row + self.col) % 2 == 1

    def is_playable(self) -> bool:
        return self.is_within_bounds() and self.is_dark()

    def offset(self, d_row: int, d_col: int, steps: int = 1) -> Square:
        return Square(self.row + steps * d_row, self.col + steps * d_col)


def is_valid_algebraic(sq: str) -> bool:
    """A letter for the file + a number for the rank, both within the board dimensions."""
    if len(sq) < 2:
        return False

    file_char, rank_chars = sq[0].lower(), sq[1:]
    if file_char not in FILE_NAMES[: BOARD_DIMENSIONS[1]]:
        return False

    if not rank_chars.isdecimal():
        return False

    return 1 <= int(rank_chars) <= BOARD_DIMENSIONS[0]
