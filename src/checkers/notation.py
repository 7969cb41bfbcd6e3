"""
Board layout strings.
----

Modelled on the piece placement part of a FEN string. Eight rows, separated by slashes, read from row 0 (black's back
rank, the top of the board) down to row 7 (white's back rank). Within a row:

* 'w' / 'b': a white / black man
* 'W' / 'B': a white / black king
* a digit: that many empty squares

ex) the starting position:
1b1b1b1b/b1b1b1b1/1b1b1b1b/8/8/w1w1w1w1/1w1w1w1w/w1w1w1w1
"""

from src.checkers.pieces import CHAR_TO_PIECE, Color
from src.checkers.square import BOARD_DIMENSIONS, Square

INITIAL_LAYOUT = "1b1b1b1b/b1b1b1b1/1b1b1b1b/8/8/w1w1w1w1/1w1w1w1w/w1w1w1w1"
EMPTY_LAYOUT = "/".join(["8"] * BOARD_DIMENSIONS[0])


def is_valid_layout(layout: str) -> bool:
    """Check the structure of the string, and that pieces only stand on dark squares."""
    num_rows, num_cols = BOARD_DIMENSIONS
    row_layouts = layout.split("/")
    if len(row_layouts) != num_rows:
        return False

    for row, row_layout in enumerate(row_layouts):
        col = 0
        for character in row_layout:
            if character.isdecimal():
                col += int(character)
            elif character in CHAR_TO_PIECE:
                if not Square(row, col).is_dark():
                    return False
                col += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if col != num_cols:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def color_to_code(color: Color) -> str:
    return "w" if color == Color.WHITE else "b"


def color_from_code(code: str) -> Color:
    return Color.WHITE if code == "w" else Color.BLACK
