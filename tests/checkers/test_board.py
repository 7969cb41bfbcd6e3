"""Unit tests for /src/checkers/board.py"""

import pytest

from src.checkers.board import Board
from src.checkers.notation import EMPTY_LAYOUT, INITIAL_LAYOUT
from src.checkers.pieces import Color, Piece, PieceType
from src.checkers.square import Square
from src.core.exceptions import InvalidLayoutError


def test_initial_board() -> None:
    """12 men each, on the dark squares of the three rows closest to their owner"""
    board = Board.initial()
    assert board.count_pieces(Color.WHITE) == 12
    assert board.count_pieces(Color.BLACK) == 12

    for square in board.locate_color(Color.WHITE):
        assert square.row in (5, 6, 7)
        assert square.is_dark()
    for square in board.locate_color(Color.BLACK):
        assert square.row in (0, 1, 2)
        assert square.is_dark()

    assert all(not piece.is_king for piece in board.position.values())


def test_initial_board_roundtrips_to_layout() -> None:
    assert Board.initial().to_layout() == INITIAL_LAYOUT


def test_empty_board() -> None:
    board = Board.empty()
    assert board.position == {}
    assert board.to_layout() == EMPTY_LAYOUT


@pytest.mark.parametrize(
    "layout",
    [
        "7B/8/8/8/8/8/8/W7",
        "1b1b4/8/3W4/8/8/2w5/8/8",
        "8/8/8/2b1b3/3w4/8/8/8",
    ],
)
def test_layout_roundtrip(layout: str) -> None:
    assert Board.from_layout(layout).to_layout() == layout


def test_from_layout_places_kings() -> None:
    board = Board.from_layout("7B/8/8/8/8/8/8/W7")
    assert board.piece(Square.from_algebraic("h8")) == Piece(Color.BLACK, PieceType.KING)
    assert board.piece(Square.from_algebraic("a1")) == Piece(Color.WHITE, PieceType.KING)
    assert len(board.position) == 2


@pytest.mark.parametrize(
    "layout", ["", "8/8/8", "b7/8/8/8/8/8/8/8", "1q6/8/8/8/8/8/8/8", "\u00b2/8/8/8/8/8/8/8"]
)
def test_invalid_layout_raises(layout: str) -> None:
    with pytest.raises(InvalidLayoutError):
        Board.from_layout(layout)


def test_piece_lookup() -> None:
    board = Board.initial()
    assert board.piece(Square.from_algebraic("a1")) == Piece(Color.WHITE)
    assert board.piece(Square.from_algebraic("b8")) == Piece(Color.BLACK)
    assert board.piece(Square.from_algebraic("d4")) is None
    assert board.is_empty(Square.from_algebraic("d4"))
    assert not board.is_empty(Square.from_algebraic("c3"))


def test_piece_lookup_off_the_board() -> None:
    with pytest.raises(AssertionError):
        Board.initial().piece(Square(8, 0))


def test_locate_color_in_reading_order() -> None:
    board = Board.from_layout("1b1b4/8/3W4/8/8/2w5/8/8")
    assert board.locate_color(Color.BLACK) == [Square(0, 1), Square(0, 3)]
    assert board.locate_color(Color.WHITE) == [Square(2, 3), Square(5, 2)]


def test_copy_is_independent() -> None:
    board = Board.initial()
    clone = board.copy()
    clone.move_piece(Square.from_algebraic("c3"), Square.from_algebraic("d4"))

    assert board.to_layout() == INITIAL_LAYOUT
    assert clone.piece(Square.from_algebraic("d4")) == Piece(Color.WHITE)
    assert clone.is_empty(Square.from_algebraic("c3"))


def test_place_and_remove_piece() -> None:
    board = Board.empty()
    square = Square.from_algebraic("e5")
    board.place_piece(Piece(Color.BLACK, PieceType.KING), square)
    assert board.piece(square) == Piece(Color.BLACK, PieceType.KING)

    board.remove_piece(square)
    assert board.is_empty(square)
    # removing from an empty square is a no-op
    board.remove_piece(square)
    assert board.position == {}


def test_cannot_place_on_light_square() -> None:
    with pytest.raises(AssertionError):
        Board.empty().place_piece(Piece(Color.WHITE), Square.from_algebraic("a2"))


def test_str_diagram() -> None:
    diagram = str(Board.from_layout("7B/8/8/8/8/8/8/W7"))
    lines = diagram.splitlines()
    assert len(lines) == 9
    assert lines[0].startswith("8 ")
    assert lines[0].endswith("B")
    assert lines[7].startswith("1 W")
    assert lines[8].strip() == "a b c d e f g h"
