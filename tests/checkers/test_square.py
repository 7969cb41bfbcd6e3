"""Unit tests for /src/checkers/square.py"""

from string import ascii_lowercase

import pytest

from src.checkers.square import BOARD_DIMENSIONS, Square, is_valid_algebraic

ALL_SQUARES = [
    (row, col, f"{ascii_lowercase[col]}{8 - row}") for row in range(8) for col in range(8)
]


@pytest.mark.parametrize("row, col, notation", ALL_SQUARES)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """Files are columns, ranks count up from white's side of the board (row 7)"""
    square = Square.from_algebraic(notation)
    assert square.row == row
    assert square.col == col


@pytest.mark.parametrize("row, col, notation", ALL_SQUARES)
def test_to_algebraic_notation(row: int, col: int, notation: str) -> None:
    square = Square(row, col)
    assert square.to_algebraic() == notation


def test_corners() -> None:
    """Both encodings must agree on the corners. a1 is bottom left seen from the white pieces."""
    assert Square.from_algebraic("a1") == Square(7, 0)
    assert Square.from_algebraic("h8") == Square(0, 7)
    assert Square.from_algebraic("a8") == Square(0, 0)
    assert Square.from_algebraic("h1") == Square(7, 7)


def test_square_within_bounds() -> None:
    for row in range(BOARD_DIMENSIONS[0]):
        for col in range(BOARD_DIMENSIONS[1]):
            assert Square(row, col).is_within_bounds()


@pytest.mark.parametrize("row, col", [(8, 0), (0, 8), (-1, 3), (3, -1), (8, 8)])
def test_square_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


@pytest.mark.parametrize("notation", ["a1", "c1", "b2", "d4", "h8", "a7", "c3", "e5"])
def test_dark_squares(notation: str) -> None:
    assert Square.from_algebraic(notation).is_dark()


@pytest.mark.parametrize("notation", ["b1", "a2", "d3", "a8", "h1", "e4"])
def test_light_squares(notation: str) -> None:
    assert not Square.from_algebraic(notation).is_dark()


def test_there_are_32_playable_squares() -> None:
    playable = [Square(row, col) for row in range(8) for col in range(8) if Square(row, col).is_playable()]
    assert len(playable) == 32


def test_offset() -> None:
    square = Square.from_algebraic("c3")
    assert square.offset(-1, 1) == Square.from_algebraic("d4")
    assert square.offset(-1, 1, steps=2) == Square.from_algebraic("e5")
    assert square.offset(1, -1) == Square.from_algebraic("b2")


@pytest.mark.parametrize("notation", ["a1", "h8", "D4", "e5"])
def test_valid_algebraic(notation: str) -> None:
    assert is_valid_algebraic(notation)


@pytest.mark.parametrize("notation", ["", "a", "i1", "a0", "a9", "11", "aa", "a1x", "-3", "a\u00b2"])
def test_invalid_algebraic(notation: str) -> None:
    assert not is_valid_algebraic(notation)
