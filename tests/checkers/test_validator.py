"""Unit tests for /src/checkers/validator.py"""

import pytest

from src.checkers.board import Board
from src.checkers.moves import Move
from src.checkers.pieces import Color, Piece
from src.checkers.rules import Rules
from src.checkers.square import Square
from src.checkers.validator import MoveDecision, validate
from src.core.exceptions import IllegalMoveError, RejectionReason, RuleViolationError

FLYING = Rules(flying_kings=True)


def sq(notation: str) -> Square:
    return Square.from_algebraic(notation)


def _board(placements: dict[str, str]) -> Board:
    board = Board.empty()
    for notation, char in placements.items():
        board.place_piece(Piece.from_char(char), sq(notation))
    return board


def _rejection(board: Board, from_alg: str, to_alg: str, color: Color = Color.WHITE, **kwargs) -> RejectionReason:
    with pytest.raises(IllegalMoveError) as exc_info:
        validate(board, sq(from_alg), sq(to_alg), color, **kwargs)
    return exc_info.value.reason


def test_accepts_simple_move() -> None:
    decision = validate(Board.initial(), sq("c3"), sq("d4"), Color.WHITE)
    assert decision == MoveDecision(Move(sq("c3"), sq("d4")))
    assert not decision.is_capture
    assert decision.captured is None
    assert not decision.continues


def test_black_moves_down_the_board() -> None:
    decision = validate(Board.initial(), sq("b6"), sq("a5"), Color.BLACK)
    assert decision.move == Move(sq("b6"), sq("a5"))


def test_validation_does_not_touch_the_board() -> None:
    board = Board.initial()
    layout = board.to_layout()
    validate(board, sq("c3"), sq("d4"), Color.WHITE)
    assert board.to_layout() == layout


def test_off_board_square() -> None:
    with pytest.raises(IllegalMoveError) as exc_info:
        validate(Board.initial(), Square(8, 1), sq("a1"), Color.WHITE)
    assert exc_info.value.reason == RejectionReason.INVALID_SQUARE

    with pytest.raises(IllegalMoveError) as exc_info:
        validate(Board.initial(), sq("a3"), Square(4, -1), Color.WHITE)
    assert exc_info.value.reason == RejectionReason.INVALID_SQUARE


@pytest.mark.parametrize("from_alg", ["d4", "b6"])
def test_no_own_piece_on_start(from_alg: str) -> None:
    """Empty square, or the opponent's piece"""
    assert _rejection(Board.initial(), from_alg, "c5") == RejectionReason.PIECE_MISSING


@pytest.mark.parametrize("to_alg", ["d3", "b2", "c3"])
def test_destination_light_or_occupied(to_alg: str) -> None:
    assert _rejection(Board.initial(), "c3", to_alg) == RejectionReason.DESTINATION_INVALID


def test_non_diagonal() -> None:
    assert _rejection(Board.initial(), "c3", "c5") == RejectionReason.NON_DIAGONAL


@pytest.mark.parametrize("to_alg", ["c3", "e3", "b2"])
def test_man_cannot_move_backwards(to_alg: str) -> None:
    board = _board({"d4": "w", "h8": "b"})
    assert _rejection(board, "d4", to_alg) == RejectionReason.BACKWARD_MAN_MOVE


def test_man_moves_a_single_square() -> None:
    assert _rejection(Board.initial(), "c3", "e5") == RejectionReason.TOO_FAR


def test_king_moves_a_single_square_without_flying_kings() -> None:
    board = _board({"d4": "W"})
    assert validate(board, sq("d4"), sq("c3"), Color.WHITE).move == Move(sq("d4"), sq("c3"))
    assert _rejection(board, "d4", "a1") == RejectionReason.TOO_FAR


def test_flying_king() -> None:
    board = _board({"d4": "W", "f6": "w"})
    decision = validate(board, sq("d4"), sq("a7"), Color.WHITE, FLYING)
    assert decision.move == Move(sq("d4"), sq("a7"))
    assert _rejection(board, "d4", "g7", rules=FLYING) == RejectionReason.PATH_BLOCKED


def test_capture_is_mandatory() -> None:
    board = _board({"d4": "w", "a3": "w", "e5": "b"})
    assert _rejection(board, "a3", "b4") == RejectionReason.CAPTURE_MANDATORY
    assert _rejection(board, "d4", "c5") == RejectionReason.CAPTURE_MANDATORY


def test_accepts_capture() -> None:
    board = _board({"d4": "w", "a3": "w", "e5": "b"})
    decision = validate(board, sq("d4"), sq("f6"), Color.WHITE)
    assert decision.is_capture
    assert decision.move == Move(sq("d4"), sq("f6"), is_capture=True)
    assert decision.captured == sq("e5")
    assert not decision.continues


def test_shorter_capture_is_rejected() -> None:
    board = _board({"c3": "w", "h2": "w", "d4": "b", "d6": "b", "g3": "b"})
    assert _rejection(board, "h2", "f4") == RejectionReason.CAPTURE_MANDATORY

    decision = validate(board, sq("c3"), sq("e5"), Color.WHITE)
    assert decision.continues
    assert len(decision.sequence) == 2


def test_king_must_pick_the_longest_landing() -> None:
    board = _board({"a1": "W", "c3": "b", "f2": "b"})
    assert _rejection(board, "a1", "e5") == RejectionReason.CAPTURE_MANDATORY
    assert validate(board, sq("a1"), sq("d4"), Color.WHITE).continues


def test_pinned_piece_must_continue() -> None:
    board = _board({"e5": "w", "d6": "b", "h2": "w", "g3": "b"})
    with pytest.raises(IllegalMoveError) as exc_info:
        validate(board, sq("h2"), sq("f4"), Color.WHITE, pinned=sq("e5"))
    assert exc_info.value.reason == RejectionReason.CHAIN_PIECE_REQUIRED
    assert "e5" in str(exc_info.value)

    decision = validate(board, sq("e5"), sq("c7"), Color.WHITE, pinned=sq("e5"))
    assert decision.captured == sq("d6")


def test_illegal_move_is_a_rule_violation() -> None:
    """The API layer only needs to know about the base class to tell the player to try again"""
    with pytest.raises(RuleViolationError):
        validate(Board.initial(), sq("c3"), sq("e5"), Color.WHITE)


def test_rejection_message_is_the_reason() -> None:
    with pytest.raises(IllegalMoveError, match=RejectionReason.TOO_FAR.value):
        validate(Board.initial(), sq("c3"), sq("e5"), Color.WHITE)
