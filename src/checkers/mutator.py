"""
Board Mutator
-----

Applies a validated move to a board and returns a NEW board. The input board is never touched: a rejected or
abandoned move (the capture search probes many of them) can never perturb the position it started from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from src.checkers.board import Board
from src.checkers.rules import promotion_row
from src.checkers.square import Square

if TYPE_CHECKING:
    from src.checkers.validator import MoveDecision


@dataclass(frozen=True)
class AppliedMove:
    """The board after the move + what happened on the way (for the move log / the transport layer)."""

    board: Board
    captured: list[Square] = field(default_factory=list)
    promoted: bool = False


def relocate(
    board: Board,
    from_square: Square,
    to_square: Square,
    captured: Optional[Square] = None,
) -> AppliedMove:
    """
    1. copy the board
    2. move the piece, removing the captured piece (if any)
    3. a man that reaches the opponent's back rank is replaced by a king
    """
    new_board = board.copy()
    piece = new_board.piece(from_square)
    assert piece is not None, f"no piece on {from_square.to_algebraic()} to move"

    new_board.remove_piece(from_square)
    if captured is not None:
        new_board.remove_piece(captured)

    promoted = (not piece.is_king) and to_square.row == promotion_row(piece.color)
    new_board.place_piece(piece.promoted() if promoted else piece, to_square)
    return AppliedMove(
        board=new_board,
        captured=[captured] if captured is not None else [],
        promoted=promoted,
    )


def apply_move(board: Board, decision: MoveDecision) -> AppliedMove:
    """Apply a single leg. For a capture this is the first hop of the sequence carried by the decision."""
    return relocate(
        board,
        decision.move.from_square,
        decision.move.to_square,
        captured=decision.captured,
    )
