"""
Move Validator
-----

Decides whether a requested (from, to) is legal for the side to move. Pure: the board is only read.
Whose turn it is gets checked by the Game before calling in here.
"""

from dataclasses import dataclass
from typing import Optional

from src.checkers.board import Board
from src.checkers.moves import (
    CaptureSequence,
    Move,
    all_capture_sequences,
    capture_sequences,
    longest_sequences,
)
from src.checkers.pieces import Color, Piece
from src.checkers.rules import DEFAULT_RULES, Rules, forward
from src.checkers.square import Square
from src.core.exceptions import IllegalMoveError, RejectionReason


@dataclass(frozen=True)
class MoveDecision:
    """An accepted move. For captures it carries the full (longest) sequence the first leg belongs to."""

    move: Move
    sequence: CaptureSequence = ()

    @property
    def is_capture(self) -> bool:
        return bool(self.sequence)

    @property
    def captured(self) -> Optional[Square]:
        return self.sequence[0].over if self.sequence else None

    @property
    def continues(self) -> bool:
        """More hops must follow with the same piece"""
        return len(self.sequence) > 1


def validate(
    board: Board,
    from_square: Square,
    to_square: Square,
    color: Color,
    rules: Rules = DEFAULT_RULES,
    pinned: Optional[Square] = None,
) -> MoveDecision:
    """
    Check a move request
    ----

    1. both squares on the board, and your own piece on the starting square
    2. halfway through a capture sequence, the capturing piece must move again (`pinned`)
    3. destination must be an empty dark square
    4. captures available? then the move must be the first hop of one of the longest sequences
    5. otherwise: a simple move, of the correct shape for a man / king

    Raises IllegalMoveError with the reason of the rejection.
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        raise IllegalMoveError(RejectionReason.INVALID_SQUARE)

    piece = board.piece(from_square)
    if piece is None or piece.color != color:
        raise IllegalMoveError(RejectionReason.PIECE_MISSING)

    if pinned is not None and from_square != pinned:
        raise IllegalMoveError(
            RejectionReason.CHAIN_PIECE_REQUIRED,
            f"Continue capturing with the piece on {pinned.to_algebraic()}",
        )

    if not to_square.is_dark() or not board.is_empty(to_square):
        raise IllegalMoveError(RejectionReason.DESTINATION_INVALID)

    sequences = (
        longest_sequences(capture_sequences(board, pinned, rules))
        if pinned is not None
        else all_capture_sequences(board, color, rules)
    )
    if sequences:
        return _match_capture(sequences, from_square, to_square)

    return _validate_simple_move(board, piece, from_square, to_square, rules)


def _match_capture(sequences: list[CaptureSequence], from_square: Square, to_square: Square) -> MoveDecision:
    for sequence in sequences:
        first_hop = sequence[0]
        if first_hop.from_square == from_square and first_hop.to_square == to_square:
            return MoveDecision(first_hop.to_move(), sequence)
    raise IllegalMoveError(RejectionReason.CAPTURE_MANDATORY)


def _validate_simple_move(
    board: Board, piece: Piece, from_square: Square, to_square: Square, rules: Rules
) -> MoveDecision:
    d_row = to_square.row - from_square.row
    d_col = to_square.col - from_square.col
    distance = abs(d_row)

    if distance != abs(d_col):
        raise IllegalMoveError(RejectionReason.NON_DIAGONAL)

    if not piece.is_king and d_row // distance != forward(piece.color):
        raise IllegalMoveError(RejectionReason.BACKWARD_MAN_MOVE)

    if distance > 1:
        if not (piece.is_king and rules.flying_kings):
            raise IllegalMoveError(RejectionReason.TOO_FAR)

        step = (d_row // distance, d_col // distance)
        path = (from_square.offset(*step, steps=i) for i in range(1, distance))
        if any(not board.is_empty(square) for square in path):
            raise IllegalMoveError(RejectionReason.PATH_BLOCKED)

    return MoveDecision(Move(from_square, to_square))
