"""
Move Generator
-----

Geometry of checkers moves and captures.

Key idea: like the simple moves, the capture rules per piece type are plugged in with a strategy pattern.
* men step/jump to a neighbouring diagonal square
* kings scan along the diagonals (raycasting) for their captures

Legality of a single request (mandatory capture, longest sequence, ...) is decided by the validator,
which uses the sets generated here.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Self

from src.checkers.board import Board
from src.checkers.mutator import relocate
from src.checkers.pieces import Color, PieceType
from src.checkers.rules import (
    DEFAULT_RULES,
    DIAGONALS,
    Rules,
    Vector,
    forward_diagonals,
)
from src.checkers.square import Square


@dataclass(frozen=True)
class Move:
    """
    A single leg: one step, a king slide, or one hop of a capture.

    Notation: "c3-d4" for a simple move, "c3xe5" for a capture
    """

    from_square: Square
    to_square: Square
    is_capture: bool = False

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        separator = "x" if "x" in notation else "-"
        from_alg, to_alg = notation.split(separator)
        return cls(
            Square.from_algebraic(from_alg),
            Square.from_algebraic(to_alg),
            is_capture=separator == "x",
        )

    def to_notation(self) -> str:
        separator = "x" if self.is_capture else "-"
        return f"{self.from_square.to_algebraic()}{separator}{self.to_square.to_algebraic()}"


@dataclass(frozen=True)
class Capture:
    """Unit hop: jump from `from_square` over the piece on `over` and land on `to_square`"""

    from_square: Square
    over: Square
    to_square: Square

    def to_move(self) -> Move:
        return Move(self.from_square, self.to_square, is_capture=True)


# ordered hops by the same piece, each one starting where the previous one landed
CaptureSequence = tuple[Capture, ...]


def diagonal_ray(square: Square, direction: Vector) -> Iterator[Square]:
    """All squares along a diagonal, walking away from `square` until the edge of the board"""
    d_row, d_col = direction
    target = square.offset(d_row, d_col)
    while target.is_within_bounds():
        yield target
        target = target.offset(d_row, d_col)


# --- SIMPLE MOVES ---
def man_simple_moves(square: Square, board: Board, rules: Rules) -> list[Move]:
    """A man steps one square diagonally forward (towards the opponent's back rank) onto an empty square"""
    piece = board.piece(square)
    assert piece is not None
    moves: list[Move] = []
    for d_row, d_col in forward_diagonals(piece.color):
        target = square.offset(d_row, d_col)
        if target.is_within_bounds() and board.is_empty(target):
            moves.append(Move(square, target))
    return moves


def king_simple_moves(square: Square, board: Board, rules: Rules) -> list[Move]:
    """
    A king steps one square diagonally in any of the four directions.
    With flying kings, it slides along the diagonal until it runs into a piece or the edge.
    """
    moves: list[Move] = []
    for direction in DIAGONALS:
        for target in diagonal_ray(square, direction):
            if not board.is_empty(target):
                break
            moves.append(Move(square, target))
            if not rules.flying_kings:
                break
    return moves


# --- CAPTURES ---
def man_captures(square: Square, board: Board, rules: Rules) -> list[Capture]:
    """
    A man jumps over an adjacent opposing piece onto the empty square directly behind it.
    Only forwards, unless the rule variant lets men capture backwards as well.
    """
    piece = board.piece(square)
    assert piece is not None
    directions = DIAGONALS if rules.men_capture_backward else forward_diagonals(piece.color)

    captures: list[Capture] = []
    for d_row, d_col in directions:
        over = square.offset(d_row, d_col)
        landing = square.offset(d_row, d_col, steps=2)
        if not landing.is_within_bounds():
            continue

        jumped = board.piece(over)
        if jumped is not None and jumped.color != piece.color and board.is_empty(landing):
            captures.append(Capture(square, over, landing))
    return captures


def king_captures(square: Square, board: Board, rules: Rules) -> list[Capture]:
    """
    Raycasting along the four diagonals.
    ----

    * empty squares are skipped
    * running into your own piece blocks the direction
    * the first opposing piece can be jumped: every empty square behind it is a landing square,
      up to the next piece or the edge of the board
    * two pieces in a row cannot be jumped in one hop, so nothing is found in that direction
    """
    piece = board.piece(square)
    assert piece is not None

    captures: list[Capture] = []
    for direction in DIAGONALS:
        over: Optional[Square] = None
        for target in diagonal_ray(square, direction):
            occupant = board.piece(target)
            if over is None:
                if occupant is None:
                    continue
                if occupant.color == piece.color:
                    break
                over = target
                continue

            if occupant is not None:
                break
            captures.append(Capture(square, over, target))
    return captures


# -- STRATEGY PATTERN: MOVEMENT + CAPTURING RULES ---
SimpleMovesFn = Callable[[Square, Board, Rules], list[Move]]
CapturesFn = Callable[[Square, Board, Rules], list[Capture]]

MOVEMENT_RULES: dict[PieceType, SimpleMovesFn] = {
    PieceType.MAN: man_simple_moves,
    PieceType.KING: king_simple_moves,
}

CAPTURE_RULES: dict[PieceType, CapturesFn] = {
    PieceType.MAN: man_captures,
    PieceType.KING: king_captures,
}


def simple_moves(board: Board, square: Square, rules: Rules = DEFAULT_RULES) -> list[Move]:
    piece = board.piece(square)
    if piece is None:
        return []
    return MOVEMENT_RULES[piece.type](square, board, rules)


def captures_for_piece(board: Board, square: Square, rules: Rules = DEFAULT_RULES) -> list[Capture]:
    piece = board.piece(square)
    if piece is None:
        return []
    return CAPTURE_RULES[piece.type](square, board, rules)


def capture_sequences(board: Board, square: Square, rules: Rules = DEFAULT_RULES) -> list[CaptureSequence]:
    """
    All maximal capture chains for the piece on `square`.
    ----

    Every hop is played on its own copy of the board (captured piece removed, mover relocated, promoted if it reached
    the back rank) and the search recurses from the landing square. A chain ends when no further hop exists from
    where the piece landed. Only complete chains are returned, never their prefixes.

    A man that gets promoted halfway continues with the capturing rules of a king,
    unless `rules.promotion_ends_chain` is set.
    """
    sequences: list[CaptureSequence] = []
    for capture in captures_for_piece(board, square, rules):
        after_hop = relocate(board, capture.from_square, capture.to_square, captured=capture.over)

        continuations: list[CaptureSequence] = []
        if not (after_hop.promoted and rules.promotion_ends_chain):
            continuations = capture_sequences(after_hop.board, capture.to_square, rules)

        if continuations:
            sequences.extend((capture, *continuation) for continuation in continuations)
        else:
            sequences.append((capture,))
    return sequences


def longest_sequences(sequences: list[CaptureSequence]) -> list[CaptureSequence]:
    """Only the sequences capturing the most pieces are legal"""
    if not sequences:
        return []
    max_length = max(len(sequence) for sequence in sequences)
    return [sequence for sequence in sequences if len(sequence) == max_length]


def all_capture_sequences(board: Board, color: Color, rules: Rules = DEFAULT_RULES) -> list[CaptureSequence]:
    """Capture chains of every piece of the given color, filtered down to the longest ones"""
    sequences: list[CaptureSequence] = []
    for square in board.locate_color(color):
        sequences.extend(capture_sequences(board, square, rules))
    return longest_sequences(sequences)


def all_simple_moves(board: Board, color: Color, rules: Rules = DEFAULT_RULES) -> list[Move]:
    moves: list[Move] = []
    for square in board.locate_color(color):
        moves.extend(simple_moves(board, square, rules))
    return moves


def has_any_legal_move(board: Board, color: Color, rules: Rules = DEFAULT_RULES) -> bool:
    """Stops at the first piece that can either step or capture"""
    return any(
        simple_moves(board, square, rules) or captures_for_piece(board, square, rules)
        for square in board.locate_color(color)
    )


def first_legs(sequences: list[CaptureSequence]) -> list[Move]:
    """Distinct opening hops of the given sequences, in the order they were found"""
    return list(dict.fromkeys(sequence[0].to_move() for sequence in sequences))


def legal_moves(
    board: Board,
    color: Color,
    rules: Rules = DEFAULT_RULES,
    pinned: Optional[Square] = None,
) -> list[Move]:
    """
    The moves the player can request right now.
    ----

    1. in the middle of a capture sequence: only the next hops of the capturing piece
    2. any capture available: only the first hops of the longest sequences (mandatory capture)
    3. otherwise: all simple moves
    """
    if pinned is not None:
        return first_legs(longest_sequences(capture_sequences(board, pinned, rules)))

    captures = all_capture_sequences(board, color, rules)
    if captures:
        return first_legs(captures)
    return all_simple_moves(board, color, rules)
