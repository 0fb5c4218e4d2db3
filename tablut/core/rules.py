from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .square import BOARD_SIZE, SQUARES, THRONE, THRONE_NEIGHBORS, Square, sq
from .state import Move, Piece, Side

ACTION_VECTOR_SIZE = len(SQUARES) * len(SQUARES)

INITIAL_ATTACKERS: Tuple[Square, ...] = (
    sq(0, 3), sq(0, 4), sq(0, 5), sq(1, 4),
    sq(8, 3), sq(8, 4), sq(8, 5), sq(7, 4),
    sq(3, 0), sq(4, 0), sq(5, 0), sq(4, 1),
    sq(3, 8), sq(4, 8), sq(5, 8), sq(4, 7),
)
INITIAL_DEFENDERS: Tuple[Square, ...] = THRONE_NEIGHBORS + (
    sq(4, 6), sq(4, 2), sq(2, 4), sq(6, 4),
)

GridArray = np.ndarray  # shape (9, 9), dtype=np.int8, indexed [row, col]


def encode_move(move: Move) -> int:
    return move.from_sq.index * len(SQUARES) + move.to_sq.index


def decode_move(index: int) -> Move:
    if not 0 <= index < ACTION_VECTOR_SIZE:
        raise ValueError("Move index out of range.")
    origin, target = divmod(index, len(SQUARES))
    return Move(SQUARES[origin], SQUARES[target])


def empty_grid() -> GridArray:
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)


def initial_grid() -> GridArray:
    grid = empty_grid()
    for square in INITIAL_ATTACKERS:
        grid[square.row, square.col] = Piece.ATTACKER
    for square in INITIAL_DEFENDERS:
        grid[square.row, square.col] = Piece.DEFENDER
    grid[THRONE.row, THRONE.col] = Piece.KING
    return grid


def piece_at(grid: GridArray, square: Square) -> Piece:
    return Piece(int(grid[square.row, square.col]))


def side_at(grid: GridArray, square: Square) -> Optional[Side]:
    return piece_at(grid, square).side


def is_unblocked_move(grid: GridArray, from_sq: Square, to_sq: Square) -> bool:
    """True iff FROM_SQ-TO_SQ is a rook move with every square after FROM_SQ empty."""
    if not from_sq.is_rook_move(to_sq):
        return False
    direction = from_sq.direction_to(to_sq)
    distance = 1
    while True:
        step = from_sq.rook_move(direction, distance)
        if grid[step.row, step.col] != Piece.EMPTY:
            return False
        if step == to_sq:
            return True
        distance += 1


def throne_surrounded(grid: GridArray) -> bool:
    """True iff at least three of the four throne neighbours hold attackers."""
    count = sum(1 for square in THRONE_NEIGHBORS if grid[square.row, square.col] == Piece.ATTACKER)
    return count >= 3


def is_hostile_to_king(grid: GridArray, square: Square) -> bool:
    return square == THRONE or grid[square.row, square.col] == Piece.ATTACKER


def king_captured(grid: GridArray, king_sq: Square) -> bool:
    """Four-sided capture rule for a king on or beside the throne."""
    for direction in range(4):
        neighbour = king_sq.rook_move(direction, 1)
        if neighbour is None or not is_hostile_to_king(grid, neighbour):
            return False
    return True


class ThroneRule(Enum):
    NEVER = "never"
    ALWAYS = "always"
    IF_SURROUNDED = "if_surrounded"


# (throne occupant, mover side, candidate side) -> whether a piece flanked
# against the throne is taken.  Missing keys are NEVER.
THRONE_CAPTURE_TABLE: Dict[Tuple[Piece, Side, Side], ThroneRule] = {
    (Piece.EMPTY, Side.ATTACKER, Side.DEFENDER): ThroneRule.ALWAYS,
    (Piece.EMPTY, Side.DEFENDER, Side.ATTACKER): ThroneRule.ALWAYS,
    (Piece.KING, Side.DEFENDER, Side.ATTACKER): ThroneRule.ALWAYS,
    (Piece.KING, Side.ATTACKER, Side.DEFENDER): ThroneRule.IF_SURROUNDED,
}


def throne_capture_applies(grid: GridArray, mover: Side, candidate: Side) -> bool:
    occupant = piece_at(grid, THRONE)
    rule = THRONE_CAPTURE_TABLE.get((occupant, mover, candidate), ThroneRule.NEVER)
    if rule is ThroneRule.ALWAYS:
        return True
    if rule is ThroneRule.IF_SURROUNDED:
        return throne_surrounded(grid)
    return False


def capture_in_direction(grid: GridArray, square: Square, direction: int) -> Optional[Square]:
    """Return the square captured by the piece on SQUARE looking along DIRECTION, if any."""
    anchor = square.rook_move(direction, 2)
    if anchor is None:
        return None
    mover = side_at(grid, square)
    candidate_sq = square.between(anchor)
    candidate = piece_at(grid, candidate_sq)
    if mover is None or candidate is Piece.EMPTY:
        return None

    if candidate is Piece.KING and (candidate_sq == THRONE or candidate_sq in THRONE_NEIGHBORS):
        return candidate_sq if king_captured(grid, candidate_sq) else None

    if candidate.side is mover:
        return None
    if anchor == THRONE:
        return candidate_sq if throne_capture_applies(grid, mover, candidate.side) else None
    if side_at(grid, anchor) is mover:
        return candidate_sq
    return None


def collect_captures(grid: GridArray, square: Square) -> List[Square]:
    captures: List[Square] = []
    for direction in range(4):
        captured = capture_in_direction(grid, square, direction)
        if captured is not None:
            captures.append(captured)
    return captures
