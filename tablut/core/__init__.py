"""Core game logic for Tablut."""

from .board import Board
from .errors import BoardInvariantError, IllegalMoveError, MoveLimitError
from .rules import (
    ACTION_VECTOR_SIZE,
    INITIAL_ATTACKERS,
    INITIAL_DEFENDERS,
    THRONE_CAPTURE_TABLE,
    ThroneRule,
    decode_move,
    encode_move,
)
from .square import BOARD_SIZE, SQUARES, THRONE, THRONE_NEIGHBORS, Square, parse_square, sq
from .state import GameResult, Move, MoveRecord, MoveResult, Piece, Side

__all__ = [
    "Board",
    "BoardInvariantError",
    "IllegalMoveError",
    "MoveLimitError",
    "ACTION_VECTOR_SIZE",
    "INITIAL_ATTACKERS",
    "INITIAL_DEFENDERS",
    "THRONE_CAPTURE_TABLE",
    "ThroneRule",
    "decode_move",
    "encode_move",
    "BOARD_SIZE",
    "SQUARES",
    "THRONE",
    "THRONE_NEIGHBORS",
    "Square",
    "parse_square",
    "sq",
    "GameResult",
    "Move",
    "MoveRecord",
    "MoveResult",
    "Piece",
    "Side",
]
