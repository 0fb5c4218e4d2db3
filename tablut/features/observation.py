from __future__ import annotations

from typing import Tuple

import numpy as np

from tablut.core import BOARD_SIZE, Board, Piece, Side

BOARD_CHANNELS = 3  # attackers, defenders, king
AUX_VECTOR_SIZE = 2  # side to move one-hot (attacker, defender)

_CHANNEL_PIECES = (Piece.ATTACKER, Piece.DEFENDER, Piece.KING)


def build_board_tensor(board: Board) -> np.ndarray:
    """Return board tensor with shape (3, 9, 9) channel-first, row 0 = rank 1."""
    grid = board.grid
    tensor = np.zeros((BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    for channel, piece in enumerate(_CHANNEL_PIECES):
        tensor[channel] = grid == piece
    return tensor


def build_aux_vector(board: Board) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[0 if board.turn is Side.ATTACKER else 1] = 1.0
    return aux


def board_to_numpy(board: Board) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(board), build_aux_vector(board)
