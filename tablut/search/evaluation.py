from __future__ import annotations

from typing import Callable

from tablut.core import Board, Side

EvaluationFn = Callable[[Board], float]

# Added to or subtracted from the material balance once a side has won.
WIN_BONUS = 9 * 11


def material_balance(board: Board) -> int:
    """Defender pieces (king included) minus attacker pieces."""
    return board.piece_count(Side.DEFENDER) - board.piece_count(Side.ATTACKER)


def terminal_bonus(board: Board) -> int:
    if board.winner is Side.DEFENDER:
        return WIN_BONUS
    if board.winner is Side.ATTACKER:
        return -WIN_BONUS
    return 0


def static_score(board: Board) -> int:
    """Positive values favour the defenders, negative values the attackers."""
    return material_balance(board) + terminal_bonus(board)
