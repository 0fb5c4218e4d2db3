"""
Minimax search with alpha-beta pruning over the Tablut board.

The search copies the caller's board once and then walks the game tree by
applying and undoing moves on that private copy.  Values are always from the
defenders' point of view: the defenders maximise (sense +1) and the attackers
minimise (sense -1).  Moves are tried in the order ``Board.legal_moves``
produces them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from tablut.core import Board, Move, Side

from .evaluation import EvaluationFn, static_score

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    # One ply reproduces the reference engine's greedy lookahead.
    depth: int = 1

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError("Search depth must be at least 1.")


@dataclass
class SearchResult:
    move: Optional[Move]
    value: float
    nodes: int


def sense_for(side: Side) -> int:
    return 1 if side is Side.DEFENDER else -1


class AlphaBetaSearch:
    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        *,
        evaluator: EvaluationFn = static_score,
    ) -> None:
        self.config = config or SearchConfig()
        self.evaluator = evaluator
        self._best_move: Optional[Move] = None
        self._nodes = 0

    def run(self, board: Board) -> SearchResult:
        if board.is_terminal:
            raise ValueError("Cannot search a finished game.")
        if not board.has_move(board.turn):
            raise ValueError("No legal moves available.")

        root = board.copy()
        self._best_move = None
        self._nodes = 0
        value = self._find_move(
            root,
            self.config.depth,
            True,
            sense_for(root.turn),
            -math.inf,
            math.inf,
        )
        logger.debug(
            "search depth=%d side=%s move=%s value=%s nodes=%d",
            self.config.depth,
            board.turn.value,
            self._best_move,
            value,
            self._nodes,
        )
        return SearchResult(move=self._best_move, value=value, nodes=self._nodes)

    def best_move(self, board: Board) -> Move:
        result = self.run(board)
        assert result.move is not None
        return result.move

    def _find_move(
        self,
        board: Board,
        depth: int,
        save_move: bool,
        sense: int,
        alpha: float,
        beta: float,
    ) -> float:
        """Return the value of BOARD searched DEPTH plies deep.

        Records the chosen move in ``_best_move`` only when SAVE_MOVE is set,
        which is the case for the root call alone.
        """
        self._nodes += 1
        if board.winner is not None or depth == 0:
            return self.evaluator(board)

        side = Side.DEFENDER if sense == 1 else Side.ATTACKER
        moves = board.legal_moves(side)
        if not moves:
            return self.evaluator(board)

        best = -math.inf if sense == 1 else math.inf
        for move in moves:
            result = board.make_move(move)
            if not result:
                continue
            value = self._find_move(board, depth - 1, False, -sense, alpha, beta)
            board.undo()

            if sense == 1:
                if value > best:
                    best = value
                    if save_move:
                        self._best_move = move
                alpha = max(alpha, best)
            else:
                if value < best:
                    best = value
                    if save_move:
                        self._best_move = move
                beta = min(beta, best)
            if alpha >= beta:
                break
        return best
