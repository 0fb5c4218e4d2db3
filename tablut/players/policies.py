from __future__ import annotations

from copy import deepcopy
from typing import Iterable, List, Optional

import numpy as np

from tablut.core import Board, Move
from tablut.search import AlphaBetaSearch, SearchConfig


class Policy:
    """Policy interface choosing one move for the side to move."""

    def choose(self, board: Board) -> Move:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Policy":
        """Return a fresh copy of this policy for another game."""
        return self


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def choose(self, board: Board) -> Move:
        moves = board.legal_moves(board.turn)
        if not moves:
            raise ValueError("No legal moves available.")
        return moves[int(self.rng.integers(len(moves)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPolicy":
        return RandomPolicy(np.random.default_rng(seed))


class AlphaBetaPolicy(Policy):
    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self._config = deepcopy(config) if config else SearchConfig()
        self.search = AlphaBetaSearch(self._config)

    def choose(self, board: Board) -> Move:
        return self.search.best_move(board)

    def spawn(self, seed: Optional[int] = None) -> "AlphaBetaPolicy":
        return AlphaBetaPolicy(self._config)


class ScriptedPolicy(Policy):
    """Replays moves given in ``e2-e4`` notation, in order."""

    def __init__(self, moves: Iterable[str]) -> None:
        self._moves: List[Move] = [Move.parse(text) for text in moves]
        self._cursor = 0

    def choose(self, board: Board) -> Move:
        if self._cursor >= len(self._moves):
            raise ValueError("Scripted policy has run out of moves.")
        move = self._moves[self._cursor]
        self._cursor += 1
        return move

    def spawn(self, seed: Optional[int] = None) -> "ScriptedPolicy":
        return ScriptedPolicy(str(move) for move in self._moves)
