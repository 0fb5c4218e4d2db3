"""Adversarial search for the automated player.

Key components:
    - AlphaBetaSearch: fixed-depth minimax with alpha-beta pruning
    - SearchConfig: search depth, defaulting to a single ply
    - static_score: material balance plus a terminal bonus
"""

from .alphabeta import AlphaBetaSearch, SearchConfig, SearchResult, sense_for
from .evaluation import WIN_BONUS, EvaluationFn, material_balance, static_score, terminal_bonus

__all__ = [
    "AlphaBetaSearch",
    "SearchConfig",
    "SearchResult",
    "sense_for",
    "EvaluationFn",
    "WIN_BONUS",
    "material_balance",
    "static_score",
    "terminal_bonus",
]
