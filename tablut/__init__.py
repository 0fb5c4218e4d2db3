"""Tablut rules engine and alpha-beta player."""

from . import core, env, evaluation, features, players, search
from .config import PlayConfig, load_yaml_config
from .core import Board, GameResult, Move, Piece, Side, Square
from .env import TablutEnv
from .evaluation import EvaluationResult, GameRecord, evaluate_policies, play_game
from .players import AlphaBetaPolicy, Policy, RandomPolicy, ScriptedPolicy
from .search import AlphaBetaSearch, SearchConfig, SearchResult, static_score

__all__ = [
    "core",
    "env",
    "evaluation",
    "features",
    "players",
    "search",
    "PlayConfig",
    "load_yaml_config",
    "Board",
    "GameResult",
    "Move",
    "Piece",
    "Side",
    "Square",
    "TablutEnv",
    "EvaluationResult",
    "GameRecord",
    "evaluate_policies",
    "play_game",
    "AlphaBetaPolicy",
    "Policy",
    "RandomPolicy",
    "ScriptedPolicy",
    "AlphaBetaSearch",
    "SearchConfig",
    "SearchResult",
    "static_score",
]
