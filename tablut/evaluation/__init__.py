"""Match helpers for Tablut policies."""

from .match import EvaluationResult, GameRecord, evaluate_policies, play_game

__all__ = ["EvaluationResult", "GameRecord", "evaluate_policies", "play_game"]
