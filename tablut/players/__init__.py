"""Move-selection policies."""

from .policies import AlphaBetaPolicy, Policy, RandomPolicy, ScriptedPolicy

__all__ = ["AlphaBetaPolicy", "Policy", "RandomPolicy", "ScriptedPolicy"]
