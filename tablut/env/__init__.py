"""Gymnasium environment for Tablut."""

from .gym_env import TablutEnv

__all__ = ["TablutEnv"]
