from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from tablut.core import (
    ACTION_VECTOR_SIZE,
    BOARD_SIZE,
    Board,
    GameResult,
    IllegalMoveError,
    decode_move,
    encode_move,
)
from tablut.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor


class TablutEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        move_limit: int = 0,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._move_limit = move_limit
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(ACTION_VECTOR_SIZE)

        self._board = Board(move_limit=move_limit)

    @property
    def board(self) -> Board:
        return self._board

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        move_limit = options.get("move_limit", self._move_limit) if options else self._move_limit
        self._board = Board(move_limit=move_limit)
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        move = decode_move(int(action_index))
        result = self._board.make_move(move)
        if not result and self._enforce_legal:
            raise IllegalMoveError(f"Illegal move {move}: {result.reason}.")

        observation = self._build_observation()
        info = self._build_info()
        info["applied"] = result.applied

        reward = self._compute_reward(self._board.result)
        terminated = self._board.is_terminal
        truncated = False

        return observation, reward, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._board.is_terminal:
            return mask
        for move in self._board.legal_moves(self._board.turn):
            mask[encode_move(move)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._board.render()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._board), "aux": build_aux_vector(self._board)}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "repeated_position": self._board.repeated_position,
        }

    def _compute_reward(self, result: GameResult) -> float:
        if result == GameResult.DEFENDER_WIN:
            return 1.0
        if result == GameResult.ATTACKER_WIN:
            return -1.0
        return 0.0
