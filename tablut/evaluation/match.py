from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from tablut.core import Board, GameResult, IllegalMoveError, Move, Side
from tablut.players import Policy

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    moves: List[Move] = field(default_factory=list)
    result: GameResult = GameResult.ONGOING
    repeated_position: bool = False

    @property
    def length(self) -> int:
        return len(self.moves)


@dataclass
class EvaluationResult:
    games_played: int
    attacker_wins: int
    defender_wins: int
    unfinished: int
    average_length: float
    records: List[GameRecord] = field(default_factory=list)

    def winrate_attacker(self) -> float:
        return self.attacker_wins / max(1, self.games_played)

    def winrate_defender(self) -> float:
        return self.defender_wins / max(1, self.games_played)


def play_game(
    attacker: Policy,
    defender: Policy,
    *,
    move_limit: int = 0,
    max_moves: Optional[int] = None,
    board: Optional[Board] = None,
) -> GameRecord:
    """Alternate ATTACKER and DEFENDER on one board until it reports a winner.

    MAX_MOVES stops the game early and leaves it ``ONGOING``.
    """
    board = board if board is not None else Board(move_limit=move_limit)
    record = GameRecord()

    while not board.is_terminal:
        if max_moves is not None and record.length >= max_moves:
            break
        policy = attacker if board.turn is Side.ATTACKER else defender
        move = policy.choose(board)
        result = board.make_move(move)
        if not result:
            raise IllegalMoveError(f"{board.turn.value} played illegal move {move}: {result.reason}.")
        record.moves.append(move)

    record.result = board.result
    record.repeated_position = board.repeated_position
    logger.info("game finished: %s after %d moves", record.result.value, record.length)
    return record


def evaluate_policies(
    attacker: Policy,
    defender: Policy,
    *,
    episodes: int,
    move_limit: int = 0,
    max_moves: Optional[int] = None,
    seed: Optional[int] = None,
) -> EvaluationResult:
    """Play EPISODES games, spawning both policies afresh for each one.

    SEED fixes the per-game seeds handed to ``spawn``, so equal seeds replay
    the same games.
    """
    rng = np.random.default_rng(seed)
    game_seeds = rng.integers(0, 2**31 - 1, size=(episodes, 2))
    attacker_wins = 0
    defender_wins = 0
    unfinished = 0
    total_moves = 0
    records: List[GameRecord] = []

    for attacker_seed, defender_seed in game_seeds:
        record = play_game(
            attacker.spawn(int(attacker_seed)),
            defender.spawn(int(defender_seed)),
            move_limit=move_limit,
            max_moves=max_moves,
        )
        records.append(record)
        total_moves += record.length
        if record.result == GameResult.ATTACKER_WIN:
            attacker_wins += 1
        elif record.result == GameResult.DEFENDER_WIN:
            defender_wins += 1
        else:
            unfinished += 1

    return EvaluationResult(
        games_played=episodes,
        attacker_wins=attacker_wins,
        defender_wins=defender_wins,
        unfinished=unfinished,
        average_length=total_moves / max(1, episodes),
        records=records,
    )
