#!/usr/bin/env python3
"""Play Tablut against the alpha-beta player in the console."""

import argparse
import logging
import sys
from typing import Callable, Optional

from tablut import AlphaBetaPolicy, Board, GameResult, Move, PlayConfig, Side, load_yaml_config

InputFn = Callable[[str], str]


def parse_side(text: Optional[str]) -> Optional[Side]:
    if text is None:
        return None
    return Side(text)


def prompt_human_move(board: Board, input_fn: InputFn = input) -> Optional[Move]:
    """Ask for a move until a legal one is entered; None means the player quit."""
    while True:
        raw = input_fn(f"{board.turn.value} move (e.g. e2-e4, q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            return None
        try:
            move = Move.parse(raw)
        except ValueError:
            print("Moves look like e2-e4.")
            continue
        reason = board.check_move(move.from_sq, move.to_sq)
        if reason is None:
            return move
        print(f"Illegal move: {reason}.")


def describe_result(board: Board) -> str:
    if board.result == GameResult.DEFENDER_WIN:
        text = "Defenders win"
    elif board.result == GameResult.ATTACKER_WIN:
        text = "Attackers win"
    else:
        return "Game abandoned."
    if board.repeated_position:
        text += " (repeated position)"
    return text + "."


def play_interactive(config: PlayConfig, input_fn: InputFn = input) -> Board:
    board = Board()
    if config.move_limit:
        board.set_move_limit(config.move_limit)
    human = parse_side(config.human_side)
    ai = AlphaBetaPolicy(config.search_config())

    while not board.is_terminal:
        print()
        print(board.render(coordinates=config.show_coordinates))
        if board.turn is human:
            move = prompt_human_move(board, input_fn)
            if move is None:
                break
        else:
            move = ai.choose(board)
            print(f"AI ({board.turn.value}) plays {move}")
        board.make_move(move)

    print()
    print(board.render(coordinates=config.show_coordinates))
    print(describe_result(board))
    return board


def build_config(args: argparse.Namespace) -> PlayConfig:
    cfg = load_yaml_config(args.config)
    if args.depth is not None:
        cfg["search_depth"] = args.depth
    if args.move_limit is not None:
        cfg["move_limit"] = args.move_limit
    if args.human_side is not None:
        cfg["human_side"] = None if args.human_side == "none" else args.human_side
    if args.no_coordinates:
        cfg["show_coordinates"] = False
    return PlayConfig.from_mapping(cfg)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Tablut in the console against the AI.")
    parser.add_argument("--config", default="configs/play.yaml")
    parser.add_argument("--human-side", choices=["attacker", "defender", "none"], default=None)
    parser.add_argument("--depth", type=int, default=None)
    parser.add_argument("--move-limit", type=int, default=None)
    parser.add_argument("--no-coordinates", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        play_interactive(build_config(args))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
