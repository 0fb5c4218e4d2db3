#!/usr/bin/env python3
"""Play the alpha-beta player against a random baseline and report results."""

import argparse
import json
import logging


from tablut.evaluation import evaluate_policies
from tablut.players import AlphaBetaPolicy, RandomPolicy
from tablut.search import SearchConfig


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=10)
    parser.add_argument("--depth", type=int, default=1)
    parser.add_argument("--search-side", choices=["attacker", "defender"], default="defender")
    parser.add_argument("--move-limit", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    search_policy = AlphaBetaPolicy(SearchConfig(depth=args.depth))
    baseline_policy = RandomPolicy()
    if args.search_side == "attacker":
        attacker, defender = search_policy, baseline_policy
    else:
        attacker, defender = baseline_policy, search_policy

    result = evaluate_policies(
        attacker,
        defender,
        episodes=args.episodes,
        move_limit=args.move_limit,
        seed=args.seed,
    )

    output = {
        "games": result.games_played,
        "attacker_wins": result.attacker_wins,
        "defender_wins": result.defender_wins,
        "unfinished": result.unfinished,
        "average_length": result.average_length,
        "attacker_winrate": result.winrate_attacker(),
        "defender_winrate": result.winrate_defender(),
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
