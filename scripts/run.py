#!/usr/bin/env python3
"""
Run a single game and print every round. Verifies the engine works end-to-end.

Usage:
    python -m scripts.run [--loyalists 16] [--traitors 4] [--seed SEED]
    python -m scripts.run --strategy fixate --end-condition all_one_type
    python -m scripts.run --type influence
"""
import argparse
import random
import sys

from quorum.config import EndCondition, SimulationType, VotingStrategy
from quorum.orchestrator import VotingGame


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one loyalist/traitor voting game")
    parser.add_argument("--loyalists", type=int, default=16)
    parser.add_argument("--traitors", type=int, default=4)
    parser.add_argument("--strategy", choices=[s.value for s in VotingStrategy], default="random")
    parser.add_argument("--end-condition", choices=[e.value for e in EndCondition],
                        default="first_traitor_removed")
    parser.add_argument("--type", choices=[t.value for t in SimulationType], default="random")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-round output")
    args = parser.parse_args()

    if args.seed is not None:
        print(f"[seed={args.seed}]")

    try:
        game = VotingGame(
            args.loyalists,
            args.traitors,
            end_condition=EndCondition(args.end_condition),
            voting_strategy=VotingStrategy(args.strategy),
            simulation_type=SimulationType(args.type),
            rng=random.Random(args.seed),
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    result = game.run(verbose=not args.quiet)

    if args.quiet:
        print(f"{result.outcome.value} after {result.total_rounds} rounds")

    sys.exit(0)


if __name__ == "__main__":
    main()
