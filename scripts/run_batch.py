#!/usr/bin/env python3
"""
Run a Monte Carlo batch and print round statistics.

Defaults come from config.yaml; flags override them.

Usage:
    python -m scripts.run_batch
    python -m scripts.run_batch --iterations 5000 --loyalists 8 --traitors 2
    python -m scripts.run_batch --type influence --seed 7 --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from quorum.config import EndCondition, SimulationType, VotingStrategy, load_simulation_config
from quorum.montecarlo import run_simulation


def _print_report(report) -> None:
    stats = report.statistics
    total = len(report.results)
    print(f"\n{'='*50}")
    print(f"{total} games")
    print(f"  mean {stats.mean:.2f} | median {stats.median:g} | mode {stats.mode}")
    print(f"  min {stats.min} | max {stats.max} | std-dev {stats.std_dev:.2f}")

    print("\nOutcomes:")
    for outcome, count in sorted(report.outcomes.items(), key=lambda kv: -kv[1]):
        print(f"  {outcome.value:<16} {count:>7}  {count / total:.1%}")

    print("\nRounds to completion:")
    peak = max((n for _, n in report.frequencies), default=0)
    for rounds, count in report.frequencies:
        bar = "#" * max(1, round(40 * count / peak)) if peak else ""
        print(f"  {rounds:>3} {count:>7} {bar}")
    print(f"{'='*50}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Monte Carlo loyalist/traitor voting simulation")
    parser.add_argument("--config", default=None, help="Path to YAML config (default: config.yaml)")
    parser.add_argument("--iterations", type=int)
    parser.add_argument("--loyalists", type=int)
    parser.add_argument("--traitors", type=int)
    parser.add_argument("--batch-size", type=int)
    parser.add_argument("--strategy", choices=[s.value for s in VotingStrategy])
    parser.add_argument("--end-condition", choices=[e.value for e in EndCondition])
    parser.add_argument("--type", choices=[t.value for t in SimulationType])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    overrides = {
        "iterations": args.iterations,
        "loyalists": args.loyalists,
        "traitors": args.traitors,
        "batch_size": args.batch_size,
        "voting_strategy": args.strategy,
        "end_condition": args.end_condition,
        "simulation_type": args.type,
        "seed": args.seed,
    }
    try:
        base = load_simulation_config(args.config)
        config = base.model_validate({
            **base.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        })
    except ValidationError as e:
        print(f"invalid configuration:\n{e}", file=sys.stderr)
        sys.exit(2)

    def on_progress(done: int, total: int) -> None:
        if not args.json:
            print(f"\r  {done}/{total} games", end="", flush=True)

    report = run_simulation(config, progress=on_progress)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)

    sys.exit(0)


if __name__ == "__main__":
    main()
