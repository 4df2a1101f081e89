#!/usr/bin/env python3
"""Simulate many consecutive draws and report sit-out and partner fairness.

Usage: courtdraw-sim [--players N | --names A B C ...] [--courts N]
                     [--mode normal|smart] [--rounds R] [--seed S]
"""

import argparse
import sys
from pathlib import Path

from courtdraw.config import default_config, load_config
from courtdraw.errors import CourtDrawError
from courtdraw.models import DrawMode
from courtdraw.stats import compute_stats, format_stats_report, simulate


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Simulate consecutive draws and report fairness",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config YAML file (courts, mode, max attempts)"
    )
    parser.add_argument(
        "-p", "--players", type=int, default=10,
        help="Number of generated players P1..PN (default: 10)"
    )
    parser.add_argument(
        "--names", nargs="+", default=None,
        help="Explicit player names (overrides --players)"
    )
    parser.add_argument("--courts", type=int, default=None)
    parser.add_argument("--mode", choices=["normal", "smart"], default=None)
    parser.add_argument(
        "-r", "--rounds", type=int, default=20,
        help="Rounds to draw (default: 20)"
    )
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    if args.config is not None:
        if not Path(args.config).exists():
            print(f"Error: config file {args.config} not found")
            sys.exit(1)
        config = load_config(args.config)
    else:
        config = default_config()

    roster = args.names or [f"P{i}" for i in range(1, args.players + 1)]
    courts = args.courts if args.courts is not None else config["session"]["courts"]
    mode = DrawMode.from_str(args.mode) if args.mode else config["session"]["mode"]

    print(f"Simulating {args.rounds} {mode.value} rounds: "
          f"{len(roster)} players, {courts} courts (seed={args.seed})...")
    try:
        rounds = simulate(roster, courts, mode, args.rounds, seed=args.seed,
                          max_attempts=config["draw"]["max_attempts"])
    except (CourtDrawError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    stats = compute_stats(rounds, roster, courts)
    print(format_stats_report(stats))
    sys.exit(1 if stats["invalid"] else 0)


if __name__ == "__main__":
    main()
