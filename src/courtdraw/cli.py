#!/usr/bin/env python3
"""Badminton court draw: roster, rounds and round timer from the terminal.

    courtdraw add Aki Ben Chie Dan Emi
    courtdraw draw --courts 1 --mode smart
    courtdraw swap 1.2 w1
    courtdraw timer --minutes 7
    courtdraw timer --preset 2

State (roster, saved base roster, last two rounds of history and the
current board) lives in a JSON file, `courtdraw.json` by default.

Examples:
    courtdraw list                      # show roster
    courtdraw save-base                 # remember tonight's regulars
    courtdraw apply-base                # restore them next week (clears history)
    courtdraw --seed 7 draw             # reproducible draw
"""

import argparse
import random
import sys
import time
from pathlib import Path

from courtdraw.config import default_config, load_config, parse_duration
from courtdraw.errors import CourtDrawError
from courtdraw.models import SlotRef
from courtdraw.output import format_board, format_roster, format_session
from courtdraw.session import SessionController
from courtdraw.store import JsonFileStore

DEFAULT_CONFIG = "config.yaml"


class TerminalAlarm:
    """Rings the terminal bell once per second for the alarm duration."""

    def __init__(self, out=None):
        self.out = out or sys.stdout
        self.ringing = False

    def play(self, duration_seconds: int) -> None:
        self.ringing = True
        print("\nTime's up!", file=self.out)
        for _ in range(duration_seconds):
            if not self.ringing:
                break
            self.out.write("\a")
            self.out.flush()
            time.sleep(1)
        self.ringing = False

    def stop(self) -> None:
        self.ringing = False


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courtdraw",
        description="Badminton court draw and round timer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Slots (for swap):
  C.P   court C, position P (1-based; positions 1-2 vs 3-4)
  wN    waiting list entry N (1-based)

Exit codes:
  0  Success
  1  Reported error (too few players, no saved base roster, bad slot, ...)
""",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG,
        help=f"Path to config YAML file (default: {DEFAULT_CONFIG})"
    )
    parser.add_argument(
        "--store", default=None,
        help="Path to the JSON state file (default: from config)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for reproducible draws"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add", help="Add players to the roster")
    p.add_argument("names", nargs="+")
    p = sub.add_parser("remove", help="Remove players from the roster")
    p.add_argument("names", nargs="+")
    sub.add_parser("list", help="Show the roster")
    sub.add_parser("save-base", help="Save the current roster as the base roster")
    sub.add_parser("apply-base", help="Replace the roster with the saved base roster")

    p = sub.add_parser("draw", help="Draw a new round")
    p.add_argument("--courts", type=int, default=None,
                   help="Number of courts (default: from config)")
    p.add_argument("--mode", choices=["normal", "smart"], default=None,
                   help="Draw mode (default: from config)")

    sub.add_parser("show", help="Show the current board")

    p = sub.add_parser("swap", help="Swap the players in two slots")
    p.add_argument("first")
    p.add_argument("second")

    p = sub.add_parser("timer", help="Run the round countdown")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--seconds", default=None,
                       help="Round length, e.g. 90, 90s, 7m, 7:30")
    group.add_argument("--minutes", type=int, default=None,
                       help="Custom round length in minutes")
    group.add_argument("--preset", type=int, default=None,
                       help="Preset number from config timer.presets (1-based)")
    return parser


def _load_config(path: str) -> dict:
    if Path(path).exists():
        return load_config(path)
    if path != DEFAULT_CONFIG:
        print(f"Error: config file {path} not found")
        sys.exit(1)
    return default_config()


def run_timer(session: SessionController, seconds=None, minutes=None,
              preset=None) -> None:
    if preset is not None:
        presets = session.timer_presets
        if not 1 <= preset <= len(presets):
            raise ValueError(
                f"Preset must be between 1 and {len(presets)}, got {preset}"
            )
        session.on_set_timer_preset(presets[preset - 1])
    elif minutes is not None:
        session.on_set_timer_custom(minutes)
    elif seconds is not None:
        session.on_set_timer_seconds(parse_duration(seconds))

    session.timer_visible = True
    session.on_timer_toggle()
    try:
        while session.timer.running:
            print(f"\r{session.timer.display()}", end="", flush=True)
            time.sleep(1)
            session.on_timer_tick()
        print(f"\r{session.timer.display()}")
    except KeyboardInterrupt:
        session.on_timer_reset()
        print("\nTimer stopped.")


def main(argv=None):
    args = _build_parser().parse_args(argv)
    config = _load_config(args.config)

    store_path = args.store or config["session"]["store"]
    try:
        session = SessionController(
            store=JsonFileStore(store_path),
            config=config,
            rng=random.Random(args.seed),
            alarm=TerminalAlarm(),
        )

        if args.command == "add":
            for name in args.names:
                if not session.on_add_player(name):
                    print(f"Skipped {name!r} (empty or already on the roster)")
            print(format_roster(session.roster.names))
            print(session.draw_label)

        elif args.command == "remove":
            for name in args.names:
                if not session.on_remove_player(name):
                    print(f"{name!r} is not on the roster")
            print(format_roster(session.roster.names))

        elif args.command == "list":
            print(format_roster(session.roster.names))
            print(session.draw_label)

        elif args.command == "save-base":
            count = session.on_save_base()
            print(f"Saved {count} players as the base roster.")

        elif args.command == "apply-base":
            names = session.on_apply_base()
            print(f"Applied base roster ({len(names)} players); history cleared.")
            print(format_roster(names))

        elif args.command == "draw":
            if args.courts is not None:
                session.on_set_courts(args.courts)
            if args.mode is not None:
                session.on_set_mode(args.mode)
            result = session.on_draw()
            if result.fallback:
                print("Note: could not avoid repeating a recent partnership.")
            print(format_board(session.board))

        elif args.command == "show":
            print(format_session(session))

        elif args.command == "swap":
            a = SlotRef.parse(args.first)
            b = SlotRef.parse(args.second)
            session.on_slot_clicked(a)
            session.on_slot_clicked(b)
            print(format_board(session.board))

        elif args.command == "timer":
            run_timer(session, seconds=args.seconds, minutes=args.minutes,
                      preset=args.preset)

    except (CourtDrawError, IndexError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
