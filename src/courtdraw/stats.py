"""Fairness statistics over a run of consecutive draws."""

import random
from collections import defaultdict

from courtdraw.draw import MAX_PAIRING_ATTEMPTS, draw_round
from courtdraw.history import HistoryLog
from courtdraw.models import DrawMode, Round
from courtdraw.verify import verify_round


def simulate(roster: list[str], court_count: int, mode: DrawMode,
             rounds: int, seed: int | None = None,
             max_attempts: int = MAX_PAIRING_ATTEMPTS) -> list[Round]:
    """Draw `rounds` consecutive rounds, feeding each into the history."""
    rng = random.Random(seed)
    history = HistoryLog()
    out = []
    for _ in range(rounds):
        result = draw_round(roster, court_count, mode, history=history,
                            rng=rng, max_attempts=max_attempts)
        history.record_round(result.round.waiting, result.pairs)
        out.append(result.round)
    return out


def compute_stats(rounds: list[Round], roster: list[str],
                  court_count: int) -> dict:
    """Compute sit-out and partnership statistics for a sequence of rounds.

    Returns dict with:
    - rounds: number of rounds
    - wait_counts: player -> rounds spent waiting
    - back_to_back: player -> times waiting two rounds in a row
    - partner_counts: (a, b) -> times partnered
    - recent_repeats: partnerships repeated within two rounds
    - invalid: list of (round number, errors) for rounds that break invariants
    """
    wait_counts: dict[str, int] = {p: 0 for p in roster}
    back_to_back: dict[str, int] = defaultdict(int)
    partner_counts: dict[tuple[str, str], int] = defaultdict(int)
    recent_repeats = 0
    invalid = []

    prev_waiting: set[str] = set()
    recent_pairs: list[set[frozenset[str]]] = []

    for number, rnd in enumerate(rounds, start=1):
        result = verify_round(rnd, roster, court_count)
        if not result["valid"]:
            invalid.append((number, result["errors"]))

        waiting = set(rnd.waiting)
        for p in waiting:
            wait_counts[p] = wait_counts.get(p, 0) + 1
            if p in prev_waiting:
                back_to_back[p] += 1
        prev_waiting = waiting

        pairs = set(rnd.pairs())
        lookback = set().union(*recent_pairs) if recent_pairs else set()
        recent_repeats += len(pairs & lookback)
        for pair in pairs:
            key = tuple(sorted(pair))
            partner_counts[key] += 1
        recent_pairs = [pairs] + recent_pairs[:1]

    return {
        "rounds": len(rounds),
        "wait_counts": wait_counts,
        "back_to_back": dict(back_to_back),
        "partner_counts": dict(partner_counts),
        "recent_repeats": recent_repeats,
        "invalid": invalid,
    }


def format_stats_report(stats: dict) -> str:
    lines = []
    lines.append("=" * 50)
    lines.append(f"FAIRNESS REPORT ({stats['rounds']} rounds)")
    lines.append("=" * 50)

    wait_counts = stats["wait_counts"]
    if wait_counts:
        lo = min(wait_counts.values())
        hi = max(wait_counts.values())
        lines.append(f"\nSit-outs per player: min={lo}, max={hi}")
        for name in sorted(wait_counts, key=lambda n: (-wait_counts[n], n)):
            b2b = stats["back_to_back"].get(name, 0)
            note = f"  ({b2b} back-to-back)" if b2b else ""
            lines.append(f"  {name:<16} {wait_counts[name]:>4}{note}")

    partner_counts = stats["partner_counts"]
    if partner_counts:
        most = max(partner_counts.values())
        lines.append(f"\nDistinct partnerships: {len(partner_counts)}, "
                     f"most frequent played {most} times")
    lines.append(f"Partnerships repeated within two rounds: {stats['recent_repeats']}")

    if stats["invalid"]:
        lines.append(f"\nINVALID ROUNDS ({len(stats['invalid'])})")
        for number, errors in stats["invalid"]:
            for e in errors:
                lines.append(f"  Round {number}: {e}")
    else:
        lines.append("\nAll rounds valid.")

    return "\n".join(lines)
