"""Invariant checks for a drawn round."""

from collections import Counter

from courtdraw.models import COURT_SIZE, Round


def verify_round(rnd: Round, roster: list[str],
                 court_count: int | None = None) -> dict:
    """Check that a round covers the roster exactly, four per court.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    """
    errors = []

    for i, court in enumerate(rnd.courts):
        if len(court) != COURT_SIZE:
            errors.append(f"Court {i + 1}: {len(court)} players (expected {COURT_SIZE})")

    counts = Counter(rnd.players)
    for name, n in counts.items():
        if n > 1:
            errors.append(f"{name} appears {n} times")

    roster_set = set(roster)
    for name in counts:
        if name not in roster_set:
            errors.append(f"{name} is not on the roster")
    for name in roster:
        if name not in counts:
            errors.append(f"{name} is missing from the round")

    if court_count is not None:
        expected = min(court_count, len(roster) // COURT_SIZE)
        if len(rnd.courts) != expected:
            errors.append(f"{len(rnd.courts)} courts filled (expected {expected})")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
    }
