"""Match draw: partition a roster into courts of four and a waiting list.

Two modes:
- Normal: one uniform shuffle of the whole roster, courts filled in order.
- Smart: waiting players are chosen to avoid back-to-back sit-outs using the
  last two rounds of history, then the playing players are shuffled until no
  side of any court repeats a partnership from those rounds (bounded retries,
  unconstrained fallback).
"""

import logging
import random
from dataclasses import dataclass, field

from courtdraw.errors import InsufficientPlayers
from courtdraw.history import HistoryLog
from courtdraw.models import COURT_SIZE, DrawMode, Round, court_pairs

logger = logging.getLogger(__name__)

MAX_PAIRING_ATTEMPTS = 500


@dataclass
class DrawResult:
    """A new round plus the partnerships it creates, for the history log."""
    round: Round
    pairs: list[frozenset[str]] = field(default_factory=list)
    attempts: int = 0
    fallback: bool = False


def courts_to_fill(roster_size: int, court_count: int) -> int:
    """Courts that can be filled with four players each."""
    return min(court_count, roster_size // COURT_SIZE)


def _chunk_courts(players: list[str], num_courts: int) -> list[list[str]]:
    return [players[i * COURT_SIZE:(i + 1) * COURT_SIZE]
            for i in range(num_courts)]


def draw_normal(roster: list[str], court_count: int,
                rng: random.Random) -> DrawResult:
    """Shuffle everyone; the first 4*courts play, the rest wait.

    Any trailing group too small for a court joins the waiting list.
    """
    shuffled = list(roster)
    rng.shuffle(shuffled)

    num_courts = courts_to_fill(len(shuffled), court_count)
    courts = _chunk_courts(shuffled, num_courts)
    waiting = shuffled[num_courts * COURT_SIZE:]

    rnd = Round(courts=courts, waiting=waiting)
    return DrawResult(round=rnd, pairs=rnd.pairs(), attempts=1)


def select_waiting(roster: list[str], num_waiting: int,
                   last_waiting: list[str], second_last_waiting: list[str],
                   rng: random.Random) -> list[str]:
    """Pick who sits out, least-recent waiters first.

    Group A: did not wait in either of the last two rounds.
    Group B: waited two rounds ago but not last round.
    Group C: waited last round.
    Each group is shuffled on its own, then candidates are taken A, B, C.
    """
    if num_waiting <= 0:
        return []

    last = set(last_waiting)
    second_last = set(second_last_waiting)

    group_a = [p for p in roster if p not in last and p not in second_last]
    group_b = [p for p in roster if p not in last and p in second_last]
    group_c = [p for p in roster if p in last]
    for group in (group_a, group_b, group_c):
        rng.shuffle(group)

    if len(group_a) + len(group_b) < num_waiting:
        logger.debug("Forced repeat sit-out: %d candidates for %d waiting slots",
                     len(group_a) + len(group_b), num_waiting)

    return (group_a + group_b + group_c)[:num_waiting]


def has_repeat_pair(courts: list[list[str]], past_pairs: set[frozenset[str]]) -> bool:
    for court in courts:
        for pair in court_pairs(court):
            if pair in past_pairs:
                return True
    return False


def search_pairings(playing: list[str], num_courts: int,
                    past_pairs: set[frozenset[str]], rng: random.Random,
                    max_attempts: int = MAX_PAIRING_ATTEMPTS,
                    ) -> tuple[list[list[str]], int, bool]:
    """Shuffle until no court side repeats a past partnership.

    First collision-free grouping wins. Returns (courts, attempts, fallback);
    after `max_attempts` failures one more unconstrained shuffle is used.
    """
    players = list(playing)
    for attempt in range(1, max_attempts + 1):
        rng.shuffle(players)
        courts = _chunk_courts(players, num_courts)
        if not has_repeat_pair(courts, past_pairs):
            return courts, attempt, False

    logger.warning(
        "No grouping without repeat partners after %d attempts; "
        "accepting repeats for this round", max_attempts,
    )
    rng.shuffle(players)
    return _chunk_courts(players, num_courts), max_attempts, True


def draw_smart(roster: list[str], court_count: int, history,
               rng: random.Random,
               max_attempts: int = MAX_PAIRING_ATTEMPTS) -> DrawResult:
    """Fairness-aware draw using the two-round history."""
    num_courts = courts_to_fill(len(roster), court_count)
    num_waiting = len(roster) - num_courts * COURT_SIZE

    waiting = select_waiting(
        roster, num_waiting,
        history.last_waiting(), history.second_last_waiting(), rng,
    )
    waiting_set = set(waiting)
    playing = [p for p in roster if p not in waiting_set]

    past_pairs = set(history.all_pairs())
    courts, attempts, fallback = search_pairings(
        playing, num_courts, past_pairs, rng, max_attempts=max_attempts,
    )

    rnd = Round(courts=courts, waiting=waiting)
    return DrawResult(round=rnd, pairs=rnd.pairs(),
                      attempts=attempts, fallback=fallback)


def draw_round(roster: list[str], court_count: int,
               mode: DrawMode = DrawMode.Normal, history=None,
               rng: random.Random | None = None,
               max_attempts: int = MAX_PAIRING_ATTEMPTS) -> DrawResult:
    """Draw one round.

    Raises InsufficientPlayers for fewer than four players and ValueError
    for a non-positive court count. Does not touch the history; the caller
    records `result.pairs` and `result.round.waiting` afterwards.
    """
    if len(roster) < COURT_SIZE:
        raise InsufficientPlayers(len(roster), COURT_SIZE)
    if court_count < 1:
        raise ValueError(f"Court count must be at least 1, got {court_count}")
    if len(set(roster)) != len(roster):
        raise ValueError("Roster contains duplicate names")

    if rng is None:
        rng = random.Random()

    if mode == DrawMode.Smart:
        if history is None:
            history = HistoryLog()
        result = draw_smart(roster, court_count, history, rng,
                            max_attempts=max_attempts)
    else:
        result = draw_normal(roster, court_count, rng)

    logger.debug("Drew %s round: %d courts, %d waiting, %d attempts",
                 mode.value, len(result.round.courts),
                 len(result.round.waiting), result.attempts)
    return result
