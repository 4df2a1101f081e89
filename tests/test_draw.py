"""Tests for draw.py - normal and smart draws."""

import logging
import random
from collections import Counter
from itertools import combinations

import pytest

from courtdraw.draw import (
    draw_round, search_pairings, select_waiting, has_repeat_pair,
)
from courtdraw.errors import InsufficientPlayers
from courtdraw.history import HistoryLog
from courtdraw.models import DrawMode
from courtdraw.verify import verify_round


def _roster(n):
    return [f"P{i}" for i in range(1, n + 1)]


class TestNormalDraw:
    def test_covers_roster_exactly(self):
        rng = random.Random(3)
        for size in range(4, 20):
            roster = _roster(size)
            for courts in range(1, 6):
                result = draw_round(roster, courts, DrawMode.Normal, rng=rng)
                check = verify_round(result.round, roster, courts)
                assert check["valid"], check["errors"]

    def test_court_count_capped_by_players(self):
        result = draw_round(_roster(7), 2, DrawMode.Normal, rng=random.Random(1))
        assert len(result.round.courts) == 1
        assert len(result.round.waiting) == 3

    def test_trailing_group_goes_to_waiting(self):
        roster = _roster(11)
        result = draw_round(roster, 3, DrawMode.Normal, rng=random.Random(5))
        assert len(result.round.courts) == 2
        assert sorted(result.round.players) == sorted(roster)

    def test_pairs_match_courts(self):
        result = draw_round(_roster(8), 2, DrawMode.Normal, rng=random.Random(2))
        assert result.pairs == result.round.pairs()
        assert len(result.pairs) == 4

    def test_five_players_one_court(self):
        roster = ["A", "B", "C", "D", "E"]
        result = draw_round(roster, 1, DrawMode.Normal, rng=random.Random(9))
        assert len(result.round.courts) == 1
        assert len(set(result.round.courts[0])) == 4
        assert len(result.round.waiting) == 1

    def test_waiting_player_is_uniform(self):
        roster = ["A", "B", "C", "D", "E"]
        rng = random.Random(12345)
        trials = 5000
        counts = Counter()
        for _ in range(trials):
            result = draw_round(roster, 1, DrawMode.Normal, rng=rng)
            counts[result.round.waiting[0]] += 1
        for name in roster:
            assert 0.17 < counts[name] / trials < 0.23, counts

    def test_deterministic_with_seed(self):
        r1 = draw_round(_roster(10), 2, DrawMode.Normal, rng=random.Random(7))
        r2 = draw_round(_roster(10), 2, DrawMode.Normal, rng=random.Random(7))
        assert r1.round == r2.round

    def test_roster_not_mutated(self):
        roster = _roster(9)
        before = list(roster)
        draw_round(roster, 2, DrawMode.Normal, rng=random.Random(1))
        assert roster == before


class TestPreconditions:
    def test_too_few_players(self):
        with pytest.raises(InsufficientPlayers) as exc:
            draw_round(["A", "B", "C"], 1)
        assert exc.value.count == 3

    def test_empty_roster(self):
        with pytest.raises(InsufficientPlayers):
            draw_round([], 1, DrawMode.Smart)

    def test_zero_courts(self):
        with pytest.raises(ValueError):
            draw_round(_roster(8), 0)

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError):
            draw_round(["A", "B", "C", "A"], 1)


class TestSelectWaiting:
    def test_none_needed(self):
        assert select_waiting(_roster(8), 0, ["P1"], [], random.Random(1)) == []

    def test_group_order(self):
        roster = ["A", "B", "C", "D", "E"]
        waiting = select_waiting(roster, 3, ["A", "B"], ["C"], random.Random(1))
        # D, E never waited; C waited two rounds ago; A, B waited last round
        assert set(waiting) == {"C", "D", "E"}

    def test_recent_waiters_skipped(self):
        roster = ["A", "B", "C", "D", "E", "F"]
        for seed in range(20):
            waiting = select_waiting(roster, 2, ["A", "B"], ["C", "D"],
                                     random.Random(seed))
            assert set(waiting) == {"E", "F"}

    def test_forced_repeat(self):
        roster = ["A", "B", "C", "D", "E"]
        waiting = select_waiting(roster, 3, ["A", "B", "C", "D"], [],
                                 random.Random(4))
        assert "E" in waiting
        assert len(set(waiting) & {"A", "B", "C", "D"}) == 2

    def test_unbiased_within_group(self):
        roster = ["A", "B", "C", "D", "E", "F"]
        rng = random.Random(99)
        counts = Counter()
        for _ in range(3000):
            counts.update(select_waiting(roster, 1, ["A"], ["B"], rng))
        assert set(counts) == {"C", "D", "E", "F"}
        for name in "CDEF":
            assert 0.2 < counts[name] / 3000 < 0.3


class TestSmartDraw:
    def test_no_back_to_back_waiting(self):
        roster = _roster(10)
        for seed in range(30):
            history = HistoryLog()
            history.record_round(["P9", "P10"], [])
            result = draw_round(roster, 2, DrawMode.Smart, history=history,
                                rng=random.Random(seed))
            assert not {"P9", "P10"} & set(result.round.waiting)

    def test_two_round_lookback(self):
        roster = ["A", "B", "C", "D", "E", "F", "G", "H"]
        for seed in range(30):
            history = HistoryLog()
            history.record_round(["G", "H"], [])   # round 1
            history.record_round([], [])           # round 2, nobody waited
            result = draw_round(roster, 1, DrawMode.Smart, history=history,
                                rng=random.Random(seed))
            assert len(result.round.waiting) == 4
            assert not {"G", "H"} & set(result.round.waiting)

    def test_covers_roster_exactly(self):
        rng = random.Random(11)
        history = HistoryLog()
        roster = _roster(13)
        for _ in range(25):
            result = draw_round(roster, 3, DrawMode.Smart, history=history, rng=rng)
            check = verify_round(result.round, roster, 3)
            assert check["valid"], check["errors"]
            history.record_round(result.round.waiting, result.pairs)

    def test_avoids_recent_partners(self):
        roster = _roster(8)
        history = HistoryLog()
        history.record_round([], [{"P1", "P2"}, {"P3", "P4"}, {"P5", "P6"}, {"P7", "P8"}])
        history.record_round([], [{"P1", "P3"}, {"P2", "P4"}, {"P5", "P7"}, {"P6", "P8"}])
        past = set(history.all_pairs())
        for seed in range(20):
            result = draw_round(roster, 2, DrawMode.Smart, history=history,
                                rng=random.Random(seed))
            assert not result.fallback
            assert not set(result.pairs) & past

    def test_without_history(self):
        result = draw_round(_roster(6), 1, DrawMode.Smart, rng=random.Random(1))
        assert len(result.round.courts) == 1
        assert len(result.round.waiting) == 2

    def test_does_not_record_history(self):
        history = HistoryLog()
        draw_round(_roster(8), 2, DrawMode.Smart, history=history,
                   rng=random.Random(1))
        assert len(history) == 0


class TestPairingSearch:
    def test_fallback_when_every_pair_is_taken(self, caplog):
        players = ["A", "B", "C", "D"]
        past = {frozenset(p) for p in combinations(players, 2)}
        with caplog.at_level(logging.WARNING, logger="courtdraw.draw"):
            courts, attempts, fallback = search_pairings(
                players, 1, past, random.Random(1), max_attempts=10,
            )
        assert fallback
        assert attempts == 10
        assert sorted(courts[0]) == players
        assert any("repeat partners" in r.message for r in caplog.records)

    def test_smart_draw_still_succeeds_on_fallback(self):
        players = ["A", "B", "C", "D"]
        history = HistoryLog()
        history.record_round([], [frozenset(p) for p in combinations(players, 2)])
        result = draw_round(players, 1, DrawMode.Smart, history=history,
                            rng=random.Random(2), max_attempts=5)
        assert result.fallback
        assert sorted(result.round.courts[0]) == players

    def test_first_fit(self):
        courts, attempts, fallback = search_pairings(
            _roster(8), 2, set(), random.Random(1),
        )
        assert attempts == 1
        assert not fallback
        assert len(courts) == 2

    def test_has_repeat_pair(self):
        courts = [["A", "B", "C", "D"]]
        assert has_repeat_pair(courts, {frozenset({"B", "A"})})
        assert not has_repeat_pair(courts, {frozenset({"A", "C"})})
