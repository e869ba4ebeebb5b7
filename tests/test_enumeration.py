"""Tests for the exhaustive enumeration engine."""

import time

import pytest

from pokerodds.equity.enumeration import EnumerationEngine, opponent_assignments
from pokerodds.exceptions import EquityCancelled, InputReason, InvalidEquityInput
from pokerodds.game.cards import Card, parse_cards
from pokerodds.game.ranges import PlayerRange


@pytest.fixture
def engine():
    return EnumerationEngine()


class TestAssignments:
    def test_aces_against_aces(self):
        aces = PlayerRange.from_notation("AA")
        assert len(list(opponent_assignments([aces, aces], set()))) == 6

    def test_dead_card_blocks_second_pair(self):
        aces = PlayerRange.from_notation("AA")
        dead = {Card.from_string("As")}
        assert list(opponent_assignments([aces, aces], dead)) == []

    def test_no_shared_cards(self):
        ranges = [PlayerRange.from_notation("AK"), PlayerRange.from_notation("AA")]
        for hands in opponent_assignments(ranges, set()):
            cards = [c for h in hands for c in h]
            assert len(set(cards)) == 4


class TestCounting:
    def test_flop_total(self, engine, board_flop):
        counts = engine.calculate(
            parse_cards("As Ks"), [PlayerRange.exact("Qc Qd")], board_flop,
        )
        assert counts.total == 990

    def test_range_multiplies_runouts(self, engine, board_flop):
        counts = engine.calculate(
            parse_cards("As Ks"), [PlayerRange.from_notation("QQ")], board_flop,
        )
        assert counts.total == 6 * 990

    def test_river_single_scenario(self, engine, board_river):
        counts = engine.calculate(
            parse_cards("Kh Kc"), [PlayerRange.exact("As Ah")], board_river,
        )
        assert (counts.wins, counts.ties, counts.total) == (1, 0, 1)

    def test_deterministic(self, engine, board_turn):
        hero = parse_cards("As Ks")
        ranges = [PlayerRange.from_notation("QQ, JJ")]
        assert engine.calculate(hero, ranges, board_turn) == engine.calculate(hero, ranges, board_turn)

    def test_workers_do_not_change_counts(self, board_flop):
        hero = parse_cards("As Ks")
        ranges = [PlayerRange.from_notation("QQ")]
        serial = EnumerationEngine(workers=1).calculate(hero, ranges, board_flop)
        parallel = EnumerationEngine(workers=2).calculate(hero, ranges, board_flop)
        assert serial == parallel

    def test_not_enough_cards(self, engine):
        opponents = [PlayerRange.any_two() for _ in range(25)]
        with pytest.raises(InvalidEquityInput) as exc_info:
            engine.calculate(parse_cards("As Ah"), opponents)
        assert exc_info.value.reason is InputReason.NO_AVAILABLE_CARDS


class TestPartitions:
    def test_preflop_partition_count(self, engine):
        parts = engine.partitions(parse_cards("As Ah"), [PlayerRange.exact("Ks Kh")])
        # The lowest of five runout cards can be any of the first 44 of 48
        assert len(parts) == 44

    def test_river_has_one_partition_per_assignment(self, engine, board_river):
        parts = engine.partitions(
            parse_cards("Ah Ad"), [PlayerRange.from_notation("QQ")], board_river,
        )
        assert len(parts) == 6
        assert all(p.needed == 0 for p in parts)

    def test_partitions_cover_every_runout(self, engine, board_flop):
        parts = engine.partitions(parse_cards("As Ks"), [PlayerRange.exact("Qc Qd")], board_flop)
        assert len(parts) == 44
        # 44 + 43 + ... + 1 two-card runouts
        assert sum(len(p.pool) - p.first - 1 for p in parts) == 990


class TestProgress:
    def test_callback_reports_every_partition(self, engine, board_flop):
        seen = []
        engine.calculate(
            parse_cards("As Ks"), [PlayerRange.exact("Qc Qd")], board_flop,
            callback=lambda done, total: seen.append((done, total)),
        )
        assert len(seen) == 44
        assert seen[0] == (1, 44)
        assert seen[-1] == (44, 44)

    def test_cancellation(self, engine, board_flop):
        checks = []

        def should_cancel():
            checks.append(1)
            return len(checks) > 3

        with pytest.raises(EquityCancelled) as exc_info:
            engine.calculate(
                parse_cards("As Ks"), [PlayerRange.exact("Qc Qd")], board_flop,
                should_cancel=should_cancel,
            )
        assert exc_info.value.completed == 3
        assert exc_info.value.total == 44

    def test_never_cancelled_runs_to_completion(self, engine, board_flop):
        counts = engine.calculate(
            parse_cards("As Ks"), [PlayerRange.exact("Qc Qd")], board_flop,
            should_cancel=lambda: False,
        )
        assert counts.total == 990

    def test_cancel_before_layout_of_large_ranges(self, engine):
        # Two any-two ranges on a flop: tens of millions of partitions
        start = time.perf_counter()
        with pytest.raises(EquityCancelled) as exc_info:
            engine.calculate(
                parse_cards("As Ah"),
                [PlayerRange.any_two(), PlayerRange.any_two()],
                parse_cards("Kd 7c 2s"),
                should_cancel=lambda: True,
            )
        assert time.perf_counter() - start < 5.0
        assert exc_info.value.completed == 0

    def test_cancel_in_worker_pool(self):
        engine = EnumerationEngine(workers=2)
        with pytest.raises(EquityCancelled):
            engine.calculate(
                parse_cards("As Ah"),
                [PlayerRange.any_two(), PlayerRange.any_two()],
                parse_cards("Kd 7c 2s"),
                should_cancel=lambda: True,
            )

    def test_total_grows_with_each_assignment(self, engine, board_flop):
        seen = []
        engine.calculate(
            parse_cards("As Ks"), [PlayerRange.from_notation("QQ")], board_flop,
            callback=lambda done, total: seen.append((done, total)),
        )
        totals = [total for _, total in seen]
        assert totals == sorted(totals)
        assert seen[0] == (1, 44)
        assert seen[-1] == (6 * 44, 6 * 44)

    def test_parallel_callback_reaches_total(self, board_flop):
        seen = []
        EnumerationEngine(workers=2).calculate(
            parse_cards("As Ks"), [PlayerRange.from_notation("QQ")], board_flop,
            callback=lambda done, total: seen.append((done, total)),
        )
        assert seen[-1] == (6 * 44, 6 * 44)


class TestMultiway:
    def test_river_counts(self, engine, board_river):
        # AcKc always chops with hero; QcQd loses to kings, 7c7h makes trips
        opponents = [PlayerRange.exact("Ac Kc"), PlayerRange.from_hands(["Qc Qd", "7c 7h"])]
        counts = engine.calculate(parse_cards("Ah Kh"), opponents, board_river)
        assert (counts.wins, counts.ties, counts.total) == (0, 1, 2)

    def test_turn_counts(self, engine):
        # Only the two remaining queens let QcQd beat hero; AcKc chops every river
        opponents = [PlayerRange.exact("Ac Kc"), PlayerRange.exact("Qc Qd")]
        counts = engine.calculate(parse_cards("Ah Kh"), opponents, parse_cards("Ks 7d 2c 9h"))
        assert (counts.wins, counts.ties, counts.total) == (0, 40, 42)
