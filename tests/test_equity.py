"""Tests for the equity calculator."""

import pytest

from pokerodds.equity import (
    EquityCalculator, EquityConfig, EquityMethod, EquityResult, OutcomeCounts, calculate_equity,
)
from pokerodds.exceptions import InputReason, InvalidEquityInput
from pokerodds.game.cards import Hand
from pokerodds.game.ranges import PlayerRange


def reason_of(exc_info) -> InputReason:
    return exc_info.value.reason


class TestValidation:
    def test_duplicate_hero_card(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("Ah Ah", [PlayerRange.exact("KsKh")])
        assert reason_of(exc_info) is InputReason.DUPLICATE_CARD
        assert exc_info.value.card == "Ah"

    def test_wrong_hole_card_count(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("Ah", [PlayerRange.exact("KsKh")])
        assert reason_of(exc_info) is InputReason.WRONG_HOLE_CARD_COUNT

        with pytest.raises(InvalidEquityInput, match="exactly 2 hole cards, got 3"):
            calculator.calculate("Ah Ad Ac", [PlayerRange.exact("KsKh")])

    def test_wrong_community_count(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [PlayerRange.exact("KsKh")], "2c 3c 4c 5c 6c 7c")
        assert reason_of(exc_info) is InputReason.WRONG_COMMUNITY_COUNT

    def test_no_opponents(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [])
        assert reason_of(exc_info) is InputReason.NO_OPPONENTS

    def test_empty_opponent_range(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [PlayerRange.exact("KsKh"), PlayerRange()])
        assert reason_of(exc_info) is InputReason.EMPTY_OPPONENT_RANGE
        assert exc_info.value.index == 1

    def test_hero_conflicts_with_exact_opponent(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [PlayerRange.exact("AsKd")])
        assert reason_of(exc_info) is InputReason.DUPLICATE_CARD
        assert exc_info.value.card == "As"

    def test_board_conflicts_with_hero(self, calculator):
        with pytest.raises(InvalidEquityInput, match="Duplicate card found in input: Ah"):
            calculator.calculate("AsAh", [PlayerRange.exact("KsKh")], "Ah 5h 2c")

    def test_two_exact_opponents_conflict(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [PlayerRange.exact("KsKh"), PlayerRange.exact("KsQd")])
        assert reason_of(exc_info) is InputReason.DUPLICATE_CARD

    def test_range_hand_holding_same_card_twice(self, calculator):
        bad_range = PlayerRange.from_hands(["QhQh", "KsKd"])
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [bad_range])
        assert reason_of(exc_info) is InputReason.DUPLICATE_CARD

    def test_non_exact_range_may_overlap_hero(self, calculator):
        # Conflicting combos are skipped rather than rejected
        result = calculator.calculate(
            "AsAh", [PlayerRange.from_notation("AA")], "Kd 7c 2s 9h 4d",
            method=EquityMethod.ENUMERATION,
        )
        assert result.sample_size == 1
        assert result.tie_probability == 1.0

    def test_non_positive_iterations(self, calculator):
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", [PlayerRange.exact("KsKh")], iterations=0)
        assert reason_of(exc_info) is InputReason.NON_POSITIVE_ITERATIONS

    def test_iterations_ignored_for_enumeration(self, calculator):
        result = calculator.calculate(
            "AsAh", [PlayerRange.exact("KsKh")], "2c 7d 9h Jc 3s",
            method=EquityMethod.ENUMERATION, iterations=0,
        )
        assert result.win_probability == 1.0

    def test_not_enough_cards_for_everyone(self, calculator):
        opponents = [PlayerRange.any_two() for _ in range(24)]
        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("AsAh", opponents)
        assert reason_of(exc_info) is InputReason.NO_AVAILABLE_CARDS
        assert exc_info.value.requested == 53
        assert exc_info.value.available == 50

    def test_errors_are_value_errors(self, calculator):
        with pytest.raises(ValueError):
            calculator.calculate("Ah", [PlayerRange.exact("KsKh")])


class TestBenchmarks:
    @pytest.mark.slow
    def test_aces_vs_kings_preflop(self):
        calculator = EquityCalculator(EquityConfig(method=EquityMethod.ENUMERATION, workers=4))
        result = calculator.calculate("As Ah", [PlayerRange.exact("Ks Kh")])
        assert 0.80 <= result.win_probability <= 0.85
        assert result.sample_size == 1712304

    def test_top_pair_vs_queens_on_ace_flop(self, enum_calculator, board_flop):
        result = enum_calculator.calculate("As Ks", [PlayerRange.exact("Qc Qd")], board_flop)
        assert result.win_probability >= 0.89
        assert result.sample_size == 990

    def test_straight_flush_on_board_chops(self, enum_calculator):
        opponents = PlayerRange.from_hands(["KhKd", "AhAd", "7c7d"])
        result = enum_calculator.calculate("2h 3h", [opponents], "Qs Js 10s 9s 8s")
        assert result.tie_probability == 1.0
        assert result.win_probability == 0.0

    def test_straight_flush_on_board_loses_to_king_of_spades(self, enum_calculator):
        opponents = PlayerRange.from_hands(["KsKh", "AhAd"])
        result = enum_calculator.calculate("2h 3h", [opponents], "Qs Js 10s 9s 8s")
        assert result.tie_probability == 0.5
        assert result.loss_probability == 0.5

    def test_river_winner(self, enum_calculator, board_river):
        # KK makes trips against AA's one pair
        result = enum_calculator.calculate("Kh Kc", [PlayerRange.exact("As Ah")], board_river)
        assert result.win_probability == 1.0
        assert result.sample_size == 1


class TestDispatch:
    def test_method_as_string(self, calculator, board_turn):
        result = calculator.calculate(
            "As Ks", [PlayerRange.exact("Qc Qd")], board_turn, method="enumeration",
        )
        assert result.sample_size == 44

    def test_defaults_from_config(self):
        calculator = EquityCalculator()
        assert calculator.config.method is EquityMethod.MONTE_CARLO
        assert calculator.config.iterations == 10000

    def test_config_iterations_used(self, board_flop):
        calculator = EquityCalculator(EquityConfig(iterations=250, seed=5))
        result = calculator.calculate("As Ks", [PlayerRange.exact("Qc Qd")], board_flop)
        assert result.sample_size == 250

    def test_config_seed_reproducible(self, board_flop):
        config = EquityConfig(iterations=300, seed=42)
        first = EquityCalculator(config).calculate("As Ks", ["QQ"], board_flop)
        second = EquityCalculator(config).calculate("As Ks", ["QQ"], board_flop)
        assert first == second

    def test_accepts_hand_and_notation_ranges(self, calculator, board_turn):
        result = calculator.calculate(
            "As Ks", [Hand.from_string("QcQd"), "JJ"], board_turn,
            method=EquityMethod.ENUMERATION,
        )
        assert result.sample_size > 0

    def test_conservation(self, calculator, board_flop):
        for method in EquityMethod:
            result = calculator.calculate(
                "Ks Kd", [PlayerRange.from_notation("AK, QQ")], board_flop,
                method=method, iterations=500,
            )
            total = result.win_probability + result.tie_probability + result.loss_probability
            assert total == pytest.approx(1.0)

    def test_exhausted_ranges_give_zero_result(self, enum_calculator):
        # Every combo of the second range collides with the first opponent
        opponents = [PlayerRange.exact("AhAd"), PlayerRange.from_hands(["AhKc", "AdQc"])]
        result = enum_calculator.calculate("2s 3s", opponents, "7h 8h 9c Jd Ks")
        assert result == EquityResult(0.0, 0.0, 0)
        assert result.loss_probability == 0.0

    def test_calculate_equity_function(self, board_flop):
        first = calculate_equity("As Ks", ["QcQd"], board_flop, iterations=400, seed=3)
        second = calculate_equity("As Ks", ["QcQd"], board_flop, iterations=400, seed=3)
        assert first == second
        assert first.sample_size == 400


class TestEquityResult:
    def test_from_counts(self):
        result = EquityResult.from_counts(OutcomeCounts(wins=60, ties=10, total=100))
        assert result.win_probability == 0.6
        assert result.tie_probability == 0.1
        assert result.loss_probability == pytest.approx(0.3)
        assert result.expected_value == pytest.approx(0.65)
        assert result.sample_size == 100

    def test_zero_total(self):
        assert EquityResult.from_counts(OutcomeCounts()) == EquityResult(0.0, 0.0, 0)

    def test_percentages(self):
        result = EquityResult(0.25, 0.5, 8)
        assert result.to_percentage_dict() == {
            "win_pct": 25.0,
            "tie_pct": 50.0,
            "loss_pct": 25.0,
            "ev_pct": 50.0,
            "sample_size": 8,
        }

    def test_to_dict(self):
        data = EquityResult(0.5, 0.0, 2).to_dict()
        assert data["loss"] == 0.5
        assert data["expected_value"] == 0.5

    def test_counts_add(self):
        total = OutcomeCounts(1, 2, 5) + OutcomeCounts(3, 0, 4)
        assert total == OutcomeCounts(4, 2, 9)
        assert total.losses == 3


class TestMethodErrors:
    def test_unknown_method(self, calculator):
        with pytest.raises(InvalidEquityInput, match="Unknown equity method: 'exhaustive'") as exc_info:
            calculator.calculate("As Ks", [PlayerRange.exact("Qc Qd")], method="exhaustive")
        assert reason_of(exc_info) is InputReason.UNKNOWN_METHOD

    def test_blocked_range_by_method(self, calculator, board_flop):
        # Every AA combo other than hero's needs the ace on the board
        blocked = PlayerRange.from_hands(["Ah Ac", "Ah Ad"])
        result = calculator.calculate(
            "As Ks", [blocked], board_flop, method=EquityMethod.ENUMERATION,
        )
        assert result == EquityResult(0.0, 0.0, 0)

        with pytest.raises(InvalidEquityInput) as exc_info:
            calculator.calculate("As Ks", [blocked], board_flop, method=EquityMethod.MONTE_CARLO)
        assert reason_of(exc_info) is InputReason.NO_AVAILABLE_CARDS
        assert exc_info.value.index == 0
