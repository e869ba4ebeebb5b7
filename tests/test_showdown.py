"""Tests for hero-centric showdown classification."""

import pytest

from pokerodds.equity.showdown import Outcome, showdown
from pokerodds.game.cards import Hand, parse_cards

RIVER = "Ks 7d 2c 9h 3s"


def classify(hero: str, *opponents: str) -> Outcome:
    return showdown(
        parse_cards(hero),
        [Hand.from_string(o) for o in opponents],
        parse_cards(RIVER),
    )


class TestHeadsUp:
    def test_win(self):
        assert classify("Ah Ad", "Qc Qd") is Outcome.WIN

    def test_tie(self):
        assert classify("Ah Kh", "Ac Kc") is Outcome.TIE

    def test_loss(self):
        assert classify("Qc Qd", "7c 7h") is Outcome.LOSS


class TestMultiway:
    def test_win_while_opponents_chop(self):
        # Both opponents hold queens with the same kickers
        assert classify("Ah Ad", "Qc Qd", "Qh Qs") is Outcome.WIN

    def test_tie_one_beat_the_other(self):
        assert classify("Ah Kh", "Ac Kc", "Qc Qd") is Outcome.TIE

    def test_tie_one_lose_to_other(self):
        assert classify("Ah Kh", "Ac Kc", "7c 7h") is Outcome.LOSS

    @pytest.mark.parametrize("order", [
        ("7c 7h", "Ac Kc"),
        ("Ac Kc", "7c 7h"),
    ])
    def test_order_does_not_matter(self, order):
        assert classify("Ah Kh", *order) is Outcome.LOSS

    def test_beats_everyone(self):
        assert classify("7c 7h", "Ac Kc", "Qc Qd", "Jh Jd") is Outcome.WIN
