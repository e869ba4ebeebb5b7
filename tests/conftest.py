"""Pytest configuration and fixtures."""

import pytest

from pokerodds.equity import EquityCalculator, EquityConfig, EquityMethod
from pokerodds.game.cards import parse_cards


@pytest.fixture
def calculator():
    """Calculator with a fixed seed so Monte Carlo runs repeat exactly."""
    return EquityCalculator(EquityConfig(seed=1234))


@pytest.fixture
def enum_calculator():
    return EquityCalculator(EquityConfig(method=EquityMethod.ENUMERATION))


@pytest.fixture
def board_flop():
    return parse_cards("Ah 5h 2c")


@pytest.fixture
def board_turn():
    return parse_cards("Ah 5h 2c 9d")


@pytest.fixture
def board_river():
    return parse_cards("Ks 7d 2c 9h 3s")
