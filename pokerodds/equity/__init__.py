"""Equity engines and the calculator that dispatches to them."""

from .result import EquityResult, OutcomeCounts
from .enumeration import EnumerationEngine
from .montecarlo import MonteCarloEngine
from .calculator import EquityCalculator, EquityConfig, EquityMethod, calculate_equity

__all__ = [
    "EquityResult",
    "OutcomeCounts",
    "EnumerationEngine",
    "MonteCarloEngine",
    "EquityCalculator",
    "EquityConfig",
    "EquityMethod",
    "calculate_equity",
]
