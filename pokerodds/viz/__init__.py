"""Visualization module."""

from .ranges import RangeDisplay, display_range
from .results import display_equity, display_hand, display_showdown, equity_table

__all__ = [
    "RangeDisplay",
    "display_range",
    "display_equity",
    "display_hand",
    "display_showdown",
    "equity_table",
]
