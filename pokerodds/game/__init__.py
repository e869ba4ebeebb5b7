"""Cards, hand evaluation and ranges."""

from .cards import Card, Hand, Deck, Rank, Suit, Street, parse_cards, parse_range
from .evaluator import (
    EvaluatedHand, HandRank, compare, evaluate_best, evaluate_hand, hand_strength
)
from .ranges import PlayerRange

__all__ = [
    "Card",
    "Hand",
    "Deck",
    "Rank",
    "Suit",
    "Street",
    "parse_cards",
    "parse_range",
    "EvaluatedHand",
    "HandRank",
    "compare",
    "evaluate_best",
    "evaluate_hand",
    "hand_strength",
    "PlayerRange",
]
