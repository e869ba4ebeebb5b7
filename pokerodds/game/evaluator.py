"""
Best-hand evaluation and comparison.

``evaluate_best`` checks every 5-card subset of the input and keeps the
strongest, returning a full ``EvaluatedHand``. ``hand_strength`` computes the
same comparison key straight from rank and suit counts; the equity engines
call it in their inner loops because it skips building the 21 subsets.
"""

import itertools
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence

from pokerodds.exceptions import EvaluationError
from .cards import Card, CardLike, Rank, parse_cards

ROYAL_RANKS = frozenset({10, 11, 12, 13, 14})
WHEEL_RANKS = frozenset({14, 2, 3, 4, 5})

Strength = tuple[int, tuple[int, ...]]


class HandRank(IntEnum):
    """Poker hand categories, weakest to strongest."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def description(self) -> str:
        return HAND_RANK_NAMES[self]


HAND_RANK_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}


@dataclass(frozen=True)
class EvaluatedHand:
    """
    The best five cards found for a player.

    ``kickers`` lists ranks from most to least significant for
    tie-breaking: [pair, k1, k2, k3] for one pair, [trips, pair] for a full
    house, [high] for straights, all five ranks for a flush, and nothing for
    a royal flush.
    """
    rank: HandRank
    cards: tuple[Card, ...]
    kickers: tuple[Rank, ...]

    @property
    def strength(self) -> Strength:
        """Comparison key; larger is better."""
        return (int(self.rank), tuple(int(k) for k in self.kickers))

    @property
    def description(self) -> str:
        return self.rank.description

    @property
    def detailed_description(self) -> str:
        """Description with the ranks that matter, e.g. 'Full House (Aces over Kings)'."""
        if not self.kickers:
            return self.description

        names = [k.display_name for k in self.kickers]
        rank = self.rank
        if rank == HandRank.HIGH_CARD:
            return f"{self.description} ({', '.join(names)})"
        if rank == HandRank.ONE_PAIR:
            return f"{self.description} of {_plural(names[0])}"
        if rank == HandRank.TWO_PAIR:
            return f"{self.description} ({_plural(names[0])} and {_plural(names[1])})"
        if rank in (HandRank.THREE_OF_A_KIND, HandRank.FOUR_OF_A_KIND):
            return f"{self.description} ({_plural(names[0])})"
        if rank == HandRank.FULL_HOUSE:
            return f"{self.description} ({_plural(names[0])} over {_plural(names[1])})"
        return f"{self.description} ({names[0]} high)"

    def to_dict(self) -> dict:
        return {
            "rank": int(self.rank),
            "kickers": [int(k) for k in self.kickers],
            "cards": [str(c) for c in self.cards],
            "description": self.description,
            "detailed_description": self.detailed_description,
        }

    def __str__(self) -> str:
        cards = " ".join(str(c) for c in self.cards)
        return f"{self.detailed_description} [{cards}]"


def _plural(name: str) -> str:
    return f"{name}s"


def compare(a: EvaluatedHand, b: EvaluatedHand) -> int:
    """
    Compare two evaluated hands.

    Returns -1 if ``a`` is weaker, 0 if they split, 1 if ``a`` is stronger.
    """
    if a.rank != b.rank:
        return 1 if a.rank > b.rank else -1
    for ka, kb in zip(a.kickers, b.kickers):
        if ka != kb:
            return 1 if ka > kb else -1
    return 0


def evaluate_best(cards: Iterable[CardLike]) -> EvaluatedHand:
    """
    Find the best 5-card hand among 5 to 7 cards.

    Args:
        cards: Cards or notation strings (typically 2 hole + up to 5 board)

    Returns:
        The strongest ``EvaluatedHand`` over every 5-card subset

    Raises:
        EvaluationError: fewer than 5 or more than 7 cards, or a card repeats
    """
    parsed = _checked(cards)

    best: Optional[EvaluatedHand] = None
    for combo in itertools.combinations(parsed, 5):
        hand = evaluate_five(combo)
        if best is None or compare(hand, best) > 0:
            best = hand
    assert best is not None
    return best


def evaluate_hand(
    hole_cards: Iterable[CardLike],
    community_cards: Iterable[CardLike] = (),
) -> EvaluatedHand:
    """Evaluate the best hand from hole cards plus community cards."""
    return evaluate_best(parse_cards(hole_cards) + parse_cards(community_cards))


def evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    """Classify exactly five cards."""
    counts: dict[int, int] = {}
    for card in cards:
        counts[card.rank] = counts.get(card.rank, 0) + 1

    is_flush = len({card.suit for card in cards}) == 1
    straight_high = _straight_high(counts.keys()) if len(counts) == 5 else None

    # Count first, then rank value, deduplicated
    ordered = sorted(counts, key=lambda r: (counts[r], r), reverse=True)
    kickers = tuple(Rank(r) for r in ordered)
    shape = sorted(counts.values(), reverse=True)

    if straight_high and is_flush:
        if set(counts) == ROYAL_RANKS:
            rank, kickers = HandRank.ROYAL_FLUSH, ()
        else:
            rank, kickers = HandRank.STRAIGHT_FLUSH, (Rank(straight_high),)
    elif shape[0] == 4:
        rank = HandRank.FOUR_OF_A_KIND
    elif shape == [3, 2]:
        rank = HandRank.FULL_HOUSE
    elif is_flush:
        rank = HandRank.FLUSH
    elif straight_high:
        rank, kickers = HandRank.STRAIGHT, (Rank(straight_high),)
    elif shape[0] == 3:
        rank = HandRank.THREE_OF_A_KIND
    elif shape[:2] == [2, 2]:
        rank = HandRank.TWO_PAIR
    elif shape[0] == 2:
        rank = HandRank.ONE_PAIR
    else:
        rank = HandRank.HIGH_CARD

    ordered_cards = tuple(sorted(cards, key=lambda c: (counts[c.rank], c.rank, c.suit), reverse=True))
    return EvaluatedHand(rank=rank, cards=ordered_cards, kickers=kickers)


def _straight_high(ranks: Iterable[int]) -> Optional[int]:
    """Highest straight among a set of distinct ranks, 5 for the wheel."""
    present = set(ranks)
    for high in range(14, 5, -1):
        if all(r in present for r in range(high - 4, high + 1)):
            return high
    if WHEEL_RANKS <= present:
        return 5
    return None


def hand_strength(cards: Sequence[Card]) -> Strength:
    """
    Comparison key of the best hand in 5-7 cards.

    Equal to ``evaluate_best(cards).strength`` but derived directly from the
    rank and suit counts. Input is not validated.
    """
    counts = [0] * 15
    suit_ranks: list[list[int]] = [[], [], [], []]
    for card in cards:
        counts[card.rank] += 1
        suit_ranks[card.suit].append(card.rank)

    flush_ranks = None
    for ranks in suit_ranks:
        if len(ranks) >= 5:
            flush_ranks = sorted(ranks, reverse=True)
            break

    if flush_ranks is not None:
        sf_high = _straight_high(flush_ranks)
        if sf_high == 14:
            return (10, ())
        if sf_high:
            return (9, (sf_high,))

    quads = []
    trips = []
    pairs = []
    singles = []
    for rank in range(14, 1, -1):
        n = counts[rank]
        if n == 4:
            quads.append(rank)
        elif n == 3:
            trips.append(rank)
        elif n == 2:
            pairs.append(rank)
        elif n == 1:
            singles.append(rank)

    if quads:
        rest = [r for r in range(14, 1, -1) if counts[r] and r != quads[0]]
        return (8, (quads[0], rest[0]))
    if trips and (len(trips) > 1 or pairs):
        second = max(trips[1:] + pairs)
        return (7, (trips[0], second))
    if flush_ranks is not None:
        return (6, tuple(flush_ranks[:5]))

    straight = _straight_high(r for r in range(2, 15) if counts[r])
    if straight:
        return (5, (straight,))
    if trips:
        return (4, (trips[0],) + tuple(singles[:2]))
    if len(pairs) >= 2:
        leftover = max(pairs[2:] + singles[:1])
        return (3, (pairs[0], pairs[1], leftover))
    if pairs:
        return (2, (pairs[0],) + tuple(singles[:3]))
    return (1, tuple(singles[:5]))


def _checked(cards: Iterable[CardLike]) -> list[Card]:
    parsed = parse_cards(cards)
    if len(parsed) < 5:
        raise EvaluationError.insufficient_cards(len(parsed))
    if len(parsed) > 7:
        raise EvaluationError.too_many_cards(len(parsed))
    seen = set()
    for card in parsed:
        if card in seen:
            raise EvaluationError.duplicate_card(str(card))
        seen.add(card)
    return parsed
