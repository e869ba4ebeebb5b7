"""Player ranges: the set of hole cards an opponent might hold."""

from typing import Iterable, Iterator, Optional, Union

from .cards import Card, CardLike, Hand, all_hands, expand_hand, parse_range

HandLike = Union[Hand, str, Iterable[CardLike]]


class PlayerRange:
    """
    A set of equally likely two-card starting hands.

    A range holding a single hand is an exact (known) hand. Duplicate combos
    collapse to one while first-seen order is kept, so iteration is
    deterministic. Card legality against the rest of the table is checked by
    the equity calculator, not here.
    """

    def __init__(self, hands: Iterable[Hand] = ()):
        self._hands: tuple[Hand, ...] = tuple(dict.fromkeys(hands))

    @classmethod
    def exact(cls, hand: HandLike) -> "PlayerRange":
        """Range consisting of one known hand."""
        return cls([_to_hand(hand)])

    @classmethod
    def from_hands(cls, hands: Iterable[HandLike]) -> "PlayerRange":
        """Range from many candidate hands, all equally likely."""
        return cls(_to_hand(h) for h in hands)

    @classmethod
    def from_notation(cls, notation: str) -> "PlayerRange":
        """
        Range from standard notation, e.g. "QQ+, AKs, AsKh".

        Every canonical hand expands to all of its suit combinations.
        """
        combos = []
        for canonical in parse_range(notation):
            combos.extend(expand_hand(canonical))
        return cls(combos)

    @classmethod
    def any_two(cls) -> "PlayerRange":
        """All 1326 starting hands."""
        return cls(all_hands())

    @property
    def hands(self) -> tuple[Hand, ...]:
        return self._hands

    @property
    def count(self) -> int:
        return len(self._hands)

    @property
    def is_exact(self) -> bool:
        return len(self._hands) == 1

    @property
    def exact_hand(self) -> Optional[Hand]:
        """The hand itself when the range is exact, otherwise None."""
        return self._hands[0] if self.is_exact else None

    def without(self, dead: Iterable[Card]) -> list[Hand]:
        """Hands that share no card with ``dead``."""
        dead_set = set(dead)
        return [
            h for h in self._hands
            if h.card1 not in dead_set and h.card2 not in dead_set
        ]

    def __len__(self) -> int:
        return len(self._hands)

    def __iter__(self) -> Iterator[Hand]:
        return iter(self._hands)

    def __getitem__(self, index: int) -> Hand:
        return self._hands[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerRange):
            return NotImplemented
        return set(self._hands) == set(other._hands)

    def __hash__(self) -> int:
        return hash(frozenset(self._hands))

    def __repr__(self) -> str:
        if self.is_exact:
            return f"PlayerRange.exact({self._hands[0]})"
        return f"PlayerRange({len(self._hands)} hands)"


def _to_hand(hand: HandLike) -> Hand:
    if isinstance(hand, Hand):
        return hand
    return Hand.from_cards(hand)
