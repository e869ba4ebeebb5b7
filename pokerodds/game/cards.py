"""Card, hole-card and range notation utilities."""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Union

from pokerodds.exceptions import InvalidCardNotation


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def display_name(self) -> str:
        """Name used in hand descriptions ('Ace', '10', ...)."""
        return RANK_NAMES.get(self, str(self.value))


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "10", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}
STR_RANK["T"] = 10  # Alias used in range notation

# Single-character ranks for canonical hand notation ('AKs', 'TT')
RANK_CHAR = {rank: ("T" if rank == 10 else s) for rank, s in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

RANK_NAMES = {11: "Jack", 12: "Queen", 13: "King", 14: "Ace"}

_CARD_TOKEN = re.compile(r"(10|[2-9TJQKA])([CDHS])", re.IGNORECASE)


@dataclass(frozen=True, order=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', '10h', 'Th', '2c'."""
        token = s.strip()
        if len(token) not in (2, 3):
            raise InvalidCardNotation(s, "expected rank followed by suit")
        rank_part = token[:-1].upper()
        suit_char = token[-1].lower()

        if rank_part not in STR_RANK:
            raise InvalidCardNotation(s, f"invalid rank {rank_part!r}")
        if suit_char not in STR_SUIT:
            raise InvalidCardNotation(s, f"invalid suit {suit_char!r}")

        return cls(rank=Rank(STR_RANK[rank_part]), suit=Suit(STR_SUIT[suit_char]))


CardLike = Union[Card, str]


def to_card(card: CardLike) -> Card:
    """Normalize a Card or notation string to a Card."""
    if isinstance(card, Card):
        return card
    return Card.from_string(card)


def parse_cards(cards: Union[str, Iterable[CardLike]]) -> list[Card]:
    """
    Parse a collection of cards.

    Accepts a list of Cards/strings, or a single string with cards separated
    by spaces or commas ("Ah Kd 10c") or run together ("AhKd10c").
    """
    if not isinstance(cards, str):
        return [to_card(c) for c in cards]

    parsed = []
    for token in re.split(r"[\s,]+", cards.strip()):
        if not token:
            continue
        if len(token) <= 3:
            parsed.append(Card.from_string(token))
            continue
        pieces = _CARD_TOKEN.findall(token)
        if "".join(r + s for r, s in pieces).lower() != token.lower():
            raise InvalidCardNotation(token, "could not split into cards")
        parsed.extend(Card.from_string(r + s) for r, s in pieces)
    return parsed


@dataclass(frozen=True)
class Hand:
    """A two-card starting hand."""
    card1: Card
    card2: Card

    def __post_init__(self):
        # Ensure card1 is the higher card so AsKh == KhAs
        if self.card1 < self.card2:
            high, low = self.card2, self.card1
            object.__setattr__(self, "card1", high)
            object.__setattr__(self, "card2", low)

    @property
    def cards(self) -> tuple[Card, Card]:
        return (self.card1, self.card2)

    @property
    def is_pair(self) -> bool:
        """Check if hand is a pocket pair."""
        return self.card1.rank == self.card2.rank

    @property
    def is_suited(self) -> bool:
        """Check if hand is suited."""
        return self.card1.suit == self.card2.suit

    @property
    def canonical(self) -> str:
        """
        Get canonical hand notation (e.g., 'AKs', 'QQ', '72o').

        This groups equivalent hands regardless of specific suits.
        """
        r1 = RANK_CHAR[self.card1.rank]
        r2 = RANK_CHAR[self.card2.rank]

        if self.is_pair:
            return f"{r1}{r2}"
        elif self.is_suited:
            return f"{r1}{r2}s"
        else:
            return f"{r1}{r2}o"

    def __iter__(self):
        return iter(self.cards)

    def __str__(self) -> str:
        return f"{self.card1}{self.card2}"

    def __repr__(self) -> str:
        return f"Hand({self.card1}, {self.card2})"

    @classmethod
    def from_cards(cls, cards: Union[str, Iterable[CardLike]]) -> "Hand":
        """Build a hand from exactly two cards."""
        parsed = parse_cards(cards)
        if len(parsed) != 2:
            notation = cards if isinstance(cards, str) else " ".join(str(c) for c in parsed)
            raise InvalidCardNotation(notation, f"a hand needs exactly 2 cards, got {len(parsed)}")
        return cls(parsed[0], parsed[1])

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Parse a specific hand from a string like 'AsKh' or '10d 9d'."""
        return cls.from_cards(s)


class Deck:
    """A standard 52-card deck."""

    def __init__(self):
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards."""
        self.cards = [
            Card(Rank(rank), Suit(suit))
            for rank in range(2, 15)
            for suit in range(4)
        ]

    def remove(self, cards: Iterable[Card]) -> None:
        """Remove specific cards from the deck, ignoring ones already gone."""
        dead = set(cards)
        self.cards = [c for c in self.cards if c not in dead]

    def __contains__(self, card: Card) -> bool:
        return card in self.cards

    def __iter__(self):
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)


def remaining_cards(dead: Iterable[Card]) -> list[Card]:
    """Return the cards of a fresh deck minus the given dead cards."""
    deck = Deck()
    deck.remove(dead)
    return deck.cards


class Street(Enum):
    """Betting streets, keyed by how many community cards are out."""
    PREFLOP = 0
    FLOP = 3
    TURN = 4
    RIVER = 5

    @classmethod
    def from_board(cls, board: Iterable[Card]) -> "Street":
        """Infer the street from the number of community cards."""
        count = len(list(board))
        for street in cls:
            if street.value == count:
                return street
        raise ValueError(f"No street has {count} community cards")

    def __str__(self) -> str:
        return self.name.capitalize()


def get_all_hands() -> list[str]:
    """Generate all 169 unique starting hands in canonical form."""
    hands = []
    ranks = "AKQJT98765432"

    # Pairs
    for r in ranks:
        hands.append(f"{r}{r}")

    # Non-pairs
    for i, r1 in enumerate(ranks):
        for r2 in ranks[i+1:]:
            hands.append(f"{r1}{r2}s")  # Suited
            hands.append(f"{r1}{r2}o")  # Offsuit

    return hands


def parse_range(range_str: str) -> list[str]:
    """
    Parse a hand range string into list of hands.

    Examples:
        "AA" -> ["AA"]
        "AKs" -> ["AKs"]
        "AK" -> ["AKs", "AKo"]
        "TT+" -> ["TT", "JJ", "QQ", "KK", "AA"]
        "ATs+" -> ["ATs", "AJs", "AQs", "AKs"]
        "22-55" -> ["22", "33", "44", "55"]
        "QQ+, AKs" -> ["QQ", "KK", "AA", "AKs"]

    Specific combos such as "AsKh" are passed through unchanged.
    """
    if "," in range_str:
        hands = []
        for part in range_str.split(","):
            if part.strip():
                hands.extend(parse_range(part))
        return hands

    hands = []
    range_str = range_str.strip()
    token = range_str.upper()

    # Pair plus: "TT+"
    if len(token) == 3 and token[2] == "+" and token[0] == token[1]:
        start_rank = _rank_of(token[0], range_str)
        for rank in range(start_rank, 15):
            hands.append(f"{RANK_CHAR[rank]}{RANK_CHAR[rank]}")
        return hands

    # Pair range: "22-55"
    if "-" in token and len(token) == 5:
        low = _rank_of(token[0], range_str)
        high = _rank_of(token[3], range_str)
        if low > high:
            low, high = high, low
        for rank in range(low, high + 1):
            hands.append(f"{RANK_CHAR[rank]}{RANK_CHAR[rank]}")
        return hands

    # Suited/offsuit plus: "ATs+"
    if len(token) == 4 and token[3] == "+":
        high_rank = _rank_of(token[0], range_str)
        low_rank = _rank_of(token[1], range_str)
        suffix = range_str[2].lower()
        if suffix not in ("s", "o"):
            raise InvalidCardNotation(range_str, "expected s or o before +")

        for rank in range(low_rank, high_rank):
            hands.append(f"{RANK_CHAR[high_rank]}{RANK_CHAR[rank]}{suffix}")
        return hands

    # Unsuffixed non-pair: "AK" covers both suited and offsuit
    if len(token) == 2 and token[0] != token[1] and token[1] not in "CDHS":
        return [f"{token}s", f"{token}o"]

    # Single hand
    return [range_str]


def expand_hand(notation: str) -> list[Hand]:
    """
    Expand one canonical hand ('QQ', 'AKs', 'AKo') into concrete combos.

    Pairs give 6 combos, suited hands 4, offsuit hands 12. Anything else is
    treated as a specific two-card hand ('AsKh').
    """
    token = notation.strip()
    upper = token.upper()

    if len(upper) == 2 and upper[0] == upper[1]:
        rank = _rank_of(upper[0], token)
        cards = [Card(Rank(rank), Suit(s)) for s in range(4)]
        return [
            Hand(cards[i], cards[j])
            for i in range(4)
            for j in range(i + 1, 4)
        ]

    if len(upper) == 3 and upper[2] in ("S", "O") and upper[1] not in "CDHS0":
        r1 = Rank(_rank_of(upper[0], token))
        r2 = Rank(_rank_of(upper[1], token))
        if r1 == r2:
            raise InvalidCardNotation(token, "pairs cannot be suited or offsuit")
        if upper[2] == "S":
            return [Hand(Card(r1, Suit(s)), Card(r2, Suit(s))) for s in range(4)]
        return [
            Hand(Card(r1, Suit(s1)), Card(r2, Suit(s2)))
            for s1 in range(4)
            for s2 in range(4)
            if s1 != s2
        ]

    return [Hand.from_string(token)]


def all_hands() -> list[Hand]:
    """Every one of the 1326 distinct two-card combinations."""
    combos = []
    for canonical in get_all_hands():
        combos.extend(expand_hand(canonical))
    return combos


def _rank_of(char: str, context: str) -> int:
    rank = STR_RANK.get(char.upper())
    if rank is None:
        raise InvalidCardNotation(context, f"invalid rank {char!r}")
    return rank
