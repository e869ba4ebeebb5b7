"""Error types raised by the evaluator and equity engines."""

from enum import Enum
from typing import Optional


class PokerError(Exception):
    """Base class for all pokerodds errors."""


class InvalidCardNotation(PokerError, ValueError):
    """A card string could not be parsed."""

    def __init__(self, notation: str, detail: str = ""):
        self.notation = notation
        message = f"Invalid card notation: {notation!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class EvaluationReason(Enum):
    INSUFFICIENT_CARDS = "insufficient_cards"
    TOO_MANY_CARDS = "too_many_cards"
    DUPLICATE_CARD = "duplicate_card"


class EvaluationError(PokerError, ValueError):
    """Raised when a set of cards cannot be evaluated as a poker hand."""

    def __init__(
        self,
        reason: EvaluationReason,
        message: str,
        requested: Optional[int] = None,
        card: Optional[str] = None,
    ):
        self.reason = reason
        self.requested = requested
        self.card = card
        super().__init__(message)

    @classmethod
    def insufficient_cards(cls, count: int) -> "EvaluationError":
        return cls(
            EvaluationReason.INSUFFICIENT_CARDS,
            f"Need at least 5 cards to evaluate a hand, got {count}",
            requested=count,
        )

    @classmethod
    def too_many_cards(cls, count: int) -> "EvaluationError":
        return cls(
            EvaluationReason.TOO_MANY_CARDS,
            f"Can evaluate at most 7 cards, got {count}",
            requested=count,
        )

    @classmethod
    def duplicate_card(cls, card: str) -> "EvaluationError":
        return cls(
            EvaluationReason.DUPLICATE_CARD,
            f"Duplicate card in hand: {card}",
            card=card,
        )


class InputReason(Enum):
    WRONG_HOLE_CARD_COUNT = "wrong_hole_card_count"
    WRONG_COMMUNITY_COUNT = "wrong_community_count"
    NO_OPPONENTS = "no_opponents"
    EMPTY_OPPONENT_RANGE = "empty_opponent_range"
    DUPLICATE_CARD = "duplicate_card"
    NON_POSITIVE_ITERATIONS = "non_positive_iterations"
    NO_AVAILABLE_CARDS = "no_available_cards"
    UNKNOWN_METHOD = "unknown_method"


class InvalidEquityInput(PokerError, ValueError):
    """
    Raised when an equity request is rejected before calculation.

    The ``reason`` attribute identifies which check failed; ``card``,
    ``index``, ``requested`` and ``available`` carry the offending values
    when they apply.
    """

    def __init__(
        self,
        reason: InputReason,
        message: str,
        *,
        card: Optional[str] = None,
        index: Optional[int] = None,
        requested: Optional[int] = None,
        available: Optional[int] = None,
    ):
        self.reason = reason
        self.card = card
        self.index = index
        self.requested = requested
        self.available = available
        super().__init__(message)

    @classmethod
    def wrong_hole_card_count(cls, count: int) -> "InvalidEquityInput":
        return cls(
            InputReason.WRONG_HOLE_CARD_COUNT,
            f"Hero must have exactly 2 hole cards, got {count}",
            requested=count,
        )

    @classmethod
    def wrong_community_count(cls, count: int) -> "InvalidEquityInput":
        return cls(
            InputReason.WRONG_COMMUNITY_COUNT,
            f"Community cards must be between 0 and 5, got {count}",
            requested=count,
        )

    @classmethod
    def no_opponents(cls) -> "InvalidEquityInput":
        return cls(InputReason.NO_OPPONENTS, "At least one opponent range is required")

    @classmethod
    def empty_opponent_range(cls, index: int) -> "InvalidEquityInput":
        return cls(
            InputReason.EMPTY_OPPONENT_RANGE,
            f"Opponent #{index} has an empty range (no possible hands)",
            index=index,
        )

    @classmethod
    def duplicate_card(cls, card: str) -> "InvalidEquityInput":
        return cls(
            InputReason.DUPLICATE_CARD,
            f"Duplicate card found in input: {card}",
            card=card,
        )

    @classmethod
    def non_positive_iterations(cls, iterations: int) -> "InvalidEquityInput":
        return cls(
            InputReason.NON_POSITIVE_ITERATIONS,
            f"Iterations must be positive, got {iterations}",
            requested=iterations,
        )

    @classmethod
    def no_available_cards(
        cls,
        requested: int,
        available: int,
        index: Optional[int] = None,
    ) -> "InvalidEquityInput":
        if index is not None:
            message = (
                f"Opponent #{index} has no hand that avoids the known cards "
                f"({available} of {requested} combos usable)"
            )
        else:
            message = (
                f"Not enough unknown cards: need {requested}, "
                f"only {available} available"
            )
        return cls(
            InputReason.NO_AVAILABLE_CARDS,
            message,
            index=index,
            requested=requested,
            available=available,
        )

    @classmethod
    def unknown_method(cls, method: object) -> "InvalidEquityInput":
        return cls(
            InputReason.UNKNOWN_METHOD,
            f"Unknown equity method: {method!r}",
        )

    @classmethod
    def undealable(cls, opponents: int, attempts: int) -> "InvalidEquityInput":
        return cls(
            InputReason.NO_AVAILABLE_CARDS,
            f"Could not deal {opponents} non-overlapping opponent hands "
            f"in {attempts} attempts",
            requested=2 * opponents,
        )


class EquityCancelled(PokerError):
    """Raised when an enumeration is aborted by its cancellation check."""

    def __init__(self, completed: int, total: int):
        self.completed = completed
        self.total = total
        super().__init__(f"Enumeration cancelled after {completed} of {total} scenario groups")
