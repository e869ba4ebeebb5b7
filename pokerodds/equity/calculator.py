"""Equity calculation entry point: validation and engine dispatch."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, Union

import numpy as np

from pokerodds.exceptions import InvalidEquityInput
from pokerodds.game.cards import Card, CardLike, Hand, parse_cards
from pokerodds.game.ranges import PlayerRange
from .enumeration import EnumerationEngine, ProgressCallback
from .montecarlo import MonteCarloEngine
from .result import EquityResult

logger = logging.getLogger(__name__)

RangeLike = Union[PlayerRange, Hand, str]


class EquityMethod(str, Enum):
    """How equity is computed."""
    MONTE_CARLO = "monte_carlo"   # Fast, approximate
    ENUMERATION = "enumeration"   # Exact, cost grows with unknown cards


@dataclass
class EquityConfig:
    """Defaults for an EquityCalculator; per-call arguments override them."""
    method: EquityMethod = EquityMethod.MONTE_CARLO
    iterations: int = 10000
    workers: int = 1                 # Processes per calculation (1 = in-process)
    seed: Optional[int] = None       # Monte Carlo seed for reproducible runs
    max_deal_attempts: int = 1000    # Redraws before giving up on a Monte Carlo deal


class EquityCalculator:
    """
    Calculates hero's win/tie probabilities against opponent ranges.

    Inputs are normalized to Card values and validated up front; nothing is
    computed unless the whole request is valid. The work is then handed to
    the enumeration or Monte Carlo engine.
    """

    def __init__(self, config: Optional[EquityConfig] = None):
        self.config = config or EquityConfig()
        self.enumeration = EnumerationEngine(workers=self.config.workers)
        self.monte_carlo = MonteCarloEngine(
            workers=self.config.workers,
            max_deal_attempts=self.config.max_deal_attempts,
        )

    def calculate(
        self,
        hero: Union[str, Iterable[CardLike]],
        opponent_ranges: Sequence[RangeLike],
        community: Union[str, Iterable[CardLike]] = (),
        method: Union[EquityMethod, str, None] = None,
        iterations: Optional[int] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
        callback: Optional[ProgressCallback] = None,
    ) -> EquityResult:
        """
        Calculate equity for a poker situation.

        Args:
            hero: Hero's 2 hole cards (Cards, strings, or "AsKh")
            opponent_ranges: One range per opponent; a Hand or a notation
                string ("QQ+, AKs") is converted to a PlayerRange
            community: 0-5 known community cards
            method: Monte Carlo or enumeration (defaults to config)
            iterations: Monte Carlo trials (defaults to config)
            seed: Monte Carlo seed (defaults to config)
            rng: Monte Carlo generator, takes precedence over seed
            should_cancel: Enumeration cancellation check
            callback: Enumeration progress callback(done, total)

        Returns:
            EquityResult with win/tie probabilities

        Raises:
            InvalidEquityInput: If the request is invalid
        """
        method = to_method(method) if method is not None else self.config.method
        iterations = self.config.iterations if iterations is None else iterations
        seed = self.config.seed if seed is None else seed

        hero_cards = parse_cards(hero)
        board = parse_cards(community)
        ranges = [to_range(r) for r in opponent_ranges]

        validate_request(hero_cards, ranges, board, method, iterations)

        logger.debug(
            "Calculating %s equity: hero=%s board=%s opponents=%s",
            method.value,
            " ".join(str(c) for c in hero_cards),
            " ".join(str(c) for c in board) or "-",
            ranges,
        )

        if method is EquityMethod.MONTE_CARLO:
            counts = self.monte_carlo.simulate(
                hero_cards, ranges, board, iterations, seed=seed, rng=rng,
            )
        else:
            counts = self.enumeration.calculate(
                hero_cards, ranges, board,
                should_cancel=should_cancel, callback=callback,
            )

        if counts.total == 0:
            logger.warning("No legal scenario for this request; returning zero equity")
        result = EquityResult.from_counts(counts)
        logger.info(
            "%s equity: win=%.4f tie=%.4f over %d scenarios",
            method.value, result.win_probability, result.tie_probability, result.sample_size,
        )
        return result


def to_method(value: Union[EquityMethod, str]) -> EquityMethod:
    """Normalize a method argument such as "enumeration"."""
    try:
        return EquityMethod(value)
    except ValueError:
        raise InvalidEquityInput.unknown_method(value) from None


def to_range(value: RangeLike) -> PlayerRange:
    """Normalize an opponent range argument."""
    if isinstance(value, PlayerRange):
        return value
    if isinstance(value, Hand):
        return PlayerRange.exact(value)
    if isinstance(value, str):
        return PlayerRange.from_notation(value)
    return PlayerRange.exact(value)


def validate_request(
    hero: Sequence[Card],
    ranges: Sequence[PlayerRange],
    community: Sequence[Card],
    method: EquityMethod,
    iterations: int,
) -> None:
    """
    Check an equity request before any computation.

    Raises:
        InvalidEquityInput: on the first failed check
    """
    if len(hero) != 2:
        raise InvalidEquityInput.wrong_hole_card_count(len(hero))

    if len(community) > 5:
        raise InvalidEquityInput.wrong_community_count(len(community))

    if not ranges:
        raise InvalidEquityInput.no_opponents()

    for index, player_range in enumerate(ranges):
        if len(player_range) == 0:
            raise InvalidEquityInput.empty_opponent_range(index)

    _check_duplicates(hero, ranges, community)

    if method is EquityMethod.MONTE_CARLO and iterations < 1:
        raise InvalidEquityInput.non_positive_iterations(iterations)

    unknown = 52 - len(hero) - len(community)
    required = 2 * len(ranges) + (5 - len(community))
    if required > unknown:
        raise InvalidEquityInput.no_available_cards(required, unknown)


def _check_duplicates(
    hero: Sequence[Card],
    ranges: Sequence[PlayerRange],
    community: Sequence[Card],
) -> None:
    seen: set[Card] = set()

    def claim(card: Card) -> None:
        if card in seen:
            raise InvalidEquityInput.duplicate_card(str(card))
        seen.add(card)

    for card in hero:
        claim(card)
    for card in community:
        claim(card)

    for player_range in ranges:
        for hand in player_range:
            if hand.card1 == hand.card2:
                raise InvalidEquityInput.duplicate_card(str(hand.card1))
        # Only a known hand reserves its cards
        exact = player_range.exact_hand
        if exact is not None:
            claim(exact.card1)
            claim(exact.card2)


def calculate_equity(
    hero: Union[str, Iterable[CardLike]],
    opponent_ranges: Sequence[RangeLike],
    community: Union[str, Iterable[CardLike]] = (),
    method: Union[EquityMethod, str] = EquityMethod.MONTE_CARLO,
    iterations: int = 10000,
    seed: Optional[int] = None,
    workers: int = 1,
) -> EquityResult:
    """
    Calculate hero equity with a one-off calculator.

    Args:
        hero: Hero's hole cards
        opponent_ranges: One range per opponent
        community: Known board cards
        method: Monte Carlo or enumeration
        iterations: Monte Carlo trials
        seed: Monte Carlo seed
        workers: Worker processes

    Returns:
        EquityResult
    """
    calculator = EquityCalculator(EquityConfig(workers=workers))
    return calculator.calculate(
        hero, opponent_ranges, community, method, iterations, seed=seed,
    )
