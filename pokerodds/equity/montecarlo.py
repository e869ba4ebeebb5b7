"""
Approximate equity by Monte Carlo sampling.

Each trial deals one hand per opponent range and a random board completion,
then classifies the showdown. Trials are independent, so the iteration
count can be split across worker processes with one child generator each.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Optional, Sequence

import numpy as np

from pokerodds.exceptions import InvalidEquityInput
from pokerodds.game.cards import Card, Hand, remaining_cards
from pokerodds.game.ranges import PlayerRange
from .result import OutcomeCounts
from .showdown import Outcome, showdown

logger = logging.getLogger(__name__)


def deal_opponents(
    live_ranges: Sequence[Sequence[Hand]],
    rng: np.random.Generator,
    max_attempts: int,
) -> tuple[Hand, ...]:
    """
    Draw one hand per range with no card dealt twice.

    Each range is sampled independently and the whole deal is redrawn when
    two opponents collide, so every legal joint deal is equally likely.
    """
    for _ in range(max_attempts):
        hands = tuple(r[rng.integers(len(r))] for r in live_ranges)
        dealt = {card for hand in hands for card in (hand.card1, hand.card2)}
        if len(dealt) == 2 * len(hands):
            return hands
    raise InvalidEquityInput.undealable(len(live_ranges), max_attempts)


def simulate_chunk(
    hero: Sequence[Card],
    community: Sequence[Card],
    live_ranges: Sequence[Sequence[Hand]],
    iterations: int,
    rng: np.random.Generator,
    max_attempts: int = 1000,
) -> OutcomeCounts:
    """Run ``iterations`` trials with one generator."""
    pool = remaining_cards([*hero, *community])
    needed = 5 - len(community)
    board = list(community)

    wins = ties = 0
    for _ in range(iterations):
        opponents = deal_opponents(live_ranges, rng, max_attempts)
        if needed:
            dealt = {card for hand in opponents for card in (hand.card1, hand.card2)}
            live = [c for c in pool if c not in dealt]
            picks = rng.choice(len(live), size=needed, replace=False)
            runout = board + [live[i] for i in picks]
        else:
            runout = board

        outcome = showdown(hero, opponents, runout)
        if outcome is Outcome.WIN:
            wins += 1
        elif outcome is Outcome.TIE:
            ties += 1
    return OutcomeCounts(wins, ties, iterations)


class MonteCarloEngine:
    """
    Sampling equity engine.

    ``total`` always equals the requested iteration count. Pass a seed or a
    ``numpy.random.Generator`` for reproducible runs.

    Unlike the enumeration engine, which returns empty counts when no
    conflict-free deal exists, this engine cannot sample from an empty
    space: it raises ``InvalidEquityInput`` (NO_AVAILABLE_CARDS) when a
    range has no hand left once hero and board cards are removed, or when
    no legal deal turns up within ``max_deal_attempts`` redraws.
    """

    def __init__(self, workers: int = 1, max_deal_attempts: int = 1000):
        self.workers = max(1, workers)
        self.max_deal_attempts = max_deal_attempts

    def simulate(
        self,
        hero: Sequence[Card],
        opponent_ranges: Sequence[PlayerRange],
        community: Sequence[Card],
        iterations: int,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> OutcomeCounts:
        """
        Estimate hero's win/tie counts over random deals.

        Args:
            hero: Hero's two hole cards
            opponent_ranges: One range per opponent
            community: Known board cards (0-5)
            iterations: Number of trials
            seed: Seed for a fresh generator (ignored when ``rng`` is given)
            rng: Generator to draw from

        Returns:
            Raw counters with total == iterations
        """
        if iterations < 1:
            raise InvalidEquityInput.non_positive_iterations(iterations)

        dead = [*hero, *community]
        live_ranges = []
        for index, player_range in enumerate(opponent_ranges):
            live = player_range.without(dead)
            if not live:
                raise InvalidEquityInput.no_available_cards(len(player_range), 0, index=index)
            live_ranges.append(live)

        needed = 5 - len(community)
        available = 52 - len(dead) - 2 * len(live_ranges)
        if needed > available:
            raise InvalidEquityInput.no_available_cards(needed, max(available, 0))

        if rng is None:
            rng = np.random.default_rng(seed)

        workers = min(self.workers, iterations)
        if workers == 1:
            return simulate_chunk(hero, community, live_ranges, iterations, rng, self.max_deal_attempts)

        chunk = iterations // workers
        sizes = [chunk] * (workers - 1) + [iterations - chunk * (workers - 1)]
        children = rng.spawn(workers)
        logger.debug("Splitting %d trials across %d workers: %s", iterations, workers, sizes)

        counts = OutcomeCounts()
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    simulate_chunk, list(hero), list(community), live_ranges,
                    size, child, self.max_deal_attempts,
                )
                for size, child in zip(sizes, children)
            ]
            for future in futures:
                counts += future.result()
        return counts
