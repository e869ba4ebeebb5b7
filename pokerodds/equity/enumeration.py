"""
Exact equity by exhaustive enumeration.

Every legal assignment of one hand per opponent range is combined with
every completion of the board. The work is split into partitions keyed by
(opponent assignment, first runout card), which can be counted in separate
processes and summed. Partitions are generated lazily, one opponent
assignment at a time, so a run can be cancelled before the whole space has
been laid out.
"""

import itertools
import logging
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Sequence

from pokerodds.exceptions import EquityCancelled, InvalidEquityInput
from pokerodds.game.cards import Card, Hand, remaining_cards
from pokerodds.game.ranges import PlayerRange
from .result import OutcomeCounts
from .showdown import Outcome, showdown

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# Partitions in flight per worker process
PENDING_PER_WORKER = 4


@dataclass(frozen=True)
class Partition:
    """One independent slice of the enumeration."""
    opponents: tuple[Hand, ...]
    pool: tuple[Card, ...]       # Cards left for the board after opponents are dealt
    needed: int                  # Board cards still to come
    first: Optional[int] = None  # Index into pool of the lowest runout card, if fixed


def opponent_assignments(
    ranges: Sequence[PlayerRange],
    dead: set[Card],
) -> Iterator[tuple[Hand, ...]]:
    """
    Yield every assignment of one hand per range with no shared cards.

    Hands touching ``dead`` or a card already given to an earlier opponent
    are pruned as the product is built.
    """
    if not ranges:
        yield ()
        return

    first, rest = ranges[0], ranges[1:]
    for hand in first:
        if hand.card1 in dead or hand.card2 in dead:
            continue
        for tail in opponent_assignments(rest, dead | {hand.card1, hand.card2}):
            yield (hand,) + tail


def count_partition(hero: Sequence[Card], community: Sequence[Card], part: Partition) -> OutcomeCounts:
    """Tally win/tie/total over every runout in one partition."""
    if part.first is None:
        base = list(community)
        runouts = itertools.combinations(part.pool, part.needed)
    else:
        base = [*community, part.pool[part.first]]
        runouts = itertools.combinations(part.pool[part.first + 1:], part.needed - 1)

    wins = ties = total = 0
    for extra in runouts:
        outcome = showdown(hero, part.opponents, base + list(extra))
        if outcome is Outcome.WIN:
            wins += 1
        elif outcome is Outcome.TIE:
            ties += 1
        total += 1
    return OutcomeCounts(wins, ties, total)


class _Progress:
    """Running done/total counters shared by the serial and parallel runners."""

    def __init__(self, should_cancel, callback):
        self.should_cancel = should_cancel
        self.callback = callback
        self.done = 0
        self.total = 0

    def check(self) -> None:
        if self.should_cancel is not None and self.should_cancel():
            raise EquityCancelled(self.done, self.total)

    def advance(self) -> None:
        self.done += 1
        if self.callback:
            self.callback(self.done, self.total)


class EnumerationEngine:
    """
    Exhaustive equity engine.

    Deterministic: identical inputs always give identical counts, whatever
    the number of workers. Cost grows combinatorially with the number of
    unknown board cards and the size of the opponent ranges, so this suits
    exact opponent hands and late streets.
    """

    def __init__(self, workers: int = 1):
        self.workers = max(1, workers)

    def calculate(
        self,
        hero: Sequence[Card],
        opponent_ranges: Sequence[PlayerRange],
        community: Sequence[Card] = (),
        should_cancel: Optional[Callable[[], bool]] = None,
        callback: Optional[ProgressCallback] = None,
    ) -> OutcomeCounts:
        """
        Count hero's wins and ties over every legal scenario.

        Args:
            hero: Hero's two hole cards
            opponent_ranges: One range per opponent
            community: Known board cards (0-5)
            should_cancel: Checked before each partition; returning True
                raises EquityCancelled
            callback: Optional callback(done, total) after each partition.
                ``total`` counts the partitions found so far and grows as
                further opponent assignments are reached; it is final once
                the last one has been generated.

        Returns:
            Raw counters; total is 0 if no legal opponent assignment exists
        """
        batches = self.partition_batches(hero, opponent_ranges, community)
        progress = _Progress(should_cancel, callback)

        if self.workers == 1:
            counts = self._run_serial(hero, community, batches, progress)
        else:
            counts = self._run_parallel(hero, community, batches, progress)

        logger.debug(
            "Enumerated %d partitions over %d opponent(s) with %d worker(s)",
            progress.total, len(opponent_ranges), self.workers,
        )
        return counts

    def partition_batches(
        self,
        hero: Sequence[Card],
        opponent_ranges: Sequence[PlayerRange],
        community: Sequence[Card] = (),
    ) -> Iterator[list[Partition]]:
        """
        Lazily yield the partitions of each opponent assignment in turn.

        Raises:
            InvalidEquityInput: if too few cards remain to finish the board
        """
        known = set(hero) | set(community)
        pool = remaining_cards(known)
        needed = 5 - len(community)

        available = len(pool) - 2 * len(opponent_ranges)
        if needed > 0 and available < needed:
            raise InvalidEquityInput.no_available_cards(needed, max(available, 0))

        return self._batches(list(opponent_ranges), known, pool, needed)

    def partitions(
        self,
        hero: Sequence[Card],
        opponent_ranges: Sequence[PlayerRange],
        community: Sequence[Card] = (),
    ) -> list[Partition]:
        """All partitions of the enumeration, materialized."""
        batches = self.partition_batches(hero, opponent_ranges, community)
        return [part for batch in batches for part in batch]

    @staticmethod
    def _batches(ranges, known, pool, needed) -> Iterator[list[Partition]]:
        for opponents in opponent_assignments(ranges, known):
            dealt = {card for hand in opponents for card in hand}
            board_pool = tuple(c for c in pool if c not in dealt)
            if needed == 0:
                yield [Partition(opponents, board_pool, 0)]
                continue
            # The lowest runout card can sit anywhere that leaves room for the rest
            yield [
                Partition(opponents, board_pool, needed, first)
                for first in range(len(board_pool) - needed + 1)
            ]

    def _run_serial(
        self,
        hero: Sequence[Card],
        community: Sequence[Card],
        batches: Iterable[list[Partition]],
        progress: _Progress,
    ) -> OutcomeCounts:
        counts = OutcomeCounts()
        for batch in batches:
            progress.total += len(batch)
            for part in batch:
                progress.check()
                counts += count_partition(hero, community, part)
                progress.advance()
        return counts

    def _run_parallel(
        self,
        hero: Sequence[Card],
        community: Sequence[Card],
        batches: Iterable[list[Partition]],
        progress: _Progress,
    ) -> OutcomeCounts:
        counts = OutcomeCounts()
        limit = self.workers * PENDING_PER_WORKER
        pending: set[Future] = set()

        def collect(finished) -> None:
            nonlocal counts
            for future in finished:
                counts += future.result()
                progress.advance()

        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            try:
                for batch in batches:
                    progress.total += len(batch)
                    for part in batch:
                        progress.check()
                        if len(pending) >= limit:
                            finished, pending = wait(pending, return_when=FIRST_COMPLETED)
                            collect(finished)
                        pending.add(executor.submit(count_partition, list(hero), list(community), part))

                while pending:
                    progress.check()
                    finished, pending = wait(pending, return_when=FIRST_COMPLETED)
                    collect(finished)
            except EquityCancelled:
                for future in pending:
                    future.cancel()
                raise
        return counts
