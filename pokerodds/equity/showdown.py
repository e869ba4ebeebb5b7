"""Hero-centric showdown classification shared by both engines."""

from enum import Enum
from typing import Sequence

from pokerodds.game.cards import Card, Hand
from pokerodds.game.evaluator import hand_strength


class Outcome(Enum):
    WIN = "win"
    TIE = "tie"
    LOSS = "loss"


def showdown(hero: Sequence[Card], opponents: Sequence[Hand], board: Sequence[Card]) -> Outcome:
    """
    Classify one complete deal from hero's point of view.

    Hero wins by beating every opponent, ties by tying at least one and
    losing to none, and loses otherwise. Opponents are not compared with
    each other.
    """
    hero_strength = hand_strength([*hero, *board])
    tied = False
    for opponent in opponents:
        opp_strength = hand_strength([opponent.card1, opponent.card2, *board])
        if opp_strength > hero_strength:
            return Outcome.LOSS
        if opp_strength == hero_strength:
            tied = True
    return Outcome.TIE if tied else Outcome.WIN
