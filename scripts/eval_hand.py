#!/usr/bin/env python3
"""Show the best five-card hand for one or more players."""

import argparse
import sys
from pathlib import Path

from rich.console import Console

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pokerodds.exceptions import PokerError
from pokerodds.game.cards import parse_cards
from pokerodds.game.evaluator import evaluate_hand
from pokerodds.viz import display_hand, display_showdown


def main():
    parser = argparse.ArgumentParser(
        description="Evaluate the best poker hand from hole and board cards"
    )
    parser.add_argument(
        "hands",
        nargs="+",
        help="Hole cards per player (e.g., 'AhKh'); a single argument may hold 5-7 cards",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Community cards shared by all players",
    )

    args = parser.parse_args()
    console = Console()

    try:
        board = parse_cards(args.board)
        evaluated = [
            (label, evaluate_hand(parse_cards(label), board))
            for label in args.hands
        ]
    except PokerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    if len(evaluated) == 1:
        display_hand(evaluated[0][1], console=console)
    else:
        display_showdown(evaluated, console=console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
