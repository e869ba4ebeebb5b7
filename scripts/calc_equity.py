#!/usr/bin/env python3
"""Calculate hero equity against one or more opponent ranges."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pokerodds.exceptions import PokerError
from pokerodds.game.cards import Street, parse_cards
from pokerodds.equity import EquityCalculator, EquityConfig, EquityMethod
from pokerodds.equity.calculator import to_range
from pokerodds.viz import display_equity, display_range


def main():
    parser = argparse.ArgumentParser(
        description="Calculate poker equity by enumeration or Monte Carlo"
    )
    parser.add_argument(
        "hero",
        help="Hero hole cards (e.g., 'AsKs' or 'As Ks')",
    )
    parser.add_argument(
        "-V", "--villain",
        action="append",
        required=True,
        help="Opponent hand or range (e.g., 'QdQc' or 'TT+, AKs'); repeat per opponent",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Known community cards (e.g., 'Ah5h2c')",
    )
    parser.add_argument(
        "-m", "--method",
        choices=[m.value for m in EquityMethod],
        default=EquityMethod.MONTE_CARLO.value,
        help="Calculation method (default: monte_carlo)",
    )
    parser.add_argument(
        "-i", "--iterations",
        type=int,
        default=10000,
        help="Monte Carlo iterations (default: 10000)",
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        help="Random seed for reproducible Monte Carlo runs",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="Worker processes (default: 1)",
    )
    parser.add_argument(
        "--show-ranges",
        action="store_true",
        help="Print each opponent range as a hand matrix",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        hero = parse_cards(args.hero)
        board = parse_cards(args.board)
        ranges = [to_range(v) for v in args.villain]
        street = Street.from_board(board)
    except (PokerError, ValueError) as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[bold]Hero:[/] {' '.join(str(c) for c in hero)}")
    console.print(f"[bold]Board:[/] {' '.join(str(c) for c in board) or '-'} ({street})")
    for idx, player_range in enumerate(ranges, start=1):
        console.print(f"[bold]Villain {idx}:[/] {args.villain[idx - 1]} ({len(player_range)} combos)")
        if args.show_ranges:
            display_range(player_range, title=f"Villain {idx}", console=console)
    console.print()

    calculator = EquityCalculator(EquityConfig(
        method=EquityMethod(args.method),
        iterations=args.iterations,
        workers=args.workers,
        seed=args.seed,
    ))

    try:
        if calculator.config.method is EquityMethod.ENUMERATION:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("Enumerating...", total=None)

                def on_progress(done: int, total: int) -> None:
                    progress.update(task, completed=done, total=total)

                result = calculator.calculate(hero, ranges, board, callback=on_progress)
        else:
            with console.status(f"Simulating {args.iterations:,} hands..."):
                result = calculator.calculate(hero, ranges, board)
    except PokerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    display_equity(result, title=f"Hero equity ({args.method})", console=console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
