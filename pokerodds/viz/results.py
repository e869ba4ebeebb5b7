"""Terminal rendering of equity results and evaluated hands."""

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokerodds.equity.result import EquityResult
from pokerodds.game.evaluator import EvaluatedHand, HandRank

# Hand categories strong enough to highlight
_HIGHLIGHT = {
    HandRank.ROYAL_FLUSH: "bold magenta",
    HandRank.STRAIGHT_FLUSH: "bold magenta",
    HandRank.FOUR_OF_A_KIND: "bold red",
    HandRank.FULL_HOUSE: "bold yellow",
}


def equity_table(result: EquityResult, title: str = "Equity") -> Table:
    """Build a table of win/tie/loss percentages for one result."""
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Outcome", style="bold")
    table.add_column("Probability", justify="right")

    table.add_row("[green]Win[/]", f"{result.win_percentage:.2f}%")
    table.add_row("[yellow]Tie[/]", f"{result.tie_percentage:.2f}%")
    table.add_row("[red]Lose[/]", f"{result.loss_percentage:.2f}%")
    table.add_row("Equity", f"{result.expected_value_percentage:.2f}%")
    table.add_row("Scenarios", f"{result.sample_size:,}")
    return table


def display_equity(
    result: EquityResult,
    title: str = "Equity",
    console: Optional[Console] = None,
) -> None:
    """Print an equity result."""
    console = console or Console()
    console.print(equity_table(result, title=title))


def display_hand(
    hand: EvaluatedHand,
    console: Optional[Console] = None,
) -> None:
    """Print an evaluated hand with its best five cards."""
    console = console or Console()
    style = _HIGHLIGHT.get(hand.rank, "bold")
    cards = "  ".join(str(c) for c in hand.cards)
    body = f"[{style}]{hand.detailed_description}[/]\n{cards}"
    console.print(Panel(body, title=hand.description, expand=False))


def display_showdown(
    hands: Sequence[tuple[str, EvaluatedHand]],
    console: Optional[Console] = None,
) -> None:
    """Print several labelled hands, strongest first."""
    console = console or Console()
    table = Table(title="Showdown", box=box.SIMPLE)
    table.add_column("Player", style="bold")
    table.add_column("Hand")
    table.add_column("Cards")

    for label, hand in sorted(hands, key=lambda item: item[1].strength, reverse=True):
        style = _HIGHLIGHT.get(hand.rank, "")
        description = f"[{style}]{hand.detailed_description}[/]" if style else hand.detailed_description
        table.add_row(label, description, " ".join(str(c) for c in hand.cards))
    console.print(table)
