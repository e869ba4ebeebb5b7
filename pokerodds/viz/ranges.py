"""Range display utilities."""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.style import Style
from rich.text import Text

from pokerodds.game.cards import expand_hand
from pokerodds.game.ranges import PlayerRange


# Standard hand matrix layout (13x13)
RANKS = "AKQJT98765432"

# Pre-computed hand matrix positions
# Pairs on diagonal, suited above, offsuit below
HAND_MATRIX = []
for i, r1 in enumerate(RANKS):
    row = []
    for j, r2 in enumerate(RANKS):
        if i == j:
            row.append(f"{r1}{r2}")  # Pair
        elif i < j:
            row.append(f"{r1}{r2}s")  # Suited (above diagonal)
        else:
            row.append(f"{r2}{r1}o")  # Offsuit (below diagonal)
    HAND_MATRIX.append(row)


@dataclass
class RangeCell:
    """Coverage of a single canonical hand in the range."""
    hand: str
    combos: int = 0      # Specific combos of this hand present in the range
    max_combos: int = 0  # 6 for pairs, 4 suited, 12 offsuit

    @property
    def frequency(self) -> float:
        """Fraction of the hand's combos in the range (0-1)."""
        return self.combos / self.max_combos if self.max_combos else 0.0


class RangeDisplay:
    """Display a PlayerRange as a 13x13 matrix in the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.cells: dict[str, RangeCell] = {}

        for row in HAND_MATRIX:
            for hand in row:
                self.cells[hand] = RangeCell(hand=hand, max_combos=len(expand_hand(hand)))

    def load_range(self, player_range: PlayerRange) -> None:
        """Count the combos of each canonical hand held by the range."""
        for cell in self.cells.values():
            cell.combos = 0
        for hand in player_range:
            self.cells[hand.canonical].combos += 1

    def display_terminal(self, title: str = "Range") -> None:
        """Display range in terminal using rich."""
        table = Table(title=title, show_header=True, header_style="bold")

        # Add column headers
        table.add_column("", style="bold")
        for rank in RANKS:
            table.add_column(rank, justify="center")

        # Add rows
        for i, rank in enumerate(RANKS):
            row = [rank]
            for j in range(13):
                cell = self.cells[HAND_MATRIX[i][j]]

                # Color based on coverage
                if cell.frequency >= 1.0:
                    style = Style(bgcolor="green", color="white")
                elif cell.frequency > 0.5:
                    style = Style(bgcolor="yellow", color="black")
                elif cell.frequency > 0:
                    style = Style(bgcolor="orange3", color="black")
                else:
                    style = Style(bgcolor="grey30", color="grey50")

                text = str(cell.combos) if cell.combos else ""
                row.append(Text(text.center(3), style=style))

            table.add_row(*row)

        self.console.print(table)


def display_range(
    player_range: PlayerRange,
    title: str = "Range",
    console: Optional[Console] = None,
) -> None:
    """
    Convenience function to display a range.

    Args:
        player_range: Range to show
        title: Display title
        console: Console to print to (default: new stdout console)
    """
    display = RangeDisplay(console=console)
    display.load_range(player_range)
    display.display_terminal(title=f"{title} ({len(player_range)} combos)")
