"""Raw outcome counters and the equity result handed back to callers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OutcomeCounts:
    """Win/tie tallies over ``total`` scenarios; losses are the remainder."""
    wins: int = 0
    ties: int = 0
    total: int = 0

    @property
    def losses(self) -> int:
        return self.total - self.wins - self.ties

    def __add__(self, other: "OutcomeCounts") -> "OutcomeCounts":
        return OutcomeCounts(
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
            total=self.total + other.total,
        )


@dataclass(frozen=True)
class EquityResult:
    """Hero's win and tie probabilities."""
    win_probability: float
    tie_probability: float
    sample_size: int

    @classmethod
    def from_counts(cls, counts: OutcomeCounts) -> "EquityResult":
        """Normalize raw counters; an empty sample gives all-zero probabilities."""
        if counts.total == 0:
            return cls(0.0, 0.0, 0)
        return cls(
            win_probability=counts.wins / counts.total,
            tie_probability=counts.ties / counts.total,
            sample_size=counts.total,
        )

    @property
    def loss_probability(self) -> float:
        if self.sample_size == 0:
            return 0.0
        return 1.0 - self.win_probability - self.tie_probability

    @property
    def expected_value(self) -> float:
        """Share of the pot: P(win) + P(tie) / 2."""
        return self.win_probability + self.tie_probability / 2.0

    @property
    def win_percentage(self) -> float:
        return self.win_probability * 100.0

    @property
    def tie_percentage(self) -> float:
        return self.tie_probability * 100.0

    @property
    def loss_percentage(self) -> float:
        return self.loss_probability * 100.0

    @property
    def expected_value_percentage(self) -> float:
        return self.expected_value * 100.0

    def to_dict(self) -> dict:
        return {
            "win": self.win_probability,
            "tie": self.tie_probability,
            "loss": self.loss_probability,
            "expected_value": self.expected_value,
            "sample_size": self.sample_size,
        }

    def to_percentage_dict(self) -> dict:
        return {
            "win_pct": self.win_percentage,
            "tie_pct": self.tie_percentage,
            "loss_pct": self.loss_percentage,
            "ev_pct": self.expected_value_percentage,
            "sample_size": self.sample_size,
        }
