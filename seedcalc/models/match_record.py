"""Per-seed-pair match record and transient game model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class MatchRecord:
    """Aggregate outcome of every historical game between two seeds.

    ``total_won`` counts wins by the favourite, the numerically smaller seed.
    """

    total_played: int = 0
    total_won: int = 0

    def __post_init__(self):
        """Validate counts."""
        if self.total_played < 0 or self.total_won < 0:
            raise ValueError(
                f"Counts must be non-negative, got played={self.total_played} won={self.total_won}"
            )
        if self.total_won > self.total_played:
            raise ValueError(
                f"total_won ({self.total_won}) cannot exceed total_played ({self.total_played})"
            )

    def record_game(self, favorite_won: bool) -> None:
        """Count one observed game."""
        self.total_played += 1
        if favorite_won:
            self.total_won += 1

    def add(self, other: "MatchRecord") -> None:
        """Accumulate another record's totals into this one."""
        self.total_played += other.total_played
        self.total_won += other.total_won

    @property
    def favorite_win_pct(self) -> Optional[float]:
        """Favourite's win percentage (0-100), or None without games."""
        if self.total_played == 0:
            return None
        return (self.total_won / self.total_played) * 100

    def to_dict(self) -> dict:
        return {"totalPlayed": self.total_played, "totalWon": self.total_won}

    @classmethod
    def from_dict(cls, data: dict) -> "MatchRecord":
        return cls(total_played=data["totalPlayed"], total_won=data["totalWon"])


@dataclass(frozen=True)
class SeasonGame:
    """One tournament game extracted from a season's bracket page."""

    team1_seed: int
    team2_seed: int
    team1_score: int
    team2_score: int
    season: Optional[int] = None

    @property
    def favorite_seed(self) -> int:
        return min(self.team1_seed, self.team2_seed)

    @property
    def underdog_seed(self) -> int:
        return max(self.team1_seed, self.team2_seed)

    @property
    def favorite_won(self) -> bool:
        """Whether the better seed outscored the worse seed."""
        if self.team1_seed < self.team2_seed:
            return self.team1_score > self.team2_score
        return self.team2_score > self.team1_score
