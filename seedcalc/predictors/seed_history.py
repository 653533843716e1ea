"""Seed matchup predictor backed by aggregated tournament history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..errors import DataCorruptionError, ValidationError
from ..models.matrix import NUM_SEEDS, ResultMatrix


@dataclass(frozen=True)
class MatchupReport:
    """Outcome of comparing two seeds."""

    seed1: int
    seed2: int
    seed1_pct: Optional[float] = None
    seed2_pct: Optional[float] = None
    recommended_seed: Optional[int] = None
    certainty: int = 0
    same_seed: bool = False
    partial: bool = False

    @property
    def has_data(self) -> bool:
        return self.seed1_pct is not None

    @property
    def is_tie(self) -> bool:
        return self.has_data and self.recommended_seed is None


def validate_seed(value) -> int:
    """Return ``value`` as a seed, raising ValidationError if it is not 1..16."""
    if isinstance(value, bool):
        raise ValidationError("Entered team seed is not an acceptable number.")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError("Entered team seed is not an acceptable number.")
    if not isinstance(value, int) or not 1 <= value <= NUM_SEEDS:
        raise ValidationError("Entered team seed is not an acceptable number.")
    return value


def compare(seed_a, seed_b, matrix: Optional[ResultMatrix]) -> MatchupReport:
    """
    Compare two seeds using historical results.

    Args:
        seed_a: First team's seed
        seed_b: Second team's seed
        matrix: Populated result matrix; not consulted for equal seeds

    Returns:
        MatchupReport with percentages, recommendation and certainty

    Raises:
        ValidationError: if either seed is not an integer in 1..16
        DataCorruptionError: if the matrix is missing or has no cell for the pair
    """
    seed_a = validate_seed(seed_a)
    seed_b = validate_seed(seed_b)

    if seed_a == seed_b:
        return MatchupReport(seed1=seed_a, seed2=seed_b, seed1_pct=50.0, seed2_pct=50.0, same_seed=True)

    record = matrix.lookup(seed_a, seed_b) if matrix is not None else None
    if record is None:
        raise DataCorruptionError("Match data has become corrupt")

    partial = matrix.partial
    if record.total_played == 0:
        return MatchupReport(seed1=seed_a, seed2=seed_b, partial=partial)

    # Subtract from 100 only the share >= 50 so the pair sums to exactly 100.0.
    favorite_pct = record.favorite_win_pct
    if favorite_pct >= 50:
        underdog_pct = 100 - favorite_pct
    else:
        underdog_pct = (record.total_played - record.total_won) / record.total_played * 100
        favorite_pct = 100 - underdog_pct
    if seed_a < seed_b:
        seed1_pct, seed2_pct = favorite_pct, underdog_pct
    else:
        seed1_pct, seed2_pct = underdog_pct, favorite_pct

    if favorite_pct > underdog_pct:
        recommended = min(seed_a, seed_b)
    elif favorite_pct < underdog_pct:
        recommended = max(seed_a, seed_b)
    else:
        recommended = None

    return MatchupReport(
        seed1=seed_a,
        seed2=seed_b,
        seed1_pct=seed1_pct,
        seed2_pct=seed2_pct,
        recommended_seed=recommended,
        certainty=record.total_played,
        partial=partial,
    )


def format_report(report: MatchupReport) -> List[str]:
    """Render a report as human-readable lines."""
    if report.same_seed:
        return ["Both seed values are the same so it's a 50/50 chance of either team winning."]
    lines = []
    if report.partial:
        lines.append("Warning: match data is incomplete (some seasons timed out); use 'force' to retry.")
    if not report.has_data:
        lines.append("No data for games with teams of these seeds.")
        return lines

    lines += [
        f"Team 1 (seed: {report.seed1}) win percentage: {report.seed1_pct:.2f}%",
        f"Team 2 (seed: {report.seed2}) win percentage: {report.seed2_pct:.2f}%",
    ]
    if report.recommended_seed is None:
        lines.append(
            f"Both teams have the same win percentage. Flip a coin or something. | Certainty: {report.certainty}"
        )
    else:
        team = 1 if report.recommended_seed == report.seed1 else 2
        lines.append(
            f"You should pick team {team} (seed: {report.recommended_seed}). | Certainty: {report.certainty}"
        )
    return lines


class SeedHistoryPredictor:
    """Predictor based on historical results between seed pairs."""

    def __init__(self, matrix: ResultMatrix):
        self.name = "seed_history"
        self.matrix = matrix

    def compare(self, seed_a, seed_b) -> MatchupReport:
        return compare(seed_a, seed_b, self.matrix)

    def win_probability(self, seed, opponent_seed) -> Optional[float]:
        """
        Get the probability that ``seed`` beats ``opponent_seed``.

        Returns:
            Probability (0 to 1), or None when the pair has never met
        """
        report = self.compare(seed, opponent_seed)
        if not report.has_data:
            return None
        return report.seed1_pct / 100
