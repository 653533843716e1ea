"""Seed matchup predictors."""

from .seed_history import MatchupReport, SeedHistoryPredictor, compare, format_report, validate_seed

__all__ = ["MatchupReport", "SeedHistoryPredictor", "compare", "format_report", "validate_seed"]
