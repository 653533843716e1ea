"""Data models for seed matchup history."""

from .match_record import MatchRecord, SeasonGame
from .matrix import NUM_SEEDS, ResultMatrix

__all__ = ["MatchRecord", "NUM_SEEDS", "ResultMatrix", "SeasonGame"]
