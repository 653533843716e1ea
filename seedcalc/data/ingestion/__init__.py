"""Concurrent acquisition of historical tournament results."""

from .coordinator import AcquisitionResult, YearFetchCoordinator, cutoff_season, season_range

__all__ = [
    "AcquisitionResult",
    "YearFetchCoordinator",
    "cutoff_season",
    "season_range",
]
