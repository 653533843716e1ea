"""Ties the snapshot, freshness policy and fetch coordinator together."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

import pytz

from .config import CalculatorConfig
from .data.cache_policy import refresh_reason
from .data.ingestion import AcquisitionResult, YearFetchCoordinator, cutoff_season
from .data.snapshot import SnapshotStore
from .models.matrix import ResultMatrix
from .predictors.seed_history import MatchupReport, compare, validate_seed

logger = logging.getLogger(__name__)


def tournament_clock(timezone: str) -> Callable[[], datetime]:
    """Return a clock reading the current time in ``timezone``."""
    tz = pytz.timezone(timezone)

    def now() -> datetime:
        return datetime.now(tz)

    return now


class SeedDataService:
    """Provides an up-to-date result matrix and answers seed comparisons."""

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        store: Optional[SnapshotStore] = None,
        coordinator: Optional[YearFetchCoordinator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config or CalculatorConfig()
        self.store = store or SnapshotStore(self.config.data_file)
        self.coordinator = coordinator or YearFetchCoordinator(self.config)
        self.clock = clock or tournament_clock(self.config.timezone)

    def load_matrix(self, force: bool = False) -> ResultMatrix:
        """Reuse the snapshot when it is fresh, otherwise re-acquire it."""
        now = self.clock()
        reason = refresh_reason(
            self.store.meta(),
            now,
            force=force,
            per_year_bytes=self.config.per_year_bytes,
            boundary_month=self.config.season_boundary_month,
        )
        if reason is None:
            matrix = self.store.load()
            expected = cutoff_season(now, self.config.cutoff_month)
            if not matrix.partial and matrix.covers(expected):
                return matrix
            reason = "partial" if matrix.partial else f"missing-season-{expected}"

        logger.info("Refreshing match data (%s)", reason)
        result = self.refresh(now)
        if not result.persisted:
            # A partial refresh was discarded in favour of the complete snapshot.
            existing = self.store.load_if_valid()
            if existing is not None:
                return existing
        return result.matrix

    def refresh(self, now: Optional[datetime] = None) -> AcquisitionResult:
        """
        Re-acquire every season and persist the merged matrix.

        A partial (timed out) result never replaces a complete snapshot.

        Raises:
            AcquisitionError: if nothing was retrieved or the write failed
        """
        now = now or self.clock()
        result = self.coordinator.acquire_all(now)
        if result.failed_seasons:
            logger.warning(
                "%d seasons could not be retrieved: %s",
                len(result.failed_seasons),
                sorted(result.failed_seasons),
            )

        if result.partial:
            existing = self.store.load_if_valid()
            if existing is not None and not existing.partial:
                logger.warning(
                    "Keeping complete snapshot %s; partial results (%d seasons missing) not saved",
                    self.store.path,
                    len(result.timed_out_seasons),
                )
                return result

        self.store.save(result.matrix)
        result.persisted = True
        return result

    def compare(self, seed_a, seed_b, force: bool = False) -> MatchupReport:
        """Compare two seeds, loading match data only when it is needed."""
        seed_a, seed_b = validate_seed(seed_a), validate_seed(seed_b)
        if seed_a == seed_b:
            return compare(seed_a, seed_b, None)
        return compare(seed_a, seed_b, self.load_matrix(force=force))
