"""Concurrent per-season fetch and aggregation of tournament results."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ...config import CalculatorConfig
from ...errors import AcquisitionError, TransportError
from ...models.matrix import ResultMatrix
from ..scrapers import BracketPageScraper

logger = logging.getLogger(__name__)


def cutoff_season(now: datetime, cutoff_month: int = 4) -> int:
    """Most recent tournament year that has finished as of ``now``."""
    if now.month < cutoff_month:
        return now.year - 1
    return now.year


def season_range(now: datetime, start_season: int = 1985, cutoff_month: int = 4) -> List[int]:
    return list(range(start_season, cutoff_season(now, cutoff_month) + 1))


@dataclass
class SeasonOutcome:
    """Terminal state of one season's fetch task."""

    season: int
    matrix: Optional[ResultMatrix] = None
    skipped_rows: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.matrix is not None


@dataclass
class AcquisitionResult:
    """Merged matrix plus bookkeeping for one acquisition run."""

    matrix: ResultMatrix
    expected_seasons: List[int]
    completed_seasons: List[int] = field(default_factory=list)
    failed_seasons: Dict[int, str] = field(default_factory=dict)
    timed_out_seasons: List[int] = field(default_factory=list)
    skipped_rows: int = 0
    persisted: bool = False

    @property
    def rejected_games(self) -> int:
        return self.matrix.rejected_games

    @property
    def partial(self) -> bool:
        return bool(self.timed_out_seasons)

    @property
    def warning_count(self) -> int:
        return len(self.failed_seasons) + len(self.timed_out_seasons)


class YearFetchCoordinator:
    """Fetches every tournament season concurrently and merges the results."""

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        scraper: Optional[BracketPageScraper] = None,
    ):
        self.config = config or CalculatorConfig()
        self.scraper = scraper or BracketPageScraper(
            base_url=self.config.base_url,
            timeout=self.config.request_timeout_seconds,
            retry_attempts=self.config.retry_attempts,
        )

    def acquire_all(self, now: datetime) -> AcquisitionResult:
        """
        Fetch and merge every season from the start season to the cutoff.

        Args:
            now: Current date, used to compute the cutoff season

        Returns:
            AcquisitionResult with the merged matrix

        Raises:
            AcquisitionError: if no season could be retrieved
        """
        seasons = season_range(now, self.config.start_season, self.config.cutoff_month)
        if not seasons:
            raise AcquisitionError("no data retrieved: no tournament seasons to fetch")
        expected = len(seasons)
        logger.info("Fetching %d seasons (%d-%d)", expected, seasons[0], seasons[-1])

        executor = ThreadPoolExecutor(max_workers=max(1, min(self.config.max_workers, expected)))
        try:
            futures = {executor.submit(self._fetch_season, season): season for season in seasons}
            done, not_done = wait(futures, timeout=self.config.acquire_timeout_seconds)
        finally:
            # Do not block on stragglers once the barrier has given up on them.
            executor.shutdown(wait=False, cancel_futures=True)

        outcomes = [self._outcome(futures[future], future) for future in done]

        result = AcquisitionResult(matrix=ResultMatrix(), expected_seasons=seasons)
        for outcome in sorted(outcomes, key=lambda o: o.season):
            result.skipped_rows += outcome.skipped_rows
            if outcome.succeeded:
                result.matrix.merge_matrix(outcome.matrix)
                result.completed_seasons.append(outcome.season)
            else:
                result.failed_seasons[outcome.season] = outcome.error or "unknown error"

        result.timed_out_seasons = sorted(futures[future] for future in not_done)
        if result.timed_out_seasons:
            logger.warning(
                "Timed out after %ss waiting for %d seasons: %s",
                self.config.acquire_timeout_seconds,
                len(result.timed_out_seasons),
                result.timed_out_seasons,
            )

        if not result.completed_seasons:
            raise AcquisitionError("no data retrieved")

        result.matrix.partial = result.partial
        logger.info(
            "Merged %d/%d seasons (%d failed, %d timed out, %d games)",
            len(result.completed_seasons),
            expected,
            len(result.failed_seasons),
            len(result.timed_out_seasons),
            result.matrix.total_games,
        )
        return result

    def _fetch_season(self, season: int) -> SeasonOutcome:
        """Fetch, parse and aggregate one season into its own matrix."""
        try:
            raw, status = self.scraper.fetch(season)
        except TransportError as exc:
            logger.warning("There was a problem getting the web page for %s: %s", season, exc)
            return SeasonOutcome(season=season, error=str(exc))

        if not 200 <= status < 300:
            logger.warning("Season %s page returned HTTP %s", season, status)
            return SeasonOutcome(season=season, error=f"HTTP {status}")

        games, skipped = self.scraper.parse_page(raw, season)
        matrix = ResultMatrix()
        matrix.merge_all(games)
        matrix.mark_season(season)
        logger.debug("Season %s: %d games, %d rows skipped", season, len(games), skipped)
        return SeasonOutcome(season=season, matrix=matrix, skipped_rows=skipped)

    @staticmethod
    def _outcome(season: int, future) -> SeasonOutcome:
        exc = future.exception()
        if exc is not None:
            logger.warning("Season %s failed unexpectedly: %s", season, exc)
            return SeasonOutcome(season=season, error=str(exc))
        return future.result()
