"""Historical NCAA tournament bracket page scraper."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from ...config import DEFAULT_BASE_URL
from ...errors import ExtractionError, TransportError
from ...models.match_record import SeasonGame

logger = logging.getLogger(__name__)


class BracketPageScraper:
    """Fetch one season's bracket page and extract its games."""

    SEED_SCORE_CLASSES = ("team1-seed", "team2-seed", "team1-score", "team2-score")

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        retry_attempts: int = 1,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)",
            }
        )

    def season_url(self, season: int) -> str:
        return f"{self.base_url}{season}/"

    def fetch(self, season: int) -> Tuple[bytes, int]:
        """
        Retrieve the raw bracket page for a season.

        Args:
            season: Tournament year

        Returns:
            Tuple of (raw page bytes, HTTP status code)

        Raises:
            TransportError: if every attempt fails at the transport level
        """
        url = self.season_url(season)
        last_exc: Optional[Exception] = None
        for _ in range(max(1, self.retry_attempts)):
            try:
                response = self.session.get(url, timeout=self.timeout)
                return response.content, response.status_code
            except requests.RequestException as exc:
                last_exc = exc
                continue
        raise TransportError(season, f"request to {url} failed: {last_exc}")

    def extract_games(self, raw, season: Optional[int] = None) -> Iterator[SeasonGame]:
        """Yield one SeasonGame per parseable bracket row, skipping the rest."""
        for game in self._iter_rows(raw, season):
            if game is not None:
                yield game

    def parse_page(self, raw, season: Optional[int] = None) -> Tuple[List[SeasonGame], int]:
        """Return ``(games, skipped_row_count)`` for one page."""
        games: List[SeasonGame] = []
        skipped = 0
        for game in self._iter_rows(raw, season):
            if game is None:
                skipped += 1
            else:
                games.append(game)
        return games, skipped

    def _iter_rows(self, raw, season: Optional[int]) -> Iterator[Optional[SeasonGame]]:
        soup = BeautifulSoup(raw, "lxml")
        for row in soup.select("tbody > tr"):
            try:
                yield self._parse_row(row, season)
            except ExtractionError as exc:
                logger.debug("Skipping bracket row for season %s: %s", season, exc)
                yield None

    def _parse_row(self, row, season: Optional[int]) -> SeasonGame:
        values = []
        for css_class in self.SEED_SCORE_CLASSES:
            cell = row.select_one(f".{css_class}")
            if cell is None:
                raise ExtractionError(f"missing .{css_class}")
            values.append(self._parse_int(cell.get_text(), css_class))
        team1_seed, team2_seed, team1_score, team2_score = values
        return SeasonGame(
            team1_seed=team1_seed,
            team2_seed=team2_seed,
            team1_score=team1_score,
            team2_score=team2_score,
            season=season,
        )

    @staticmethod
    def _parse_int(text: str, field: str) -> int:
        try:
            return int(text.strip())
        except (TypeError, ValueError):
            raise ExtractionError(f"unparseable .{field}: {text!r}")
