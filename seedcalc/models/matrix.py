"""Triangular win/loss matrix keyed by seed pair."""

from __future__ import annotations

import json
import logging
import threading
from typing import Iterable, Iterator, List, Optional, Tuple

from ..errors import DataCorruptionError
from .match_record import MatchRecord, SeasonGame

logger = logging.getLogger(__name__)

NUM_SEEDS = 16


def _is_seed(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= NUM_SEEDS


def _is_score(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class ResultMatrix:
    """Historical results for every seed pair 1..16.

    Row ``i`` holds ``i + 1`` cells; the pair ``(a, b)`` lives at
    ``[max(a, b) - 1][min(a, b) - 1]`` so each unordered pair has one cell.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.rows: List[List[MatchRecord]] = []
        self.seasons: List[int] = []
        self.partial = False
        self.rejected_games = 0
        self.initialize()

    def initialize(self) -> None:
        """Reset every cell to an empty record."""
        with self._lock:
            self.rows = [[MatchRecord() for _ in range(i + 1)] for i in range(NUM_SEEDS)]
            self.seasons = []
            self.partial = False
            self.rejected_games = 0

    def merge(self, game: SeasonGame) -> None:
        """Fold one observed game into its seed-pair cell.

        Games with a missing or out-of-range seed, missing scores, or equal
        seeds are dropped and counted in ``rejected_games``.
        """
        if not (_is_seed(game.team1_seed) and _is_seed(game.team2_seed)):
            self._reject(game, "seed out of range")
            return
        if game.team1_seed == game.team2_seed:
            self._reject(game, "equal seeds")
            return
        if not (_is_score(game.team1_score) and _is_score(game.team2_score)):
            self._reject(game, "missing score")
            return

        cell_row, cell_col = game.underdog_seed - 1, game.favorite_seed - 1
        with self._lock:
            self.rows[cell_row][cell_col].record_game(game.favorite_won)

    def merge_all(self, games: Iterable[SeasonGame]) -> None:
        for game in games:
            self.merge(game)

    def _reject(self, game: SeasonGame, reason: str) -> None:
        with self._lock:
            self.rejected_games += 1
        logger.warning("Dropping game %s (%s)", game, reason)

    def merge_matrix(self, other: "ResultMatrix") -> None:
        """Accumulate another matrix's cells and season bookkeeping."""
        with self._lock:
            for row, other_row in zip(self.rows, other.rows):
                for cell, other_cell in zip(row, other_row):
                    cell.add(other_cell)
            self.seasons = sorted(set(self.seasons) | set(other.seasons))
            self.partial = self.partial or other.partial
            self.rejected_games += other.rejected_games

    def mark_season(self, season: int) -> None:
        with self._lock:
            if season not in self.seasons:
                self.seasons.append(season)
                self.seasons.sort()

    def covers(self, season: int) -> bool:
        """Whether results for ``season`` have been merged."""
        return season in self.seasons

    def lookup(self, seed_a: int, seed_b: int) -> Optional[MatchRecord]:
        """Return the record for an unordered seed pair, None if out of range."""
        if not (_is_seed(seed_a) and _is_seed(seed_b)):
            return None
        return self.rows[max(seed_a, seed_b) - 1][min(seed_a, seed_b) - 1]

    def cells(self) -> Iterator[Tuple[int, int, MatchRecord]]:
        """Yield ``(favorite_seed, underdog_seed, record)`` for every cell."""
        for i, row in enumerate(self.rows):
            for j, record in enumerate(row):
                yield j + 1, i + 1, record

    @property
    def total_games(self) -> int:
        return sum(record.total_played for _, _, record in self.cells())

    def to_dict(self) -> dict:
        return {
            "seasons": list(self.seasons),
            "partial": self.partial,
            "matrix": [[record.to_dict() for record in row] for row in self.rows],
        }

    def serialize(self) -> bytes:
        """Encode the matrix as the persisted JSON snapshot."""
        return json.dumps(self.to_dict(), indent=4).encode("utf-8")

    @classmethod
    def deserialize(cls, data: bytes) -> "ResultMatrix":
        """Decode a snapshot, raising DataCorruptionError unless fully valid."""
        try:
            payload = json.loads(data)
        except (TypeError, ValueError) as exc:
            raise DataCorruptionError(f"Match data is not valid JSON ({exc})") from exc

        # Bare 16-row arrays are the legacy snapshot layout.
        if isinstance(payload, list):
            payload = {"matrix": payload}
        if not isinstance(payload, dict):
            raise DataCorruptionError("Match data has an unexpected layout")

        raw_rows = payload.get("matrix")
        if not isinstance(raw_rows, list) or len(raw_rows) != NUM_SEEDS:
            raise DataCorruptionError(f"Match data must contain {NUM_SEEDS} rows")

        rows: List[List[MatchRecord]] = []
        for i, raw_row in enumerate(raw_rows):
            if not isinstance(raw_row, list) or len(raw_row) != i + 1:
                raise DataCorruptionError(f"Match data row {i + 1} must contain {i + 1} cells")
            row = []
            for raw_cell in raw_row:
                if not isinstance(raw_cell, dict):
                    raise DataCorruptionError(f"Match data row {i + 1} has a malformed cell")
                if not (_is_score(raw_cell.get("totalPlayed")) and _is_score(raw_cell.get("totalWon"))):
                    raise DataCorruptionError(f"Match data row {i + 1} has invalid counts")
                try:
                    row.append(MatchRecord.from_dict(raw_cell))
                except ValueError as exc:
                    raise DataCorruptionError(f"Match data row {i + 1}: {exc}") from exc
            rows.append(row)

        seasons = payload.get("seasons", [])
        if not isinstance(seasons, list) or not all(isinstance(s, int) for s in seasons):
            raise DataCorruptionError("Match data has an invalid season list")

        matrix = cls()
        matrix.rows = rows
        matrix.seasons = sorted(set(seasons))
        matrix.partial = bool(payload.get("partial", False))
        return matrix

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResultMatrix):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.seasons == other.seasons
            and self.partial == other.partial
        )

    def __repr__(self) -> str:
        return f"ResultMatrix(seasons={len(self.seasons)}, games={self.total_games}, partial={self.partial})"
