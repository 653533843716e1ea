"""Runtime configuration for the seed calculator."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_BASE_URL = (
    "http://apps.washingtonpost.com/sports/apps/live-updating-mens-ncaa-basketball-bracket/bracket/"
)


@dataclass
class CalculatorConfig:
    """Settings for data acquisition, caching and the snapshot location."""

    data_file: str = "data.json"
    base_url: str = DEFAULT_BASE_URL
    start_season: int = 1985
    # Month (1-12) from which a snapshot must include games from this year.
    season_boundary_month: int = 3
    # Month (1-12) from which this year's tournament counts as finished.
    cutoff_month: int = 4

    max_workers: int = 8
    request_timeout_seconds: int = 30
    acquire_timeout_seconds: Optional[float] = 120.0
    retry_attempts: int = 1

    # Minimum snapshot bytes per elapsed season before the file is considered
    # incomplete. Calibrated against the 4-space indented JSON snapshot.
    per_year_bytes: float = 200.0
    timezone: str = "US/Eastern"

    @classmethod
    def from_env(cls, **overrides) -> "CalculatorConfig":
        """Build a config from defaults, SEEDCALC_* env vars, then overrides."""
        config = cls()
        env = {}
        if os.getenv("SEEDCALC_DATA_FILE"):
            env["data_file"] = os.getenv("SEEDCALC_DATA_FILE")
        if os.getenv("SEEDCALC_BASE_URL"):
            env["base_url"] = os.getenv("SEEDCALC_BASE_URL")
        workers = _safe_int(os.getenv("SEEDCALC_MAX_WORKERS"))
        if workers:
            env["max_workers"] = workers
        timeout = _safe_float(os.getenv("SEEDCALC_TIMEOUT"))
        if timeout:
            env["acquire_timeout_seconds"] = timeout
        env.update({k: v for k, v in overrides.items() if v is not None})
        return replace(config, **env)


def _safe_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _safe_float(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
