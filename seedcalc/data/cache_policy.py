"""Staleness rules for the persisted match data snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DEFAULT_PER_YEAR_BYTES = 200.0
SIZE_BASE_YEAR = 1986


@dataclass(frozen=True)
class SnapshotMeta:
    """File metadata used for the staleness decision."""

    size: int
    modified: datetime


def refresh_reason(
    meta: Optional[SnapshotMeta],
    now: datetime,
    force: bool = False,
    per_year_bytes: float = DEFAULT_PER_YEAR_BYTES,
    boundary_month: int = 3,
) -> Optional[str]:
    """
    Explain why the snapshot must be re-acquired.

    Rules are checked in order and the first match wins.

    Args:
        meta: Snapshot metadata, or None when no snapshot exists
        now: Current date
        force: Caller asked for a refresh regardless of the snapshot
        per_year_bytes: Minimum snapshot size per elapsed season
        boundary_month: Month (1-12) from which this year's tournament is played

    Returns:
        Short reason string, or None when the snapshot can be reused
    """
    if force:
        return "forced"
    if meta is None:
        return "missing"
    if meta.size < per_year_bytes * (now.year - SIZE_BASE_YEAR):
        return "undersized"
    if meta.modified.year < now.year and meta.modified.month < boundary_month:
        return "previous-season"
    if now.month >= boundary_month and meta.modified.month < boundary_month:
        return "pre-tournament"
    return None


def needs_refresh(
    meta: Optional[SnapshotMeta],
    now: datetime,
    force: bool = False,
    per_year_bytes: float = DEFAULT_PER_YEAR_BYTES,
    boundary_month: int = 3,
) -> bool:
    """Whether the snapshot is missing, forced, or stale."""
    return refresh_reason(meta, now, force, per_year_bytes, boundary_month) is not None
