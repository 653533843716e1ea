"""Unit tests for snapshot staleness rules."""

from datetime import datetime

import pytest

from seedcalc.data.cache_policy import SnapshotMeta, needs_refresh, refresh_reason

BIG = 50_000


@pytest.mark.parametrize(
    "meta,now,expected",
    [
        (None, datetime(2024, 6, 1), True),
        (SnapshotMeta(10, datetime(2024, 5, 1)), datetime(2024, 6, 1), True),
        (SnapshotMeta(BIG, datetime(2024, 2, 10)), datetime(2024, 3, 20), True),
        (SnapshotMeta(BIG, datetime(2024, 4, 2)), datetime(2024, 6, 15), False),
        # Captured before last year's tournament.
        (SnapshotMeta(BIG, datetime(2023, 1, 5)), datetime(2024, 1, 20), True),
        # Captured after last year's tournament, still before this one.
        (SnapshotMeta(BIG, datetime(2023, 11, 5)), datetime(2024, 2, 20), False),
        (SnapshotMeta(BIG, datetime(2024, 1, 5)), datetime(2024, 2, 20), False),
        (SnapshotMeta(BIG, datetime(2023, 11, 5)), datetime(2024, 4, 1), False),
    ],
)
def test_needs_refresh_truth_table(meta, now, expected):
    assert needs_refresh(meta, now) is expected


def test_force_overrides_fresh_snapshot():
    meta = SnapshotMeta(BIG, datetime(2024, 4, 2))

    assert needs_refresh(meta, datetime(2024, 6, 15)) is False
    assert needs_refresh(meta, datetime(2024, 6, 15), force=True) is True


@pytest.mark.parametrize(
    "meta,now,reason",
    [
        (None, datetime(2024, 6, 1), "missing"),
        (SnapshotMeta(10, datetime(2024, 5, 1)), datetime(2024, 6, 1), "undersized"),
        (SnapshotMeta(BIG, datetime(2023, 2, 1)), datetime(2024, 6, 1), "previous-season"),
        (SnapshotMeta(BIG, datetime(2024, 2, 1)), datetime(2024, 6, 1), "pre-tournament"),
        (SnapshotMeta(BIG, datetime(2024, 5, 1)), datetime(2024, 6, 1), None),
    ],
)
def test_refresh_reason_reports_first_matching_rule(meta, now, reason):
    assert refresh_reason(meta, now) == reason


def test_size_threshold_scales_with_elapsed_seasons():
    meta = SnapshotMeta(5_000, datetime(2024, 5, 1))

    assert needs_refresh(meta, datetime(2024, 6, 1), per_year_bytes=100.0) is False
    assert needs_refresh(meta, datetime(2024, 6, 1), per_year_bytes=200.0) is True
