"""
Tests for the combined scoring helpers.
"""

from datetime import datetime, timezone

import pytest

from repo_maturity.config import OverallWeights, ScoringConfig
from repo_maturity.models import RepositoryMetrics
from repo_maturity.scoring import (
    clamp_score,
    compute_overall_score,
    compute_scores,
    enrich_metrics,
    round_half_up,
)
from repo_maturity.scoring.base import days_since, parse_datetime


def test_round_half_up():
    """Test halves are rounded up, not to even."""
    assert round_half_up(2.25) == 2.3
    assert round_half_up(2.5, 0) == 3.0
    assert round_half_up(0.125, 2) == 0.13


@pytest.mark.parametrize(
    "raw,expected",
    [(-3.0, 0.0), (0.0, 0.0), (4.44, 4.4), (6.75, 6.8), (10.0, 10.0), (12.5, 10.0)],
)
def test_clamp_score(raw, expected):
    """Test clamping and one-decimal rounding."""
    assert clamp_score(raw) == expected


def test_parse_datetime_variants():
    """Test Z suffix, offsets, naive values and garbage."""
    assert parse_datetime("2024-01-01T00:00:00Z") == datetime(
        2024, 1, 1, tzinfo=timezone.utc
    )
    assert parse_datetime("2024-01-01T00:00:00").tzinfo == timezone.utc
    assert parse_datetime("not a date") is None
    assert parse_datetime(None) is None


def test_days_since_floors_partial_days():
    """Test whole days elapsed."""
    now = datetime(2024, 1, 10, 23, 0, tzinfo=timezone.utc)
    assert days_since("2024-01-01T00:00:00Z", now) == 9
    assert days_since(None, now) is None


def test_enrich_metrics_sets_days_since_push(healthy_metrics):
    """Test that enrichment derives days since the last push."""
    record = healthy_metrics._replace(
        activity=healthy_metrics.activity._replace(
            last_push_date="2026-10-01T12:00:00Z", days_since_last_push=None
        )
    )
    enriched = enrich_metrics(record, now=datetime(2026, 10, 18, 12, tzinfo=timezone.utc))
    assert enriched.activity.days_since_last_push == 17
    assert record.activity.days_since_last_push is None


def test_enrich_metrics_without_push_date(healthy_metrics):
    """Test that a missing push date stays unknown."""
    record = healthy_metrics._replace(
        activity=healthy_metrics.activity._replace(last_push_date=None)
    )
    assert enrich_metrics(record).activity.days_since_last_push is None


def test_compute_overall_score_weights():
    """Test the weighted blend."""
    assert compute_overall_score(10, 10, 10, 10) == 10.0
    assert compute_overall_score(8, 0, 0, 0) == 2.0
    assert compute_overall_score(0, 0, 10, 0) == 3.0
    weights = OverallWeights(activity=1.0, collaboration=0, quality_signals=0, documentation=0)
    assert compute_overall_score(7, 1, 1, 1, weights) == 7.0


def test_compute_scores(healthy_metrics):
    """Test the full breakdown for the healthy baseline."""
    scores = compute_scores(healthy_metrics)
    assert scores.activity == 8.5
    assert scores.collaboration == 9.0
    assert scores.quality_signals == 10.0
    assert scores.documentation == 8.0
    assert scores.overall == 8.9


def test_compute_scores_in_range(make_metrics):
    """Test that every score stays within 0-10 for an extreme record."""
    record = make_metrics(
        activity={"commits_per_month": 900, "longest_inactivity_gap_days": 400,
                  "days_since_last_push": 900},
        collaboration={"merge_rate": 0.0, "average_pr_size_files": 400, "prs_open": 20},
        quality_signals={"has_tests": False, "has_ci": False,
                         "open_security_alerts_count": 99},
    )
    for value in compute_scores(record):
        assert 0.0 <= value <= 10.0


def test_compute_scores_is_idempotent(healthy_metrics):
    """Test that scoring the same record twice gives identical output."""
    assert compute_scores(healthy_metrics) == compute_scores(healthy_metrics)


def test_compute_scores_uses_config(healthy_metrics):
    """Test that a custom configuration is honored."""
    config = ScoringConfig(overall=OverallWeights(1.0, 0.0, 0.0, 0.0))
    assert compute_scores(healthy_metrics, config).overall == 8.5


def test_compute_scores_errored_record():
    """Test that an errored record is skipped instead of zero-scored."""
    record = RepositoryMetrics.failed("alice", "gone", "Not found")
    assert compute_scores(record) is None
