"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from repo_maturity.models import (
    ActivityMetrics,
    CollaborationMetrics,
    GamingDetection,
    HygieneMetrics,
    LinterPresence,
    QualitySignals,
    ReadmeSections,
    RepositoryMetrics,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _healthy_metrics() -> RepositoryMetrics:
    return RepositoryMetrics(
        owner="alice",
        repository="widget",
        url="https://github.com/alice/widget",
        analyzed_at=NOW.isoformat(),
        activity=ActivityMetrics(
            repo_age_years=2.0,
            commits_per_month=10.0,
            longest_inactivity_gap_days=14,
            last_push_date="2026-10-13T12:00:00+00:00",
            days_since_last_push=5,
        ),
        collaboration=CollaborationMetrics(
            total_prs=20,
            prs_merged=15,
            prs_closed=2,
            prs_open=3,
            merge_rate=0.75,
            average_pr_size_files=5.0,
            external_contributors_count=2,
        ),
        quality_signals=QualitySignals(
            has_tests=True,
            has_ci=True,
            has_linters=LinterPresence(eslint=True, prettier=True),
            open_security_alerts_count=0,
        ),
        hygiene=HygieneMetrics(
            readme_length=3000,
            readme_sections=ReadmeSections(install=True, usage=True),
            has_license=True,
            license_type="MIT",
            has_changelog=True,
            releases_count=3,
        ),
        gaming_detection=GamingDetection(
            total_issues=10,
            avg_files_per_commit=3.0,
            created_at="2024-10-18T12:00:00+00:00",
            total_commits_in_window=70,
            max_week_commits=8,
            weeks_with_activity=20,
            commit_concentration=8 / 70,
        ),
    )


@pytest.fixture
def healthy_metrics() -> RepositoryMetrics:
    """An enriched record that triggers no risk flags."""
    return _healthy_metrics()


@pytest.fixture
def make_metrics():
    """Build a record from the healthy baseline with per-section field overrides."""

    def _make(**sections) -> RepositoryMetrics:
        metrics = _healthy_metrics()
        changes = {}
        for section, fields in sections.items():
            changes[section] = getattr(metrics, section)._replace(**fields)
        return metrics._replace(**changes)

    return _make
