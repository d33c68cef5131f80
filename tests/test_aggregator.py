"""
Tests for the per-repository aggregator.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

from repo_maturity.aggregator import (
    analyze_repository,
    build_repository_metrics,
    count_external_contributors,
    count_initial_period_commits,
    longest_zero_run_days,
)
from repo_maturity.errors import NotFoundError, VCSError
from repo_maturity.models import PRAggregate

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

METADATA = {
    "created_at": "2022-10-18T12:00:00Z",
    "pushed_at": "2026-10-10T08:00:00Z",
    "license": {"spdx_id": "MIT"},
}


def _mock_client() -> AsyncMock:
    client = AsyncMock()
    client.get_repo_metadata.return_value = METADATA
    client.get_commit_activity.return_value = [{"total": 13} for _ in range(30)]
    client.list_contributors.return_value = [
        {"login": "Alice"},
        {"login": "bob"},
        {"login": "carol"},
        {"login": None},
    ]
    client.query_pr_and_issue_aggregate.return_value = {
        "isFork": False,
        "parent": None,
        "allIssues": {"totalCount": 5},
        "openIssues": {"totalCount": 1},
        "allPRs": {"totalCount": 8},
        "mergedPRs": {"totalCount": 6},
        "closedPRs": {"totalCount": 1},
        "openPRs": {"totalCount": 1},
        "recentMergedPRs": {"nodes": [{"changedFiles": 4}]},
        "defaultBranchRef": None,
    }
    client.path_exists.side_effect = lambda owner, repo, path: path in {
        "tests",
        ".github/workflows",
    }
    client.query_security_alert_count.return_value = 0
    client.get_readme.return_value = {"content": "## Usage\n" + "x" * 600, "size": 609}
    client.list_releases.return_value = [{"tag_name": "v1"}, {"tag_name": "v2"}]
    return client


def test_longest_zero_run_days():
    """Test inner and trailing inactivity runs."""
    assert longest_zero_run_days([]) == 0
    assert longest_zero_run_days([1, 0, 0, 3, 0]) == 14
    assert longest_zero_run_days([4, 0, 0, 0]) == 21


def test_count_external_contributors():
    """Test case-insensitive owner exclusion."""
    contributors = [{"login": "ALICE"}, {"login": "bob"}, {}]
    assert count_external_contributors(contributors, "alice") == 1


def test_count_initial_period_commits():
    """Test commits within seven days of creation."""
    created = datetime(2026, 1, 1, tzinfo=timezone.utc)
    dates = (
        "2025-12-31T23:00:00Z",
        "2026-01-01T00:00:00Z",
        "2026-01-05T10:00:00Z",
        "2026-01-08T00:00:00Z",
        "2026-01-08T00:00:01Z",
    )
    assert count_initial_period_commits(dates, created, 7) == 3
    assert count_initial_period_commits(dates, None, 7) == 0


class TestBuildRepositoryMetrics:
    """Test folding fetched data into a record."""

    def test_degraded_sources_use_defaults(self):
        """Test that missing sources yield zero, empty and False values."""
        metrics = build_repository_metrics("alice", "widget", {}, now=NOW)

        assert metrics.error is None
        assert metrics.url == "https://github.com/alice/widget"
        assert metrics.activity.repo_age_years == 0.0
        assert metrics.activity.commits_per_month == 0.0
        assert metrics.activity.last_push_date is None
        assert metrics.collaboration.total_prs == 0
        assert metrics.collaboration.merge_rate == 0.0
        assert metrics.quality_signals.has_tests is False
        assert metrics.quality_signals.has_linters.has_any is False
        assert metrics.hygiene.readme_length == 0
        assert metrics.hygiene.has_license is False
        assert metrics.hygiene.has_changelog is False
        assert metrics.gaming_detection.avg_files_per_commit is None

    def test_gaming_detection_signals(self):
        """Test burst, concentration and creation spike inputs."""
        weeks = [{"total": 0}] * 27 + [{"total": 5}, {"total": 60}, {"total": 15}]
        aggregate = PRAggregate(
            total_prs=4,
            merged_prs=3,
            closed_prs=0,
            open_prs=1,
            average_pr_size_files=2.0,
            total_issues=0,
            open_issues=0,
            is_fork=True,
            parent_repo="acme/lib",
            avg_files_per_commit=1.2,
            recent_commit_dates=("2026-10-02T00:00:00Z", "2026-10-20T00:00:00Z"),
        )
        metrics = build_repository_metrics(
            "alice",
            "widget",
            {"created_at": "2026-10-01T00:00:00Z"},
            commit_activity=weeks,
            pr_aggregate=aggregate,
            now=NOW,
        )

        gaming = metrics.gaming_detection
        assert gaming.total_commits_in_window == 80
        assert gaming.max_week_commits == 60
        assert gaming.weeks_with_activity == 3
        assert gaming.commit_concentration == 0.75
        assert gaming.burst_weeks_count == 1
        assert gaming.initial_period_commits == 1
        assert gaming.is_fork is True
        assert gaming.parent_repo == "acme/lib"
        assert metrics.collaboration.merge_rate == 0.75
        assert metrics.activity.longest_inactivity_gap_days == 189


class TestAnalyzeRepository:
    """Test the analyze_repository fan-out."""

    async def test_full_analysis(self):
        """Test a repository where every source succeeds."""
        metrics = await analyze_repository(_mock_client(), "alice", "widget", now=NOW)

        assert metrics.is_error is False
        assert metrics.activity.repo_age_years == 4.0
        # 390 commits over 30 / 4.33 months
        assert metrics.activity.commits_per_month == 56.3
        assert metrics.activity.last_push_date == "2026-10-10T08:00:00+00:00"
        assert metrics.collaboration.external_contributors_count == 2
        assert metrics.collaboration.merge_rate == 0.75
        assert metrics.collaboration.average_pr_size_files == 4.0
        assert metrics.quality_signals.has_tests is True
        assert metrics.quality_signals.has_ci is True
        assert metrics.hygiene.readme_length == 609
        assert metrics.hygiene.readme_sections.usage is True
        assert metrics.hygiene.license_type == "MIT"
        assert metrics.hygiene.releases_count == 2
        assert metrics.hygiene.has_changelog is True

    async def test_metadata_failure_is_fatal(self):
        """Test an errored record when metadata cannot be read."""
        client = _mock_client()
        client.get_repo_metadata.side_effect = NotFoundError("Not found: /repos/alice/gone")

        metrics = await analyze_repository(client, "alice", "gone")

        assert metrics.is_error is True
        assert "Not found" in metrics.error
        assert metrics.activity is None
        assert metrics.to_dict()["error"] == metrics.error

    async def test_other_failures_degrade(self):
        """Test that failing secondary sources never abort the analysis."""
        client = _mock_client()
        client.get_commit_activity.side_effect = VCSError("boom", status_code=500)
        client.list_contributors.side_effect = VCSError("boom", status_code=500)
        client.list_releases.side_effect = VCSError("boom", status_code=500)

        metrics = await analyze_repository(client, "alice", "widget", now=NOW)

        assert metrics.is_error is False
        assert metrics.activity.commits_per_month == 0.0
        assert metrics.collaboration.external_contributors_count == 0
        assert metrics.hygiene.releases_count == 0
        assert metrics.collaboration.total_prs == 8

    async def test_alert_failure_keeps_quality_signals(self):
        """Test that an unexpected alert error does not reset found paths."""
        client = _mock_client()
        client.path_exists.side_effect = None
        client.path_exists.return_value = True
        client.query_security_alert_count.side_effect = ValueError("Expecting value")

        metrics = await analyze_repository(client, "alice", "widget", now=NOW)

        quality = metrics.quality_signals
        assert quality.has_tests is True
        assert quality.has_ci is True
        assert quality.has_linters.enabled_count == 3
        assert quality.open_security_alerts_count == 0
