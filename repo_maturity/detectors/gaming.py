"""
Anti-gaming heuristics.

Each check looks for a statistically suspicious pattern that can indicate
artificial profile inflation. Flags are advisory input for downstream review;
none of them rejects a repository.
"""

from repo_maturity.config import DetectionConfig
from repo_maturity.detectors.base import FlagCheck
from repo_maturity.models import GamingDetection, RepositoryMetrics, RiskFlag
from repo_maturity.scoring.base import round_half_up


def _gaming(metrics: RepositoryMetrics) -> GamingDetection:
    return metrics.gaming_detection or GamingDetection()


def _percent(ratio: float) -> int:
    return int(round_half_up(ratio * 100, 0))


def check_commit_burst(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """Most of the window's commits landed in a single week (pre-application bulk commits)."""
    gaming = _gaming(metrics)
    thresholds = config.commit_burst
    if (
        gaming.commit_concentration > thresholds.single_week_concentration
        and gaming.total_commits_in_window >= thresholds.min_commits_for_concentration
    ):
        return RiskFlag(
            "gaming:commit_burst",
            f"{_percent(gaming.commit_concentration)}% of commits in single week",
            "medium",
        )
    return None


def check_weekly_spike(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """One or more weeks reached the weekly burst threshold."""
    gaming = _gaming(metrics)
    thresholds = config.commit_burst
    if gaming.burst_weeks_count <= 0:
        return None
    severity = (
        "high"
        if gaming.burst_weeks_count > thresholds.high_severity_burst_weeks
        else "low"
    )
    return RiskFlag(
        "gaming:weekly_spike",
        f"{gaming.burst_weeks_count} week(s) with "
        f"{thresholds.weekly_burst_threshold}+ commits",
        severity,
    )


def check_low_file_diversity(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """Many commits touching very few files each (whitespace or padding commits)."""
    gaming = _gaming(metrics)
    thresholds = config.file_diversity
    avg_files = gaming.avg_files_per_commit
    if avg_files is None:
        return None
    if (
        avg_files < thresholds.min_files_per_commit
        and gaming.total_commits_in_window >= thresholds.min_commits_sampled
    ):
        severity = "high" if avg_files < thresholds.trivial_files_per_commit else "medium"
        return RiskFlag(
            "gaming:low_file_diversity",
            f"Avg {avg_files} files/commit "
            f"({gaming.total_commits_in_window} commits sampled)",
            severity,
        )
    return None


def check_high_commit_low_pr(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """Heavy commit volume with almost no PRs (direct pushes that bypass review)."""
    thresholds = config.activity_mismatch
    commits_per_month = metrics.activity.commits_per_month
    if commits_per_month <= thresholds.high_commit_monthly:
        return None

    window_commits = commits_per_month * thresholds.analysis_window_months
    total_prs = metrics.collaboration.total_prs
    pr_ratio = total_prs / window_commits
    if pr_ratio < thresholds.max_pr_ratio:
        return RiskFlag(
            "gaming:high_commit_low_pr",
            f"{int(round_half_up(window_commits, 0))} commits but only {total_prs} PRs "
            f"(ratio: {_percent(pr_ratio)}%)",
            "medium",
        )
    return None


def check_no_issue_tracking(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """High commit rate on a repository that never used its issue tracker."""
    gaming = _gaming(metrics)
    commits_per_month = metrics.activity.commits_per_month
    if (
        commits_per_month > config.activity_mismatch.high_commit_no_issue_monthly
        and gaming.total_issues == 0
    ):
        return RiskFlag(
            "gaming:no_issue_tracking",
            f"{commits_per_month} commits/month but 0 issues ever created",
            "low",
        )
    return None


def check_fork_contribution(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """
    Forks of popular projects used to pad a portfolio.

    A fork with fewer unique commits than the threshold is flagged high; any
    other fork only gets an informational note.
    """
    gaming = _gaming(metrics)
    if not gaming.is_fork:
        return None

    parent = gaming.parent_repo or "unknown"
    unique_commits = gaming.total_commits_in_window
    if unique_commits < config.fork.min_unique_commits:
        return RiskFlag(
            "gaming:fork_minimal_contribution",
            f"Fork of {parent} with only {unique_commits} commits in analysis window",
            "high",
        )
    return RiskFlag("info:is_fork", f"Fork of {parent}", "info")


def check_creation_spike(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    """Bulk commits right after creation (uploading pre-existing or generated code)."""
    gaming = _gaming(metrics)
    thresholds = config.creation_spike
    if gaming.initial_period_commits >= thresholds.artificial_burst_threshold:
        return RiskFlag(
            "gaming:creation_spike",
            f"{gaming.initial_period_commits} commits in first "
            f"{thresholds.initial_period_days} days",
            "medium",
        )
    return None


GAMING_CHECKS = [
    FlagCheck("commit_burst", check_commit_burst),
    FlagCheck("weekly_spike", check_weekly_spike),
    FlagCheck("low_file_diversity", check_low_file_diversity),
    FlagCheck("high_commit_low_pr", check_high_commit_low_pr),
    FlagCheck("no_issue_tracking", check_no_issue_tracking),
    FlagCheck("fork_minimal_contribution", check_fork_contribution),
    FlagCheck("creation_spike", check_creation_spike),
]
