"""Quality risk flags."""

from repo_maturity.config import DetectionConfig
from repo_maturity.detectors.base import FlagCheck
from repo_maturity.models import RepositoryMetrics, RiskFlag
from repo_maturity.scoring.base import round_half_up


def check_abandoned(metrics: RepositoryMetrics, config: DetectionConfig) -> RiskFlag | None:
    days = metrics.activity.days_since_last_push
    if days is not None and days > config.quality_flags.abandoned_days:
        return RiskFlag("quality:abandoned", f"No activity for {days} days", "high")
    return None


def check_commit_spam(metrics: RepositoryMetrics, config: DetectionConfig) -> RiskFlag | None:
    commits_per_month = metrics.activity.commits_per_month
    if commits_per_month > config.quality_flags.commit_spam_monthly:
        return RiskFlag(
            "quality:commit_spam",
            f"{commits_per_month} commits/month is unusually high",
            "medium",
        )
    return None


def check_giant_prs(metrics: RepositoryMetrics, config: DetectionConfig) -> RiskFlag | None:
    pr_size = metrics.collaboration.average_pr_size_files
    if pr_size > config.quality_flags.giant_pr_files:
        return RiskFlag("quality:giant_prs", f"Avg PR size {pr_size} files", "low")
    return None


def check_no_tests(metrics: RepositoryMetrics, _config: DetectionConfig) -> RiskFlag | None:
    if not metrics.quality_signals.has_tests:
        return RiskFlag("quality:no_tests", "No test directory detected", "medium")
    return None


def check_security_alerts(
    metrics: RepositoryMetrics, config: DetectionConfig
) -> RiskFlag | None:
    alerts = metrics.quality_signals.open_security_alerts_count
    if alerts > config.quality_flags.security_alerts:
        return RiskFlag("quality:security_alerts", f"{alerts} open security alerts", "high")
    return None


def check_poor_docs(metrics: RepositoryMetrics, config: DetectionConfig) -> RiskFlag | None:
    if metrics.hygiene.readme_length < config.quality_flags.poor_docs_readme_length:
        return RiskFlag("quality:poor_docs", "README missing or very short", "low")
    return None


def check_stale_prs(metrics: RepositoryMetrics, config: DetectionConfig) -> RiskFlag | None:
    collaboration = metrics.collaboration
    thresholds = config.quality_flags
    if collaboration.total_prs <= thresholds.stale_pr_min_total:
        return None
    open_ratio = collaboration.prs_open / collaboration.total_prs
    if open_ratio > thresholds.stale_pr_open_ratio:
        return RiskFlag(
            "quality:stale_prs",
            f"{int(round_half_up(open_ratio * 100, 0))}% of PRs still open",
            "low",
        )
    return None


def check_no_license(metrics: RepositoryMetrics, _config: DetectionConfig) -> RiskFlag | None:
    if not metrics.hygiene.has_license:
        return RiskFlag("quality:no_license", "No license file detected", "info")
    return None


QUALITY_CHECKS = [
    FlagCheck("abandoned", check_abandoned),
    FlagCheck("commit_spam", check_commit_spam),
    FlagCheck("giant_prs", check_giant_prs),
    FlagCheck("no_tests", check_no_tests),
    FlagCheck("security_alerts", check_security_alerts),
    FlagCheck("poor_docs", check_poor_docs),
    FlagCheck("stale_prs", check_stale_prs),
    FlagCheck("no_license", check_no_license),
]
