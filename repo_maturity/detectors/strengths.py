"""Strength tags."""

from repo_maturity.config import DetectionConfig
from repo_maturity.detectors.base import StrengthCheck
from repo_maturity.models import RepositoryMetrics


def _actively_maintained(metrics: RepositoryMetrics, config: DetectionConfig) -> bool:
    days = metrics.activity.days_since_last_push
    return (
        days is not None
        and days < config.strengths.recent_push_days
        and metrics.activity.commits_per_month >= config.strengths.min_commits_per_month
    )


def _community_driven(metrics: RepositoryMetrics, config: DetectionConfig) -> bool:
    return (
        metrics.collaboration.external_contributors_count
        >= config.strengths.community_contributors
    )


def _clean_pr_workflow(metrics: RepositoryMetrics, config: DetectionConfig) -> bool:
    thresholds = config.strengths
    collaboration = metrics.collaboration
    return (
        thresholds.clean_merge_rate_min
        <= collaboration.merge_rate
        <= thresholds.clean_merge_rate_max
        and collaboration.average_pr_size_files <= thresholds.clean_pr_size_max
    )


def _tested_with_ci(metrics: RepositoryMetrics, _config: DetectionConfig) -> bool:
    return metrics.quality_signals.has_tests and metrics.quality_signals.has_ci


def _well_documented(metrics: RepositoryMetrics, config: DetectionConfig) -> bool:
    hygiene = metrics.hygiene
    return (
        hygiene.readme_length >= config.strengths.documented_readme_length
        and hygiene.readme_sections.install
        and hygiene.readme_sections.usage
    )


def _versioned_releases(metrics: RepositoryMetrics, config: DetectionConfig) -> bool:
    return metrics.hygiene.releases_count >= config.strengths.versioned_releases


def _mature_stable(metrics: RepositoryMetrics, config: DetectionConfig) -> bool:
    return (
        metrics.activity.repo_age_years >= config.strengths.mature_age_years
        and metrics.activity.longest_inactivity_gap_days
        < config.strengths.mature_max_gap_days
    )


def _code_quality_tools(metrics: RepositoryMetrics, _config: DetectionConfig) -> bool:
    return metrics.quality_signals.has_linters.has_any


STRENGTH_CHECKS = [
    StrengthCheck("actively_maintained", _actively_maintained),
    StrengthCheck("community_driven", _community_driven),
    StrengthCheck("clean_pr_workflow", _clean_pr_workflow),
    StrengthCheck("tested_with_ci", _tested_with_ci),
    StrengthCheck("well_documented", _well_documented),
    StrengthCheck("versioned_releases", _versioned_releases),
    StrengthCheck("mature_stable", _mature_stable),
    StrengthCheck("code_quality_tools", _code_quality_tools),
]
