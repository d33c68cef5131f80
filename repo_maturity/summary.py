"""
Compact, bounded summary of one analyzed repository.

The summary is meant as model input: nesting depth of at most three, lists of
at most five entries and relative times instead of raw timestamps.
"""

from datetime import datetime
from typing import Any

from repo_maturity.config import DetectionConfig, ScoringConfig
from repo_maturity.detectors import detect_risk_flags, detect_strengths
from repo_maturity.models import RepositoryMetrics
from repo_maturity.scoring import compute_scores, enrich_metrics
from repo_maturity.scoring.base import round_half_up


def format_relative_time(days: int | None) -> str:
    """Render a day count as ``today``, ``3d ago``, ``2w ago``, ``5mo ago`` or ``1y ago``."""
    if days is None:
        return "unknown"
    # A push slightly ahead of the reference clock reads as today
    days = max(days, 0)
    if days == 0:
        return "today"
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    if days < 365:
        return f"{days // 30}mo ago"
    return f"{days // 365}y ago"


def categorize_readme_size(length: int) -> str:
    if length >= 5000:
        return "comprehensive"
    if length >= 2000:
        return "good"
    if length >= 500:
        return "basic"
    if length > 0:
        return "minimal"
    return "none"


def build_signals(metrics: RepositoryMetrics) -> dict[str, dict[str, Any]]:
    """Human-readable signal digest of an enriched record."""
    activity = metrics.activity
    collaboration = metrics.collaboration
    quality = metrics.quality_signals
    hygiene = metrics.hygiene

    return {
        "activity": {
            "commits_monthly": activity.commits_per_month,
            "last_push": format_relative_time(activity.days_since_last_push),
            "age": f"{activity.repo_age_years}y",
            "max_gap": f"{activity.longest_inactivity_gap_days}d",
        },
        "collaboration": {
            "prs": collaboration.total_prs,
            "merge_rate": f"{int(round_half_up(collaboration.merge_rate * 100, 0))}%",
            "pr_size_avg": collaboration.average_pr_size_files,
            # Owner plus external contributors
            "contributors": collaboration.external_contributors_count + 1,
        },
        "quality": {
            "tests": quality.has_tests,
            "ci": quality.has_ci,
            "linters": quality.has_linters.enabled_count,
            "security_issues": quality.open_security_alerts_count,
        },
        "docs": {
            "readme_size": categorize_readme_size(hygiene.readme_length),
            "has_install": hygiene.readme_sections.install,
            "has_usage": hygiene.readme_sections.usage,
            "license": hygiene.license_type or "none",
            "releases": hygiene.releases_count,
        },
    }


def generate_summary(
    metrics: RepositoryMetrics,
    *,
    now: datetime | None = None,
    scoring_config: ScoringConfig | None = None,
    detection_config: DetectionConfig | None = None,
) -> dict[str, Any] | None:
    """
    Build the summary for one repository.

    Args:
        metrics: Raw (not yet enriched) metrics record.
        now: Reference time for relative values; defaults to the current time.
        scoring_config: Score thresholds and weights.
        detection_config: Flag and strength thresholds.

    Returns:
        ``{repo, scores, signals, risk_flags, strengths}``, or None for an
        errored record. Derived gaming signals are never included.
    """
    if metrics.is_error:
        return None

    enriched = enrich_metrics(metrics, now)
    scores = compute_scores(enriched, scoring_config)

    return {
        "repo": metrics.repository,
        "scores": scores.to_dict(),
        "signals": build_signals(enriched),
        "risk_flags": [
            flag.to_dict() for flag in detect_risk_flags(enriched, detection_config)
        ],
        "strengths": detect_strengths(enriched, detection_config),
    }
