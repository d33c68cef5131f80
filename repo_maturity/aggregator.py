"""
Per-repository aggregation.

Fans the per-source fetchers out concurrently and folds their outcomes into a
single RepositoryMetrics record. Only a metadata failure is fatal; every other
source degrades to an empty default.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

from rich.console import Console

from repo_maturity.config import (
    DEFAULT_COLLECTOR_CONFIG,
    DEFAULT_DETECTION_CONFIG,
    CollectorConfig,
    DetectionConfig,
)
from repo_maturity.fetchers import (
    fetch_commit_activity,
    fetch_contributors,
    fetch_pr_metrics,
    fetch_quality_signals,
    fetch_readme,
    fetch_releases,
    fetch_repo_metadata,
)
from repo_maturity.models import (
    ActivityMetrics,
    CollaborationMetrics,
    FetchResult,
    GamingDetection,
    LinterPresence,
    PRAggregate,
    QualitySignals,
    ReadmeData,
    HygieneMetrics,
    RepositoryMetrics,
)
from repo_maturity.scoring.base import parse_datetime, round_half_up
from repo_maturity.vcs.base import BaseVCSProvider

console = Console(stderr=True)

SOURCE_NAMES = (
    "metadata",
    "commit activity",
    "contributors",
    "PR metrics",
    "quality signals",
    "README",
    "releases",
)


def _weekly_totals(weeks: list[dict[str, Any]] | None) -> list[int]:
    return [week.get("total", 0) for week in weeks or []]


def longest_zero_run_days(weekly_totals: list[int]) -> int:
    """Longest run of zero-commit weeks in days, counting a trailing run."""
    longest = current = 0
    for total in weekly_totals:
        if total == 0:
            current += 1
        else:
            longest = max(longest, current)
            current = 0
    return max(longest, current) * 7


def count_external_contributors(contributors: list[dict[str, Any]], owner: str) -> int:
    """Contributors whose login differs from the owner, case-insensitively."""
    owner_login = owner.lower()
    return sum(
        1
        for contributor in contributors
        if contributor.get("login") and contributor["login"].lower() != owner_login
    )


def count_initial_period_commits(
    commit_dates: tuple[str, ...], created_at: datetime | None, period_days: int
) -> int:
    if created_at is None or not commit_dates:
        return 0
    period_end = created_at + timedelta(days=period_days)
    count = 0
    for value in commit_dates:
        committed = parse_datetime(value)
        if committed is not None and created_at <= committed <= period_end:
            count += 1
    return count


def build_gaming_detection(
    weekly_totals: list[int],
    pr_aggregate: PRAggregate | None,
    created_at: datetime | None,
    config: DetectionConfig = DEFAULT_DETECTION_CONFIG,
) -> GamingDetection:
    total_commits = sum(weekly_totals)
    max_week = max(weekly_totals, default=0)
    commit_dates = pr_aggregate.recent_commit_dates if pr_aggregate else ()

    return GamingDetection(
        is_fork=pr_aggregate.is_fork if pr_aggregate else False,
        parent_repo=pr_aggregate.parent_repo if pr_aggregate else None,
        total_issues=pr_aggregate.total_issues if pr_aggregate else 0,
        avg_files_per_commit=pr_aggregate.avg_files_per_commit if pr_aggregate else None,
        recent_commit_dates=commit_dates,
        created_at=created_at.isoformat() if created_at else None,
        total_commits_in_window=total_commits,
        max_week_commits=max_week,
        weeks_with_activity=sum(1 for total in weekly_totals if total > 0),
        commit_concentration=max_week / total_commits if total_commits > 0 else 0.0,
        burst_weeks_count=sum(
            1
            for total in weekly_totals
            if total >= config.commit_burst.weekly_burst_threshold
        ),
        initial_period_commits=count_initial_period_commits(
            commit_dates, created_at, config.creation_spike.initial_period_days
        ),
    )


def build_repository_metrics(
    owner: str,
    repo: str,
    metadata: dict[str, Any],
    commit_activity: list[dict[str, Any]] | None = None,
    contributors: list[dict[str, Any]] | None = None,
    pr_aggregate: PRAggregate | None = None,
    quality: QualitySignals | None = None,
    readme: ReadmeData | None = None,
    releases: list[dict[str, Any]] | None = None,
    *,
    collector_config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
    detection_config: DetectionConfig = DEFAULT_DETECTION_CONFIG,
    now: datetime | None = None,
) -> RepositoryMetrics:
    """
    Fold fetched data into a RepositoryMetrics record.

    Any source passed as None falls back to its degraded default:
    zero counts, empty sections and False signals.
    """
    now = now or datetime.now(timezone.utc)
    created_at = parse_datetime(metadata.get("created_at"))
    pushed_at = parse_datetime(metadata.get("pushed_at"))

    # Activity
    age_days = (now - created_at).total_seconds() / 86400 if created_at else 0.0
    weekly_totals = _weekly_totals(commit_activity)
    commits_per_month = 0.0
    if weekly_totals:
        commits_per_month = round_half_up(
            sum(weekly_totals) / collector_config.window_months, 1
        )
    activity = ActivityMetrics(
        repo_age_years=round_half_up(age_days / 365.25, 1),
        commits_per_month=commits_per_month,
        longest_inactivity_gap_days=longest_zero_run_days(weekly_totals),
        last_push_date=pushed_at.isoformat() if pushed_at else None,
    )

    # Collaboration
    total_prs = pr_aggregate.total_prs if pr_aggregate else 0
    merged_prs = pr_aggregate.merged_prs if pr_aggregate else 0
    collaboration = CollaborationMetrics(
        total_prs=total_prs,
        prs_merged=merged_prs,
        prs_closed=pr_aggregate.closed_prs if pr_aggregate else 0,
        prs_open=pr_aggregate.open_prs if pr_aggregate else 0,
        merge_rate=round_half_up(merged_prs / total_prs, 2) if total_prs > 0 else 0.0,
        average_pr_size_files=pr_aggregate.average_pr_size_files if pr_aggregate else 0.0,
        external_contributors_count=count_external_contributors(
            contributors or [], owner
        ),
    )

    quality = quality or QualitySignals(
        has_tests=False,
        has_ci=False,
        has_linters=LinterPresence(),
        open_security_alerts_count=0,
    )

    # Hygiene
    readme = readme or ReadmeData(exists=False, length=0)
    license_info = metadata.get("license")
    releases_count = len(releases or [])
    hygiene = HygieneMetrics(
        readme_length=readme.length,
        readme_sections=readme.sections,
        has_license=license_info is not None,
        license_type=(license_info or {}).get("spdx_id"),
        # No changelog lookup; published releases stand in for one
        has_changelog=releases_count > 0,
        releases_count=releases_count,
    )

    return RepositoryMetrics(
        owner=owner,
        repository=repo,
        url=f"https://github.com/{owner}/{repo}",
        analyzed_at=now.isoformat(),
        activity=activity,
        collaboration=collaboration,
        quality_signals=quality,
        hygiene=hygiene,
        gaming_detection=build_gaming_detection(
            weekly_totals, pr_aggregate, created_at, detection_config
        ),
    )


async def analyze_repository(
    client: BaseVCSProvider,
    owner: str,
    repo: str,
    *,
    collector_config: CollectorConfig | None = None,
    detection_config: DetectionConfig | None = None,
    now: datetime | None = None,
) -> RepositoryMetrics:
    """
    Collect every metric for one repository.

    Never raises for fetch failures: a failed metadata fetch yields an errored
    record, other failures degrade that source and print a warning.
    """
    collector_config = collector_config or DEFAULT_COLLECTOR_CONFIG
    detection_config = detection_config or DEFAULT_DETECTION_CONFIG

    outcomes = await asyncio.gather(
        fetch_repo_metadata(client, owner, repo),
        fetch_commit_activity(client, owner, repo, collector_config),
        fetch_contributors(client, owner, repo, collector_config),
        fetch_pr_metrics(client, owner, repo, collector_config),
        fetch_quality_signals(client, owner, repo, collector_config),
        fetch_readme(client, owner, repo),
        fetch_releases(client, owner, repo, collector_config),
        return_exceptions=True,
    )
    results = [
        FetchResult(error=outcome)
        if isinstance(outcome, BaseException)
        else FetchResult(value=outcome)
        for outcome in outcomes
    ]

    metadata = results[0]
    if not metadata.ok:
        console.print(
            f"  [red]Failed to analyze {owner}/{repo}: {metadata.error}[/red]"
        )
        return RepositoryMetrics.failed(owner, repo, str(metadata.error))

    for name, result in zip(SOURCE_NAMES[1:], results[1:]):
        if not result.ok:
            console.print(
                f"  [yellow]⚠️  {name} unavailable for {owner}/{repo}: "
                f"{result.error}[/yellow]"
            )

    try:
        return build_repository_metrics(
            owner,
            repo,
            metadata.value,
            *(result.unwrap() for result in results[1:]),
            collector_config=collector_config,
            detection_config=detection_config,
            now=now,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        console.print(f"  [red]Failed to analyze {owner}/{repo}: {e}[/red]")
        return RepositoryMetrics.failed(owner, repo, f"Unexpected data: {e}")
