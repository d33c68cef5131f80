"""
Per-source fetchers for a single repository.

Each fetcher wraps one provider call. Repository metadata, commit activity and
contributors raise on failure so the aggregator can decide; the remaining
fetchers degrade to a default value and print a warning.
"""

import asyncio
import re
from typing import Any

from rich.console import Console

from repo_maturity.config import DEFAULT_COLLECTOR_CONFIG, CollectorConfig
from repo_maturity.errors import NotFoundError, RepoMaturityError, StatsComputingError
from repo_maturity.models import (
    LinterPresence,
    PRAggregate,
    QualitySignals,
    ReadmeData,
    ReadmeSections,
)
from repo_maturity.scoring.base import round_half_up
from repo_maturity.vcs.base import BaseVCSProvider

console = Console(stderr=True)

INSTALL_SECTION_PATTERN = re.compile(
    r"#{1,3}\s*(install|installation|setup|getting started)", re.IGNORECASE
)
USAGE_SECTION_PATTERN = re.compile(
    r"#{1,3}\s*(usage|how to use|examples?|quick start)", re.IGNORECASE
)


async def fetch_repo_metadata(
    client: BaseVCSProvider, owner: str, repo: str
) -> dict[str, Any]:
    """Repository metadata (created_at, pushed_at, license, ...). Failure is fatal."""
    return await client.get_repo_metadata(owner, repo)


async def fetch_commit_activity(
    client: BaseVCSProvider,
    owner: str,
    repo: str,
    config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
) -> list[dict[str, Any]] | None:
    """
    Weekly commit totals for the most recent commit-activity window.

    GitHub computes these statistics lazily and answers 202 while it does;
    the call is retried with a linearly growing backoff.

    Returns:
        The last ``config.commit_weeks_window`` weeks, or None when the
        statistics never became available or the payload is not a list.
    """
    for attempt in range(1, config.stats_max_attempts + 1):
        try:
            weeks = await client.get_commit_activity(owner, repo)
        except StatsComputingError:
            if attempt < config.stats_max_attempts:
                await asyncio.sleep(config.stats_backoff_seconds * attempt)
            continue

        if not isinstance(weeks, list):
            return None
        return weeks[-config.commit_weeks_window :]

    console.print(
        f"  [dim]Commit statistics for {owner}/{repo} still being computed, "
        f"gave up after {config.stats_max_attempts} attempts[/dim]"
    )
    return None


async def fetch_contributors(
    client: BaseVCSProvider,
    owner: str,
    repo: str,
    config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
) -> list[dict[str, Any]]:
    """Up to one page of contributors; an empty repository yields []."""
    contributors = await client.list_contributors(
        owner, repo, per_page=config.page_size
    )
    return contributors or []


def _average(values: list[float]) -> float | None:
    if not values:
        return None
    return round_half_up(sum(values) / len(values), 1)


def parse_pr_aggregate(repository: dict[str, Any]) -> PRAggregate:
    """Normalize the raw aggregate GraphQL payload."""
    merged_nodes = (repository.get("recentMergedPRs") or {}).get("nodes") or []
    pr_sizes = [
        node["changedFiles"]
        for node in merged_nodes
        if node and node.get("changedFiles") is not None
    ]

    branch = repository.get("defaultBranchRef") or {}
    history = (branch.get("target") or {}).get("history") or {}
    commit_nodes = history.get("nodes") or []
    commit_file_counts = [
        node["changedFilesIfAvailable"]
        for node in commit_nodes
        if node and node.get("changedFilesIfAvailable") is not None
    ]
    commit_dates = tuple(
        node["committedDate"]
        for node in commit_nodes
        if node and node.get("committedDate")
    )

    parent = repository.get("parent") or {}

    return PRAggregate(
        total_prs=repository["allPRs"]["totalCount"],
        merged_prs=repository["mergedPRs"]["totalCount"],
        # CLOSED excludes merged pull requests on GitHub
        closed_prs=max(0, repository["closedPRs"]["totalCount"]),
        open_prs=repository["openPRs"]["totalCount"],
        average_pr_size_files=_average(pr_sizes) or 0.0,
        total_issues=repository["allIssues"]["totalCount"],
        open_issues=repository["openIssues"]["totalCount"],
        is_fork=bool(repository.get("isFork")),
        parent_repo=parent.get("nameWithOwner"),
        avg_files_per_commit=_average(commit_file_counts),
        recent_commit_dates=commit_dates,
    )


async def fetch_pr_metrics(
    client: BaseVCSProvider,
    owner: str,
    repo: str,
    config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
) -> PRAggregate | None:
    """PR counts, issue counts, fork status and commit samples in one query."""
    try:
        repository = await client.query_pr_and_issue_aggregate(
            owner,
            repo,
            merged_pr_sample=config.merged_pr_sample_size,
            commit_sample=config.commit_sample_size,
        )
        return parse_pr_aggregate(repository)
    except (RepoMaturityError, KeyError, TypeError) as e:
        console.print(
            f"  [yellow]⚠️  PR metrics unavailable for {owner}/{repo}: {e}[/yellow]"
        )
        return None


async def check_path_exists(
    client: BaseVCSProvider, owner: str, repo: str, path: str
) -> bool:
    """Whether ``path`` exists in the default branch. Errors count as absent."""
    try:
        return await client.path_exists(owner, repo, path)
    except Exception as e:
        console.print(
            f"  [yellow]⚠️  Could not check {path} in {owner}/{repo}: {e}[/yellow]"
        )
        return False


async def check_paths_exist(
    client: BaseVCSProvider, owner: str, repo: str, paths: tuple[str, ...]
) -> bool:
    """True when any candidate path exists. Candidates are checked concurrently."""
    if not paths:
        return False
    results = await asyncio.gather(
        *(check_path_exists(client, owner, repo, path) for path in paths)
    )
    return any(results)


async def fetch_security_alerts(client: BaseVCSProvider, owner: str, repo: str) -> int:
    """
    Count open vulnerability alerts.

    Reading alerts needs an extra token scope; a missing scope, like any other
    failure, is reported as zero alerts.
    """
    try:
        return await client.query_security_alert_count(owner, repo)
    except Exception as e:
        console.print(
            f"  [yellow]⚠️  Security alerts unavailable for {owner}/{repo}: {e}[/yellow]"
        )
        return 0


async def fetch_quality_signals(
    client: BaseVCSProvider,
    owner: str,
    repo: str,
    config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
) -> QualitySignals:
    """Detect tests, CI, linter configs and open security alerts."""
    linter_paths = config.linter_paths
    has_tests, has_ci, eslint, prettier, biome, alerts = await asyncio.gather(
        check_paths_exist(client, owner, repo, config.test_paths),
        check_paths_exist(client, owner, repo, config.ci_paths),
        check_paths_exist(client, owner, repo, linter_paths.eslint),
        check_paths_exist(client, owner, repo, linter_paths.prettier),
        check_paths_exist(client, owner, repo, linter_paths.biome),
        fetch_security_alerts(client, owner, repo),
    )
    return QualitySignals(
        has_tests=has_tests,
        has_ci=has_ci,
        has_linters=LinterPresence(eslint=eslint, prettier=prettier, biome=biome),
        open_security_alerts_count=alerts,
    )


def detect_readme_sections(content: str) -> ReadmeSections:
    return ReadmeSections(
        install=INSTALL_SECTION_PATTERN.search(content) is not None,
        usage=USAGE_SECTION_PATTERN.search(content) is not None,
    )


async def fetch_readme(client: BaseVCSProvider, owner: str, repo: str) -> ReadmeData:
    """README length and install/usage section detection."""
    try:
        readme = await client.get_readme(owner, repo)
    except NotFoundError:
        return ReadmeData(exists=False, length=0)
    except RepoMaturityError as e:
        console.print(
            f"  [yellow]⚠️  README unavailable for {owner}/{repo}: {e}[/yellow]"
        )
        return ReadmeData(exists=False, length=0)

    content = readme.get("content") or ""
    return ReadmeData(
        exists=True,
        length=len(content),
        sections=detect_readme_sections(content),
    )


async def fetch_releases(
    client: BaseVCSProvider,
    owner: str,
    repo: str,
    config: CollectorConfig = DEFAULT_COLLECTOR_CONFIG,
) -> list[dict[str, Any]]:
    """Up to one page of releases; failures yield []."""
    try:
        return await client.list_releases(owner, repo, per_page=config.page_size)
    except RepoMaturityError as e:
        console.print(
            f"  [yellow]⚠️  Releases unavailable for {owner}/{repo}: {e}[/yellow]"
        )
        return []
