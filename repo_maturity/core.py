"""
Combined analysis: collection, scoring and summaries in one call.
"""

from typing import Any

from repo_maturity.collector import analyze_repositories
from repo_maturity.config import (
    get_collector_config,
    get_detection_config,
    get_scoring_config,
)
from repo_maturity.models import RepositoryMetrics
from repo_maturity.summary import generate_summary
from repo_maturity.vcs.base import BaseVCSProvider

AnalysisOutput = RepositoryMetrics | dict[str, Any]


async def analyze_repositories_with_scoring(
    client: BaseVCSProvider,
    owner: str,
    repo_names: list[str],
    *,
    include_full: bool = True,
    include_summary: bool = True,
) -> list[AnalysisOutput]:
    """
    Analyze repositories and attach scored summaries.

    Thresholds come from ``.repo-maturity.toml`` or ``pyproject.toml`` when
    present, otherwise from the built-in defaults.

    Args:
        client: Authenticated VCS provider.
        owner: Account that owns every repository.
        repo_names: Repository names to analyze.
        include_full: Include the full RepositoryMetrics record.
        include_summary: Include the summary dict.

    Returns:
        One entry per repository, in input order:

        - errored records are passed through unchanged
        - ``{"metrics": ..., "summary": ...}`` when both parts are requested
        - otherwise the summary alone, or the metrics record alone
    """
    scoring_config = get_scoring_config()
    detection_config = get_detection_config()

    base_results = await analyze_repositories(
        client,
        owner,
        repo_names,
        config=get_collector_config(),
        detection_config=detection_config,
    )

    outputs: list[AnalysisOutput] = []
    for metrics in base_results:
        if metrics.is_error:
            outputs.append(metrics)
            continue

        summary = None
        if include_summary:
            summary = generate_summary(
                metrics,
                scoring_config=scoring_config,
                detection_config=detection_config,
            )

        if include_full and include_summary:
            outputs.append({"metrics": metrics, "summary": summary})
        elif include_summary:
            outputs.append(summary)
        else:
            outputs.append(metrics)
    return outputs
