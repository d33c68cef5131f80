"""Collaboration score."""

from repo_maturity.config import CollaborationThresholds
from repo_maturity.models import CollaborationMetrics
from repo_maturity.scoring.base import clamp_score


def compute_collaboration_score(
    collaboration: CollaborationMetrics,
    thresholds: CollaborationThresholds = CollaborationThresholds(),
) -> float:
    """
    Evaluates the pull request workflow and outside participation.

    A repository without any PR cannot be judged and scores exactly 5.

    Scoring (from a neutral 5):
    - Merge rate 50-95%: +2; below 30%: -2; above 98% (no real review): -0.5
    - 3+ external contributors: +2; 1-2: +1
    - Average PR size 1-15 files: +1; above 50 files: -2; over 15 up to 50 files: -0.5
    - More than 5 PRs with over half still open: -1
    """
    if collaboration.total_prs == 0:
        return 5.0

    score = 5.0

    merge_rate = collaboration.merge_rate
    if thresholds.ideal_merge_rate_min <= merge_rate <= thresholds.ideal_merge_rate_max:
        score += 2
    elif merge_rate < thresholds.low_merge_rate:
        score -= 2
    elif merge_rate > thresholds.frictionless_merge_rate:
        score -= 0.5

    external = collaboration.external_contributors_count
    if external >= thresholds.community_contributors:
        score += 2
    elif external >= thresholds.min_external_contributors:
        score += 1

    pr_size = collaboration.average_pr_size_files
    if thresholds.ideal_pr_size_min <= pr_size <= thresholds.ideal_pr_size_max:
        score += 1
    elif pr_size > thresholds.giant_pr_threshold:
        score -= 2
    elif pr_size > thresholds.ideal_pr_size_max:
        score -= 0.5

    if collaboration.total_prs > thresholds.stale_pr_min_total:
        open_ratio = collaboration.prs_open / collaboration.total_prs
        if open_ratio > thresholds.stale_pr_open_ratio:
            score -= 1

    return clamp_score(score)
