"""
Scoring engine: four category sub-scores and the weighted overall score.

All functions are pure. Pass records through ``enrich_metrics`` first so the
activity scorer sees ``days_since_last_push``.
"""

from repo_maturity.config import DEFAULT_SCORING_CONFIG, OverallWeights, ScoringConfig
from repo_maturity.models import RepositoryMetrics, ScoreBreakdown
from repo_maturity.scoring.activity import compute_activity_score
from repo_maturity.scoring.base import clamp_score, enrich_metrics, round_half_up
from repo_maturity.scoring.collaboration import compute_collaboration_score
from repo_maturity.scoring.documentation import compute_documentation_score
from repo_maturity.scoring.quality_signals import compute_quality_score

__all__ = [
    "clamp_score",
    "compute_activity_score",
    "compute_collaboration_score",
    "compute_documentation_score",
    "compute_overall_score",
    "compute_quality_score",
    "compute_scores",
    "enrich_metrics",
    "round_half_up",
]


def compute_overall_score(
    activity: float,
    collaboration: float,
    quality_signals: float,
    documentation: float,
    weights: OverallWeights = OverallWeights(),
) -> float:
    """
    Weighted blend of the category scores.

    Quality signals weigh most (0.30), collaboration least (0.20) since it is
    the easiest to inflate and depends most on solo vs. team projects.
    """
    return clamp_score(
        activity * weights.activity
        + collaboration * weights.collaboration
        + quality_signals * weights.quality_signals
        + documentation * weights.documentation
    )


def compute_scores(
    metrics: RepositoryMetrics, config: ScoringConfig | None = None
) -> ScoreBreakdown | None:
    """
    Compute every sub-score plus the overall score for one repository.

    Returns:
        ScoreBreakdown, or None for an errored record (skipped, not zero-scored).
    """
    if metrics.is_error:
        return None
    config = config or DEFAULT_SCORING_CONFIG

    activity = compute_activity_score(metrics.activity, config.activity)
    collaboration = compute_collaboration_score(
        metrics.collaboration, config.collaboration
    )
    quality = compute_quality_score(metrics.quality_signals, config.quality)
    documentation = compute_documentation_score(metrics.hygiene, config.documentation)

    return ScoreBreakdown(
        activity=activity,
        collaboration=collaboration,
        quality_signals=quality,
        documentation=documentation,
        overall=compute_overall_score(
            activity, collaboration, quality, documentation, config.overall
        ),
    )
