"""
Shared scoring helpers.
"""

import math
from datetime import datetime, timezone

from repo_maturity.models import RepositoryMetrics

MIN_SCORE = 0.0
MAX_SCORE = 10.0


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with halves rounded up (2.25 -> 2.3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp_score(score: float) -> float:
    """Clamp a raw score to [0, 10] and round to one decimal."""
    return round_half_up(max(MIN_SCORE, min(MAX_SCORE, score)), 1)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp (``Z`` suffix allowed). Returns None on failure."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_since(value: str | None, now: datetime | None = None) -> int | None:
    """Whole days elapsed since an ISO timestamp, or None when unknown."""
    moment = parse_datetime(value)
    if moment is None:
        return None
    now = now or datetime.now(timezone.utc)
    return math.floor((now - moment).total_seconds() / 86400)


def enrich_metrics(
    metrics: RepositoryMetrics, now: datetime | None = None
) -> RepositoryMetrics:
    """
    Derive ``days_since_last_push`` from ``last_push_date``.

    This is the only clock read in the scoring path; every scorer and detector
    works from the value stored here. Errored records are returned unchanged.
    """
    if metrics.is_error or metrics.activity is None:
        return metrics
    activity = metrics.activity._replace(
        days_since_last_push=days_since(metrics.activity.last_push_date, now)
    )
    return metrics._replace(activity=activity)
