"""
Risk flag and strength detection.

Both detectors are pure functions of an enriched RepositoryMetrics record and
return bounded lists: at most five flags (severity-sorted, lowest-severity
entries dropped first) and at most five strength tags.
"""

from repo_maturity.config import (
    DEFAULT_DETECTION_CONFIG,
    MAX_LIST_ENTRIES,
    DetectionConfig,
)
from repo_maturity.detectors.base import FlagCheck, StrengthCheck, sort_by_severity
from repo_maturity.detectors.gaming import GAMING_CHECKS
from repo_maturity.detectors.quality import QUALITY_CHECKS
from repo_maturity.detectors.strengths import STRENGTH_CHECKS
from repo_maturity.models import RepositoryMetrics, RiskFlag

__all__ = [
    "FlagCheck",
    "GAMING_CHECKS",
    "QUALITY_CHECKS",
    "STRENGTH_CHECKS",
    "StrengthCheck",
    "collect_risk_flags",
    "detect_risk_flags",
    "detect_strengths",
]


def collect_risk_flags(
    metrics: RepositoryMetrics, config: DetectionConfig | None = None
) -> list[RiskFlag]:
    """Every triggered flag, gaming heuristics first, before sorting and truncation."""
    if metrics.is_error:
        return []
    config = config or DEFAULT_DETECTION_CONFIG

    flags: list[RiskFlag] = []
    for check in GAMING_CHECKS + QUALITY_CHECKS:
        flag = check.checker(metrics, config)
        if flag is not None:
            flags.append(flag)
    return flags


def detect_risk_flags(
    metrics: RepositoryMetrics, config: DetectionConfig | None = None
) -> list[RiskFlag]:
    """
    Detect gaming heuristics and quality risks for one repository.

    Returns:
        Up to ``config.max_flags`` flags, never more than five, ordered
        high, medium, low, info.
        Flags beyond the cap are dropped silently.
    """
    config = config or DEFAULT_DETECTION_CONFIG
    flags = sort_by_severity(collect_risk_flags(metrics, config))
    return flags[: min(config.max_flags, MAX_LIST_ENTRIES)]


def detect_strengths(
    metrics: RepositoryMetrics, config: DetectionConfig | None = None
) -> list[str]:
    """Return up to ``config.max_strengths`` strength tags (at most five) in rule order."""
    if metrics.is_error:
        return []
    config = config or DEFAULT_DETECTION_CONFIG

    strengths = [
        check.tag for check in STRENGTH_CHECKS if check.predicate(metrics, config)
    ]
    return strengths[: min(config.max_strengths, MAX_LIST_ENTRIES)]
