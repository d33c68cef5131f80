"""
Shared detector types.
"""

from typing import Callable, NamedTuple

from repo_maturity.config import DetectionConfig
from repo_maturity.models import SEVERITY_ORDER, RiskFlag, RepositoryMetrics


class FlagCheck(NamedTuple):
    """A single risk-flag rule."""

    name: str
    checker: Callable[[RepositoryMetrics, DetectionConfig], RiskFlag | None]


class StrengthCheck(NamedTuple):
    """A single strength rule: ``tag`` is emitted when ``predicate`` holds."""

    tag: str
    predicate: Callable[[RepositoryMetrics, DetectionConfig], bool]


def sort_by_severity(flags: list[RiskFlag]) -> list[RiskFlag]:
    """Stable sort: high, medium, low, info. Unknown severities sort last."""
    return sorted(flags, key=lambda flag: SEVERITY_ORDER.get(flag.severity, 99))
