"""Quality signals score."""

from repo_maturity.config import QualityWeights
from repo_maturity.models import QualitySignals
from repo_maturity.scoring.base import clamp_score


def compute_quality_score(
    quality: QualitySignals, weights: QualityWeights = QualityWeights()
) -> float:
    """
    Weighted sum of engineering-discipline signals, normalized to 0-10.

    Weights (total 10):
    - Tests present: 3
    - CI configured: 3
    - Linters: 2 for two or more tracked linters, 1 for exactly one
    - Security: 2 with no open alerts, 1 with 1-2 alerts,
      and a further -1 with 10 or more alerts
    """
    total_weight = weights.tests + weights.ci + weights.linters + weights.security
    weighted = 0.0

    if quality.has_tests:
        weighted += weights.tests

    if quality.has_ci:
        weighted += weights.ci

    linter_count = quality.has_linters.enabled_count
    if linter_count >= weights.multi_linter_count:
        weighted += weights.linters
    elif linter_count > 0:
        weighted += weights.linters * 0.5

    alerts = quality.open_security_alerts_count
    if alerts == 0:
        weighted += weights.security
    elif alerts <= weights.security_partial_max_alerts:
        weighted += weights.security * 0.5
    elif alerts >= weights.security_critical_alerts:
        weighted -= weights.security_critical_penalty

    return clamp_score(weighted / total_weight * 10)
