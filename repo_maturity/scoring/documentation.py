"""Documentation score."""

from repo_maturity.config import DocumentationThresholds
from repo_maturity.models import HygieneMetrics
from repo_maturity.scoring.base import clamp_score


def compute_documentation_score(
    hygiene: HygieneMetrics,
    thresholds: DocumentationThresholds = DocumentationThresholds(),
) -> float:
    """
    Checks README depth, license and release history.

    Scoring (additive, max 10):
    - README length: 5000+ chars 4, 2000+ 3, 500+ 2, any 1
    - Install section: +1
    - Usage section: +1
    - License: +2
    - Releases: 5+ gives 2, 1-4 gives 1
    """
    score = 0.0

    length = hygiene.readme_length
    if length >= thresholds.excellent_readme_length:
        score += 4
    elif length >= thresholds.good_readme_length:
        score += 3
    elif length >= thresholds.min_readme_length:
        score += 2
    elif length > 0:
        score += 1

    if hygiene.readme_sections.install:
        score += 1
    if hygiene.readme_sections.usage:
        score += 1

    if hygiene.has_license:
        score += thresholds.license_points

    if hygiene.releases_count >= thresholds.frequent_releases:
        score += 2
    elif hygiene.releases_count >= 1:
        score += 1

    return clamp_score(score)
