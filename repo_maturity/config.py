"""
Configuration management for repo-maturity.

Holds the scoring thresholds, detection heuristics and collector limits as
immutable NamedTuples, and loads overrides from:
1. .repo-maturity.toml (local config)
2. pyproject.toml (project-level config)

Overrides live under ``[tool.repo-maturity.<section>]``, for example::

    [tool.repo-maturity.scoring.activity]
    commit_spam_threshold = 150

    [tool.repo-maturity.collector]
    batch_size = 3
"""

import tomllib
from pathlib import Path
from typing import Any, NamedTuple

# Config files are looked up relative to the working directory of the caller
PROJECT_ROOT = Path.cwd()

LOCAL_CONFIG_NAME = ".repo-maturity.toml"
TOOL_SECTION = "repo-maturity"

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True


# --- Scoring thresholds ---


class ActivityThresholds(NamedTuple):
    ideal_commits_min: float = 2
    ideal_commits_max: float = 50
    commit_spam_threshold: float = 100
    inactivity_days_warning: int = 90
    inactivity_days_critical: int = 180
    recent_push_days: int = 30
    max_age_bonus_years: float = 3
    min_age_bonus_years: float = 1


class CollaborationThresholds(NamedTuple):
    ideal_merge_rate_min: float = 0.5
    ideal_merge_rate_max: float = 0.95
    low_merge_rate: float = 0.3
    frictionless_merge_rate: float = 0.98
    community_contributors: int = 3
    min_external_contributors: int = 1
    ideal_pr_size_min: float = 1
    ideal_pr_size_max: float = 15
    giant_pr_threshold: float = 50
    stale_pr_min_total: int = 5
    stale_pr_open_ratio: float = 0.5


class QualityWeights(NamedTuple):
    tests: float = 3
    ci: float = 3
    linters: float = 2
    security: float = 2
    multi_linter_count: int = 2
    security_partial_max_alerts: int = 2
    security_critical_alerts: int = 10
    security_critical_penalty: float = 1


class DocumentationThresholds(NamedTuple):
    min_readme_length: int = 500
    good_readme_length: int = 2000
    excellent_readme_length: int = 5000
    frequent_releases: int = 5
    license_points: float = 2


class OverallWeights(NamedTuple):
    activity: float = 0.25
    collaboration: float = 0.20
    quality_signals: float = 0.30
    documentation: float = 0.25


class ScoringConfig(NamedTuple):
    """Thresholds and weights used by the four category scorers."""

    activity: ActivityThresholds = ActivityThresholds()
    collaboration: CollaborationThresholds = CollaborationThresholds()
    quality: QualityWeights = QualityWeights()
    documentation: DocumentationThresholds = DocumentationThresholds()
    overall: OverallWeights = OverallWeights()


# --- Detection heuristics ---


class CommitBurstThresholds(NamedTuple):
    weekly_burst_threshold: int = 50
    single_week_concentration: float = 0.6
    min_commits_for_concentration: int = 20
    high_severity_burst_weeks: int = 2


class ActivityMismatchThresholds(NamedTuple):
    high_commit_monthly: float = 50
    max_pr_ratio: float = 0.02
    high_commit_no_issue_monthly: float = 30
    # Commits in the analysis window are estimated as commits/month * this
    analysis_window_months: float = 7


class ForkThresholds(NamedTuple):
    min_unique_commits: int = 5


class CreationSpikeThresholds(NamedTuple):
    initial_period_days: int = 7
    artificial_burst_threshold: int = 100


class FileDiversityThresholds(NamedTuple):
    min_files_per_commit: float = 1.5
    trivial_files_per_commit: float = 1.0
    min_commits_sampled: int = 30


class QualityFlagThresholds(NamedTuple):
    abandoned_days: int = 180
    commit_spam_monthly: float = 100
    giant_pr_files: float = 50
    security_alerts: int = 5
    poor_docs_readme_length: int = 100
    stale_pr_min_total: int = 5
    stale_pr_open_ratio: float = 0.5


class StrengthThresholds(NamedTuple):
    recent_push_days: int = 30
    min_commits_per_month: float = 2
    community_contributors: int = 3
    clean_merge_rate_min: float = 0.6
    clean_merge_rate_max: float = 0.95
    clean_pr_size_max: float = 15
    documented_readme_length: int = 2000
    versioned_releases: int = 5
    mature_age_years: float = 2
    mature_max_gap_days: int = 90


# Hard ceiling on risk flags and strengths; larger overrides are clamped
MAX_LIST_ENTRIES = 5


class DetectionConfig(NamedTuple):
    """Thresholds for the gaming heuristics, quality flags and strengths."""

    commit_burst: CommitBurstThresholds = CommitBurstThresholds()
    activity_mismatch: ActivityMismatchThresholds = ActivityMismatchThresholds()
    fork: ForkThresholds = ForkThresholds()
    creation_spike: CreationSpikeThresholds = CreationSpikeThresholds()
    file_diversity: FileDiversityThresholds = FileDiversityThresholds()
    quality_flags: QualityFlagThresholds = QualityFlagThresholds()
    strengths: StrengthThresholds = StrengthThresholds()
    max_flags: int = 5
    max_strengths: int = 5


# --- Collector limits ---


class LinterPaths(NamedTuple):
    eslint: tuple[str, ...] = (
        ".eslintrc",
        ".eslintrc.js",
        ".eslintrc.json",
        ".eslintrc.yml",
        ".eslintrc.yaml",
        "eslint.config.js",
        "eslint.config.mjs",
    )
    prettier: tuple[str, ...] = (
        ".prettierrc",
        ".prettierrc.js",
        ".prettierrc.json",
        ".prettierrc.yml",
        ".prettierrc.yaml",
        "prettier.config.js",
        "prettier.config.mjs",
    )
    biome: tuple[str, ...] = ("biome.json", "biome.jsonc")


class CollectorConfig(NamedTuple):
    """Batching, retry and sampling limits for data collection."""

    batch_size: int = 5
    rate_limit_floor: int = 50
    reset_margin_seconds: float = 1.0
    commit_weeks_window: int = 30
    weeks_per_month: float = 4.33
    stats_max_attempts: int = 3
    stats_backoff_seconds: float = 2.0
    page_size: int = 100
    merged_pr_sample_size: int = 50
    commit_sample_size: int = 100
    test_paths: tuple[str, ...] = ("test", "__tests__", "tests", "spec", "specs")
    ci_paths: tuple[str, ...] = (".github/workflows",)
    linter_paths: LinterPaths = LinterPaths()

    @property
    def window_months(self) -> float:
        """Length of the commit-activity window in months."""
        return self.commit_weeks_window / self.weeks_per_month


DEFAULT_SCORING_CONFIG = ScoringConfig()
DEFAULT_DETECTION_CONFIG = DetectionConfig()
DEFAULT_COLLECTOR_CONFIG = CollectorConfig()


# --- Loading ---


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict[str, Any]:
    """
    Load the ``[tool.repo-maturity]`` table from configuration files.

    Priority:
    1. .repo-maturity.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        The tool table, or an empty dict when neither file defines one.
    """
    local_config_path = PROJECT_ROOT / LOCAL_CONFIG_NAME
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        section = config.get("tool", {}).get(TOOL_SECTION, {})
        if section:
            return section

    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return config.get("tool", {}).get(TOOL_SECTION, {})

    return {}


def apply_overrides(defaults: NamedTuple, overrides: dict[str, Any]) -> Any:
    """
    Return a copy of ``defaults`` with values replaced from ``overrides``.

    Nested NamedTuples are merged recursively, lists become tuples and unknown
    keys are ignored.
    """
    if not overrides:
        return defaults

    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in defaults._fields:
            continue
        current = getattr(defaults, key)
        if hasattr(current, "_fields") and isinstance(value, dict):
            changes[key] = apply_overrides(current, value)
        elif isinstance(value, list):
            changes[key] = tuple(value)
        else:
            changes[key] = value
    return defaults._replace(**changes)


def get_scoring_config() -> ScoringConfig:
    """Scoring thresholds with any file-based overrides applied."""
    return apply_overrides(DEFAULT_SCORING_CONFIG, get_tool_config().get("scoring", {}))


def get_detection_config() -> DetectionConfig:
    """Detection thresholds with any file-based overrides applied."""
    return apply_overrides(
        DEFAULT_DETECTION_CONFIG, get_tool_config().get("detection", {})
    )


def get_collector_config() -> CollectorConfig:
    """Collector limits with any file-based overrides applied."""
    return apply_overrides(
        DEFAULT_COLLECTOR_CONFIG, get_tool_config().get("collector", {})
    )


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL
