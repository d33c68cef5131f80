"""
Shared record types for repository analysis.

Every record is an immutable NamedTuple; nested records are NamedTuples too so
``to_dict`` can serialize a whole RepositoryMetrics tree for the caller.
"""

from datetime import datetime, timezone
from typing import Any, NamedTuple

SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2, "info": 3}


def _to_plain(value: Any) -> Any:
    """Convert nested NamedTuples and tuples into dicts and lists."""
    if hasattr(value, "_asdict"):
        return {key: _to_plain(item) for key, item in value._asdict().items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


# --- Fetch-level records ---


class FetchResult(NamedTuple):
    """Outcome of one per-source fetch: either a value or the error raised."""

    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the fetched value, or None when the fetch failed."""
        return self.value if self.error is None else None


class RateLimitStatus(NamedTuple):
    limit: int
    remaining: int
    reset_timestamp: float  # Unix seconds
    reset_at: str


class ReadmeSections(NamedTuple):
    install: bool = False
    usage: bool = False


class ReadmeData(NamedTuple):
    exists: bool
    length: int
    sections: ReadmeSections = ReadmeSections()


class PRAggregate(NamedTuple):
    """Normalized result of the aggregate PR/issue query."""

    total_prs: int
    merged_prs: int
    closed_prs: int
    open_prs: int
    average_pr_size_files: float
    total_issues: int
    open_issues: int
    is_fork: bool
    parent_repo: str | None
    avg_files_per_commit: float | None
    recent_commit_dates: tuple[str, ...] = ()


class LinterPresence(NamedTuple):
    eslint: bool = False
    prettier: bool = False
    biome: bool = False

    @property
    def enabled_count(self) -> int:
        return sum(1 for present in self if present)

    @property
    def has_any(self) -> bool:
        return self.enabled_count > 0


# --- RepositoryMetrics sections ---


class ActivityMetrics(NamedTuple):
    repo_age_years: float
    commits_per_month: float
    longest_inactivity_gap_days: int
    last_push_date: str | None
    # Derived by scoring.enrich_metrics, None until then or when never pushed
    days_since_last_push: int | None = None


class CollaborationMetrics(NamedTuple):
    total_prs: int
    prs_merged: int
    prs_closed: int
    prs_open: int
    merge_rate: float
    average_pr_size_files: float
    external_contributors_count: int


class QualitySignals(NamedTuple):
    has_tests: bool
    has_ci: bool
    has_linters: LinterPresence
    open_security_alerts_count: int


class HygieneMetrics(NamedTuple):
    readme_length: int
    readme_sections: ReadmeSections
    has_license: bool
    license_type: str | None
    has_changelog: bool
    releases_count: int


class GamingDetection(NamedTuple):
    """Derived signals consumed by the gaming heuristics, never user-facing."""

    is_fork: bool = False
    parent_repo: str | None = None
    total_issues: int = 0
    avg_files_per_commit: float | None = None
    recent_commit_dates: tuple[str, ...] = ()
    created_at: str | None = None
    total_commits_in_window: int = 0
    max_week_commits: int = 0
    weeks_with_activity: int = 0
    commit_concentration: float = 0.0
    burst_weeks_count: int = 0
    initial_period_commits: int = 0


class RepositoryMetrics(NamedTuple):
    """Normalized metrics for one analyzed repository.

    When ``error`` is set the analysis failed and every section is None; such a
    record must be reported as skipped, never as a zero score.
    """

    owner: str
    repository: str
    url: str
    analyzed_at: str
    activity: ActivityMetrics | None = None
    collaboration: CollaborationMetrics | None = None
    quality_signals: QualitySignals | None = None
    hygiene: HygieneMetrics | None = None
    gaming_detection: GamingDetection | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def failed(
        cls, owner: str, repository: str, error: str, url: str | None = None
    ) -> "RepositoryMetrics":
        """Build the record returned when a repository could not be analyzed."""
        return cls(
            owner=owner,
            repository=repository,
            url=url or f"https://github.com/{owner}/{repository}",
            analyzed_at=datetime.now(timezone.utc).isoformat(),
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain dicts/lists; errored records carry identity only."""
        if self.is_error:
            return {
                "owner": self.owner,
                "repository": self.repository,
                "url": self.url,
                "analyzed_at": self.analyzed_at,
                "error": self.error,
            }
        data = _to_plain(self)
        data.pop("error")
        return data


# --- Scoring and detection outputs ---


class ScoreBreakdown(NamedTuple):
    activity: float
    collaboration: float
    quality_signals: float
    documentation: float
    overall: float

    def to_dict(self) -> dict[str, float]:
        return dict(self._asdict())


class RiskFlag(NamedTuple):
    flag: str
    reason: str
    severity: str  # "high", "medium", "low", "info"

    def to_dict(self) -> dict[str, str]:
        return dict(self._asdict())
